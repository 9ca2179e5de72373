"""Tests for cdd.models -- the IR wire format and configuration models."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from cdd.models import (
    Info,
    Method,
    Model,
    ModelKind,
    Project,
    ProjectConfig,
    Request,
    ServiceConfig,
    TypeKind,
    Variable,
    VariableType,
)


# ---------------------------------------------------------------------------
# VariableType
# ---------------------------------------------------------------------------


class TestVariableTypeWire:
    @pytest.mark.parametrize(
        ("vtype", "wire"),
        [
            (VariableType.string(), "StringType"),
            (VariableType.integer(), "IntType"),
            (VariableType.float(), "FloatType"),
            (VariableType.boolean(), "BoolType"),
            (VariableType.complex("Pet"), {"ComplexType": "Pet"}),
            (
                VariableType.array(VariableType.array(VariableType.integer())),
                {"ArrayType": {"ArrayType": "IntType"}},
            ),
        ],
    )
    def test_dump_and_validate(self, vtype: VariableType, wire: object) -> None:
        assert vtype.model_dump() == wire
        assert VariableType.model_validate(wire) == vtype

    def test_nested_in_variable(self) -> None:
        variable = Variable(
            name="tags",
            optional=True,
            variable_type=VariableType.array(VariableType.complex("Tag")),
        )
        assert json.loads(variable.model_dump_json()) == {
            "name": "tags",
            "optional": True,
            "variable_type": {"ArrayType": {"ComplexType": "Tag"}},
            "value": None,
        }

    @pytest.mark.parametrize(
        "wire",
        ["UuidType", {"ArrayType": "NopeType"}, {"MapType": "StringType"}, 3],
    )
    def test_unknown_tags_are_rejected(self, wire: object) -> None:
        with pytest.raises(ValidationError):
            VariableType.model_validate(wire)

    def test_payload_rules(self) -> None:
        with pytest.raises(ValidationError):
            VariableType(kind=TypeKind.ARRAY)
        with pytest.raises(ValidationError):
            VariableType(kind=TypeKind.COMPLEX)
        with pytest.raises(ValidationError):
            VariableType(kind=TypeKind.INT, name="Pet")


class TestVariableTypeHelpers:
    def test_str(self) -> None:
        assert str(VariableType.integer()) == "IntType"
        assert str(VariableType.complex("Pet")) == "Pet"
        assert str(VariableType.array(VariableType.array(VariableType.complex("Pet")))) == "[[Pet]]"

    def test_array_depth(self) -> None:
        assert VariableType.string().array_depth == 0
        assert VariableType.array(VariableType.array(VariableType.float())).array_depth == 2

    def test_frozen_and_hashable(self) -> None:
        assert len({VariableType.string(), VariableType.string()}) == 1
        with pytest.raises(ValidationError):
            VariableType.string().kind = TypeKind.INT


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------


class TestModel:
    def test_service_output_validates(self) -> None:
        model = Model.model_validate(
            {"name": "Pet", "vars": [{"name": "id", "optional": False, "variable_type": "IntType"}]}
        )
        assert model.kind == ModelKind.OBJECT
        assert model.vars[0].variable_type == VariableType.integer()

    def test_marker(self) -> None:
        marker = Model.marker("Animal")
        assert marker.is_marker
        assert marker.model_dump(mode="json") == {"name": "Animal", "vars": [], "kind": "marker"}

    def test_marker_with_vars_is_rejected(self) -> None:
        variable = {"name": "x", "optional": True, "variable_type": "StringType"}
        with pytest.raises(ValidationError, match="cannot declare variables"):
            Model.model_validate({"name": "Bad", "kind": "marker", "vars": [variable]})

    def test_object_without_vars_is_allowed(self) -> None:
        assert not Model(name="Empty").is_marker


# ---------------------------------------------------------------------------
# Request / Project
# ---------------------------------------------------------------------------


class TestRequest:
    def test_method_serializes_as_name(self) -> None:
        request = Request(
            name="petsGETrequest",
            path="",
            method=Method.GET,
            response_type="[Pet]",
            error_type="Error",
        )
        dumped = request.model_dump(mode="json")
        assert dumped["method"] == "GET"
        assert dumped["vars"] == []

    def test_method_str(self) -> None:
        assert str(Method.PATCH) == "PATCH"
        assert [m.value for m in Method] == [
            "GET", "POST", "PUT", "DELETE", "OPTIONS", "HEAD", "PATCH", "TRACE",
        ]


class TestProject:
    def test_defaults(self) -> None:
        project = Project()
        assert project.info == Info(host="", endpoint="")
        assert project.models == []
        assert project.requests == []

    def test_json_round_trip(self, petstore_project: Project) -> None:
        restored = Project.model_validate_json(petstore_project.model_dump_json())
        assert restored == petstore_project

    def test_names(self, petstore_project: Project) -> None:
        assert petstore_project.model_names()[0] == "Pet"
        assert petstore_project.request_names()[0] == "petsGETrequest"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_defaults(self) -> None:
        config = ProjectConfig()
        assert config.spec == "openapi.yml"
        assert config.strict_components is True
        assert config.services == {}

    def test_service_timeout_default(self) -> None:
        service = ServiceConfig(
            bin_path="~/bin/cdd-swift",
            template_path="~/templates/ios",
            project_path="ios",
            component_file="ios/Models.swift",
        )
        assert service.timeout == 60

    def test_service_requires_paths(self) -> None:
        with pytest.raises(ValidationError):
            ProjectConfig.model_validate({"services": {"ios": {"bin_path": "x"}}})
