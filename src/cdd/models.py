"""Canonical Pydantic models shared across all cdd modules.

The models fall into two groups:

**Configuration models** -- loaded from the workspace's ``config.yml``:
    :class:`ServiceConfig` and :class:`ProjectConfig`.

**IR models** -- produced by the OpenAPI translator and exchanged as JSON
with the per-language services:
    :class:`VariableType`, :class:`Variable`, :class:`ModelKind`,
    :class:`Model`, :class:`Method`, :class:`Request`, :class:`Info`, and
    :class:`Project`.

IR models are frozen. Their JSON shape is the one the services already
speak, so ``Model.model_validate`` accepts service output directly and
``Project.model_dump(mode="json")`` can be handed to a service unchanged.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_serializer,
    model_validator,
)


# --- Configuration ---


class ServiceConfig(BaseModel):
    """One per-language service entry under ``services:`` in ``config.yml``.

    Example::

        ServiceConfig(
            bin_path="~/.cdd/bin/cdd-swift",
            template_path="~/.cdd/templates/ios",
            project_path="ios",
            component_file="ios/Source/API/APIModels.swift",
        )
    """

    bin_path: str = Field(description="Path to the service executable (``~`` allowed)")
    template_path: str = Field(
        description="Template directory copied into the workspace when the project is missing"
    )
    project_path: str = Field(description="Generated project directory, relative to the workspace")
    component_file: str = Field(
        description="File inside the project that holds the generated models"
    )
    timeout: int = Field(default=60, description="Seconds before a service call is abandoned")


class ProjectConfig(BaseModel):
    """Workspace configuration persisted as ``config.yml``.

    Loaded and saved by :func:`~cdd.config.load_config` and
    :func:`~cdd.config.save_config`.
    """

    spec: str = Field(default="openapi.yml", description="OpenAPI document, relative to the workspace")
    strict_components: bool = Field(
        default=True,
        description="Fail when the document has no components section instead of producing no models",
    )
    services: dict[str, ServiceConfig] = Field(default_factory=dict)


# --- IR ---


class TypeKind(str, enum.Enum):
    """Tags of the :class:`VariableType` union, spelled as on the wire."""

    STRING = "StringType"
    INT = "IntType"
    FLOAT = "FloatType"
    BOOL = "BoolType"
    ARRAY = "ArrayType"
    COMPLEX = "ComplexType"


_SCALAR_KINDS = frozenset({TypeKind.STRING, TypeKind.INT, TypeKind.FLOAT, TypeKind.BOOL})


class VariableType(BaseModel):
    """Closed tagged union describing the type of a :class:`Variable`.

    ``ARRAY`` carries an ``element`` type and ``COMPLEX`` carries the
    ``name`` of the referenced model; the scalar kinds carry nothing.
    ``COMPLEX`` names are not resolved against the model list -- that is
    left to the code generators.

    On the wire the union is externally tagged::

        "StringType"
        {"ArrayType": {"ArrayType": "IntType"}}
        {"ComplexType": "Pet"}

    Use the constructors rather than building instances by hand::

        VariableType.array(VariableType.complex("Pet"))
    """

    model_config = ConfigDict(frozen=True)

    kind: TypeKind
    element: Optional[VariableType] = None
    name: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:  # noqa: ANN401
        if isinstance(data, str):
            return {"kind": data}
        if isinstance(data, dict) and len(data) == 1:
            ((tag, payload),) = data.items()
            if tag == TypeKind.ARRAY.value:
                return {"kind": tag, "element": payload}
            if tag == TypeKind.COMPLEX.value:
                return {"kind": tag, "name": payload}
        return data

    @model_validator(mode="after")
    def _check_payload(self) -> VariableType:
        if self.kind == TypeKind.ARRAY and self.element is None:
            raise ValueError("ArrayType requires an element type")
        if self.kind == TypeKind.COMPLEX and self.name is None:
            raise ValueError("ComplexType requires a name")
        if self.kind in _SCALAR_KINDS and (self.element is not None or self.name is not None):
            raise ValueError(f"{self.kind.value} carries no payload")
        return self

    @model_serializer
    def _to_wire(self) -> Any:  # noqa: ANN401
        return self.to_wire()

    def to_wire(self) -> Any:  # noqa: ANN401
        """Return the externally tagged JSON-compatible form."""
        if self.kind == TypeKind.ARRAY:
            assert self.element is not None
            return {self.kind.value: self.element.to_wire()}
        if self.kind == TypeKind.COMPLEX:
            return {self.kind.value: self.name}
        return self.kind.value

    @classmethod
    def string(cls) -> VariableType:
        return cls(kind=TypeKind.STRING)

    @classmethod
    def integer(cls) -> VariableType:
        return cls(kind=TypeKind.INT)

    @classmethod
    def float(cls) -> VariableType:
        return cls(kind=TypeKind.FLOAT)

    @classmethod
    def boolean(cls) -> VariableType:
        return cls(kind=TypeKind.BOOL)

    @classmethod
    def array(cls, element: VariableType) -> VariableType:
        return cls(kind=TypeKind.ARRAY, element=element)

    @classmethod
    def complex(cls, name: str) -> VariableType:
        return cls(kind=TypeKind.COMPLEX, name=name)

    @property
    def array_depth(self) -> int:
        """Number of ``ArrayType`` layers wrapped around the innermost type."""
        depth = 0
        current: Optional[VariableType] = self
        while current is not None and current.kind == TypeKind.ARRAY:
            depth += 1
            current = current.element
        return depth

    def __str__(self) -> str:
        if self.kind == TypeKind.ARRAY:
            return f"[{self.element}]"
        if self.kind == TypeKind.COMPLEX:
            return str(self.name)
        return self.kind.value


class Variable(BaseModel):
    """A typed field of a :class:`Model` or a parameter of a :class:`Request`.

    ``value`` is reserved for literal defaults and is always ``None`` when
    produced by the translator.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    optional: bool
    variable_type: VariableType
    value: Optional[Any] = None


class ModelKind(str, enum.Enum):
    """Distinguishes record models from inheritance markers.

    A ``MARKER`` model comes from a top-level schema that is not an object
    (a polymorphism base, a string enum, a composed schema...). It never has
    variables, so an ``OBJECT`` model with no variables is not ambiguous.
    """

    OBJECT = "object"
    MARKER = "marker"


class Model(BaseModel):
    """A named record type extracted from one ``components/schemas`` entry.

    ``kind`` defaults to ``OBJECT`` so that services, which only report
    ``name`` and ``vars``, validate without change.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    vars: list[Variable] = Field(default_factory=list)
    kind: ModelKind = ModelKind.OBJECT

    @model_validator(mode="after")
    def _markers_have_no_vars(self) -> Model:
        if self.kind == ModelKind.MARKER and self.vars:
            raise ValueError(f"Marker model {self.name} cannot declare variables")
        return self

    @classmethod
    def marker(cls, name: str) -> Model:
        """Build the empty marker model for a non-object schema."""
        return cls(name=name, vars=[], kind=ModelKind.MARKER)

    @property
    def is_marker(self) -> bool:
        return self.kind == ModelKind.MARKER


class Method(str, enum.Enum):
    """HTTP methods of an OpenAPI path item, in extraction order."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"
    PATCH = "PATCH"
    TRACE = "TRACE"

    def __str__(self) -> str:
        return self.value


class Request(BaseModel):
    """One operation (path + method) of the API.

    ``response_type`` and ``error_type`` are model names, a bracketed
    ``"[Model]"`` for array responses, or one of the empty-response
    sentinels ``"ResponceEmpty"`` / ``"ResponseEmpty"`` that the code
    generators special-case.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    vars: list[Variable] = Field(default_factory=list)
    method: Method
    response_type: str
    error_type: str


class Info(BaseModel):
    """Server location derived from the first ``servers`` entry."""

    model_config = ConfigDict(frozen=True)

    host: str = ""
    endpoint: str = ""


class Project(BaseModel):
    """The complete IR of one OpenAPI document.

    Built once per run by :func:`~cdd.parser.extractor.extract_project` and
    consumed by :func:`~cdd.instructions.build_instruction_tree` and the
    services.
    """

    model_config = ConfigDict(frozen=True)

    info: Info = Field(default_factory=Info)
    models: list[Model] = Field(default_factory=list)
    requests: list[Request] = Field(default_factory=list)

    def model_names(self) -> list[str]:
        return [model.name for model in self.models]

    def request_names(self) -> list[str]:
        return [request.name for request in self.requests]


VariableType.model_rebuild()
