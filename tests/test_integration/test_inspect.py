"""Integration tests for ``cdd inspect`` against the petstore workspace."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from cdd.app import app
from cdd.commands.inspect import format_variable
from cdd.exit_codes import EXIT_SPEC_PARSE_ERROR
from cdd.models import Variable, VariableType


def _inspect(cli_runner, workspace_dir: Path, *args: str):  # noqa: ANN202
    return cli_runner.invoke(app, ["-q", "--config", str(workspace_dir), "inspect", *args])


class TestInspectProject:
    def test_dumps_ir(self, cli_runner, workspace_dir: Path) -> None:
        result = _inspect(cli_runner, workspace_dir, "project")
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["info"] == {"host": "https://api.petstore.example.com", "endpoint": "/v1"}
        assert [m["name"] for m in data["models"]] == ["Pet", "Error", "Animal"]
        assert data["requests"][0]["response_type"] == "[Pet]"

    def test_wire_types(self, cli_runner, workspace_dir: Path) -> None:
        result = _inspect(cli_runner, workspace_dir, "project")
        pet = json.loads(result.stdout)["models"][0]
        nicknames = next(v for v in pet["vars"] if v["name"] == "nicknames")
        assert nicknames["variable_type"] == {"ArrayType": "StringType"}

    def test_spec_override(self, cli_runner, workspace_dir: Path, tmp_path: Path) -> None:
        other = tmp_path / "tiny.json"
        other.write_text(json.dumps({
            "openapi": "3.0.0",
            "components": {"schemas": {"Tag": {"type": "object"}}},
        }))
        result = _inspect(cli_runner, workspace_dir, "project", "--spec", str(other))
        assert result.exit_code == 0, result.output
        assert [m["name"] for m in json.loads(result.stdout)["models"]] == ["Tag"]

    def test_spec_from_stdin(self, cli_runner, workspace_dir: Path) -> None:
        result = cli_runner.invoke(
            app,
            ["-q", "--config", str(workspace_dir), "inspect", "project", "--spec", "-"],
            input="openapi: 3.0.0\ncomponents: {}\n",
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["models"] == []

    def test_missing_components(self, cli_runner, workspace_dir: Path, tmp_path: Path) -> None:
        bare = tmp_path / "bare.yml"
        bare.write_text("openapi: 3.0.0\npaths: {}\n")
        result = _inspect(cli_runner, workspace_dir, "project", "--spec", str(bare))
        assert result.exit_code == EXIT_SPEC_PARSE_ERROR

        result = _inspect(cli_runner, workspace_dir, "project", "--spec", str(bare), "--lenient")
        assert result.exit_code == 0, result.output


class TestInspectTables:
    def test_models_plain(self, cli_runner, workspace_dir: Path) -> None:
        result = _inspect(cli_runner, workspace_dir, "models")
        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert lines[0] == "Name\tKind\tVariables"
        assert lines[3] == "Animal\tmarker\t"
        assert lines[2] == "Error\tobject\tcode: IntType, message: StringType, id: IntType"

    def test_models_json(self, cli_runner, workspace_dir: Path) -> None:
        result = cli_runner.invoke(
            app, ["-q", "--json", "--config", str(workspace_dir), "inspect", "models"]
        )
        assert result.exit_code == 0, result.output
        rows = json.loads(result.stdout)
        assert rows[0]["Name"] == "Pet"
        assert "nicknames: [StringType]?" in rows[0]["Variables"]

    def test_requests_json(self, cli_runner, workspace_dir: Path) -> None:
        result = cli_runner.invoke(
            app, ["-q", "--json", "--config", str(workspace_dir), "inspect", "requests"]
        )
        assert result.exit_code == 0, result.output
        rows = json.loads(result.stdout)
        assert rows[0] == {
            "Method": "GET",
            "Path": "",
            "Name": "petsGETrequest",
            "Response": "[Pet]",
            "Error": "Error",
            "Parameters": "limit: IntType?",
        }
        assert rows[1]["Response"] == "ResponceEmpty"
        assert rows[1]["Error"] == "ResponseEmpty"


class TestFormatVariable:
    @pytest.mark.parametrize(
        ("optional", "expected"),
        [(False, "owner: Owner"), (True, "owner: Owner?")],
    )
    def test_optional_suffix(self, optional: bool, expected: str) -> None:
        variable = Variable(
            name="owner", optional=optional, variable_type=VariableType.complex("Owner")
        )
        assert format_variable(variable) == expected


class TestRootCommand:
    def test_version(self, cli_runner) -> None:
        from cdd import __version__

        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"cdd {__version__}" in result.output

    def test_inspect_without_subcommand_shows_help(self, cli_runner) -> None:
        result = cli_runner.invoke(app, ["inspect"])
        assert "project" in result.output
        assert "models" in result.output
