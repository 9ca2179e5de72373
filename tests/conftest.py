"""Shared test fixtures for cdd.

Provides the petstore fixture document (raw and translated), an isolated
workspace directory with ``config.yml`` and ``openapi.yml``, fake service
executables, and output-state management.
"""

from __future__ import annotations

import json
import stat
import sys
from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from cdd.models import Project, ProjectConfig, ServiceConfig
from cdd.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The manager holds the sys.stdout/sys.stderr objects that were current
    when it was created; CliRunner swaps those streams per invocation.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN OutputManager for tests that ignore diagnostics."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Spec fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_raw() -> dict[str, Any]:
    """The petstore document as parsed from YAML."""
    with open(FIXTURES_DIR / "petstore.yml", encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def petstore_project(petstore_raw: dict[str, Any]) -> Project:
    """The petstore document translated into the IR."""
    from cdd.parser import extract_project

    return extract_project(petstore_raw)


# ---------------------------------------------------------------------------
# Fake services
# ---------------------------------------------------------------------------


ServiceFactory = Callable[..., Path]


@pytest.fixture
def make_service(tmp_path: Path) -> ServiceFactory:
    """Factory writing an executable that behaves like a service binary.

    The script prints *stdout* and *stderr*, exits with *exit_code*, and
    records its arguments as JSON in ``<name>.args.json`` next to itself.
    """

    def _make(
        name: str = "service",
        stdout: str = "[]",
        stderr: str = "",
        exit_code: int = 0,
    ) -> Path:
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        path = bin_dir / name
        args_file = bin_dir / f"{name}.args.json"
        path.write_text(
            f"#!{sys.executable}\n"
            "import json, sys\n"
            f"open({str(args_file)!r}, 'w').write(json.dumps(sys.argv[1:]))\n"
            f"sys.stdout.write({stdout!r})\n"
            f"sys.stderr.write({stderr!r})\n"
            f"sys.exit({exit_code})\n"
        )
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make


@pytest.fixture
def service_args() -> Callable[[Path], list[str]]:
    """Read back the arguments a fake service was last invoked with."""

    def _read(bin_path: Path) -> list[str]:
        return json.loads((bin_path.parent / f"{bin_path.name}.args.json").read_text())

    return _read


# ---------------------------------------------------------------------------
# Workspace fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep crash logs and config lookups inside tmp_path and chdir there."""
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("CDD_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def workspace_dir(
    isolated_env: Path,
    petstore_raw: dict[str, Any],
    make_service: ServiceFactory,
) -> Path:
    """A workspace with the petstore spec and one ``ios`` service.

    The service reports ``Pet`` and a stale ``Owner`` model. Its project
    directory is missing and its template holds ``ios/README``.
    """
    root = isolated_env / "workspace"
    root.mkdir()
    (root / "openapi.yml").write_text(yaml.safe_dump(petstore_raw, sort_keys=False))

    template = isolated_env / "templates" / "ios"
    (template / "ios").mkdir(parents=True)
    (template / "ios" / "README").write_text("generated ios project\n")

    bin_path = make_service(
        "cdd-swift",
        stdout=json.dumps([
            {"name": "Pet", "vars": []},
            {"name": "Owner", "vars": []},
        ]),
    )

    config = ProjectConfig(
        services={
            "ios": ServiceConfig(
                bin_path=str(bin_path),
                template_path=str(template),
                project_path="ios",
                component_file="ios/Models.swift",
            )
        }
    )
    (root / "config.yml").write_text(
        yaml.safe_dump(config.model_dump(mode="json"), sort_keys=False)
    )
    return root


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
