"""Init command -- scaffold a new workspace.

Implements ``cdd init NAME``: creates the directory ``NAME/`` with a
``config.yml`` that declares no services yet and a starter ``openapi.yml``
titled after the project.
"""

from __future__ import annotations

from pathlib import Path

import typer
import yaml

from cdd.config import CONFIG_FILENAME, atomic_write, save_config
from cdd.exceptions import InvalidUsageError
from cdd.models import ProjectConfig
from cdd.output import error, info, success, suggest
from cdd.parser.loader import DEFAULT_SPEC_NAME


def starter_spec(name: str) -> dict:
    """The OpenAPI document written by ``cdd init``."""
    return {
        "openapi": "3.0.3",
        "info": {"title": name, "version": "0.1.0"},
        "servers": [{"url": "http://localhost:8080/api"}],
        "paths": {},
        "components": {"schemas": {}},
    }


def check_overwrite(paths: list[Path], force: bool) -> None:
    """Refuse to replace existing workspace files unless *force* is set.

    Raises:
        InvalidUsageError: Naming the first of *paths* that exists.
    """
    if force:
        return
    for path in paths:
        if path.exists():
            raise InvalidUsageError(f"{path} already exists")


def init_command(
    name: str = typer.Argument(..., help="Project name (also the directory created)."),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing config.yml / openapi.yml."
    ),
) -> None:
    """Initialize a new project configuration file and OpenAPI spec.

    Example::

        cdd init petstore
        cd petstore && cdd sync
    """
    root = Path(name)
    config_path = root / CONFIG_FILENAME
    spec_path = root / DEFAULT_SPEC_NAME

    try:
        check_overwrite([config_path, spec_path], force)
    except InvalidUsageError as exc:
        error(str(exc))
        suggest("Re-run with --force to overwrite it.")
        raise typer.Exit(code=exc.exit_code) from None

    info(f"Creating project {name}")
    save_config(ProjectConfig(spec=DEFAULT_SPEC_NAME), config_path)
    atomic_write(spec_path, yaml.safe_dump(starter_spec(name), sort_keys=False))

    success(f'Project "{name}" created.')
    suggest(f"Add services to {config_path}")
    suggest(f"Then run: cd {name} && cdd sync")
