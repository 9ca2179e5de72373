"""Helpers shared by the workspace commands."""

from __future__ import annotations

from typing import Optional

import typer

from cdd.config import resolve_config_path
from cdd.exceptions import CddError
from cdd.output import error
from cdd.workspace import Workspace


def open_workspace(ctx: typer.Context, spec: Optional[str] = None) -> Workspace:
    """Open the workspace selected by ``--config`` / ``CDD_CONFIG``.

    Raises:
        typer.Exit: With the error's exit code when the configuration or
            the spec cannot be read.
    """
    obj = ctx.obj or {}
    config_path = resolve_config_path(obj.get("config"))
    try:
        return Workspace.read(config_path, spec_source=spec)
    except CddError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
