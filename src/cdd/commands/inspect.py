"""Inspect commands -- print the IR translated from the workspace's spec.

``cdd inspect project`` dumps the whole :class:`~cdd.models.Project` as JSON
(the same shape the services consume); ``models`` and ``requests`` print
tables, or JSON records with the global ``--json`` flag.
"""

from __future__ import annotations

from typing import Optional

import typer

from cdd.commands.common import open_workspace
from cdd.exceptions import CddError
from cdd.models import Project, Variable
from cdd.output import error, get_output, print_json


inspect_app = typer.Typer(no_args_is_help=True)

_SPEC_OPTION = typer.Option(
    None, "--spec", "-s", help="OpenAPI document to use instead of the one in config.yml."
)
_LENIENT_OPTION = typer.Option(
    False, "--lenient", help="Treat a document without components as having no models."
)


def _build(ctx: typer.Context, spec: Optional[str], lenient: bool) -> Project:
    workspace = open_workspace(ctx, spec)
    try:
        return workspace.build_project(strict_components=False if lenient else None)
    except CddError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def format_variable(variable: Variable) -> str:
    """``name: Type`` with a trailing ``?`` for optional variables."""
    suffix = "?" if variable.optional else ""
    return f"{variable.name}: {variable.variable_type}{suffix}"


@inspect_app.command("project")
def inspect_project(
    ctx: typer.Context,
    spec: Optional[str] = _SPEC_OPTION,
    lenient: bool = _LENIENT_OPTION,
) -> None:
    """Print the full project IR as JSON.

    Example::

        cdd inspect project > project.json
    """
    project = _build(ctx, spec, lenient)
    print_json(project.model_dump(mode="json"))


@inspect_app.command("models")
def inspect_models(
    ctx: typer.Context,
    spec: Optional[str] = _SPEC_OPTION,
    lenient: bool = _LENIENT_OPTION,
) -> None:
    """List the models extracted from ``components/schemas``."""
    project = _build(ctx, spec, lenient)
    rows = [
        [model.name, model.kind.value, ", ".join(format_variable(v) for v in model.vars)]
        for model in project.models
    ]
    get_output().print_table(
        ["Name", "Kind", "Variables"], rows, title=f"Models ({len(rows)})"
    )


@inspect_app.command("requests")
def inspect_requests(
    ctx: typer.Context,
    spec: Optional[str] = _SPEC_OPTION,
    lenient: bool = _LENIENT_OPTION,
) -> None:
    """List the requests extracted from ``paths``."""
    project = _build(ctx, spec, lenient)
    rows = [
        [
            request.method.value,
            request.path,
            request.name,
            request.response_type,
            request.error_type,
            ", ".join(format_variable(v) for v in request.vars),
        ]
        for request in project.requests
    ]
    get_output().print_table(
        ["Method", "Path", "Name", "Response", "Error", "Parameters"],
        rows,
        title=f"Requests ({len(rows)})",
    )
