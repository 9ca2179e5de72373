"""Sync command -- translate the spec and reconcile every service project.

``cdd sync`` opens the workspace, scaffolds missing service projects from
their templates, translates ``openapi.yml`` into the IR, builds the
instruction tree, and then asks each service which models it already has,
reporting the ones it lacks and the ones the spec no longer declares.
"""

from __future__ import annotations

from typing import Optional

import typer

from cdd.commands.common import open_workspace
from cdd.exceptions import CddError
from cdd.models import Model, Project
from cdd.output import debug, error, info, success, suggest, warning


def sync_command(
    ctx: typer.Context,
    spec: Optional[str] = typer.Option(
        None, "--spec", "-s", help="OpenAPI document to use instead of the one in config.yml."
    ),
    lenient: bool = typer.Option(
        False, "--lenient", help="Treat a document without components as having no models."
    ),
    skip_templates: bool = typer.Option(
        False, "--skip-templates", help="Do not copy templates for missing projects."
    ),
) -> None:
    """Sync projects using language-specific services.

    Example::

        cdd sync
        cdd -v sync --spec ../api/openapi.yml
    """
    workspace = open_workspace(ctx, spec)

    try:
        if not skip_templates:
            workspace.copy_templates()
        project = workspace.build_project(strict_components=False if lenient else None)
        instructions = workspace.generate_instruction_tree(project)
        debug(f"{len(instructions)} instruction(s) generated")

        info("Reading service projects")
        service_models = workspace.service_models()
    except CddError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if not service_models:
        warning("No services configured in config.yml")
        suggest("Add a service under 'services:' to generate client code.")

    for name, models in service_models.items():
        _report_service(name, project, models)

    success(
        f"Synced {len(project.models)} model(s) and {len(project.requests)} request(s)."
    )


def _report_service(name: str, project: Project, models: list[Model]) -> None:
    """Report how a service's models differ from the spec's."""
    present = {model.name for model in models}
    declared = project.model_names()

    missing = [model for model in declared if model not in present]
    extra = sorted(present.difference(declared))

    if not missing and not extra:
        info(f"{name}: up to date ({len(present)} model(s))")
        return
    if missing:
        info(f"{name}: missing {len(missing)} model(s): {', '.join(missing)}")
    if extra:
        info(f"{name}: {len(extra)} model(s) not in spec: {', '.join(extra)}")
