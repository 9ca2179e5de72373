"""cdd -- keep per-language client projects in sync with one OpenAPI document.

The package turns an OpenAPI 3.x document into a language-agnostic
intermediate representation (a :class:`~cdd.models.Project` of models and
requests) and hands it to per-language *services* that own the generated
code. Users keep ``openapi.yml`` and ``config.yml`` at the workspace root
and run ``cdd sync`` whenever the API changes.

Typical workflow::

    cdd init petstore          # scaffold config.yml + openapi.yml
    cd petstore && cdd sync    # copy templates, translate, ask services

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for the IR and the project configuration.
    parser: OpenAPI loading and the OpenAPI-to-IR translator.
    workspace: Reads a workspace and drives templates, translation, services.
    services: Subprocess runner for per-language service binaries.
    config: ``config.yml`` loading, saving, and path resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting built on Rich.
"""

__version__ = "0.3.0"
