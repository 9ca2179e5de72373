"""Assemble a :class:`~cdd.models.Project` from a parsed OpenAPI document.

This module walks a raw (not ``$ref``-resolved) OpenAPI dict and drives the
other parser modules in a fixed order:

1. ``servers`` -- :func:`extract_info` derives host and endpoint from the
   first server URL.
2. ``components/schemas`` -- array aliases are collected first, then every
   non-array inline schema becomes a model.
3. ``paths`` -- every operation becomes a request, with the alias map from
   step 2 consulted read-only.

References are never followed here: a ``$ref`` is reduced to the name of its
target and resolution is left to the code generators.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlsplit

from cdd.exceptions import MissingComponents
from cdd.models import Info, Model, Project
from cdd.parser.requests import extract_requests
from cdd.parser.schemas import collect_array_aliases, extract_model, is_array_schema

_FORBIDDEN_HOST_CHARS = frozenset(" #%/<>?@[\\]^|")


def extract_project(spec: Mapping[str, Any], strict_components: bool = True) -> Project:
    """Translate an OpenAPI document into the project IR.

    Args:
        spec: The parsed document as returned by
            :func:`~cdd.parser.loader.load_spec`.
        strict_components: When true, a document without a ``components``
            section is rejected. When false it simply yields no models.

    Returns:
        The assembled :class:`~cdd.models.Project`.

    Raises:
        MissingComponents: If ``components`` is absent and
            *strict_components* is true.
        SchemaError: If any component schema cannot be represented. The
            first failure aborts the whole translation.

    Example::

        spec = load_spec("openapi.yml")
        project = extract_project(spec)
        for request in project.requests:
            print(request.method, request.path, request.response_type)
    """
    components = spec.get("components")
    if components is None:
        if strict_components:
            raise MissingComponents()
        components = {}

    schemas = components.get("schemas") or {}
    aliases = collect_array_aliases(schemas)

    return Project(
        info=extract_info(spec),
        models=extract_models(schemas),
        requests=extract_requests(spec.get("paths") or {}, aliases),
    )


def extract_models(schemas: Mapping[str, Any]) -> list[Model]:
    """Extract a model for every inline, non-array component schema.

    Component entries that are themselves ``$ref`` pointers are skipped,
    as are array schemas (see
    :func:`~cdd.parser.schemas.collect_array_aliases`).
    """
    models: list[Model] = []
    for name, schema in schemas.items():
        if not isinstance(schema, Mapping) or "$ref" in schema:
            continue
        if is_array_schema(schema):
            continue
        models.append(extract_model(str(name), dict(schema)))
    return models


def extract_info(spec: Mapping[str, Any]) -> Info:
    """Derive :class:`~cdd.models.Info` from the first ``servers`` entry.

    ``https://api.example.com:8443/v1`` gives
    ``Info(host="https://api.example.com", endpoint="/v1")``; the port is
    not kept and IPv6 hosts keep their brackets. Relative or otherwise
    unparsable URLs (bad port, forbidden host characters), and documents
    without servers, give empty strings.
    """
    servers = spec.get("servers") or []
    if not servers or not isinstance(servers[0], Mapping):
        return Info()

    url = str(servers[0].get("url", ""))
    try:
        parts = urlsplit(url)
        hostname = parts.hostname or ""
        parts.port  # raises ValueError for a non-numeric or out-of-range port
    except ValueError:
        return Info()

    if not parts.scheme or not hostname:
        return Info()
    if ":" in hostname:
        hostname = f"[{hostname}]"
    elif any(char in _FORBIDDEN_HOST_CHARS for char in hostname):
        return Info()

    return Info(
        host=f"{parts.scheme}://{hostname}",
        endpoint=parts.path or "/",
    )
