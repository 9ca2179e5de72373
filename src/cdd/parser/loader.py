"""Load OpenAPI documents from the workspace, a URL, or stdin.

By convention a workspace keeps its document at ``openapi.yml``;
:func:`find_spec` locates it and :func:`load_spec` reads it. JSON and YAML
are both accepted with format detection, and :func:`validate_openapi_version`
rejects Swagger 2.x documents before translation.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml

from cdd.exceptions import MissingSpecFile, SpecParseError

DEFAULT_SPEC_NAME = "openapi.yml"


def find_spec(root: Path, name: str = DEFAULT_SPEC_NAME) -> Path:
    """Return the path of the workspace's OpenAPI document.

    Args:
        root: Workspace directory.
        name: Document path relative to *root* (absolute paths are used
            as-is).

    Raises:
        MissingSpecFile: If the document does not exist.
    """
    path = root / name
    if not path.is_file():
        raise MissingSpecFile(f"Could not find {name} in {root}")
    return path


def load_spec(source: str | Path) -> dict[str, Any]:
    """Load an OpenAPI document from a file path, URL, or stdin (``'-'``).

    Args:
        source: A local path, an ``http``/``https`` URL, or ``'-'``.

    Returns:
        The parsed document.

    Raises:
        MissingSpecFile: If a local file does not exist.
        SpecParseError: If the source cannot be read or parsed.
    """
    source = str(source)
    if source == "-":
        return _load_from_stdin()
    if source.startswith(("http://", "https://")):
        return _load_from_url(source)
    return _load_from_file(Path(source))


def _load_from_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except OSError as exc:
        raise SpecParseError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise SpecParseError("No input received from stdin")
    return _parse_content(content)


def _load_from_url(url: str) -> dict[str, Any]:
    """Fetch a document over HTTP, using the content type as a format hint."""
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching spec from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch spec from {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    hint = ""
    if "json" in content_type:
        hint = "json"
    elif "yaml" in content_type or "yml" in content_type:
        hint = "yaml"
    return _parse_content(response.text, hint=hint)


def _load_from_file(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise MissingSpecFile(f"Could not find {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecParseError(f"Failed to read spec file {path}: {exc}") from exc

    if not content.strip():
        raise SpecParseError(f"Spec file is empty: {path}")

    suffix = path.suffix.lower()
    hint = ""
    if suffix == ".json":
        hint = "json"
    elif suffix in (".yaml", ".yml"):
        hint = "yaml"
    return _parse_content(content, hint=hint)


def _parse_content(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as JSON, then YAML, unless *hint* pins one format.

    Raises:
        SpecParseError: If the content is not a mapping in either format.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            return _require_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise SpecParseError(f"Invalid JSON: {exc}") from exc
            json_error = exc

    try:
        return _require_mapping(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        msg = "Failed to parse spec as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise SpecParseError(msg) from exc


def _require_mapping(document: Any) -> dict[str, Any]:  # noqa: ANN401
    if not isinstance(document, dict):
        kind = type(document).__name__ if document is not None else "empty document"
        raise SpecParseError(f"Spec must be a JSON/YAML object (got {kind})")
    return document


def validate_openapi_version(spec: dict[str, Any]) -> str:
    """Return the document's ``openapi`` version, rejecting anything but 3.x.

    Raises:
        SpecParseError: For Swagger 2.x documents, a missing ``openapi``
            field, or a non-3.x version.
    """
    if "swagger" in spec:
        raise SpecParseError(
            f"Swagger {spec['swagger']} is not supported. "
            "Convert the document to OpenAPI 3.x first."
        )

    version = spec.get("openapi")
    if version is None:
        raise SpecParseError("Missing 'openapi' field. Is this an OpenAPI 3.x document?")

    version_str = str(version)
    if not version_str.startswith("3."):
        raise SpecParseError(f"Unsupported OpenAPI version: {version_str}")
    return version_str
