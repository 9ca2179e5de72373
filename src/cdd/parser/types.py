"""Classify raw OpenAPI schema nodes and resolve them to :class:`~cdd.models.VariableType`.

OpenAPI schemas are open-ended dicts. :func:`schema_kind` folds every node
into the closed :class:`SchemaKind` set at the boundary so that the rest of
the translator only ever branches on that enum. :func:`resolve_type` is the
lenient resolver used for array items, parameters, and response types: it
never fails and falls back to ``StringType`` for anything it cannot
represent.
"""

from __future__ import annotations

import enum
from typing import Any

from cdd.models import VariableType

INLINE_OBJECT_TYPE = "InlineObject"
"""Placeholder ``ComplexType`` name for inline object schemas met while resolving."""

_COMPOSITION_KEYS = ("oneOf", "anyOf", "allOf", "not")


class SchemaKind(str, enum.Enum):
    """Closed set of schema shapes the translator distinguishes."""

    REFERENCE = "reference"
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    COMPOSED = "composed"
    ANY = "any"


_TYPE_KINDS = {
    "string": SchemaKind.STRING,
    "number": SchemaKind.NUMBER,
    "integer": SchemaKind.INTEGER,
    "boolean": SchemaKind.BOOLEAN,
    "array": SchemaKind.ARRAY,
    "object": SchemaKind.OBJECT,
}

_SCALAR_TYPES = {
    SchemaKind.STRING: VariableType.string,
    SchemaKind.NUMBER: VariableType.float,
    SchemaKind.INTEGER: VariableType.integer,
    SchemaKind.BOOLEAN: VariableType.boolean,
}


def schema_kind(node: Any) -> SchemaKind:  # noqa: ANN401
    """Classify a reference-or-schema node.

    A ``type`` keyword decides the kind, so a schema with ``properties``
    but no ``type`` is ``ANY``. OpenAPI 3.1 type arrays such as
    ``["string", "null"]`` use their first non-null entry.

    Args:
        node: A raw schema dict (or anything else found where a schema
            was expected).

    Returns:
        The :class:`SchemaKind` of *node*.
    """
    if not isinstance(node, dict):
        return SchemaKind.ANY
    if "$ref" in node:
        return SchemaKind.REFERENCE

    type_value = node.get("type")
    if isinstance(type_value, list):
        non_null = [t for t in type_value if t != "null"]
        type_value = non_null[0] if non_null else None
    if type_value is not None:
        return _TYPE_KINDS.get(str(type_value), SchemaKind.ANY)

    if any(key in node for key in _COMPOSITION_KEYS):
        return SchemaKind.COMPOSED
    return SchemaKind.ANY


def ref_name(ref: str) -> str:
    """Return the last ``/`` segment of a ``$ref`` string.

    ``"#/components/schemas/Widget"`` becomes ``"Widget"`` whatever the
    depth of the pointer.
    """
    return ref.split("/")[-1]


def array_items(node: dict[str, Any]) -> Any:  # noqa: ANN401
    """Return the ``items`` schema of an array node (an empty schema when absent)."""
    return node.get("items") or {}


def resolve_type(node: Any) -> VariableType:  # noqa: ANN401
    """Resolve a reference-or-schema node to a :class:`~cdd.models.VariableType`.

    * ``$ref`` -- ``ComplexType`` named after the last pointer segment. The
      target is neither looked up nor checked for cycles.
    * string / number / integer / boolean -- the matching scalar type.
    * array -- ``ArrayType`` around the recursively resolved items.
    * inline object -- ``ComplexType(INLINE_OBJECT_TYPE)``; nested fields
      are not expanded.
    * anything else -- ``StringType``.

    Args:
        node: A raw schema dict or ``{"$ref": ...}`` dict.

    Returns:
        The resolved type.
    """
    kind = schema_kind(node)
    if kind == SchemaKind.REFERENCE:
        return VariableType.complex(ref_name(str(node["$ref"])))
    if kind in _SCALAR_TYPES:
        return _SCALAR_TYPES[kind]()
    if kind == SchemaKind.ARRAY:
        return VariableType.array(resolve_type(array_items(node)))
    if kind == SchemaKind.OBJECT:
        return VariableType.complex(INLINE_OBJECT_TYPE)
    return VariableType.string()


def resolve_property_type(node: dict[str, Any]) -> VariableType | None:
    """Strict variant of :func:`resolve_type` for model properties.

    Returns ``None`` when *node* is not a string, number, integer, boolean,
    or array schema; the caller decides how to report it.
    """
    kind = schema_kind(node)
    if kind in _SCALAR_TYPES:
        return _SCALAR_TYPES[kind]()
    if kind == SchemaKind.ARRAY:
        return VariableType.array(resolve_type(array_items(node)))
    return None
