"""Turn ``components/schemas`` entries into :class:`~cdd.models.Model` objects.

Three steps live here:

* :func:`extract_variables` -- the strict property-to-variable conversion.
  Generated records are flat, so reference and nested-object properties are
  rejected with a :class:`~cdd.exceptions.SchemaError`.
* :func:`extract_model` -- one named schema to one model, appending the
  implicit ``id`` field, or to a marker model when the schema is not an
  object.
* :func:`collect_array_aliases` -- top-level array schemas are never
  modelled; those whose items resolve to a ``ComplexType`` are remembered so
  array responses can be rendered as ``[Model]``.
"""

from __future__ import annotations

from typing import Any

from cdd.exceptions import UnsupportedReferenceProperty, UnsupportedSchemaKind
from cdd.models import Model, ModelKind, TypeKind, Variable, VariableType
from cdd.parser.types import (
    SchemaKind,
    array_items,
    resolve_property_type,
    resolve_type,
    schema_kind,
)

ID_FIELD = "id"


def extract_variables(
    model_name: str,
    properties: dict[str, Any],
    required: list[str],
) -> list[Variable]:
    """Convert an object schema's properties into variables, in declared order.

    Args:
        model_name: Owning schema name, used in error messages.
        properties: The schema's ``properties`` mapping.
        required: The schema's ``required`` list.

    Returns:
        One :class:`~cdd.models.Variable` per property. ``optional`` is
        true exactly when the property is not listed in *required*.

    Raises:
        UnsupportedReferenceProperty: If a property is a ``$ref``.
        UnsupportedSchemaKind: If a property is not a string, number,
            integer, boolean, or array schema.
    """
    required_names = set(required)
    variables: list[Variable] = []

    for var_name, prop in properties.items():
        var_name = str(var_name)
        kind = schema_kind(prop)
        if kind == SchemaKind.REFERENCE:
            raise UnsupportedReferenceProperty(model_name, var_name)

        variable_type = resolve_property_type(prop)
        if variable_type is None:
            raise UnsupportedSchemaKind(model_name, var_name, kind.value)

        variables.append(
            Variable(
                name=var_name,
                optional=var_name not in required_names,
                variable_type=variable_type,
            )
        )

    return variables


def extract_model(name: str, schema: dict[str, Any]) -> Model:
    """Build the model for one top-level schema.

    Object schemas become a record with their properties followed by a
    non-optional ``id: IntType``. Every other kind, including a schema
    without ``type``, becomes an empty marker model: such schemas act as
    inheritance bases for the generators.

    Args:
        name: The schema's key under ``components/schemas``.
        schema: The schema body.

    Returns:
        The extracted :class:`~cdd.models.Model`.

    Raises:
        SchemaError: If a property cannot be represented (see
            :func:`extract_variables`).
    """
    if schema_kind(schema) != SchemaKind.OBJECT:
        return Model.marker(name)

    variables = extract_variables(
        name,
        schema.get("properties") or {},
        schema.get("required") or [],
    )
    variables.append(
        Variable(name=ID_FIELD, optional=False, variable_type=VariableType.integer())
    )
    return Model(name=name, vars=variables, kind=ModelKind.OBJECT)


def is_array_schema(schema: Any) -> bool:  # noqa: ANN401
    """Whether a top-level schema is itself an array type."""
    return schema_kind(schema) == SchemaKind.ARRAY


def collect_array_aliases(schemas: dict[str, Any]) -> dict[str, str]:
    """Map top-level array schema names to the model their items reference.

    ``Pets: {type: array, items: {$ref: '#/components/schemas/Pet'}}``
    yields ``{"Pets": "Pet"}``. Inline object items alias to the
    ``InlineObject`` placeholder. Arrays of primitives or of arrays are not
    recorded.

    Args:
        schemas: The ``components/schemas`` mapping.

    Returns:
        A new dict from alias name to referenced model name.
    """
    aliases: dict[str, str] = {}
    for name, schema in schemas.items():
        if not is_array_schema(schema):
            continue
        item_type = resolve_type(array_items(schema))
        if item_type.kind == TypeKind.COMPLEX:
            aliases[str(name)] = str(item_type.name)
    return aliases
