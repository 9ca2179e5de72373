"""Extract :class:`~cdd.models.Request` objects from the OpenAPI ``paths`` object.

Every present HTTP method on every path item yields one request. Only
``query`` and ``path`` parameters become variables. Response and error types
are reduced to model names; array aliases collected from
``components/schemas`` turn an aliased response name into ``"[Model]"``.

The two empty-response sentinels are spelled differently on purpose: code
generators already match on ``"ResponceEmpty"`` for success responses and
``"ResponseEmpty"`` for errors.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from cdd.models import Method, Request, Variable, VariableType
from cdd.parser.types import ref_name, resolve_type

EMPTY_RESPONSE = "ResponceEmpty"
"""``response_type`` when the success response has no referenced schema."""

EMPTY_ERROR = "ResponseEmpty"
"""``error_type`` when the operation declares no ``default`` response."""

_PARAMETER_LOCATIONS = frozenset({"query", "path"})
_DEFAULT_RESPONSE = "default"
_NAME_STRIP_CHARS = str.maketrans("", "", "/{}")


def extract_requests(
    paths: Mapping[str, Any],
    aliases: Mapping[str, str],
) -> list[Request]:
    """Extract one request per path + method pair.

    Args:
        paths: The document's ``paths`` mapping.
        aliases: Array alias map from
            :func:`~cdd.parser.schemas.collect_array_aliases`. Only read.

    Returns:
        Requests in path order, methods within a path in :class:`Method`
        order (GET, POST, PUT, DELETE, OPTIONS, HEAD, PATCH, TRACE).
    """
    requests: list[Request] = []

    for url_path, path_item in paths.items():
        if not isinstance(path_item, Mapping) or "$ref" in path_item:
            continue
        url_path = str(url_path)

        for method in Method:
            operation = path_item.get(method.value.lower())
            if not isinstance(operation, Mapping):
                continue
            requests.append(extract_request(url_path, method, operation, aliases))

    return requests


def extract_request(
    url_path: str,
    method: Method,
    operation: Mapping[str, Any],
    aliases: Mapping[str, str],
) -> Request:
    """Build the request for a single operation.

    Args:
        url_path: The raw path key, e.g. ``"/users/{id}"``.
        method: The HTTP method the operation is declared under.
        operation: The operation object.
        aliases: Array alias map, see :func:`extract_requests`.

    Returns:
        The extracted :class:`~cdd.models.Request`.
    """
    responses = operation.get("responses") or {}

    return Request(
        name=request_name(url_path, method),
        path=trim_path(url_path),
        vars=extract_parameters(operation.get("parameters") or []),
        method=method,
        response_type=response_type(responses, aliases),
        error_type=error_type(responses),
    )


def extract_parameters(parameters: list[Any]) -> list[Variable]:
    """Convert inline ``query`` and ``path`` parameters into variables.

    Header and cookie parameters, and ``$ref`` parameters, are skipped.
    """
    variables: list[Variable] = []
    for param in parameters:
        if not isinstance(param, Mapping) or "$ref" in param:
            continue
        if param.get("in") not in _PARAMETER_LOCATIONS:
            continue
        variables.append(parameter_variable(param))
    return variables


def parameter_variable(param: Mapping[str, Any]) -> Variable:
    """Turn one parameter object into a variable.

    A ``schema`` parameter is resolved with
    :func:`~cdd.parser.types.resolve_type`. A ``content`` parameter has no
    usable type yet and becomes a required ``StringType``.
    """
    name = str(param.get("name", ""))
    if "schema" in param:
        return Variable(
            name=name,
            optional=not param.get("required", False),
            variable_type=resolve_type(param["schema"]),
        )
    # TODO: resolve the schema of the first media type in ``content``.
    return Variable(name=name, optional=False, variable_type=VariableType.string())


def response_name(response: Any) -> str:  # noqa: ANN401
    """Reduce a response (or ``$ref`` to one) to a model name.

    A referenced response yields the reference's last segment. Otherwise the
    first media type's schema is used when it is a ``$ref``; any other
    shape yields ``""``.
    """
    if not isinstance(response, Mapping):
        return ""
    if "$ref" in response:
        return ref_name(str(response["$ref"]))

    content = response.get("content") or {}
    media_type = next(iter(content.values()), None)
    schema = media_type.get("schema") if isinstance(media_type, Mapping) else None
    if isinstance(schema, Mapping) and "$ref" in schema:
        return ref_name(str(schema["$ref"]))
    return ""


def response_type(responses: Mapping[Any, Any], aliases: Mapping[str, str]) -> str:
    """Name of the first non-default response, with alias and sentinel handling."""
    name = ""
    for status, response in responses.items():
        if str(status) == _DEFAULT_RESPONSE:
            continue
        name = response_name(response)
        break

    if not name:
        name = EMPTY_RESPONSE
    if name in aliases:
        name = f"[{aliases[name]}]"
    return name


def error_type(responses: Mapping[Any, Any]) -> str:
    """Name of the ``default`` response, or :data:`EMPTY_ERROR` when none is declared.

    A declared default without a referenced schema yields ``""``.
    """
    if _DEFAULT_RESPONSE not in responses:
        return EMPTY_ERROR
    return response_name(responses[_DEFAULT_RESPONSE])


def request_name(url_path: str, method: Method) -> str:
    """``"/users/{id}"`` + GET becomes ``"usersidGETrequest"``.

    Distinct paths can collide once ``/``, ``{`` and ``}`` are removed;
    collisions are not detected.
    """
    return f"{url_path}{method.value}request".translate(_NAME_STRIP_CHARS)


def trim_path(url_path: str) -> str:
    """Drop the final ``/``-delimited segment: ``"/users/{id}"`` becomes ``"/users"``.

    The last segment is dropped whether or not it is a parameter, so
    ``"/users"`` becomes ``""``.
    """
    return "/".join(url_path.split("/")[:-1])
