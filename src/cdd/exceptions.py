"""Exception hierarchy for cdd.

All exceptions inherit from :class:`CddError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`cdd.exit_codes`.
The top-level error handler in :func:`cdd.app.main` catches ``CddError``
and exits with the appropriate code, while unexpected exceptions produce a
crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    CddError (exit 1)
    +-- InvalidUsageError              (exit 2)
    +-- SpecParseError                 (exit 7)
    |   +-- MissingSpecFile
    |   +-- MissingComponents
    |   +-- SchemaError
    |       +-- UnsupportedSchemaKind
    |       +-- UnsupportedReferenceProperty
    +-- ServiceError                   (exit 8)
    +-- ConfigError                    (exit 1)
"""

from __future__ import annotations

from cdd.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SERVICE_ERROR,
    EXIT_SPEC_PARSE_ERROR,
)


class CddError(Exception):
    """Base exception for all cdd errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(CddError):
    """Raised for invalid CLI arguments."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(CddError):
    """Raised when the OpenAPI document cannot be loaded or translated."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class MissingSpecFile(SpecParseError):
    """Raised when the OpenAPI document cannot be located on disk."""


class MissingComponents(SpecParseError):
    """Raised when the document declares no ``components`` section at all."""

    def __init__(self) -> None:
        super().__init__(
            "The OpenAPI document has no 'components' section; "
            "declare one or run with --lenient"
        )


class SchemaError(SpecParseError):
    """Raised when a component schema cannot be represented as a model.

    Attributes:
        model: Name of the component schema being translated.
        field: Name of the offending property.
    """

    def __init__(self, message: str, model: str, field: str):
        super().__init__(message)
        self.model = model
        self.field = field


class UnsupportedSchemaKind(SchemaError):
    """Raised when a model property has a kind that cannot be flattened.

    Only string, number, integer, boolean, and array properties are
    allowed on generated records; nested objects and composed schemas are
    rejected.
    """

    def __init__(self, model: str, field: str, kind: str):
        super().__init__(
            f"Unsupported variable type on {model} for {field}: {kind}",
            model=model,
            field=field,
        )
        self.kind = kind


class UnsupportedReferenceProperty(SchemaError):
    """Raised when a model property is a ``$ref`` instead of an inline schema."""

    def __init__(self, model: str, field: str):
        super().__init__(
            f"Reference types for variables are not supported in {model} for {field}",
            model=model,
            field=field,
        )


class ServiceError(CddError):
    """Raised when a per-language service is missing, fails, or returns bad output."""

    exit_code = EXIT_SERVICE_ERROR


class ConfigError(CddError):
    """Raised for configuration problems (missing or invalid ``config.yml``, bad template paths)."""

    exit_code = EXIT_GENERIC_FAILURE
