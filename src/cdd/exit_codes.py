"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to an error category and is referenced by the
corresponding :class:`~cdd.exceptions.CddError` subclass, so wrapper
scripts can tell a broken spec from a broken service without parsing
stderr.

Example::

    $ cdd sync
    $ echo $?
    7   # EXIT_SPEC_PARSE_ERROR -- openapi.yml could not be translated
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be loaded or translated into the IR."""

EXIT_SERVICE_ERROR = 8
"""A per-language service binary was missing, failed, or returned bad output."""
