"""OpenAPI loading and the OpenAPI-to-IR translator.

Typical usage::

    from cdd.parser import extract_project, load_spec

    spec = load_spec("openapi.yml")
    project = extract_project(spec)

Sub-modules:

* :mod:`~cdd.parser.loader` -- I/O layer (file, URL, stdin) and version check.
* :mod:`~cdd.parser.types` -- schema-kind classification and type resolution.
* :mod:`~cdd.parser.schemas` -- variables, models, and array aliases.
* :mod:`~cdd.parser.requests` -- requests from the ``paths`` object.
* :mod:`~cdd.parser.extractor` -- assembles the :class:`~cdd.models.Project`.
"""

from cdd.parser.extractor import extract_project
from cdd.parser.loader import find_spec, load_spec, validate_openapi_version

__all__ = ["extract_project", "find_spec", "load_spec", "validate_openapi_version"]
