"""AFAS update connector payloads.

This package builds and validates the nested data sent to AFAS Profit update
connectors and renders it as XML (SOAP) or JSON (REST):

- Schema registry of object types, fields and embeddable objects
- ``UpdateObject`` tree with input validation
- Output validation resolving actions, matching and defaults
- XML and JSON encoders
"""

from importlib.metadata import PackageNotFoundError, version

try:  # pragma: no cover
    __version__ = version("afas-update")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

from afas_update.application.update_object import UpdateObject
from afas_update.constants import (
    DEFAULT_CHANGE,
    DEFAULT_VALIDATION,
    ChangeBehavior,
    ValidationBehavior,
)
from afas_update.exceptions import (
    FieldValueError,
    InputError,
    OutputError,
    SchemaError,
    TransportError,
    UpdateConnectorError,
)
from afas_update.infrastructure.schema_registry import get_schema, list_object_types

__all__ = [
    "DEFAULT_CHANGE",
    "DEFAULT_VALIDATION",
    "ChangeBehavior",
    "FieldValueError",
    "InputError",
    "OutputError",
    "SchemaError",
    "TransportError",
    "UpdateConnectorError",
    "UpdateObject",
    "ValidationBehavior",
    "__version__",
    "get_schema",
    "list_object_types",
]
