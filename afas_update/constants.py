from enum import IntFlag
from typing import ClassVar


class ChangeBehavior(IntFlag):
    """Which changes the output pass may make to element values."""

    ALLOW_NO_CHANGES = 0
    FLATTEN_SINGLE_ELEMENT = 1
    ALLOW_EMBEDDED_CHANGES = 2
    ALLOW_DEFAULTS_ON_INSERT = 4
    ALLOW_DEFAULTS_ON_UPDATE = 8
    ALLOW_REFORMAT = 16
    ALLOW_CHANGES = 32


class ValidationBehavior(IntFlag):
    NOTHING = 0
    ESSENTIAL = 1
    REQUIRED = 2
    NO_UNKNOWN = 4
    FORMAT = 8


DEFAULT_CHANGE = (
    ChangeBehavior.FLATTEN_SINGLE_ELEMENT
    | ChangeBehavior.ALLOW_EMBEDDED_CHANGES
    | ChangeBehavior.ALLOW_DEFAULTS_ON_INSERT
    | ChangeBehavior.ALLOW_REFORMAT
)
DEFAULT_VALIDATION = (
    ValidationBehavior.ESSENTIAL
    | ValidationBehavior.REQUIRED
    | ValidationBehavior.NO_UNKNOWN
)
ALL_CHANGE_BITS = 63
ALL_VALIDATION_BITS = 15


class Actions:
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    NONE = ""
    ALL: ClassVar[frozenset[str]] = frozenset({INSERT, UPDATE, DELETE, NONE})
    ALIASES: ClassVar[dict[str, str]] = {"post": INSERT, "put": UPDATE}


class PseudoKeys:
    ID = "#id"
    ACTION = "#action"
    ID_ATTRIBUTE_PREFIX = "@"


class OutputFormats:
    JSON = "json"
    XML = "xml"
    ALL: ClassVar[tuple[str, ...]] = (JSON, XML)


class Defaults:
    XML_INDENT = 2
    JSON_INDENT = 4
    OUTPUT_FORMAT = OutputFormats.JSON
    NEUTRAL_MATCH_VALUE = "0"


class Namespaces:
    XSI = "http://www.w3.org/2001/XMLSchema-instance"


class Patterns:
    ISO_DATE = r"^\d{4}-\d{2}-\d{2}$"
    ISO_DATETIME = r"^(\d{4}-\d{2}-\d{2})[T ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?$"
    NUMERIC = r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$"


class SchemaFiles:
    OBJECT_TYPES = "object_types.csv"
    FIELDS = "fields.csv"
    OBJECTS = "objects.csv"
