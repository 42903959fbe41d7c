"""Single field value conversion and validation.

Values are validated when they enter an element (input mode) and again when
the element is output. ``None`` is never rejected here; requiredness is a
concern of the element validator.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
import re

from ...constants import ChangeBehavior, Patterns, ValidationBehavior
from ...exceptions import FieldValueError
from ..entities.schema import FieldDefinition

_ISO_DATE = re.compile(Patterns.ISO_DATE)
_ISO_DATETIME = re.compile(Patterns.ISO_DATETIME)
_NUMERIC = re.compile(Patterns.NUMERIC)

_TRUE_STRINGS = frozenset({"1", "true", "yes", "y"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "n", ""})

SCALAR_TYPES = (str, int, float, Decimal, date)


def is_scalar(value: object) -> bool:
    return isinstance(value, SCALAR_TYPES)


def describe_element(object_type: str, element_index: int | None = None) -> str:
    if element_index:
        return f"'{object_type}' element with index {element_index + 1}"
    return f"'{object_type}' element"


def validate_field_value(
    value: object,
    field: FieldDefinition,
    *,
    object_type: str,
    change: int = ChangeBehavior.ALLOW_NO_CHANGES,
    validation: int = ValidationBehavior.ESSENTIAL,
    element_index: int | None = None,
) -> object:
    """Return the (possibly converted) value or raise :class:`FieldValueError`."""
    if value is None:
        return None

    reformat = bool(change & ChangeBehavior.ALLOW_REFORMAT)
    try:
        if validation & ValidationBehavior.ESSENTIAL:
            value = _convert(value, field)
        if field.type == "date" and isinstance(value, str):
            value = _check_date_string(value, reformat=reformat, validation=validation)
    except ValueError as e:
        message = str(e).format(
            name=field.display_name(),
            element=describe_element(object_type, element_index),
        )
        raise FieldValueError(message) from e

    if reformat and isinstance(value, str):
        value = value.strip()
    return value


def _convert(value: object, field: FieldDefinition) -> object:
    if not is_scalar(value):
        raise ValueError("{name} field value of {element} must be scalar.")
    if field.type == "boolean":
        return _to_bool(value)
    if field.type in ("integer", "decimal"):
        if isinstance(value, bool) or not _is_numeric(value):
            raise ValueError("{name} field value of {element} must be numeric.")
        if field.type == "integer" and not _is_integral(value):
            raise ValueError(
                "{name} field value of {element} must be an integer value."
            )
        return value
    if field.type == "date":
        if isinstance(value, datetime):
            return value.date().isoformat()
        if isinstance(value, date):
            return value.isoformat()
        if not isinstance(value, str):
            raise ValueError("{name} field value of {element} must be a date.")
    return value


def _to_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError("{name} field value of {element} must be a boolean.")


def _is_numeric(value: object) -> bool:
    if isinstance(value, (int, float, Decimal)):
        return True
    return isinstance(value, str) and _NUMERIC.match(value) is not None


def _is_integral(value: object) -> bool:
    if isinstance(value, int):
        return True
    if isinstance(value, str):
        return "." not in value and "e" not in value.lower()
    if isinstance(value, float):
        return value.is_integer()
    if isinstance(value, Decimal):
        return value == value.to_integral_value()
    return False


def _check_date_string(value: str, *, reformat: bool, validation: int) -> str:
    stripped = value.strip()
    if reformat and (match := _ISO_DATETIME.match(stripped)):
        value = match.group(1)
        stripped = value
    if validation & ValidationBehavior.FORMAT:
        if not _ISO_DATE.match(stripped):
            raise ValueError(
                "{name} field value of {element} must be a date in YYYY-MM-DD format."
            )
        try:
            date.fromisoformat(stripped)
        except ValueError as e:
            raise ValueError(
                "{name} field value of {element} is not a valid date."
            ) from e
    return value
