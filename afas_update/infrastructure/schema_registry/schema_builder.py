from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from ...domain.entities.schema import (
    FIELD_TYPES,
    NO_DEFAULT,
    FieldDefinition,
    MatchingRule,
    ObjectRelation,
    ObjectSchema,
    PostalAddressRule,
    Requirement,
)
from ...exceptions import SchemaError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

_REQUIREMENTS = {
    "": Requirement.OPTIONAL,
    "n": Requirement.OPTIONAL,
    "y": Requirement.ON_INSERT,
    "insert": Requirement.ON_INSERT,
    "essential": Requirement.ESSENTIAL,
    "always": Requirement.ALWAYS,
}
_TRUE_VALUES = {"y", "yes", "true", "1"}
_FALSE_VALUES = {"", "n", "no", "false", "0"}


def compute_row_order(row: Mapping[str, str], idx: int) -> tuple[int, int]:
    raw = (row.get("Field Order") or "").strip()
    try:
        return (int(raw), idx)
    except ValueError:
        return (1000000, idx)


def parse_flag(raw: str, *, column: str, object_type: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise SchemaError(f"Invalid '{column}' value {raw!r} for object type '{object_type}'")


def parse_default(raw: str, field_type: str) -> object:
    if raw == "":
        return NO_DEFAULT
    if field_type == "boolean":
        return parse_flag(raw, column="Default", object_type="")
    if field_type == "integer":
        try:
            return int(raw)
        except ValueError as e:
            raise SchemaError(f"Invalid integer default {raw!r}") from e
    if field_type == "decimal":
        try:
            return Decimal(raw)
        except InvalidOperation as e:
            raise SchemaError(f"Invalid decimal default {raw!r}") from e
    return raw


def field_from_row(row: Mapping[str, str], object_type: str) -> FieldDefinition:
    name = row.get("Field Name", "")
    field_type = (row.get("Data Type") or "string").lower()
    if field_type not in FIELD_TYPES:
        raise SchemaError(
            f"Unknown data type '{field_type}' for field '{name}' of '{object_type}'"
        )
    required_raw = (row.get("Required") or "").lower()
    if required_raw not in _REQUIREMENTS:
        raise SchemaError(
            f"Unknown requirement '{required_raw}' for field '{name}' of '{object_type}'"
        )
    return FieldDefinition(
        name=name,
        type=field_type,
        alias=row.get("Alias", ""),
        required=_REQUIREMENTS[required_raw],
        default=parse_default(row.get("Default", ""), field_type),
        always_default=parse_flag(
            row.get("Always Default", ""), column="Always Default", object_type=object_type
        ),
        label=row.get("Label", ""),
    )


def relation_from_row(row: Mapping[str, str], object_type: str) -> ObjectRelation:
    name = row.get("Reference Name", "")
    return ObjectRelation(
        name=name,
        type=row.get("Child Type") or name,
        alias=row.get("Alias", ""),
        multiple=parse_flag(
            row.get("Multiple", ""), column="Multiple", object_type=object_type
        ),
        required=parse_flag(
            row.get("Required", ""), column="Required", object_type=object_type
        ),
    )


def parse_matching(type_row: Mapping[str, str], object_type: str) -> MatchingRule | None:
    match_field = type_row.get("Match Field", "")
    if not match_field:
        return None
    identifiers: list[tuple[str, str]] = []
    for token in type_row.get("Match Identifiers", "").split():
        identifier, sep, value = token.partition(":")
        if not sep or not identifier or not value:
            raise SchemaError(
                f"Invalid match identifier {token!r} for object type '{object_type}'"
            )
        identifiers.append((identifier, value))
    always_insert = type_row.get("Match Insert Value", "")
    if not always_insert:
        raise SchemaError(
            f"Object type '{object_type}' has a match field but no insert value"
        )
    return MatchingRule(
        field=match_field,
        always_insert=always_insert,
        identifiers=tuple(identifiers),
        neutral=type_row.get("Match Neutral Value") or "0",
    )


def parse_postal_address(type_row: Mapping[str, str]) -> PostalAddressRule | None:
    address = type_row.get("Address Object", "")
    postal = type_row.get("Postal Address Object", "")
    flag = type_row.get("Postal Flag Field", "")
    if not (address and postal and flag):
        return None
    return PostalAddressRule(address_object=address, postal_object=postal, flag_field=flag)


def build_schema_from_rows(
    object_type: str,
    type_row: Mapping[str, str],
    field_rows: Sequence[Mapping[str, str]],
    object_rows: Sequence[Mapping[str, str]],
) -> ObjectSchema:
    ordered = [
        r
        for _, r in sorted(
            ((compute_row_order(r, i), r) for i, r in enumerate(field_rows)),
            key=lambda x: x[0],
        )
    ]
    fields = tuple(field_from_row(row, object_type) for row in ordered)
    names = [f.name for f in fields]
    if len(names) != len(set(names)):
        duplicates = sorted({n for n in names if names.count(n) > 1})
        raise SchemaError(
            f"Duplicate fields for object type '{object_type}': {', '.join(duplicates)}"
        )
    objects = tuple(relation_from_row(row, object_type) for row in object_rows)
    return ObjectSchema(
        type=object_type,
        fields=fields,
        objects=objects,
        id_field=type_row.get("Id Field") or None,
        description=type_row.get("Description", ""),
        matching=parse_matching(type_row, object_type),
        auto_number_field=type_row.get("Auto Number Field") or None,
        postal_address=parse_postal_address(type_row),
    )


__all__ = ["build_schema_from_rows", "compute_row_order"]
