from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Final


class _NoDefault:
    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


NO_DEFAULT: Final = _NoDefault()

FIELD_TYPES: Final = frozenset({"string", "boolean", "integer", "decimal", "date"})


class Requirement(IntEnum):
    OPTIONAL = 0
    ON_INSERT = 1
    ESSENTIAL = 2
    ALWAYS = 3


@dataclass(frozen=True, slots=True)
class FieldDefinition:
    name: str
    type: str = "string"
    alias: str = ""
    required: Requirement = Requirement.OPTIONAL
    default: object = NO_DEFAULT
    always_default: bool = False
    label: str = ""

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    def display_name(self) -> str:
        if self.alias:
            return f"'{self.name}' ({self.alias})"
        return f"'{self.name}'"


@dataclass(frozen=True, slots=True)
class ObjectRelation:
    name: str
    type: str
    alias: str = ""
    multiple: bool = False
    required: bool = False

    def display_name(self) -> str:
        if self.alias:
            return f"'{self.name}' ({self.alias})"
        return f"'{self.name}'"


@dataclass(frozen=True, slots=True)
class MatchingRule:
    """How an element is matched against existing remote records.

    ``identifiers`` pairs each identifying field with the match value to send
    when that field is present; the first present identifier wins.
    """

    field: str
    always_insert: str
    identifiers: tuple[tuple[str, str], ...] = ()
    neutral: str = "0"

    @property
    def primary_key(self) -> str | None:
        if not self.identifiers:
            return None
        return self.identifiers[0][0]


@dataclass(frozen=True, slots=True)
class PostalAddressRule:
    address_object: str
    postal_object: str
    flag_field: str


@dataclass(frozen=True, slots=True)
class ObjectSchema:
    type: str
    fields: tuple[FieldDefinition, ...]
    objects: tuple[ObjectRelation, ...] = ()
    id_field: str | None = None
    description: str = ""
    matching: MatchingRule | None = None
    auto_number_field: str | None = None
    postal_address: PostalAddressRule | None = None

    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def object_names(self) -> tuple[str, ...]:
        return tuple(o.name for o in self.objects)

    def field(self, name: str) -> FieldDefinition | None:
        for definition in self.fields:
            if definition.name == name:
                return definition
        return None

    def relation(self, name: str) -> ObjectRelation | None:
        for relation in self.objects:
            if relation.name == name:
                return relation
        return None

    def resolve_field_name(self, key: str) -> str | None:
        """Return the canonical field tag for a tag or alias, if known."""
        for definition in self.fields:
            if definition.name == key:
                return definition.name
        for definition in self.fields:
            if definition.alias and definition.alias == key:
                return definition.name
        return None

    def resolve_object_name(self, key: str) -> str | None:
        for relation in self.objects:
            if relation.name == key:
                return relation.name
        for relation in self.objects:
            if relation.alias and relation.alias == key:
                return relation.name
        return None

    def replace_field(self, name: str, **changes: object) -> ObjectSchema:
        fields = tuple(
            replace(f, **changes) if f.name == name else f for f in self.fields
        )
        return replace(self, fields=fields)

    def without_fields(self, *names: str) -> ObjectSchema:
        return replace(self, fields=tuple(f for f in self.fields if f.name not in names))

    def with_field(self, definition: FieldDefinition) -> ObjectSchema:
        if self.field(definition.name) is not None:
            return self.replace_field(
                definition.name,
                alias=definition.alias,
                type=definition.type,
                required=definition.required,
                default=definition.default,
                always_default=definition.always_default,
                label=definition.label,
            )
        return replace(self, fields=(*self.fields, definition))

    def without_object(self, name: str) -> ObjectSchema:
        return replace(self, objects=tuple(o for o in self.objects if o.name != name))

    def with_object(self, relation: ObjectRelation) -> ObjectSchema:
        objects = tuple(o for o in self.objects if o.name != relation.name)
        return replace(self, objects=(*objects, relation))
