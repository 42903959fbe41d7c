"""Per-object-type behaviour that cannot be expressed as schema data.

Hooks come in three kinds:

- ``adjust_schema`` returns a schema tailored to the parent type, the action
  and the element being validated.
- ``derive_fields`` fills fields from other field values; it only runs when
  the caller allows value changes.
- ``finalize_fields`` runs after defaults and field validation and returns
  any extra error messages.

Both field hooks receive the working copy of the element's fields and may
modify it in place.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from ...constants import Actions, ChangeBehavior
from ..entities.schema import FieldDefinition, ObjectRelation, ObjectSchema, Requirement
from .conversions import convert_name_fields, convert_street_name

ARTICLE_ITEM_TYPES = frozenset({"2", "7"})
DEFAULT_ITEM_TYPE = 2


@dataclass(frozen=True, slots=True)
class SchemaContext:
    parent_type: str = ""
    action: str = ""
    fields: dict[str, object] | None = None
    objects: frozenset[str] = frozenset()

    def has_field(self, *names: str) -> bool:
        if not self.fields:
            return False
        return any(self.fields.get(name) not in (None, "") for name in names)


@dataclass(frozen=True, slots=True)
class FieldContext:
    schema: ObjectSchema
    action: str
    change: int
    validation: int
    element_description: str

    @property
    def defaults_allowed(self) -> bool:
        return bool(
            self.change
            & (
                ChangeBehavior.ALLOW_DEFAULTS_ON_INSERT
                | ChangeBehavior.ALLOW_DEFAULTS_ON_UPDATE
            )
        )


AdjustSchema = Callable[[ObjectSchema, SchemaContext], ObjectSchema]
FieldHook = Callable[[dict[str, object], FieldContext], list[str]]


@dataclass(frozen=True, slots=True)
class ObjectHooks:
    adjust_schema: AdjustSchema | None = None
    derive_fields: FieldHook | None = None
    finalize_fields: FieldHook | None = None

    def describe(self) -> str:
        names = [
            name
            for name in ("adjust_schema", "derive_fields", "finalize_fields")
            if getattr(self, name) is not None
        ]
        return ", ".join(names)


NO_HOOKS = ObjectHooks()


def adjust_contact_schema(schema: ObjectSchema, context: SchemaContext) -> ObjectSchema:
    if context.parent_type not in ("KnOrganisation", "KnPerson"):
        return schema
    schema = schema.without_fields("BcCoOga", "BcCoPer", "AddToPortal", "EmailPortal")
    contact_type = FieldDefinition(
        name="ViKc", alias="contact_type", label="Contact type"
    )
    if context.parent_type == "KnOrganisation":
        schema = schema.with_object(
            ObjectRelation(name="KnPerson", type="KnPerson", alias="person")
        )
        if "KnPerson" in context.objects:
            contact_type = FieldDefinition(
                name="ViKc", alias="contact_type", default="PRS", label="Contact type"
            )
    return schema.with_field(contact_type)


def adjust_person_schema(schema: ObjectSchema, context: SchemaContext) -> ObjectSchema:
    if context.has_field("In"):
        schema = schema.replace_field("FiNm", required=Requirement.OPTIONAL)
    if context.parent_type in ("KnContact", "KnSalesRelationPer"):
        schema = schema.with_field(
            FieldDefinition(name="CoLw", label="Country of legislation")
        )
    if context.parent_type == "KnSalesRelationPer":
        # The private phone/mobile/email fields take over the aliases.
        for business, private in (("TeNr", "TeN2"), ("MbNr", "MbN2"), ("EmAd", "EmA2")):
            definition = schema.field(business)
            if definition is None or schema.field(private) is None:
                continue
            schema = schema.replace_field(business, alias="")
            schema = schema.replace_field(private, alias=definition.alias)
    return schema


def derive_person_fields(fields: dict[str, object], context: FieldContext) -> list[str]:
    converted = convert_name_fields(fields)
    fields.clear()
    fields.update(converted)
    return []


def derive_address_fields(fields: dict[str, object], context: FieldContext) -> list[str]:
    converted = convert_street_name(fields)
    fields.clear()
    fields.update(converted)
    return []


def finalize_address_fields(
    fields: dict[str, object], context: FieldContext
) -> list[str]:
    if not context.defaults_allowed or context.schema.field("BeginDate") is None:
        return []
    if context.action == Actions.INSERT:
        fields.pop("BeginDate", None)
    elif fields.get("BeginDate") in (None, ""):
        fields["BeginDate"] = date.today().isoformat()
    return []


def is_article_line(fields: dict[str, object] | None) -> bool:
    item_type = DEFAULT_ITEM_TYPE
    if fields and fields.get("VaIt") not in (None, ""):
        item_type = fields["VaIt"]
    return str(item_type).strip() in ARTICLE_ITEM_TYPES


def adjust_sales_line_schema(
    schema: ObjectSchema, context: SchemaContext
) -> ObjectSchema:
    if not is_article_line(context.fields):
        return schema
    for name in ("ItCd", "BiUn", "QuUn", "Upri"):
        if schema.field(name) is not None:
            schema = schema.replace_field(name, required=Requirement.ON_INSERT)
    if schema.field("BiUn") is not None:
        schema = schema.replace_field("BiUn", default="Stk")
    if schema.field("QuUn") is not None:
        schema = schema.replace_field("QuUn", default=1)
    return schema


BUILTIN_HOOKS: dict[str, ObjectHooks] = {
    "KnContact": ObjectHooks(adjust_schema=adjust_contact_schema),
    "KnPerson": ObjectHooks(
        adjust_schema=adjust_person_schema,
        derive_fields=derive_person_fields,
    ),
    "KnBasicAddress": ObjectHooks(
        derive_fields=derive_address_fields,
        finalize_fields=finalize_address_fields,
    ),
    "FbSalesLines": ObjectHooks(adjust_schema=adjust_sales_line_schema),
}
