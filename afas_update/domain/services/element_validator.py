"""Element and object tree validation.

Validation happens in two passes:

- :func:`validate_element_input` checks the structure of data as it enters an
  object: known keys, no tag/alias collisions, id and action rules, and the
  values actually supplied. It never injects defaults and never checks
  requiredness.
- :func:`validate_object_output` validates a whole tree before it is output.
  It resolves actions, matching values and auto-numbering, applies defaults,
  checks requiredness and runs the per-type hooks. It never mutates the tree;
  it returns a separate validated tree.

Both passes collect error messages instead of raising, so callers can report
every problem found in one call.
"""

from __future__ import annotations

from collections.abc import Mapping
import copy
from dataclasses import replace
from typing import TYPE_CHECKING, Protocol

from ...constants import Actions, ChangeBehavior, PseudoKeys, ValidationBehavior
from ...exceptions import FieldValueError
from ..entities.element import (
    Element,
    ElementInputResult,
    ObjectNode,
    OutputResult,
    ValidatedElement,
    ValidatedObject,
)
from ..entities.schema import FieldDefinition, ObjectSchema, Requirement
from .field_validator import describe_element, validate_field_value
from .object_hooks import FieldContext, ObjectHooks

if TYPE_CHECKING:
    from ...application.ports.services import LoggerPort


class SchemaResolver(Protocol):
    pass

    def schema_for(
        self,
        object_type: str,
        *,
        parent_type: str = "",
        action: str = "",
        element: Element | None = None,
    ) -> ObjectSchema: ...

    def hooks_for(self, object_type: str) -> ObjectHooks: ...


def normalize_action(value: object) -> str | None:
    """Return the canonical action for ``value`` or ``None`` if it is unknown."""
    if not isinstance(value, str):
        return None
    lowered = value.strip().lower()
    lowered = Actions.ALIASES.get(lowered, lowered)
    if lowered in Actions.ALL:
        return lowered
    return None


def as_object_node(value: object) -> ObjectNode | None:
    if isinstance(value, ObjectNode):
        return value
    node = getattr(value, "node", None)
    if isinstance(node, ObjectNode):
        return node
    return None


def _is_container(value: object) -> bool:
    return isinstance(value, (Mapping, list, tuple)) or as_object_node(value) is not None


def normalize_elements(data: object) -> list[object]:
    """Split input data into per-element mappings.

    A mapping holding at least one non-container value is a single element;
    any other mapping is a batch whose values are the elements.
    """
    if isinstance(data, Mapping):
        if not data or any(not _is_container(v) for v in data.values()):
            return [data]
        return list(data.values())
    if isinstance(data, (list, tuple)):
        return list(data)
    return [data]


def _is_empty(value: object) -> bool:
    return value is None or value == ""


def build_object_node(
    object_type: str,
    data: object,
    *,
    parent_type: str,
    action: str,
    validation: int,
    resolver: SchemaResolver,
    start_index: int = 0,
) -> tuple[ObjectNode, list[str]]:
    node = ObjectNode(type=object_type, parent_type=parent_type, action=action)
    errors: list[str] = []
    for offset, raw in enumerate(normalize_elements(data)):
        result = validate_element_input(
            raw,
            object_type=object_type,
            parent_type=parent_type,
            action=action,
            index=start_index + offset,
            validation=validation,
            resolver=resolver,
        )
        errors.extend(result.errors)
        node.elements.append(result.element)
    return node, errors


def adopt_object_node(
    value: ObjectNode, relation_type: str, parent_type: str, description: str
) -> tuple[ObjectNode | None, list[str]]:
    if value.type != relation_type:
        return None, [
            f"Object of type '{value.type}' cannot be embedded in {description}; "
            f"expected '{relation_type}'."
        ]
    adopted = copy.deepcopy(value)
    adopted.parent_type = parent_type
    return adopted, []


def _take(remaining: dict[object, object], name: str, alias: str) -> tuple[bool, object, bool]:
    """Pop the value stored under ``name`` or ``alias``.

    Returns ``(present, value, collision)``.
    """
    by_name = name in remaining
    by_alias = bool(alias) and alias in remaining
    if by_name and by_alias:
        remaining.pop(name)
        remaining.pop(alias)
        return True, None, True
    if by_name:
        return True, remaining.pop(name), False
    if by_alias:
        return True, remaining.pop(alias), False
    return False, None, False


def validate_element_input(
    raw: object,
    *,
    object_type: str,
    parent_type: str,
    action: str,
    index: int,
    validation: int,
    resolver: SchemaResolver,
) -> ElementInputResult:
    element = Element()
    result = ElementInputResult(element=element)
    errors = result.errors
    description = describe_element(object_type, index)
    if not isinstance(raw, Mapping):
        errors.append(f"Data for {description} must be a mapping.")
        return result
    if not raw:
        errors.append(f"{description} has no field or object values.")
        return result

    remaining: dict[object, object] = dict(raw)
    schema = resolver.schema_for(object_type, parent_type=parent_type, action=action)

    if PseudoKeys.ACTION in remaining:
        value = remaining.pop(PseudoKeys.ACTION)
        if not parent_type:
            errors.append("#action override is only allowed in embedded objects.")
        elif (normalized := normalize_action(value)) is None:
            errors.append(
                f"Unknown value '{value}' for #action inside '{object_type}' object."
            )
        else:
            element.action = normalized

    errors.extend(_take_id(remaining, element, schema, description))

    element_action = action if element.action is None else element.action
    for relation in schema.objects:
        present, value, collision = _take(remaining, relation.name, relation.alias)
        if collision:
            errors.append(
                f"{description} has a value provided by both its object name "
                f"{relation.name} and alias {relation.alias}."
            )
            continue
        if not present:
            continue
        if (node := as_object_node(value)) is not None:
            child, child_errors = adopt_object_node(
                node, relation.type, object_type, description
            )
        elif isinstance(value, (Mapping, list, tuple)):
            child, child_errors = build_object_node(
                relation.type,
                value,
                parent_type=object_type,
                action=element_action,
                validation=validation,
                resolver=resolver,
            )
        else:
            child, child_errors = None, [
                f"Value for {relation.display_name()} object embedded in "
                f"{description} must be a mapping or a list of mappings."
            ]
        errors.extend(child_errors)
        if child is not None:
            element.objects[relation.name] = child

    for definition in schema.fields:
        present, value, collision = _take(remaining, definition.name, definition.alias)
        if collision:
            errors.append(
                f"{description} has a value provided by both its field name "
                f"{definition.name} and alias {definition.alias}."
            )
            continue
        if not present:
            continue
        try:
            element.fields[definition.name] = validate_field_value(
                value,
                definition,
                object_type=object_type,
                change=ChangeBehavior.ALLOW_NO_CHANGES,
                validation=validation,
                element_index=index,
            )
        except FieldValueError as e:
            errors.append(str(e))

    if remaining:
        keys = ", ".join(str(key) for key in remaining)
        errors.append(
            f"Unmapped element values provided for {description}: keys are '{keys}'."
        )
    return result


def _take_id(
    remaining: dict[object, object],
    element: Element,
    schema: ObjectSchema,
    description: str,
) -> list[str]:
    id_key = (
        f"{PseudoKeys.ID_ATTRIBUTE_PREFIX}{schema.id_field}" if schema.id_field else None
    )
    has_pseudo = PseudoKeys.ID in remaining
    has_attribute = id_key is not None and id_key in remaining
    if not has_pseudo and not has_attribute:
        return []
    if id_key is None:
        remaining.pop(PseudoKeys.ID)
        return [f"Id value provided but no id-field defined for '{schema.type}' object."]

    pseudo_value = remaining.pop(PseudoKeys.ID, None)
    attribute_value = remaining.pop(id_key, None)
    if has_pseudo and has_attribute and pseudo_value != attribute_value:
        return [
            f"{description} has different id values provided by both {id_key} "
            f"and {PseudoKeys.ID}."
        ]
    value = attribute_value if has_attribute else pseudo_value
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        return [f"'{id_key}' property in {description} must hold integer/string value."]
    element.id = value
    return []


def resolve_match_value(schema: ObjectSchema, fields: Mapping[str, object], action: str) -> str | None:
    """Return the matching value to send when none was supplied."""
    rule = schema.matching
    if rule is None:
        return None
    for identifier, code in rule.identifiers:
        if not _is_empty(fields.get(identifier)):
            return code
    if action == Actions.INSERT:
        return rule.always_insert
    return rule.neutral


def is_required(definition: FieldDefinition, action: str, validation: int) -> bool:
    if definition.required is Requirement.OPTIONAL:
        return False
    if definition.required is Requirement.ALWAYS:
        return bool(validation & ValidationBehavior.REQUIRED)
    if action != Actions.INSERT:
        return False
    if definition.required is Requirement.ESSENTIAL:
        return bool(
            validation & (ValidationBehavior.REQUIRED | ValidationBehavior.ESSENTIAL)
        )
    return bool(validation & ValidationBehavior.REQUIRED)


def _with_dynamic_defaults(
    schema: ObjectSchema,
    element: Element,
    fields: Mapping[str, object],
    action: str,
) -> tuple[ObjectSchema, bool]:
    """Apply computed defaults to the schema and tell whether the element is provably new."""
    provably_inserting = action == Actions.INSERT
    rule = schema.matching
    if rule is not None and schema.field(rule.field) is not None:
        explicit = fields.get(rule.field)
        if _is_empty(explicit):
            match_value = resolve_match_value(schema, fields, action)
            schema = schema.replace_field(
                rule.field, default=match_value, always_default=True
            )
        else:
            match_value = str(explicit)
        provably_inserting = provably_inserting and match_value == rule.always_insert

    auto_number = schema.auto_number_field
    if (
        auto_number is not None
        and schema.field(auto_number) is not None
        and action == Actions.INSERT
        and element.id is None
        and (
            rule is None
            or rule.primary_key is None
            or _is_empty(fields.get(rule.primary_key))
        )
    ):
        schema = schema.replace_field(auto_number, default=True, always_default=True)

    postal = schema.postal_address
    if (
        postal is not None
        and schema.relation(postal.address_object) is not None
        and schema.relation(postal.postal_object) is not None
        and schema.field(postal.flag_field) is not None
        and _populated(element, postal.address_object)
        and not _populated(element, postal.postal_object)
    ):
        schema = schema.replace_field(postal.flag_field, default=True)
    return schema, provably_inserting


def _populated(element: Element, name: str) -> bool:
    child = element.objects.get(name)
    return child is not None and bool(child.elements)


def validate_object_output(
    node: ObjectNode,
    *,
    change: int,
    validation: int,
    resolver: SchemaResolver,
    logger: LoggerPort | None = None,
) -> OutputResult:
    result = OutputResult()
    for index in range(len(node.elements)):
        validated, errors = _validate_element_output(
            node,
            index,
            change=change,
            validation=validation,
            resolver=resolver,
            logger=logger,
        )
        result.errors.extend(errors)
        if validated is not None:
            result.elements.append(validated)
    return result


def _validate_element_output(
    node: ObjectNode,
    index: int,
    *,
    change: int,
    validation: int,
    resolver: SchemaResolver,
    logger: LoggerPort | None,
) -> tuple[ValidatedElement | None, list[str]]:
    element = node.elements[index]
    action = node.element_action(index)
    description = describe_element(node.type, index)
    if element.is_empty():
        return None, [
            f"{description} has empty 'Fields' and 'Objects'; at least one of "
            "these must contain a value."
        ]

    schema = resolver.schema_for(
        node.type, parent_type=node.parent_type, action=action, element=element
    )
    errors: list[str] = []
    objects = _validate_children(
        element, schema, description, errors,
        change=change, validation=validation, resolver=resolver, logger=logger,
    )

    fields = dict(element.fields)
    hooks = resolver.hooks_for(node.type)
    context = FieldContext(
        schema=schema,
        action=action,
        change=change,
        validation=validation,
        element_description=description,
    )
    if change & ChangeBehavior.ALLOW_CHANGES and hooks.derive_fields is not None:
        errors.extend(hooks.derive_fields(fields, context))
        schema = resolver.schema_for(
            node.type,
            parent_type=node.parent_type,
            action=action,
            element=replace(element, fields=fields),
        )
        context = replace(context, schema=schema)

    schema, provably_inserting = _with_dynamic_defaults(schema, element, fields, action)
    on_insert = bool(change & ChangeBehavior.ALLOW_DEFAULTS_ON_INSERT)
    on_update = bool(change & ChangeBehavior.ALLOW_DEFAULTS_ON_UPDATE)
    ordinary_allowed = on_insert if provably_inserting else on_update
    always_allowed = on_insert or on_update
    # Non-inserts always carry a matching value, whatever the change bits.
    match_field = schema.matching.field if schema.matching is not None else None
    forced_default = match_field if action != Actions.INSERT else None

    output: dict[str, object] = {}
    for definition in schema.fields:
        name = definition.name
        present = name in fields
        value = fields.get(name)
        default_available = definition.has_default and (
            name == forced_default
            or (always_allowed if definition.always_default else ordinary_allowed)
        )
        if (
            is_required(definition, action, validation)
            and value is None
            and (not default_available or (present and definition.default is not None))
        ):
            errors.append(
                f"No value provided for required {definition.display_name()} field "
                f"of {description}."
            )
            continue
        if default_available and (
            not present
            or (value is None and definition.required is not Requirement.OPTIONAL)
        ):
            value = definition.default
            present = True
            if logger is not None and name == match_field:
                logger.debug(f"Matching value {name}={value!r} resolved for {description}")
            elif logger is not None:
                logger.debug(f"Default {name}={value!r} applied to {description}")
        if not present:
            continue
        try:
            output[name] = validate_field_value(
                value,
                definition,
                object_type=node.type,
                change=change,
                validation=validation,
                element_index=index,
            )
        except FieldValueError as e:
            errors.append(str(e))

    if hooks.finalize_fields is not None:
        context = replace(context, schema=schema)
        errors.extend(hooks.finalize_fields(output, context))

    if schema.id_field and element.id is None and action != Actions.INSERT:
        errors.append(
            f"'@{schema.id_field}' property in {description} must have a value, "
            f"or Action '{action}' must be set to 'insert'."
        )

    unknown = [name for name in fields if schema.field(name) is None]
    if unknown:
        if validation & ValidationBehavior.NO_UNKNOWN:
            errors.append(
                f"Unknown fields provided for {description}: names are "
                f"'{', '.join(unknown)}'."
            )
        else:
            for name in unknown:
                output[name] = fields[name]

    if errors:
        return None, errors
    return (
        ValidatedElement(
            action=action,
            fields=output,
            objects=objects,
            id=element.id,
            id_field=schema.id_field,
        ),
        [],
    )


def _validate_children(
    element: Element,
    schema: ObjectSchema,
    description: str,
    errors: list[str],
    *,
    change: int,
    validation: int,
    resolver: SchemaResolver,
    logger: LoggerPort | None,
) -> dict[str, ValidatedObject]:
    child_change = (
        change
        if change & ChangeBehavior.ALLOW_EMBEDDED_CHANGES
        else ChangeBehavior.ALLOW_NO_CHANGES
    )
    objects: dict[str, ValidatedObject] = {}
    for relation in schema.objects:
        child = element.objects.get(relation.name)
        if child is None or not child.elements:
            if relation.required and validation & ValidationBehavior.REQUIRED:
                errors.append(
                    f"No value provided for required {relation.display_name()} object "
                    f"embedded in {description}."
                )
            continue
        if not relation.multiple and len(child.elements) > 1:
            errors.append(
                f"{relation.display_name()} object embedded in {description} contains "
                f"{len(child.elements)} elements but can only contain a single element."
            )
            continue
        child_result = validate_object_output(
            child,
            change=child_change,
            validation=validation,
            resolver=resolver,
            logger=logger,
        )
        errors.extend(child_result.errors)
        objects[relation.name] = ValidatedObject(
            type=child.type,
            elements=tuple(child_result.elements),
            multiple=relation.multiple,
        )

    unknown = [
        name
        for name, child in element.objects.items()
        if child.elements and schema.relation(name) is None
    ]
    if unknown and validation & ValidationBehavior.NO_UNKNOWN:
        errors.append(
            f"Unknown objects provided for {description}: names are "
            f"'{', '.join(unknown)}'."
        )
    return objects
