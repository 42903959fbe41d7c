"""The ``UpdateObject`` facade over an object tree.

An ``UpdateObject`` holds the elements of one object type and the objects
embedded in them. Input methods validate what they are given and modify the
tree in place; :meth:`UpdateObject.output` validates the full tree and renders
it without changing it.
"""

from __future__ import annotations

from collections.abc import Mapping
import copy
from typing import TYPE_CHECKING

from ..constants import (
    DEFAULT_CHANGE,
    DEFAULT_VALIDATION,
    ChangeBehavior,
    OutputFormats,
    ValidationBehavior,
)
from ..domain.entities.element import Element, ObjectNode, ValidatedObject
from ..domain.services.element_validator import (
    adopt_object_node,
    as_object_node,
    build_object_node,
    normalize_action,
    validate_object_output,
)
from ..domain.services.field_validator import describe_element, validate_field_value
from ..exceptions import InputError, OutputError, join_messages
from ..infrastructure.io import element_to_dict, encode_json, encode_xml
from ..infrastructure.logging.current import get_logger
from ..infrastructure.schema_registry import RegistrySchemaResolver, get_schema

if TYPE_CHECKING:
    from ..domain.entities.element import ValidatedElement
    from ..domain.entities.schema import FieldDefinition, ObjectRelation, ObjectSchema
    from ..domain.services.element_validator import SchemaResolver
    from .ports.services import LoggerPort


class UpdateObject:
    """Data for one update connector call, or for an object embedded in one."""

    def __init__(
        self,
        node: ObjectNode,
        *,
        resolver: SchemaResolver | None = None,
        logger: LoggerPort | None = None,
    ) -> None:
        super().__init__()
        self._node = node
        self._resolver = resolver or RegistrySchemaResolver()
        self._logger = logger

    @classmethod
    def create(
        cls,
        object_type: str,
        elements: object = None,
        action: str = "",
        validation: int = ValidationBehavior.ESSENTIAL,
        parent_type: str = "",
        *,
        resolver: SchemaResolver | None = None,
        logger: LoggerPort | None = None,
    ) -> UpdateObject:
        """Create an object of ``object_type``, optionally holding ``elements``.

        Raises :class:`SchemaError` for an unknown type and :class:`InputError`
        for an unknown action or invalid element data.
        """
        get_schema(object_type)
        normalized = normalize_action(action)
        if normalized is None:
            raise InputError(f"Unknown action value '{action}'.")
        obj = cls(
            ObjectNode(type=object_type, parent_type=parent_type, action=normalized),
            resolver=resolver,
            logger=logger,
        )
        if elements is not None:
            obj.add_elements(elements, validation)
        return obj

    @property
    def node(self) -> ObjectNode:
        return self._node

    @property
    def type(self) -> str:
        return self._node.type

    @property
    def parent_type(self) -> str:
        return self._node.parent_type

    @property
    def action(self) -> str:
        return self._node.action

    @property
    def logger(self) -> LoggerPort:
        return self._logger if self._logger is not None else get_logger()

    def __len__(self) -> int:
        return len(self._node.elements)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UpdateObject):
            return NotImplemented
        return self._node == other._node

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"UpdateObject(type={self.type!r}, elements={len(self)}, action={self.action!r})"

    def _element(self, index: int) -> Element:
        if 0 <= index < len(self._node.elements):
            return self._node.elements[index]
        raise IndexError(f"No element present with index {index}.")

    def _check_write_index(self, index: int) -> None:
        if not 0 <= index <= len(self._node.elements):
            raise IndexError(f"No element present with index {index}.")

    def _element_for_write(self, index: int) -> Element:
        self._check_write_index(index)
        if index == len(self._node.elements):
            self._node.elements.append(Element())
        return self._node.elements[index]

    def _action_for(self, index: int) -> str:
        if index < len(self._node.elements):
            return self._node.element_action(index)
        return self._node.action

    def _schema(self, index: int) -> ObjectSchema:
        element = (
            self._node.elements[index] if index < len(self._node.elements) else None
        )
        return self._resolver.schema_for(
            self.type,
            parent_type=self.parent_type,
            action=self._action_for(index),
            element=element,
        )

    def _field_definition(self, name: str, index: int) -> FieldDefinition:
        schema = self._schema(index)
        resolved = schema.resolve_field_name(name)
        definition = schema.field(resolved) if resolved else None
        if definition is None:
            raise InputError(f"Unknown field '{name}' for '{self.type}' object.")
        return definition

    def _relation(self, reference: str, index: int) -> ObjectRelation:
        schema = self._schema(index)
        resolved = schema.resolve_object_name(reference)
        relation = schema.relation(resolved) if resolved else None
        if relation is None:
            raise InputError(f"Unknown object '{reference}' for '{self.type}' object.")
        return relation

    def get_action(self, index: int | None = None) -> str:
        if index is None:
            return self._node.action
        self._element(index)
        return self._node.element_action(index)

    def set_action(
        self, action: str, index: int | None = None, *, set_embedded: bool = True
    ) -> None:
        """Set the action for all elements, or override it for one element.

        With ``set_embedded`` the action is also set on the objects embedded in
        the affected element(s).
        """
        normalized = normalize_action(action)
        if normalized is None:
            raise InputError(f"Unknown action value '{action}'.")
        if index is None:
            self._node.action = normalized
            targets = list(self._node.elements)
        else:
            if not self.parent_type:
                raise InputError("#action override is only allowed in embedded objects.")
            element = self._element(index)
            element.action = normalized
            targets = [element]
        if not set_embedded:
            return
        for element in targets:
            for child in element.objects.values():
                UpdateObject(child, resolver=self._resolver).set_action(normalized)

    def get_id(self, index: int = 0) -> int | str | None:
        return self._element(index).id

    def set_id(self, value: int | str, index: int = 0) -> None:
        schema = self._schema(index)
        if not schema.id_field:
            raise InputError(
                f"Id value provided but no id-field defined for '{self.type}' object."
            )
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise InputError(
                f"'@{schema.id_field}' property in {describe_element(self.type, index)} "
                "must hold integer/string value."
            )
        self._element_for_write(index).id = value

    def get_field(
        self, name: str, index: int = 0, *, return_default: bool = False
    ) -> object:
        if not return_default:
            self._element(index)
        definition = self._field_definition(name, index)
        if index < len(self._node.elements):
            fields = self._node.elements[index].fields
            if definition.name in fields:
                return fields[definition.name]
        if return_default and definition.has_default:
            return definition.default
        return None

    def set_field(
        self,
        name: str,
        value: object,
        index: int = 0,
        validation: int = ValidationBehavior.ESSENTIAL,
    ) -> None:
        self._check_write_index(index)
        definition = self._field_definition(name, index)
        converted = validate_field_value(
            value,
            definition,
            object_type=self.type,
            validation=validation,
            element_index=index,
        )
        self._element_for_write(index).fields[definition.name] = converted

    def get_object(self, reference: str, index: int = 0) -> UpdateObject | None:
        """Return the embedded object; changes to it change this tree."""
        element = self._element(index)
        relation = self._relation(reference, index)
        child = element.objects.get(relation.name)
        if child is None:
            return None
        return UpdateObject(child, resolver=self._resolver, logger=self._logger)

    def set_object(
        self,
        reference: str,
        elements: object,
        action: str | None = None,
        index: int = 0,
        validation: int = ValidationBehavior.ESSENTIAL,
    ) -> None:
        self._check_write_index(index)
        relation = self._relation(reference, index)
        if action is None:
            child_action = self._action_for(index)
        else:
            normalized = normalize_action(action)
            if normalized is None:
                raise InputError(f"Unknown action value '{action}'.")
            child_action = normalized

        if (node := as_object_node(elements)) is not None:
            child, errors = adopt_object_node(
                node, relation.type, self.type, describe_element(self.type, index)
            )
        elif isinstance(elements, (Mapping, list, tuple)):
            child, errors = build_object_node(
                relation.type,
                elements,
                parent_type=self.type,
                action=child_action,
                validation=validation,
                resolver=self._resolver,
            )
        else:
            raise InputError(
                f"Value for {relation.display_name()} object must be a mapping, "
                "a list of mappings or an UpdateObject."
            )
        if errors or child is None:
            raise InputError(join_messages(errors))
        self._element_for_write(index).objects[relation.name] = child

    def add_elements(
        self, elements: object, validation: int = ValidationBehavior.ESSENTIAL
    ) -> None:
        """Validate and append elements; nothing is added if any of them is invalid."""
        node, errors = build_object_node(
            self.type,
            elements,
            parent_type=self.parent_type,
            action=self.action,
            validation=validation,
            resolver=self._resolver,
            start_index=len(self._node.elements),
        )
        if errors:
            raise InputError(join_messages(errors))
        self._node.elements.extend(node.elements)

    def set_elements(
        self, elements: object, validation: int = ValidationBehavior.ESSENTIAL
    ) -> None:
        node, errors = build_object_node(
            self.type,
            elements,
            parent_type=self.parent_type,
            action=self.action,
            validation=validation,
            resolver=self._resolver,
        )
        if errors:
            raise InputError(join_messages(errors))
        self._node.elements = node.elements

    def validate(
        self,
        change: int = DEFAULT_CHANGE,
        validation: int = DEFAULT_VALIDATION,
    ) -> list[ValidatedElement]:
        """Validate the full tree; raise :class:`OutputError` listing every problem."""
        result = validate_object_output(
            self._node,
            change=change,
            validation=validation,
            resolver=self._resolver,
            logger=self.logger,
        )
        if not result.ok:
            raise OutputError(join_messages(result.errors))
        return result.elements

    def get_elements(
        self,
        change: int | None = None,
        validation: int = ValidationBehavior.NOTHING,
    ) -> list[Element] | list[dict[str, object]]:
        if change is None:
            return copy.deepcopy(self._node.elements)
        return [element_to_dict(e) for e in self.validate(change, validation)]

    def output(
        self,
        fmt: str = OutputFormats.JSON,
        *,
        pretty: bool = False,
        indent: int | None = None,
        change: int = DEFAULT_CHANGE,
        validation: int = DEFAULT_VALIDATION,
    ) -> str:
        fmt = fmt.lower()
        if fmt not in OutputFormats.ALL:
            raise InputError(f"Invalid format '{fmt}'.")
        if indent is not None and indent < 1:
            raise ValueError(f"indent must be positive, got {indent}")
        flatten = bool(change & ChangeBehavior.FLATTEN_SINGLE_ELEMENT)
        elements = self.validate(
            change & ~ChangeBehavior.FLATTEN_SINGLE_ELEMENT, validation
        )
        tree = ValidatedObject(type=self.type, elements=tuple(elements))
        self.logger.debug(f"Rendering {len(elements)} '{self.type}' element(s) as {fmt}")
        if fmt == OutputFormats.XML:
            return encode_xml(tree, pretty=pretty, indent=indent)
        return encode_json(tree, flatten=flatten, pretty=pretty, indent=indent)


__all__ = ["UpdateObject"]
