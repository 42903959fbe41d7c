from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class Element:
    """One record of an object type, holding field values and child objects."""

    id: int | str | None = None
    fields: dict[str, object] = field(default_factory=dict)
    objects: dict[str, ObjectNode] = field(default_factory=dict)
    action: str | None = None

    def is_empty(self) -> bool:
        return not self.fields and not self.objects


@dataclass(slots=True)
class ObjectNode:
    type: str
    parent_type: str = ""
    action: str = ""
    elements: list[Element] = field(default_factory=list)

    def element_action(self, index: int) -> str:
        override = self.elements[index].action
        return self.action if override is None else override


@dataclass(frozen=True, slots=True)
class ValidatedElement:
    action: str
    fields: dict[str, object]
    objects: dict[str, ValidatedObject] = field(default_factory=dict)
    id: int | str | None = None
    id_field: str | None = None


@dataclass(frozen=True, slots=True)
class ValidatedObject:
    type: str
    elements: tuple[ValidatedElement, ...]
    multiple: bool = True


@dataclass(slots=True)
class ElementInputResult:
    element: Element
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(slots=True)
class OutputResult:
    elements: list[ValidatedElement] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
