"""JSON rendering of validated object trees, as accepted by REST update connectors."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from ...constants import Defaults, PseudoKeys

if TYPE_CHECKING:
    from ...domain.entities.element import ValidatedElement, ValidatedObject

COMPACT_SEPARATORS = (",", ":")


def element_to_dict(element: ValidatedElement) -> dict[str, object]:
    data: dict[str, object] = {}
    if element.id_field and element.id is not None:
        data[f"{PseudoKeys.ID_ATTRIBUTE_PREFIX}{element.id_field}"] = element.id
    data["Fields"] = dict(element.fields)
    if element.objects:
        data["Objects"] = {
            reference: {"Element": _object_payload(child)}
            for reference, child in element.objects.items()
        }
    return data


def _object_payload(child: ValidatedObject) -> object:
    elements = [element_to_dict(e) for e in child.elements]
    if not child.multiple and len(elements) == 1:
        return elements[0]
    return elements


def _default(value: object) -> str:
    # Decimal and date values
    return str(value)


def encode_json(
    tree: ValidatedObject,
    *,
    flatten: bool = False,
    pretty: bool = False,
    indent: int | None = None,
) -> str:
    elements = [element_to_dict(e) for e in tree.elements]
    payload: object = elements[0] if flatten and len(elements) == 1 else elements
    data = {tree.type: {"Element": payload}}
    if pretty:
        if indent is None:
            indent = Defaults.JSON_INDENT
        return json.dumps(data, indent=indent, default=_default)
    return json.dumps(data, separators=COMPACT_SEPARATORS, default=_default)
