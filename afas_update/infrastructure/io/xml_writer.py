"""XML rendering of validated object trees, as accepted by SOAP update connectors."""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.etree import ElementTree as ET

from ...constants import Defaults, Namespaces

if TYPE_CHECKING:
    from ...domain.entities.element import ValidatedElement, ValidatedObject


def format_xml_value(value: object) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def _append_element(parent: ET.Element, element: ValidatedElement) -> None:
    attrib = {}
    if element.id_field and element.id is not None:
        attrib[element.id_field] = str(element.id)
    node = ET.SubElement(parent, "Element", attrib)

    fields = ET.SubElement(node, "Fields", {"Action": element.action} if element.action else {})
    for name, value in element.fields.items():
        if value is None:
            ET.SubElement(fields, name, {"xsi:nil": "true"})
        else:
            ET.SubElement(fields, name).text = format_xml_value(value)

    if element.objects:
        objects = ET.SubElement(node, "Objects")
        for reference, child in element.objects.items():
            wrapper = ET.SubElement(objects, reference)
            for child_element in child.elements:
                _append_element(wrapper, child_element)


def build_xml_tree(tree: ValidatedObject) -> ET.Element:
    root = ET.Element(tree.type, {"xmlns:xsi": Namespaces.XSI})
    for element in tree.elements:
        _append_element(root, element)
    return root


def encode_xml(
    tree: ValidatedObject, *, pretty: bool = False, indent: int | None = None
) -> str:
    """Serialize ``tree`` without an XML declaration.

    Pretty output uses ``indent`` spaces per level (2 by default) and has no
    trailing newline.
    """
    root = build_xml_tree(tree)
    if pretty:
        if indent is None:
            indent = Defaults.XML_INDENT
        ET.indent(root, space=" " * indent)
    return ET.tostring(root, encoding="unicode")
