"""Payload encoders for validated object trees."""

from .json_writer import element_to_dict, encode_json
from .xml_writer import build_xml_tree, encode_xml

__all__ = ["build_xml_tree", "element_to_dict", "encode_json", "encode_xml"]
