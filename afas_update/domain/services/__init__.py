"""Domain services.

Field conversion and validation, per-type hooks and the two validation passes
over element trees.
"""

from .element_validator import (
    SchemaResolver,
    build_object_node,
    normalize_action,
    normalize_elements,
    resolve_match_value,
    validate_element_input,
    validate_object_output,
)
from .field_validator import describe_element, validate_field_value

__all__ = [
    "SchemaResolver",
    "build_object_node",
    "describe_element",
    "normalize_action",
    "normalize_elements",
    "resolve_match_value",
    "validate_element_input",
    "validate_field_value",
    "validate_object_output",
]
