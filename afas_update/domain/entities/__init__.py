"""Domain entities.

Object schemas, field definitions and the element tree.
"""

from .element import (
    Element,
    ElementInputResult,
    ObjectNode,
    OutputResult,
    ValidatedElement,
    ValidatedObject,
)
from .schema import (
    NO_DEFAULT,
    FieldDefinition,
    MatchingRule,
    ObjectRelation,
    ObjectSchema,
    PostalAddressRule,
    Requirement,
)

__all__ = [
    "NO_DEFAULT",
    "Element",
    "ElementInputResult",
    "FieldDefinition",
    "MatchingRule",
    "ObjectNode",
    "ObjectRelation",
    "ObjectSchema",
    "OutputResult",
    "PostalAddressRule",
    "Requirement",
    "ValidatedElement",
    "ValidatedObject",
]
