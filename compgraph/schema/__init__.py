"""Schema flattening and field resolution."""

from .flattener import (
    ARRAY_WILDCARD,
    MAX_DISPLAY_LENGTH,
    classify_value,
    flatten,
    format_value,
    get_field_paths,
    get_schema,
)
from .nodes import ArrayLeaf, Leaf, Node, ObjectArray, SchemaValue, parse_schema
from .resolver import FieldPresence, find_field, verify_field_presence

__all__ = [
    "ARRAY_WILDCARD",
    "MAX_DISPLAY_LENGTH",
    "classify_value",
    "flatten",
    "format_value",
    "get_field_paths",
    "get_schema",
    "ArrayLeaf",
    "Leaf",
    "Node",
    "ObjectArray",
    "SchemaValue",
    "parse_schema",
    "FieldPresence",
    "find_field",
    "verify_field_presence",
]
