"""Flatten nested schemas into addressable leaf fields."""

from __future__ import annotations

from typing import Any

from ..models.schema import FieldDescriptor, FieldType
from .nodes import ArrayLeaf, Leaf, Node, ObjectArray, SchemaValue, is_plain_object, parse_schema

# Strings longer than this are truncated in display values
MAX_DISPLAY_LENGTH = 50

# Path segment addressing the fields of array elements
ARRAY_WILDCARD = "[:]"


def classify_value(value: Any) -> FieldType:
    """Classify a primitive value.

    ``None`` is reported as ``object``; values JSON cannot express are
    ``undefined``.
    """
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if value is None or is_plain_object(value):
        return "object"
    return "undefined"


def format_value(value: Any) -> Any:
    """Make a value display-safe."""
    if isinstance(value, (list, tuple)):
        return f"[{len(value)} items]"
    if isinstance(value, str) and len(value) > MAX_DISPLAY_LENGTH:
        return value[:MAX_DISPLAY_LENGTH] + "..."
    return value


def _join(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def flatten_node(node: SchemaValue, path: str) -> list[FieldDescriptor]:
    """Flatten a parsed schema value found at ``path``."""
    if isinstance(node, Node):
        fields: list[FieldDescriptor] = []
        for key, child in node.children.items():
            fields.extend(flatten_node(child, _join(path, key)))
        return fields

    if isinstance(node, ObjectArray):
        # Union of all element fields: first-seen position, last-seen value
        merged: dict[str, FieldDescriptor] = {}
        for element in node.elements:
            for descriptor in flatten_node(element, path + ARRAY_WILDCARD):
                merged[descriptor.path] = descriptor
        return list(merged.values())

    if isinstance(node, ArrayLeaf):
        return [FieldDescriptor(path=path, type="array", value=f"[{node.count} items]")]

    if isinstance(node, Leaf):
        return [
            FieldDescriptor(
                path=path,
                type=classify_value(node.value),
                value=format_value(node.value),
            )
        ]

    raise TypeError(f"Unknown schema node: {node!r}")


def flatten(schema: dict[str, Any], prefix: str = "") -> list[FieldDescriptor]:
    """Flatten a schema object into its leaf field descriptors.

    Nested objects contribute only their leaves. Arrays of objects contribute
    the deduplicated union of their elements' fields under ``path[:]``;
    other arrays are a single ``array`` leaf.

    Example:
        >>> [f.path for f in flatten({"items": [{"a": 1}, {"a": 2, "b": 3}]})]
        ['items[:].a', 'items[:].b']
    """
    root = parse_schema(schema)
    if not isinstance(root, Node):
        raise TypeError(f"Schema must be an object, got {type(schema).__name__}")
    return flatten_node(root, prefix)


def get_schema(schema: Any, prefix: str = "") -> list[FieldDescriptor]:
    """Flatten a schema, treating a missing or non-object schema as empty."""
    if not is_plain_object(schema):
        return []
    return flatten(schema, prefix)


def get_field_paths(schema: Any) -> list[str]:
    """Return the leaf paths of a schema."""
    return [descriptor.path for descriptor in get_schema(schema)]
