"""Tagged schema value variants.

JSON-like schema values are parsed once into a closed set of node types so
that flattening can recurse structurally instead of sniffing types at every
step.
"""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Leaf:
    """Primitive value (string, number, boolean, null or unsupported)."""

    value: Any


@dataclass(frozen=True)
class ArrayLeaf:
    """Array without object elements; reported as a single field."""

    count: int


@dataclass(frozen=True)
class Node:
    """Plain object with named children."""

    children: dict[str, "SchemaValue"] = field(default_factory=dict)


@dataclass(frozen=True)
class ObjectArray:
    """Array holding at least one object element.

    Only the object elements are kept; their fields are unioned under the
    ``[:]`` wildcard segment when flattened.
    """

    elements: tuple[Node, ...]
    count: int


SchemaValue = Union[Leaf, ArrayLeaf, Node, ObjectArray]


def is_plain_object(value: Any) -> bool:
    """Check whether a value is a JSON object (mapping)."""
    return isinstance(value, MappingABC)


def parse_schema(value: Any) -> SchemaValue:
    """Convert a JSON-like value into a tagged schema value."""
    if is_plain_object(value):
        return Node({str(key): parse_schema(child) for key, child in value.items()})

    if isinstance(value, (list, tuple)):
        elements = tuple(parse_schema(item) for item in value if is_plain_object(item))
        if elements:
            return ObjectArray(elements=elements, count=len(value))
        return ArrayLeaf(count=len(value))

    return Leaf(value)
