"""Flattened schema field descriptors."""

from typing import Any, Literal

from pydantic import BaseModel, Field

FieldType = Literal["string", "number", "boolean", "object", "array", "undefined"]


class FieldDescriptor(BaseModel):
    """Addressable leaf field of a schema.

    ``path`` uses dot-notation for nested objects and ``[:]`` for fields of
    array elements, e.g. ``items[:].product.name``.
    """

    path: str
    type: FieldType
    value: Any = Field(default=None, description="Display-safe value")
