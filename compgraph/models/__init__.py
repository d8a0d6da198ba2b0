"""Pydantic models for governed components."""

from .base import ComponentType, Mapping
from .collection import ComponentCollection, find_component, find_component_by_name
from .component import COMPONENT_COLORS, Component, generate_id, generate_random_color
from .report import (
    MESSAGE_PRESENT_BUT_EMPTY,
    MESSAGE_SOURCE_COMPONENT_NOT_FOUND,
    DependencyReport,
    FieldValidationResult,
    IntegrityError,
    MissingField,
    MissingFieldRef,
    MissingMappingRow,
)
from .schema import FieldDescriptor, FieldType

__all__ = [
    "ComponentType",
    "Mapping",
    "Component",
    "COMPONENT_COLORS",
    "generate_id",
    "generate_random_color",
    "ComponentCollection",
    "find_component",
    "find_component_by_name",
    "FieldDescriptor",
    "FieldType",
    "MissingField",
    "DependencyReport",
    "MissingFieldRef",
    "FieldValidationResult",
    "MissingMappingRow",
    "IntegrityError",
    "MESSAGE_PRESENT_BUT_EMPTY",
    "MESSAGE_SOURCE_COMPONENT_NOT_FOUND",
]
