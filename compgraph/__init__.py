"""Field dependency and mapping governance for component graphs."""

from .dependency import (
    DependencyChecker,
    check_component_dependencies,
    get_all_missing_mappings,
    is_field_available_in_consumed_components,
    validate_field_dependencies,
)
from .errors import (
    CompgraphError,
    ComponentNotFoundError,
    ComponentValidationError,
    IntegrityValidationError,
)
from .integrity import clean_orphaned_mappings, validate_mappings
from .models import Component, ComponentCollection, ComponentType, Mapping
from .schema import flatten, get_field_paths, get_schema, verify_field_presence

__version__ = "0.1.0"

__all__ = [
    "Component",
    "ComponentCollection",
    "ComponentType",
    "Mapping",
    "DependencyChecker",
    "check_component_dependencies",
    "get_all_missing_mappings",
    "is_field_available_in_consumed_components",
    "validate_field_dependencies",
    "clean_orphaned_mappings",
    "validate_mappings",
    "flatten",
    "get_field_paths",
    "get_schema",
    "verify_field_presence",
    "CompgraphError",
    "ComponentNotFoundError",
    "ComponentValidationError",
    "IntegrityValidationError",
]
