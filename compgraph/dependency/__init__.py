"""Cross-component dependency and mapping validation."""

from .availability import is_field_available_in_consumed_components
from .engine import DependencyChecker, check, check_component_dependencies
from .field_validation import (
    FieldDependencyValidator,
    build_missing_fields_data,
    get_all_missing_mappings,
    requires_dependency_validation,
    validate_field_dependencies,
)

__all__ = [
    "DependencyChecker",
    "FieldDependencyValidator",
    "build_missing_fields_data",
    "check",
    "check_component_dependencies",
    "get_all_missing_mappings",
    "is_field_available_in_consumed_components",
    "requires_dependency_validation",
    "validate_field_dependencies",
]
