"""Field mapping editing helpers."""

from .service import (
    FieldOption,
    FieldUsage,
    MappingCompleteness,
    MappingInputValidation,
    MappingService,
    RequiredField,
    group_missing_by_component,
)

__all__ = [
    "FieldOption",
    "FieldUsage",
    "MappingCompleteness",
    "MappingInputValidation",
    "MappingService",
    "RequiredField",
    "group_missing_by_component",
]
