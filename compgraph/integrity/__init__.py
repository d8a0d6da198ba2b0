"""Referential integrity of the component collection."""

from .cleanup import clean_orphaned_mappings
from .validator import MappingIntegrityValidator, group_mappings_by_target, validate_mappings

__all__ = [
    "MappingIntegrityValidator",
    "clean_orphaned_mappings",
    "group_mappings_by_target",
    "validate_mappings",
]
