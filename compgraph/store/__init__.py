"""Component database persistence."""

from .reader import DatabaseReader
from .repository import ComponentRepository, DatabaseValidation
from .writer import DatabaseWriter

__all__ = [
    "ComponentRepository",
    "DatabaseReader",
    "DatabaseValidation",
    "DatabaseWriter",
]
