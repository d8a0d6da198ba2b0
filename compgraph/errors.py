"""Exceptions raised by compgraph."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.report import IntegrityError


class CompgraphError(Exception):
    """Base class for compgraph errors."""

    pass


class ComponentNotFoundError(CompgraphError, LookupError):
    """A component id (or name) is not part of the collection."""

    def __init__(self, component_id: str | None, name: str | None = None):
        self.component_id = component_id
        self.name = name
        if name is not None and component_id is None:
            message = f"Component with name {name} not found"
        elif name is not None:
            message = f"Component with values id={component_id}, name={name} not found"
        else:
            message = f"Component with ID {component_id} not found"
        super().__init__(message)


class ComponentValidationError(CompgraphError, ValueError):
    """Component data failed validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Component validation failed: {', '.join(errors)}")


class IntegrityValidationError(CompgraphError):
    """Collection has mapping integrity errors and cannot be saved."""

    def __init__(self, errors: list[IntegrityError]):
        self.errors = errors
        super().__init__(
            f"Database validation failed with {len(errors)} integrity error(s)"
        )
