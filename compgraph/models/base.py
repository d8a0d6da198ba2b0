"""Base models for governed components."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ComponentType(str, Enum):
    """Supported component types."""

    ENDPOINT = "endpoint"
    DATABASE_TABLE = "database_table"

    @classmethod
    def from_str(cls, value: str) -> "ComponentType":
        """Parse component type from string, handling case and separators."""
        normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
        if normalized == "endpoint":
            return cls.ENDPOINT
        elif normalized in ("database_table", "table"):
            return cls.DATABASE_TABLE
        else:
            return cls(value)


class Mapping(BaseModel):
    """How one required field of a consumed component is supplied.

    Without ``source_component_id`` the ``source_field`` is looked up in the
    owning component's own input. With it, the field is looked up in the
    output of the named component, which does not have to be consumed.

    All fields are optional so that incomplete records survive loading and
    can be reported by the integrity validator.
    """

    target_component_id: str | None = Field(
        default=None, description="Consumed component that requires the field"
    )
    target_field: str | None = Field(
        default=None, description="Path into the target's input schema"
    )
    source_field: str | None = Field(
        default=None, description="Path of the field supplying the value"
    )
    source_component_id: str | None = Field(
        default=None, description="Component whose output supplies the field"
    )

    @property
    def is_cross_component(self) -> bool:
        """Whether the source field lives in another component's output."""
        return bool(self.source_component_id)

    def matches_target(self, component_id: str, field: str) -> bool:
        """Check whether this mapping explains ``field`` of ``component_id``."""
        return self.target_component_id == component_id and self.target_field == field
