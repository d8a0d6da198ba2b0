"""Result records produced by dependency checks and integrity validation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .base import Mapping
from .schema import FieldDescriptor

# Resolver and engine diagnostics
MESSAGE_PRESENT_BUT_EMPTY = "Field is present but empty"
MESSAGE_SOURCE_COMPONENT_NOT_FOUND = "Invalid existing mapping: source component not found"


class MissingField(FieldDescriptor):
    """A required field of a consumed component that could not be resolved."""

    model_config = ConfigDict(populate_by_name=True)

    from_id: str = Field(..., alias="from", description="Consumed component id")
    message: str | None = None


class DependencyReport(BaseModel):
    """Missing dependencies of one component."""

    model_config = ConfigDict(populate_by_name=True)

    has_missing_dependencies: bool = Field(default=False, alias="hasMissingDependencies")
    missing_fields: list[MissingField] = Field(default_factory=list, alias="missingFields")

    @classmethod
    def from_missing(cls, missing_fields: list[MissingField]) -> "DependencyReport":
        return cls(
            has_missing_dependencies=len(missing_fields) > 0,
            missing_fields=missing_fields,
        )


class MissingFieldRef(BaseModel):
    """Field that still needs a mapping prompt in the interactive editor."""

    model_config = ConfigDict(populate_by_name=True)

    field: str
    from_component: str = Field(..., alias="fromComponent")
    from_component_id: str | None = Field(..., alias="fromComponentId")


class FieldValidationResult(BaseModel):
    """Result of the permissive, interactive dependency validation."""

    model_config = ConfigDict(populate_by_name=True)

    has_valid_dependencies: bool = Field(default=True, alias="hasValidDependencies")
    missing_fields: list[MissingFieldRef] = Field(default_factory=list, alias="missingFields")
    has_missing_dependencies: bool = Field(default=False, alias="hasMissingDependencies")


class MissingMappingRow(BaseModel):
    """One display row of the collection-wide missing mappings table."""

    model_config = ConfigDict(populate_by_name=True)

    component_name: str = Field(..., alias="componentName")
    component_id: str | None = Field(..., alias="componentId")
    missing_field: str = Field(..., alias="missingField")
    from_component: str | None = Field(..., alias="fromComponent")
    from_component_id: str | None = Field(..., alias="fromComponentId")
    message: str | None = None


class IntegrityError(BaseModel):
    """Referential integrity violation found in a component's mappings."""

    model_config = ConfigDict(populate_by_name=True)

    component: str = Field(..., description="Name of the offending component")
    component_id: str | None = Field(..., alias="componentId")
    error: str
    target_id: str | None = Field(default=None, alias="targetId")
    mapping: Mapping | None = None
