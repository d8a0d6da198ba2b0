"""Component entity model."""

from __future__ import annotations

import copy
import random
import uuid
from typing import Any

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

from ..errors import ComponentValidationError
from .base import ComponentType, Mapping

# Palette used for new components without an explicit colour
COMPONENT_COLORS = (
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FFEAA7",
    "#DDA0DD", "#98D8C8", "#F7DC6F", "#BB8FCE", "#85C1E9",
    "#F8C471", "#82E0AA", "#F1948A", "#85C1E9", "#D2B4DE",
)


def generate_id() -> str:
    """Generate a new component id."""
    return str(uuid.uuid4())


def generate_random_color() -> str:
    """Pick a display colour for a new component."""
    return random.choice(COMPONENT_COLORS)


class Component(BaseModel):
    """A governed endpoint or database table."""

    id: str | None = Field(default=None, title="ID", description="Stable identifier")
    name: str = Field(..., min_length=1, title="Name")
    type: ComponentType = Field(default=ComponentType.ENDPOINT, title="Type")
    input: dict[str, Any] = Field(
        default_factory=dict, title="Input", description="Fields the component receives"
    )
    output: dict[str, Any] = Field(
        default_factory=dict, title="Output", description="Fields the component supplies"
    )
    consumes: list[str] = Field(
        default_factory=list, title="Consumes", description="Ids of consumed components"
    )
    mappings: list[Mapping] = Field(default_factory=list, title="Mappings")
    color: str | None = Field(default=None, title="Color")

    @field_validator("input", "output", "consumes", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "consumes" else {}
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return ComponentType.from_str(value)
        return value

    @field_validator("mappings", mode="before")
    @classmethod
    def _normalize_mappings(cls, value: Any) -> Any:
        """Accept the legacy keyed-by-target-id shape and flatten it."""
        if value is None:
            return []
        if isinstance(value, dict):
            flattened = []
            for target_id, bucket in value.items():
                if not isinstance(bucket, list):
                    continue
                for mapping in bucket:
                    if isinstance(mapping, dict):
                        flattened.append({"target_component_id": target_id, **mapping})
                    else:
                        flattened.append(mapping)
            return flattened
        return value

    @property
    def is_endpoint(self) -> bool:
        return self.type == ComponentType.ENDPOINT

    @classmethod
    def validate_data(cls, data: dict[str, Any]) -> "Component":
        """Validate raw data, raising ComponentValidationError on failure."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            errors = []
            for error in e.errors():
                loc = ".".join(str(part) for part in error["loc"]) or "component"
                errors.append(f"Field '{loc}' {error['msg'].lower()}")
            raise ComponentValidationError(errors) from e

    @classmethod
    def apply_defaults(cls, data: dict[str, Any]) -> dict[str, Any]:
        """Fill missing fields with (deep-copied) defaults."""
        component = dict(data)
        defaults: dict[str, Any] = {
            "type": ComponentType.ENDPOINT.value,
            "input": {},
            "output": {},
            "consumes": [],
            "mappings": [],
        }
        for field_name, default in defaults.items():
            if component.get(field_name) is None:
                component[field_name] = copy.deepcopy(default)
        return component

    @classmethod
    def create(cls, data: dict[str, Any] | None = None, assign_id: bool = True) -> "Component":
        """Create a new component with defaults applied and an id assigned.

        Args:
            data: Raw component data.
            assign_id: Generate an id when ``data`` does not carry one.

        Raises:
            ComponentValidationError: If the data is invalid.
        """
        component = cls.apply_defaults(data or {})
        if assign_id and not component.get("id"):
            component["id"] = generate_id()
        return cls.validate_data(component)

    @classmethod
    def update(cls, existing: "Component", updates: dict[str, Any]) -> "Component":
        """Merge updates into an existing component and validate the result."""
        merged = {**existing.model_dump(mode="json"), **updates}
        return cls.validate_data(merged)

    @classmethod
    def clone(cls, source: "Component", name_prefix: str = "Copy of ") -> "Component":
        """Clone a component with a new id and a prefixed name."""
        data = source.model_dump(mode="json")
        data["id"] = generate_id()
        data["name"] = f"{name_prefix}{source.name}"
        return cls.validate_data(data)
