"""Create, edit and inspect field mappings."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Literal

from pydantic import BaseModel, Field

from ..models import (
    Component,
    Mapping,
    MissingMappingRow,
    find_component,
    find_component_by_name,
)
from ..schema import get_field_paths

logger = logging.getLogger(__name__)

MappingsChanged = Callable[[list[Mapping]], None]


class FieldOption(BaseModel):
    """A field offered as a mapping source."""

    field: str
    source: str = Field(..., description="Name of the component holding the field")
    source_id: str | None = None

    @property
    def display(self) -> str:
        return f"{self.field} (from {self.source})"


class FieldUsage(BaseModel):
    """A component's field used as a mapping source elsewhere."""

    field: str
    used_by_component: str
    used_by_component_id: str | None
    mapped_to_field: str | None


class RequiredField(BaseModel):
    """A field that must be mapped for a given component."""

    component_id: str
    field: str


class MappingInputValidation(BaseModel):
    """Result of checking the inputs of a mapping creation request."""

    is_valid: bool
    error: str | None = None
    available_components: list[str] | None = None
    target_component: Component | None = None
    source_field: str | None = None
    source_component_name: str | None = None


class MappingCompleteness(BaseModel):
    """How many of the required fields have a mapping."""

    is_complete: bool
    missing_mappings: list[RequiredField] = Field(default_factory=list)
    total_required: int = 0
    total_mapped: int = 0


class MappingService:
    """Edit a component's mapping list.

    Mutating operations return new lists and leave the given list untouched.
    The ``on_mapping_changed`` callback is called with the new list whenever
    an operation actually changes it.
    """

    def __init__(self, on_mapping_changed: MappingsChanged | None = None):
        self.on_mapping_changed = on_mapping_changed

    def set_on_mapping_changed(self, callback: MappingsChanged | None) -> None:
        """Set callback for mapping changes."""
        self.on_mapping_changed = callback

    def _notify(self, mappings: list[Mapping]) -> None:
        if self.on_mapping_changed is not None:
            self.on_mapping_changed(mappings)

    def validate_mapping_inputs(
        self,
        target_field: str | None,
        target_component_name: str | None,
        selected: FieldOption | None,
        components: Sequence[Component],
        current_component_id: str | None,
    ) -> MappingInputValidation:
        """Check the inputs of a mapping creation request."""
        if not target_field:
            return MappingInputValidation(is_valid=False, error="Missing target field")

        if not target_component_name:
            return MappingInputValidation(
                is_valid=False, error="Missing target component name"
            )

        if selected is None:
            return MappingInputValidation(
                is_valid=False, error="Invalid selected field object"
            )

        if not current_component_id:
            return MappingInputValidation(
                is_valid=False, error="Current component ID is required"
            )

        target_component = find_component_by_name(list(components), target_component_name)
        if target_component is None:
            return MappingInputValidation(
                is_valid=False,
                error=f"Target component not found: {target_component_name}",
                available_components=[c.name for c in components],
            )

        if not selected.field:
            return MappingInputValidation(
                is_valid=False, error="Missing field property in selected field object"
            )

        if not selected.source:
            return MappingInputValidation(
                is_valid=False, error="Missing source property in selected field object"
            )

        return MappingInputValidation(
            is_valid=True,
            target_component=target_component,
            source_field=selected.field,
            source_component_name=selected.source,
        )

    def create_field_mapping(
        self,
        target_field: str | None,
        target_component_name: str | None,
        selected: FieldOption | None,
        components: Sequence[Component],
        current_component_id: str | None,
        current_component_name: str,
    ) -> Mapping | None:
        """Build a mapping from a field picked in the editor.

        Picking a field of the current component gives an own-input mapping;
        picking one of another component records that component as source.

        Returns:
            The new mapping, or None if the inputs are invalid or the source
            component does not exist.
        """
        validation = self.validate_mapping_inputs(
            target_field, target_component_name, selected, components, current_component_id
        )
        if not validation.is_valid:
            logger.error(f"Mapping validation failed: {validation.error}")
            return None

        mapping = Mapping(
            target_component_id=validation.target_component.id,
            target_field=target_field,
            source_field=validation.source_field,
        )

        if validation.source_component_name != current_component_name:
            source = find_component_by_name(list(components), validation.source_component_name)
            if source is None:
                return None
            mapping.source_component_id = source.id

        return mapping

    def add_mapping(self, mappings: list[Mapping], new_mapping: Mapping | None) -> list[Mapping]:
        """Append a mapping."""
        if new_mapping is None:
            logger.error("Cannot add null mapping")
            return mappings

        updated = [*mappings, new_mapping]
        self._notify(updated)
        return updated

    def remove_mapping(self, mappings: list[Mapping], to_remove: Mapping) -> list[Mapping]:
        """Remove the first mapping with the same target and source field."""
        for index, mapping in enumerate(mappings):
            if (
                mapping.target_component_id == to_remove.target_component_id
                and mapping.target_field == to_remove.target_field
                and mapping.source_field == to_remove.source_field
            ):
                break
        else:
            logger.warning(f"Mapping not found for removal: {to_remove}")
            return mappings

        updated = [m for i, m in enumerate(mappings) if i != index]
        self._notify(updated)
        return updated

    def cleanup_mappings_for_deleted_field(
        self, mappings: list[Mapping], deleted_field_path: str
    ) -> list[Mapping]:
        """Drop mappings whose target or source field was deleted."""
        updated = [
            m
            for m in mappings
            if m.target_field != deleted_field_path and m.source_field != deleted_field_path
        ]
        if len(updated) != len(mappings):
            self._notify(updated)
        return updated

    def has_mapping(
        self, mappings: list[Mapping], target_component_id: str, target_field: str
    ) -> bool:
        """Check if a target field already has a mapping."""
        return any(m.matches_target(target_component_id, target_field) for m in mappings)

    def get_mappings_for_component(
        self,
        mappings: list[Mapping],
        component_id: str,
        side: Literal["target", "source"] = "target",
    ) -> list[Mapping]:
        """Filter mappings by target or source component."""
        if side == "target":
            return [m for m in mappings if m.target_component_id == component_id]
        elif side == "source":
            return [m for m in mappings if m.source_component_id == component_id]
        return []

    def validate_mapping_completeness(
        self, mappings: list[Mapping], required: list[RequiredField]
    ) -> MappingCompleteness:
        """Check that every required field has a mapping."""
        missing = [
            r for r in required if not self.has_mapping(mappings, r.component_id, r.field)
        ]
        return MappingCompleteness(
            is_complete=len(missing) == 0,
            missing_mappings=missing,
            total_required=len(required),
            total_mapped=len(required) - len(missing),
        )

    def get_available_fields_for_mapping(
        self,
        component_id: str,
        target_component_name: str,
        components: Sequence[Component],
    ) -> list[FieldOption]:
        """List the fields that can be picked as a mapping source.

        The current component's input and output fields come first, followed
        by the outputs of its consumed components other than the target.
        """
        all_components = list(components)
        current = find_component(all_components, component_id)
        if current is None:
            return []

        options = [
            FieldOption(field=path, source=current.name, source_id=current.id)
            for path in get_field_paths(current.input) + get_field_paths(current.output)
        ]

        for consumed_id in current.consumes:
            consumed = find_component(all_components, consumed_id)
            if consumed is None or consumed.name == target_component_name:
                continue
            options.extend(
                FieldOption(field=path, source=consumed.name, source_id=consumed.id)
                for path in get_field_paths(consumed.output)
            )

        return options

    def find_field_usage_in_other_components(
        self, component_id: str, components: Sequence[Component]
    ) -> list[FieldUsage]:
        """Find mappings in other components that source fields from this one."""
        all_components = list(components)
        current = find_component(all_components, component_id)
        if current is None:
            return []

        current_fields = set(get_field_paths(current.input) + get_field_paths(current.output))
        usages = []
        for component in all_components:
            if component.id == component_id:
                continue
            for mapping in component.mappings:
                if (
                    mapping.source_component_id == component_id
                    and mapping.source_field in current_fields
                ):
                    usages.append(
                        FieldUsage(
                            field=mapping.source_field,
                            used_by_component=component.name,
                            used_by_component_id=component.id,
                            mapped_to_field=mapping.target_field,
                        )
                    )
        return usages


def group_missing_by_component(
    rows: list[MissingMappingRow],
) -> dict[str | None, list[MissingMappingRow]]:
    """Group missing mapping rows by the component that owes the fields."""
    grouped: dict[str | None, list[MissingMappingRow]] = {}
    for row in rows:
        grouped.setdefault(row.component_id, []).append(row)
    return grouped
