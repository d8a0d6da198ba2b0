"""Permissive dependency validation used to drive the mapping editor."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models import (
    Component,
    ComponentType,
    FieldValidationResult,
    MissingFieldRef,
    MissingMappingRow,
    find_component,
)
from ..schema import get_field_paths
from .availability import is_field_available_in_consumed_components
from .engine import DependencyChecker

logger = logging.getLogger(__name__)


def requires_dependency_validation(component_type: ComponentType | str) -> bool:
    """Only endpoints impose field requirements on their consumers."""
    return component_type == ComponentType.ENDPOINT


class FieldDependencyValidator:
    """Decide which missing fields still need a mapping from the user.

    Unlike ``DependencyChecker`` this validator also accepts a field that is
    supplied by another consumed component, and it treats any mapping record
    for the field as resolving it without checking the mapping's source.
    """

    def __init__(self, checker: DependencyChecker | None = None):
        self._checker = checker or DependencyChecker()

    def validate_field_dependencies(
        self,
        component: Component,
        components: Sequence[Component],
        current_fields: list[str] | None = None,
    ) -> FieldValidationResult:
        """Validate the dependencies of a component being edited.

        Args:
            component: Component under edit (may carry unsaved changes).
            components: Full component collection snapshot.
            current_fields: Leaf paths of the edited input. Defaults to the
                paths of ``component.input``.
        """
        if not component.consumes:
            return FieldValidationResult()

        all_components = list(components)
        if current_fields is None:
            current_fields = get_field_paths(component.input)

        report = self._checker.check_component_dependencies(component.id, all_components)
        if not report.has_missing_dependencies:
            return FieldValidationResult()

        missing_fields = self.build_missing_fields_data(
            component, all_components, current_fields
        )
        return FieldValidationResult(
            has_valid_dependencies=len(missing_fields) == 0,
            missing_fields=missing_fields,
            has_missing_dependencies=len(missing_fields) > 0,
        )

    def build_missing_fields_data(
        self,
        component: Component,
        components: Sequence[Component],
        current_fields: list[str],
    ) -> list[MissingFieldRef]:
        """List the consumed fields that are not resolved by any means."""
        all_components = list(components)
        missing_fields: list[MissingFieldRef] = []

        # consumes is an ordered set; repeated ids are checked once
        for consumed_id in dict.fromkeys(component.consumes):
            consumed = find_component(all_components, consumed_id)
            if consumed is None or not consumed.input or not consumed.is_endpoint:
                continue

            for field in get_field_paths(consumed.input):
                if not self.is_field_resolved(
                    field, consumed, component, all_components, current_fields
                ):
                    missing_fields.append(
                        MissingFieldRef(
                            field=field,
                            from_component=consumed.name,
                            from_component_id=consumed.id,
                        )
                    )

        return missing_fields

    def is_field_resolved(
        self,
        field: str,
        consumed: Component,
        component: Component,
        components: Sequence[Component],
        current_fields: list[str],
    ) -> bool:
        """Check if a field is in the current input, another dependency, or mapped."""
        if field in current_fields:
            return True

        if is_field_available_in_consumed_components(
            field, consumed.id, component.consumes, components
        ):
            return True

        return any(
            mapping.matches_target(consumed.id, field) for mapping in component.mappings
        )

    def get_all_missing_mappings(
        self, components: Sequence[Component]
    ) -> list[MissingMappingRow]:
        """Collect the missing fields of every endpoint into display rows."""
        all_components = list(components)
        rows: list[MissingMappingRow] = []

        for component in all_components:
            if not requires_dependency_validation(component.type) or not component.consumes:
                continue

            report = self._checker.check_component_dependencies(component.id, all_components)
            for missing in report.missing_fields:
                source = find_component(all_components, missing.from_id)
                rows.append(
                    MissingMappingRow(
                        component_name=component.name,
                        component_id=component.id,
                        missing_field=missing.path,
                        from_component=source.name if source else None,
                        from_component_id=missing.from_id,
                        message=missing.message,
                    )
                )

        logger.debug(f"Found {len(rows)} missing mapping(s) across {len(all_components)} components")
        return rows


_default_validator = FieldDependencyValidator()


def validate_field_dependencies(
    component: Component,
    components: Sequence[Component],
    current_fields: list[str] | None = None,
) -> FieldValidationResult:
    """Validate dependencies of an edited component with the default validator."""
    return _default_validator.validate_field_dependencies(component, components, current_fields)


def build_missing_fields_data(
    component: Component,
    components: Sequence[Component],
    current_fields: list[str],
) -> list[MissingFieldRef]:
    """List unresolved consumed fields with the default validator."""
    return _default_validator.build_missing_fields_data(component, components, current_fields)


def get_all_missing_mappings(components: Sequence[Component]) -> list[MissingMappingRow]:
    """Collect collection-wide missing mapping rows with the default validator."""
    return _default_validator.get_all_missing_mappings(components)
