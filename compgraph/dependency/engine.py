"""Resolve the fields a component owes to the components it consumes."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from ..errors import ComponentNotFoundError
from ..models import (
    MESSAGE_SOURCE_COMPONENT_NOT_FOUND,
    Component,
    DependencyReport,
    FieldDescriptor,
    Mapping,
    MissingField,
    find_component,
)
from ..schema import get_schema, verify_field_presence
from ..schema.resolver import FieldPresence

logger = logging.getLogger(__name__)

Flattener = Callable[[Any], list[FieldDescriptor]]
Resolver = Callable[[list[FieldDescriptor], str], FieldPresence]


class DependencyChecker:
    """Validate a component's dependencies and mappings.

    For every leaf field required by a consumed endpoint, the field is
    resolved through a fixed rule chain:

    1. present in the component's own input;
    2. an explicit mapping sourcing it from the component's own input;
    3. an explicit mapping sourcing it from another component's output.

    Anything left unresolved is reported as a ``MissingField`` with a message
    describing why.

    Example:
        checker = DependencyChecker()
        report = checker.check_component_dependencies("orders-api", components)
        for missing in report.missing_fields:
            print(missing.path, missing.from_id, missing.message)
    """

    def __init__(
        self,
        flatten: Flattener = get_schema,
        verify: Resolver = verify_field_presence,
    ):
        """Initialize with the schema collaborators.

        Args:
            flatten: Turns a schema object into leaf field descriptors.
            verify: Resolves a path against flattened fields.
        """
        self._flatten = flatten
        self._verify = verify

    def check_component_dependencies(
        self, component_id: str, components: Sequence[Component]
    ) -> DependencyReport:
        """Report unresolved fields for one component.

        Args:
            component_id: Component to check.
            components: Full component collection snapshot.

        Returns:
            DependencyReport listing every unresolved field.

        Raises:
            ComponentNotFoundError: If ``component_id`` is not in the collection.
        """
        all_components = list(components)
        component = find_component(all_components, component_id)
        if component is None:
            raise ComponentNotFoundError(component_id)

        # Only endpoints with dependencies are checked
        if not component.is_endpoint or not component.consumes:
            return DependencyReport()

        current_fields = self._flatten(component.input)
        missing_fields: list[MissingField] = []

        # consumes is an ordered set; repeated ids are checked once
        for consumed_id in dict.fromkeys(component.consumes):
            consumed = find_component(all_components, consumed_id)
            if consumed is None or not consumed.input or not consumed.is_endpoint:
                continue

            for required in self._flatten(consumed.input):
                missing = self._resolve_field(
                    required, consumed, component, current_fields, all_components
                )
                if missing is not None:
                    missing_fields.append(missing)

        logger.debug(
            f"Checked {component.name}: {len(missing_fields)} missing field(s)"
        )
        return DependencyReport.from_missing(missing_fields)

    # Alias kept for callers using the short name
    check = check_component_dependencies

    def _resolve_field(
        self,
        required: FieldDescriptor,
        consumed: Component,
        component: Component,
        current_fields: list[FieldDescriptor],
        components: list[Component],
    ) -> MissingField | None:
        """Resolve one required field, returning None when it is satisfied."""
        presence = self._verify(current_fields, required.path)
        if presence.found:
            return None

        mapping = self._find_mapping(component, consumed.id, required.path)
        if mapping is None:
            return self._missing(required, consumed, presence.message)

        if not mapping.source_component_id:
            presence = self._verify(current_fields, mapping.source_field)
            if presence.found:
                return None
            message = presence.message or (
                f"Invalid mapping: {mapping.source_field} not found "
                f"in the input of component {component.name}"
            )
            return self._missing(required, consumed, message)

        source = find_component(components, mapping.source_component_id)
        if source is None:
            return self._missing(required, consumed, MESSAGE_SOURCE_COMPONENT_NOT_FOUND)

        presence = self._verify(self._flatten(source.output), mapping.source_field)
        if presence.found:
            return None
        message = presence.message or (
            f"Invalid mapping: {mapping.source_field} not found "
            f"in source component {source.name}"
        )
        return self._missing(required, consumed, message)

    @staticmethod
    def _find_mapping(
        component: Component, target_id: str | None, target_field: str
    ) -> Mapping | None:
        for mapping in component.mappings:
            if mapping.matches_target(target_id, target_field):
                return mapping
        return None

    @staticmethod
    def _missing(
        required: FieldDescriptor, consumed: Component, message: str | None
    ) -> MissingField:
        return MissingField(
            path=required.path,
            type=required.type,
            value=required.value,
            from_id=consumed.id,
            message=message,
        )


_default_checker = DependencyChecker()


def check_component_dependencies(
    component_id: str, components: Sequence[Component]
) -> DependencyReport:
    """Report unresolved fields for one component using the default checker."""
    return _default_checker.check_component_dependencies(component_id, components)


def check(component_id: str, components: Sequence[Component]) -> DependencyReport:
    """Alias for check_component_dependencies."""
    return check_component_dependencies(component_id, components)
