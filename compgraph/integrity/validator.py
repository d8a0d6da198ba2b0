"""Collection-wide referential integrity checks for mappings."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models import Component, IntegrityError, Mapping

logger = logging.getLogger(__name__)


def group_mappings_by_target(mappings: list[Mapping]) -> dict[str | None, list[Mapping]]:
    """Derive the keyed-by-target-id view of a mapping list.

    Bucket order follows the first mapping seen for each target.
    """
    grouped: dict[str | None, list[Mapping]] = {}
    for mapping in mappings:
        grouped.setdefault(mapping.target_component_id, []).append(mapping)
    return grouped


class MappingIntegrityValidator:
    """Check mapping records and consumes lists against the known component ids.

    This is a structural pass: it never resolves fields, it only checks that
    every id a component refers to exists and that mapping records are
    complete. Violations are returned as data.
    """

    def validate(self, components: Sequence[Component]) -> list[IntegrityError]:
        """Validate every component of the collection."""
        all_components = list(components)
        component_ids = {c.id for c in all_components if c.id}
        errors: list[IntegrityError] = []

        for component in all_components:
            errors.extend(self._validate_consumes(component, component_ids))
            errors.extend(self._validate_component_mappings(component, component_ids))

        if errors:
            logger.debug(f"Mapping validation found {len(errors)} error(s)")
        return errors

    def _validate_consumes(
        self, component: Component, component_ids: set[str]
    ) -> list[IntegrityError]:
        errors = []
        for consumed_id in component.consumes:
            if consumed_id == component.id:
                errors.append(
                    self._error(component, "Component consumes itself", target_id=consumed_id)
                )
            elif consumed_id not in component_ids:
                errors.append(
                    self._error(
                        component,
                        f"Invalid consumed component ID: {consumed_id}",
                        target_id=consumed_id,
                    )
                )
        return errors

    def _validate_component_mappings(
        self, component: Component, component_ids: set[str]
    ) -> list[IntegrityError]:
        errors = []
        for target_id, bucket in group_mappings_by_target(component.mappings).items():
            if target_id not in component_ids:
                errors.append(
                    self._error(
                        component,
                        f"Invalid target component ID in mappings: {target_id}",
                        target_id=target_id,
                    )
                )

            if target_id not in component.consumes:
                errors.append(
                    self._error(
                        component,
                        f"Target component ID {target_id} not in consumes array",
                        target_id=target_id,
                    )
                )

            for mapping in bucket:
                if not mapping.target_field or not mapping.source_field:
                    errors.append(
                        self._error(
                            component,
                            "Mapping must have both target_field and source_field",
                            target_id=target_id,
                            mapping=mapping,
                        )
                    )

                if (
                    mapping.source_component_id
                    and mapping.source_component_id not in component_ids
                ):
                    errors.append(
                        self._error(
                            component,
                            f"Invalid source_component_id: {mapping.source_component_id}",
                            target_id=target_id,
                            mapping=mapping,
                        )
                    )
        return errors

    @staticmethod
    def _error(
        component: Component,
        message: str,
        target_id: str | None = None,
        mapping: Mapping | None = None,
    ) -> IntegrityError:
        return IntegrityError(
            component=component.name,
            component_id=component.id,
            error=message,
            target_id=target_id,
            mapping=mapping,
        )


def validate_mappings(components: Sequence[Component]) -> list[IntegrityError]:
    """Validate mapping integrity across a component collection."""
    return MappingIntegrityValidator().validate(components)
