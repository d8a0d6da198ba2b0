"""Keep the collection consistent when a component is deleted."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models import Component, Mapping

logger = logging.getLogger(__name__)


def _references(mapping: Mapping, component_id: str) -> bool:
    return (
        mapping.target_component_id == component_id
        or mapping.source_component_id == component_id
    )


def clean_orphaned_mappings(
    components: Sequence[Component], deleted_id: str
) -> list[Component]:
    """Strip references to a deleted component.

    Returns new component objects; the input collection is not modified.
    Mappings targeting or sourcing from ``deleted_id`` are dropped and the id
    is removed from every ``consumes`` list. Running it twice with the same id
    gives the same result as running it once.

    Args:
        components: Component collection (the deleted component may or may
            not still be part of it).
        deleted_id: Id of the deleted component.

    Returns:
        Cleaned copy of the collection, in the same order.
    """
    cleaned = []
    removed = 0
    for component in components:
        mappings = [
            m.model_copy() for m in component.mappings if not _references(m, deleted_id)
        ]
        consumes = [c for c in component.consumes if c != deleted_id]
        removed += len(component.mappings) - len(mappings)
        cleaned.append(
            component.model_copy(
                update={"mappings": mappings, "consumes": consumes}, deep=True
            )
        )

    if removed:
        logger.debug(f"Removed {removed} orphaned mapping(s) referencing {deleted_id}")
    return cleaned
