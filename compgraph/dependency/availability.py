"""Check whether a field is already supplied by another consumed component."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from ..models import Component, FieldDescriptor, find_component
from ..schema import get_schema, verify_field_presence
from ..schema.resolver import FieldPresence


def is_field_available_in_consumed_components(
    field: str,
    exclude_component_id: str | None,
    consumed_ids: Iterable[str],
    components: Sequence[Component],
    flatten: Callable[[Any], list[FieldDescriptor]] = get_schema,
    verify: Callable[[list[FieldDescriptor], str], FieldPresence] = verify_field_presence,
) -> bool:
    """Check if ``field`` is present in the input of another consumed component.

    Fields that exist but are empty do not count as available.

    Args:
        field: Leaf path to look for.
        exclude_component_id: Consumed component that requires the field.
        consumed_ids: Ids consumed by the component under validation.
        components: Full component collection snapshot.
        flatten: Schema flattener.
        verify: Field resolver.
    """
    for consumed_id in consumed_ids:
        if consumed_id == exclude_component_id:
            continue

        consumed = find_component(list(components), consumed_id)
        if consumed is None or not consumed.input:
            continue

        if verify(flatten(consumed.input), field).found:
            return True

    return False
