"""Look up fields in a flattened schema."""

from typing import NamedTuple

from ..models.report import MESSAGE_PRESENT_BUT_EMPTY
from ..models.schema import FieldDescriptor


class FieldPresence(NamedTuple):
    """Outcome of a field lookup.

    ``message`` is None when the field is absent and carries
    ``MESSAGE_PRESENT_BUT_EMPTY`` when it exists with a null value.
    """

    found: bool
    message: str | None = None


def find_field(fields: list[FieldDescriptor], path: str | None) -> FieldDescriptor | None:
    """Return the first descriptor with exactly ``path``."""
    for descriptor in fields:
        if descriptor.path == path:
            return descriptor
    return None


def verify_field_presence(fields: list[FieldDescriptor], path: str | None) -> FieldPresence:
    """Check that ``path`` exists in ``fields`` with a non-null value."""
    descriptor = find_field(fields, path)
    if descriptor is None:
        return FieldPresence(found=False, message=None)
    if descriptor.value is None:
        return FieldPresence(found=False, message=MESSAGE_PRESENT_BUT_EMPTY)
    return FieldPresence(found=True, message=None)
