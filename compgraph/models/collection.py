"""Container for the persisted component collection."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .base import ComponentType
from .component import Component


class ComponentCollection(BaseModel):
    """The ``{"components": [...]}`` database document."""

    components: list[Component] = Field(default_factory=list)

    def get(self, component_id: str | None) -> Component | None:
        """Get component by id."""
        return find_component(self.components, component_id)

    def get_by_name(self, name: str) -> Component | None:
        """Get the first component with the given name."""
        return find_component_by_name(self.components, name)

    def ids(self) -> set[str]:
        """Return the set of known component ids."""
        return {c.id for c in self.components if c.id}

    def by_type(self, component_type: ComponentType) -> list[Component]:
        """Get all components of a specific type."""
        return [c for c in self.components if c.type == component_type]

    def count(self) -> dict[str, int]:
        """Get component count by type."""
        return {
            ComponentType.ENDPOINT.value: len(self.by_type(ComponentType.ENDPOINT)),
            ComponentType.DATABASE_TABLE.value: len(
                self.by_type(ComponentType.DATABASE_TABLE)
            ),
            "total": len(self.components),
        }


def find_component(components: list[Component], component_id: str | None) -> Component | None:
    """Find a component by id in a plain component list."""
    if not component_id:
        return None
    for component in components:
        if component.id == component_id:
            return component
    return None


def find_component_by_name(components: list[Component], name: str | None) -> Component | None:
    """Find the first component with ``name``; names are treated as unique."""
    if not name:
        return None
    for component in components:
        if component.name == name:
            return component
    return None
