"""Persistence operations around the component database file."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from ..errors import ComponentNotFoundError, IntegrityValidationError
from ..integrity import clean_orphaned_mappings, validate_mappings
from ..models import Component, ComponentCollection, IntegrityError, generate_random_color
from .reader import DatabaseReader
from .writer import DatabaseWriter

logger = logging.getLogger(__name__)


class DatabaseValidation(BaseModel):
    """Integrity status of the stored collection."""

    is_valid: bool
    errors: list[IntegrityError] = Field(default_factory=list)


class ComponentRepository:
    """Add, update, clone and delete components in a database file.

    Every operation reads a fresh snapshot of the file, so callers always act
    on the latest saved state. Integrity problems found while reading or
    editing are logged; only ``save_database`` refuses to write an
    inconsistent collection (when ``strict`` is set).
    """

    def __init__(self, path: str | Path, strict: bool = True):
        """Initialize repository.

        Args:
            path: Database file (``.json``, ``.yaml`` or ``.yml``).
            strict: Refuse to save collections with integrity errors.
        """
        self._path = Path(path)
        self._strict = strict
        self._reader = DatabaseReader()
        self._writer = DatabaseWriter()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> ComponentCollection:
        """Read the current collection snapshot."""
        return self._reader.read_collection(self._path)

    def _write(self, collection: ComponentCollection) -> None:
        self._writer.write_collection(collection, self._path)
        logger.info(f"Saved {len(collection.components)} component(s) to: {self._path}")

    def _warn_integrity(self, components: list[Component], context: str) -> list[IntegrityError]:
        errors = validate_mappings(components)
        if errors:
            logger.warning(f"{context}: {len(errors)} integrity issue(s) found")
            for error in errors:
                logger.warning(f"  {error.component}: {error.error}")
        return errors

    def get_components(self) -> list[Component]:
        """Return all components, logging integrity issues."""
        components = self.load().components
        self._warn_integrity(components, "Database integrity issues found")
        return components

    def get_component(
        self, component_id: str | None = None, name: str | None = None
    ) -> Component:
        """Get a component by id or name.

        Raises:
            ComponentNotFoundError: If neither id nor name matches.
        """
        collection = self.load()
        for component in collection.components:
            if (component_id and component.id == component_id) or (
                name and component.name == name
            ):
                return component
        raise ComponentNotFoundError(component_id, name)

    def validate_database(self) -> DatabaseValidation:
        """Check the stored collection's mapping integrity."""
        errors = validate_mappings(self.load().components)
        return DatabaseValidation(is_valid=len(errors) == 0, errors=errors)

    def save_database(self, collection: ComponentCollection) -> None:
        """Replace the stored collection.

        Raises:
            IntegrityValidationError: If strict and the collection is inconsistent.
        """
        errors = self._warn_integrity(collection.components, "Validation errors found")
        if errors and self._strict:
            raise IntegrityValidationError(errors)
        self._write(collection)

    def add_component(self, data: dict[str, Any]) -> Component:
        """Create and store a new component.

        Raises:
            ComponentValidationError: If the component data is invalid.
        """
        component = Component.create(data)
        if not component.color:
            component.color = generate_random_color()

        collection = self.load()
        collection.components.append(component)
        self._warn_integrity(collection.components, "Validation errors when adding component")
        self._write(collection)
        return component

    def update_component(self, data: dict[str, Any]) -> bool:
        """Merge updates into the stored component with the same id.

        Returns:
            True if the component existed and was updated.
        """
        collection = self.load()
        for index, existing in enumerate(collection.components):
            if existing.id == data.get("id"):
                collection.components[index] = Component.update(existing, data)
                self._warn_integrity(
                    collection.components, "Validation errors after component update"
                )
                self._write(collection)
                return True
        return False

    def delete_component(self, component_id: str) -> bool:
        """Delete a component and strip every reference to it.

        Returns:
            True if a component was removed.
        """
        collection = self.load()
        remaining = [c for c in collection.components if c.id != component_id]
        if len(remaining) == len(collection.components):
            return False

        collection.components = clean_orphaned_mappings(remaining, component_id)
        self._write(collection)
        return True

    def clone_component(self, component_id: str) -> Component | None:
        """Store a copy of a component under a new id and ``"<name> (Copy)"``."""
        collection = self.load()
        original = collection.get(component_id)
        if original is None:
            return None

        cloned = Component.clone(original, "")
        cloned.name = f"{original.name} (Copy)"
        collection.components.append(cloned)
        self._write(collection)
        return cloned

    def import_database(self, data: dict[str, Any]) -> ComponentCollection:
        """Reconcile the store with an imported ``{"components": [...]}`` document.

        Every item is validated before anything is written. Stored components
        missing from the import are then deleted (with orphan cleanup), known
        ids are updated and the rest are added with fresh ids.

        Raises:
            ValueError: If the document does not have a components list or an
                item is not an object.
            ComponentValidationError: If an item is not a valid component.
        """
        if not isinstance(data, dict) or not isinstance(data.get("components"), list):
            raise ValueError('Invalid data format. Expected: { "components": [...] }')

        items = data["components"]
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise ValueError(f"Invalid component at index {index}: expected an object")

        current = self.load()
        existing_ids = current.ids()
        for item in items:
            if item.get("id") in existing_ids:
                Component.update(current.get(item["id"]), item)
            else:
                Component.create({k: v for k, v in item.items() if k != "id"})

        new_ids = {item.get("id") for item in items if item.get("id")}
        for existing_id in existing_ids - new_ids:
            self.delete_component(existing_id)

        for item in items:
            if item.get("id") in existing_ids:
                self.update_component(item)
            else:
                self.add_component({k: v for k, v in item.items() if k != "id"})

        return self.load()
