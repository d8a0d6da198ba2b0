"""Read and parse the component database document."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..models import Component, ComponentCollection

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


class DatabaseReader:
    """Read the ``{"components": [...]}`` document from JSON or YAML."""

    def read_collection(self, path: Path) -> ComponentCollection:
        """Read a database file.

        A missing or unreadable file yields an empty collection.
        """
        if not path.exists():
            logger.debug(f"No database at {path}, starting empty")
            return ComponentCollection()

        try:
            with open(path, encoding="utf-8") as f:
                text = f.read()
            data = self.parse_text(text, yaml_format=path.suffix.lower() in YAML_SUFFIXES)
        except (yaml.YAMLError, OSError, ValueError) as e:
            logger.error(f"Error reading database {path}: {e}")
            return ComponentCollection()

        return self.parse_collection(data)

    def parse_text(self, text: str, yaml_format: bool = False) -> Any:
        """Decode document text."""
        if yaml_format:
            return yaml.safe_load(text)
        return json.loads(text)

    def parse_collection(self, data: Any) -> ComponentCollection:
        """Parse a decoded document, skipping components that fail validation."""
        if not isinstance(data, dict) or not isinstance(data.get("components"), list):
            logger.warning('Invalid data format. Expected: { "components": [...] }')
            return ComponentCollection()

        components = []
        for item in data["components"]:
            component = self.parse_component(item)
            if component is not None:
                components.append(component)
        return ComponentCollection(components=components)

    def parse_component(self, data: Any) -> Component | None:
        """Parse a single component dict."""
        if not isinstance(data, dict):
            logger.warning(f"Skipping non-object component entry: {data!r}")
            return None
        try:
            return Component.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Failed to validate component {data.get('name')!r}: {e}")
            return None
