"""Write the component database document."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from ..models import ComponentCollection
from .reader import YAML_SUFFIXES


class DatabaseWriter:
    """Write the component collection back to JSON or YAML."""

    def to_data(self, collection: ComponentCollection) -> dict[str, Any]:
        """Convert the collection to plain data."""
        # mode="json" ensures Enums are serialized as strings; null schema
        # values must be kept, so no exclude_none
        return collection.model_dump(mode="json")

    def write_collection(self, collection: ComponentCollection, path: Path) -> None:
        """Write collection to file, picking the format from the suffix."""
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() in YAML_SUFFIXES:
            text = self.write_yaml_str(collection)
        else:
            text = self.write_json_str(collection)

        with open(path, "w", encoding="utf-8") as f:
            f.write(text)

    def write_json_str(self, collection: ComponentCollection) -> str:
        """Convert collection to an indented JSON string."""
        return json.dumps(self.to_data(collection), indent=2, ensure_ascii=False)

    def write_yaml_str(self, collection: ComponentCollection) -> str:
        """Convert collection to a YAML string."""
        return yaml.dump(
            self.to_data(collection),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
