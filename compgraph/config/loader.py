"""Locate and read compgraph.yaml."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .models import CompgraphConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Resolve compgraph settings for a project directory.

    The project's ``compgraph.yaml`` wins over the one in the user config
    directory. A missing, unreadable or invalid file yields the defaults.
    """

    CONFIG_FILENAME = "compgraph.yaml"
    USER_CONFIG_DIR = Path.home() / ".compgraph"

    def __init__(self, project_path: Path | None = None):
        self._project_path = project_path or Path.cwd()

    def candidate_paths(self) -> list[Path]:
        """Config file locations in lookup order."""
        return [
            self._project_path / self.CONFIG_FILENAME,
            self.USER_CONFIG_DIR / self.CONFIG_FILENAME,
        ]

    def get_config_path(self) -> Path | None:
        """Return the first existing config file, if any."""
        return next((path for path in self.candidate_paths() if path.exists()), None)

    def load(self) -> CompgraphConfig:
        config_path = self.get_config_path()
        if config_path is None:
            logger.debug(f"No {self.CONFIG_FILENAME} found, using defaults")
            return CompgraphConfig()

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
            config = CompgraphConfig.model_validate(data or {})
        except (yaml.YAMLError, OSError, ValueError) as e:
            logger.warning(f"Ignoring config {config_path}: {e}")
            return CompgraphConfig()

        logger.info(f"Loaded config from: {config_path}")
        return config

    def resolve_database_path(self, config: CompgraphConfig) -> Path:
        """Resolve the configured database path against the project directory."""
        path = Path(config.settings.database_path).expanduser()
        return path if path.is_absolute() else self._project_path / path


def load_config(project_path: Path | str | None = None) -> CompgraphConfig:
    """Load the configuration that applies to ``project_path``."""
    return ConfigLoader(Path(project_path) if project_path else None).load()
