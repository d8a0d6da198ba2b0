"""Configuration models for compgraph."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class CompgraphSettings(BaseModel):
    """Global settings."""

    database_path: str = Field(
        default="database.json", description="Component database file (JSON or YAML)"
    )
    strict_save: bool = Field(
        default=True, description="Refuse to save collections with integrity errors"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="WARNING")


class CompgraphConfig(BaseModel):
    """Root configuration model."""

    version: int = Field(default=1)
    settings: CompgraphSettings = Field(default_factory=CompgraphSettings)
