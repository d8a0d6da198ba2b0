"""Configuration module for compgraph."""

from .loader import ConfigLoader, load_config
from .models import CompgraphConfig, CompgraphSettings

__all__ = [
    "CompgraphConfig",
    "CompgraphSettings",
    "ConfigLoader",
    "load_config",
]
