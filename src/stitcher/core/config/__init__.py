"""Configuration: bundled defaults, project file, environment, CLI overrides."""
from __future__ import annotations

from .manager import ENV_PREFIX, PROJECT_CONFIG_NAMES, ConfigManager, load_config
from .models import StitcherConfig

__all__ = ["ConfigManager", "StitcherConfig", "load_config", "ENV_PREFIX", "PROJECT_CONFIG_NAMES"]
