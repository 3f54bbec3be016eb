"""
Bundled data resources (default configuration, JSON schemas).

Accessed through importlib.resources so they work from an installed wheel.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a bundled data file or directory.

    Example:
        >>> get_data_path("config", "defaults.yaml")
        PosixPath('/path/to/stitcher/data/config/defaults.yaml')
    """
    base = Path(str(resources.files("stitcher.data") / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=16)
def read_yaml(subpackage: str, filename: str) -> dict[str, Any]:
    """Load a bundled YAML file (cached; callers must not mutate the result)."""
    with open(get_data_path(subpackage, filename), "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@lru_cache(maxsize=16)
def read_json(subpackage: str, filename: str) -> dict[str, Any]:
    """Load a bundled JSON file (cached; callers must not mutate the result)."""
    with open(get_data_path(subpackage, filename), "r", encoding="utf-8") as f:
        return json.load(f)


__all__ = ["get_data_path", "read_yaml", "read_json"]
