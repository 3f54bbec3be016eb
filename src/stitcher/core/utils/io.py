"""File I/O helpers shared by config loading, discovery and sinks."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Union

import yaml

PathLike = Union[str, Path]


def ensure_parent_dir(path: PathLike) -> None:
    """Create the parent directory of ``path`` if it is missing."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def ensure_directory(path: PathLike, create: bool = True) -> Path:
    """Ensure ``path`` is a directory.

    Raises:
        FileNotFoundError: If create=False and the directory doesn't exist
        NotADirectoryError: If path exists but is not a directory
    """
    path = Path(path)

    if path.exists():
        if not path.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {path}")
        return path

    if not create:
        raise FileNotFoundError(f"Directory does not exist: {path}")
    path.mkdir(parents=True, exist_ok=True)
    return path


def read_yaml(path: PathLike, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read a YAML file.

    Returns ``default`` when the file is missing, empty or invalid, unless
    ``raise_on_error`` is set, in which case the underlying error propagates.
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default
    return data if data is not None else default


__all__ = ["PathLike", "ensure_parent_dir", "ensure_directory", "read_yaml"]
