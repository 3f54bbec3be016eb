"""Source-tree writer used by fixtures."""
from __future__ import annotations

from pathlib import Path
from typing import Mapping


def write_tree(base: Path, files: Mapping[str, str]) -> Path:
    """Write ``files`` (relative path -> text) under ``base`` and return ``base``.

    Text is written verbatim (no newline translation) so offsets and
    indentation in assertions match the source exactly.
    """
    base.mkdir(parents=True, exist_ok=True)
    for rel, text in files.items():
        path = base / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(text.encode("utf-8"))
    return base
