"""Shared utilities: file I/O, dictionary merging, timing spans."""
from __future__ import annotations

from .io import ensure_directory, ensure_parent_dir, read_yaml
from .merge import deep_merge
from .profiling import Profiler, Timer, enable_profiler, span

__all__ = [
    "ensure_directory",
    "ensure_parent_dir",
    "read_yaml",
    "deep_merge",
    "Profiler",
    "Timer",
    "enable_profiler",
    "span",
]
