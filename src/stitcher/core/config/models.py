"""Typed view of the merged configuration."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from ..stitching.models import RenderOptions


@dataclass(frozen=True)
class StitcherConfig:
    """Resolved configuration for one build run.

    Passed explicitly into the builder and compositor; nothing reads
    process-wide settings.
    """

    root_glob: str = "**/*.html"
    root_exclude: Tuple[str, ...] = ("*.partial.html",)
    partial_glob: str = "**/*.html"
    encoding: str = "utf-8"
    verbose: bool = False
    detect_cycles: bool = True
    max_depth: Optional[int] = None
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StitcherConfig":
        render = data.get("render") or {}
        logging_cfg = data.get("logging") or {}
        log_file = logging_cfg.get("file")
        return cls(
            root_glob=data.get("rootGlob", cls.root_glob),
            root_exclude=tuple(data.get("rootExclude") or ()),
            partial_glob=data.get("partialGlob", cls.partial_glob),
            encoding=data.get("encoding", cls.encoding),
            verbose=bool(data.get("verbose", False)),
            detect_cycles=bool(render.get("detectCycles", True)),
            max_depth=render.get("maxDepth"),
            log_level=str(logging_cfg.get("level") or cls.log_level),
            log_file=Path(log_file) if log_file else None,
        )

    @property
    def effective_log_level(self) -> str:
        """``verbose`` lowers the level to DEBUG."""
        return "DEBUG" if self.verbose else self.log_level

    @property
    def render_options(self) -> RenderOptions:
        return RenderOptions(
            encoding=self.encoding,
            detect_cycles=self.detect_cycles,
            max_depth=self.max_depth,
        )


__all__ = ["StitcherConfig"]
