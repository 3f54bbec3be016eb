"""Build reports returned by the builder and printed by the CLI."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass
class BuildReport:
    """Outcome of building one root file."""

    root: Path
    output: Optional[Path] = None
    elapsed_ms: float = 0.0
    files_rendered: int = 0
    partials_rendered: int = 0
    chars_written: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "root": str(self.root),
            "output": str(self.output) if self.output else None,
            "elapsed_ms": round(self.elapsed_ms, 3),
            "files_rendered": self.files_rendered,
            "partials_rendered": self.partials_rendered,
            "chars_written": self.chars_written,
            "error": self.error,
        }

    def summary(self) -> str:
        target = str(self.output) if self.output else "<stdout>"
        if self.error:
            return f"{self.root} => FAILED: {self.error}"
        return f"{self.root} => {target} {self.elapsed_ms:.0f}ms"


@dataclass
class BatchBuildReport:
    """Reports for every root file of one build run."""

    timestamp: datetime = field(default_factory=datetime.now)
    reports: List[BuildReport] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.reports)

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.reports if not r.ok)

    @property
    def ok(self) -> bool:
        return self.error_count == 0

    def add_report(self, report: BuildReport) -> None:
        self.reports.append(report)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "total": self.total_count,
            "errors": self.error_count,
            "reports": [r.to_dict() for r in self.reports],
        }


__all__ = ["BuildReport", "BatchBuildReport"]
