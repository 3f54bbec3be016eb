"""Records passed between the stitching stages."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Union


def name_stem(path: Union[str, Path]) -> str:
    """Return the base name of ``path`` up to its first ``.``.

    ``nav.partial.html`` -> ``nav``; this is the tag name a partial is
    included with.
    """
    return Path(path).name.split(".", 1)[0]


@dataclass(frozen=True)
class CandidateFile:
    """A file that may be included as a partial (or rendered as a root)."""

    path: Path
    base_dir: Optional[Path] = None

    @classmethod
    def from_path(cls, path: Union[str, Path], base_dir: Optional[Path] = None) -> "CandidateFile":
        return cls(Path(path).resolve(), base_dir.resolve() if base_dir else None)

    @property
    def stem(self) -> str:
        return name_stem(self.path)

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def relative_path(self) -> Path:
        """Path relative to the directory it was discovered in."""
        if self.base_dir is None:
            return Path(self.path.name)
        try:
            return self.path.relative_to(self.base_dir)
        except ValueError:
            return Path(self.path.name)

    def read_text(self, encoding: str = "utf-8") -> str:
        return self.path.read_text(encoding=encoding)

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class PartialOccurrence:
    """One located ``<name ...>...</name>`` include within a buffer.

    ``start``/``end`` delimit the whole element (``end`` is exclusive).
    ``parameters`` holds the open tag's attributes plus ``inner``, the raw
    text between the open and close tags. ``indent`` is the run of spaces
    and tabs immediately before ``start``.
    """

    name: str
    start: int
    end: int
    parameters: Mapping[str, str] = field(default_factory=dict)
    indent: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.start < self.end:
            raise ValueError(f"Invalid span for <{self.name}>: [{self.start}, {self.end})")

    @property
    def inner(self) -> str:
        return self.parameters.get("inner", "")

    def overlaps_start_of(self, other: "PartialOccurrence") -> bool:
        """True when ``other`` begins inside this occurrence's span."""
        return other is not self and self.start <= other.start < self.end


@dataclass(frozen=True)
class RenderOptions:
    """Explicit render configuration handed to the compositor."""

    encoding: str = "utf-8"
    detect_cycles: bool = True
    max_depth: Optional[int] = None


RenderParameters = Dict[str, str]


__all__ = [
    "name_stem",
    "CandidateFile",
    "PartialOccurrence",
    "RenderOptions",
    "RenderParameters",
]
