"""Partial collection and nesting validation for a single buffer."""
from __future__ import annotations

from typing import Iterable, List, Optional

from ..exceptions import NestedPartialError
from .buffer import FileBuffer
from .models import PartialOccurrence


def collect_partials(buffer: FileBuffer, names: Iterable[str]) -> List[PartialOccurrence]:
    """Return every occurrence of every name in ``names``, sorted by start offset.

    Each name is searched repeatedly, resuming just past the previous match.
    Empty and duplicate names are skipped.
    """
    found: List[PartialOccurrence] = []
    seen = set()
    for name in names:
        if not name or name in seen:
            continue
        seen.add(name)
        position = 0
        while True:
            occurrence = buffer.find_partial(name, position)
            if occurrence is None:
                break
            found.append(occurrence)
            position = occurrence.end
    found.sort(key=lambda occurrence: occurrence.start)
    return found


def validate_partials(occurrences: List[PartialOccurrence], *, file: Optional[str] = None) -> None:
    """Reject any occurrence that starts inside another occurrence's span.

    Sequential and adjacent occurrences are fine. Two occurrences that start
    at the same offset (``<ab>`` also matched as ``<a``) count as nested.

    Raises:
        NestedPartialError: Naming the outer and the nested tag.
    """
    ordered = sorted(occurrences, key=lambda occurrence: occurrence.start)
    for index, outer in enumerate(ordered):
        for other in ordered[index + 1 :]:
            if other.start >= outer.end:
                break
            if outer.overlaps_start_of(other):
                raise NestedPartialError(
                    f"{outer.name} cannot contain nested partial {other.name}",
                    outer=outer.name,
                    inner=other.name,
                    file=file,
                )


__all__ = ["collect_partials", "validate_partials"]
