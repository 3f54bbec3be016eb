"""Recursive compositor: renders one file and, depth-first, every partial it includes.

Rendering a file has these steps:

1. The file is read into a fresh in-memory buffer.
2. Every line after the first is indented with the whitespace that preceded
   the include element in the parent, so nested output keeps its column.
3. ``${name}`` placeholders are replaced with the parameters passed down
   from the parent element (the root file starts with none).
4. The buffer is scanned for elements named after the candidate partials,
   excluding the file being rendered, so a file never includes itself.
5. Nested elements are rejected and the rest are ordered by position.
6. Literal text and the output of each rendered partial are written to the
   sink in document order.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Set, Tuple

from ..exceptions import CyclicInclusionError, IncludeDepthError, UnresolvedPartialError
from ..utils.profiling import span
from .buffer import FileBuffer
from .collector import collect_partials, validate_partials
from .models import CandidateFile, PartialOccurrence, RenderOptions
from .sinks import OutputSink

logger = logging.getLogger(__name__)


@dataclass
class RenderStats:
    """Counters collected over one render tree."""

    files_rendered: int = 0
    partials_rendered: int = 0
    partials_used: Set[Path] = field(default_factory=set)

    def record(self, file: CandidateFile, *, is_partial: bool) -> None:
        self.files_rendered += 1
        if is_partial:
            self.partials_rendered += 1
            self.partials_used.add(file.path)


def index_by_stem(candidates: Sequence[CandidateFile]) -> Dict[str, CandidateFile]:
    """Map tag name to candidate; the first candidate with a given stem wins."""
    index: Dict[str, CandidateFile] = {}
    for candidate in candidates:
        if candidate.stem:
            index.setdefault(candidate.stem, candidate)
    return index


def render(
    file: CandidateFile,
    candidates: Sequence[CandidateFile],
    sink: OutputSink,
    parameters: Optional[Mapping[str, str]] = None,
    indent: str = "",
    *,
    options: Optional[RenderOptions] = None,
    stats: Optional[RenderStats] = None,
    chain: Tuple[Path, ...] = (),
) -> RenderStats:
    """Render ``file`` into ``sink``, expanding partials from ``candidates``.

    The sink is not closed here; the caller owns it.

    Raises:
        MalformedPartialError: An include element has no close tag.
        NestedPartialError: An include element starts inside another one.
        UnresolvedPartialError: A matched tag name has no candidate file.
        CyclicInclusionError: A partial would include one of its own ancestors
            (only when ``options.detect_cycles``).
        IncludeDepthError: Nesting deeper than ``options.max_depth``.
    """
    options = options or RenderOptions()
    stats = stats if stats is not None else RenderStats()
    parameters = dict(parameters or {})
    chain = chain + (file.path,)
    source = str(file.path)

    logger.info("Rendering %s", source)
    logger.debug("Parameters %s", json.dumps(parameters))

    with span("stitcher.render", file=source):
        buffer = FileBuffer.read(file, encoding=options.encoding)
        buffer.indent(indent)
        buffer.substitute_all(parameters)

        others = [candidate for candidate in candidates if candidate.path != file.path]
        by_stem = index_by_stem(others)

        occurrences = collect_partials(buffer, by_stem.keys())
        validate_partials(occurrences, file=source)
        plan = [(occurrence, _resolve(occurrence, by_stem, chain, options, source)) for occurrence in occurrences]

        stats.record(file, is_partial=len(chain) > 1)

        resume = 0
        for occurrence, partial in plan:
            sink.write(buffer.span(resume, occurrence.start))
            render(
                partial,
                candidates,
                sink,
                occurrence.parameters,
                occurrence.indent,
                options=options,
                stats=stats,
                chain=chain,
            )
            resume = occurrence.end
        sink.write(buffer.span(resume))

    return stats


def _resolve(
    occurrence: PartialOccurrence,
    by_stem: Mapping[str, CandidateFile],
    chain: Tuple[Path, ...],
    options: RenderOptions,
    source: str,
) -> CandidateFile:
    partial = by_stem.get(occurrence.name)
    if partial is None:
        raise UnresolvedPartialError(
            f"No partial file found for <{occurrence.name}>",
            file=source,
            tag=occurrence.name,
        )

    if options.detect_cycles and partial.path in chain:
        names: List[str] = [str(p) for p in chain + (partial.path,)]
        raise CyclicInclusionError(
            f"Circular partial inclusion detected: {' -> '.join(names)}",
            chain=names,
            tag=occurrence.name,
        )

    depth = len(chain)
    if options.max_depth is not None and depth > options.max_depth:
        raise IncludeDepthError(
            f"Partial depth exceeded (>{options.max_depth}) including <{occurrence.name}>",
            file=source,
            tag=occurrence.name,
            context={"depth": depth},
        )

    return partial


__all__ = ["RenderStats", "index_by_stem", "render"]
