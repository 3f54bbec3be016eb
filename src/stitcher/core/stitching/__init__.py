"""Stitching engine: tag locator, substitutor, collector/validator, compositor, sinks."""
from __future__ import annotations

from .attributes import parse_attributes, scan_open_tag
from .buffer import INNER_KEY, FileBuffer, indent_lines, leading_indent, locate_partial, substitute
from .collector import collect_partials, validate_partials
from .compositor import RenderStats, index_by_stem, render
from .discovery import discover_files, shadowed_stems, without
from .models import CandidateFile, PartialOccurrence, RenderOptions, RenderParameters, name_stem
from .report import BatchBuildReport, BuildReport
from .sinks import AtomicFileSink, BufferedStreamSink, MemorySink, NullSink, OutputSink, StreamSink

__all__ = [
    "parse_attributes",
    "scan_open_tag",
    "INNER_KEY",
    "FileBuffer",
    "indent_lines",
    "leading_indent",
    "locate_partial",
    "substitute",
    "collect_partials",
    "validate_partials",
    "RenderStats",
    "index_by_stem",
    "render",
    "discover_files",
    "shadowed_stems",
    "without",
    "CandidateFile",
    "PartialOccurrence",
    "RenderOptions",
    "RenderParameters",
    "name_stem",
    "BatchBuildReport",
    "BuildReport",
    "AtomicFileSink",
    "MemorySink",
    "NullSink",
    "OutputSink",
    "StreamSink",
    "BufferedStreamSink",
]
