"""Build root HTML files into stitched outputs.

Two modes, chosen by the input path:

- A single root file: partials are discovered next to it (the root itself
  excluded) and the result goes to ``output`` or stdout.
- A directory: every root file under it is built into ``output_dir``,
  mirroring its relative path; root files are never partials.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, TextIO, Tuple, Union

from .config import StitcherConfig
from .exceptions import InputPathError, RenderError, StitcherError
from .stitching.compositor import RenderStats, render
from .stitching.discovery import discover_files, shadowed_stems, without
from .stitching.models import CandidateFile
from .stitching.report import BatchBuildReport, BuildReport
from .stitching.sinks import AtomicFileSink, BufferedStreamSink, NullSink, OutputSink
from .utils.io import ensure_directory
from .utils.profiling import Timer, span

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
OUT_SUFFIX = ".out"


def check_arguments(
    input_path: PathLike,
    output: Optional[PathLike] = None,
    *,
    require_output_for_directory: bool = True,
) -> None:
    """Reject unusable input/output combinations before anything is written.

    Raises:
        InputPathError: Describing the first problem found.
    """
    source = Path(input_path)
    if not source.exists():
        raise InputPathError(f"Input path does not exist: {input_path}", context={"input": str(input_path)})

    source = source.resolve()
    if not (source.is_file() or source.is_dir()):
        raise InputPathError(f"Input path is not a file or directory: {input_path}", context={"input": str(input_path)})

    if source.is_dir() and output is None and require_output_for_directory:
        raise InputPathError(
            f"Output directory required for batch mode (--output) {input_path}",
            context={"input": str(input_path)},
        )

    if output is None:
        return

    target = Path(output).resolve()
    if not target.exists():
        return
    if not (target.is_file() or target.is_dir()):
        raise InputPathError(f"Output path is not a file or directory: {output}", context={"output": str(output)})
    if target.is_file():
        if source.is_dir():
            raise InputPathError(f"Output path must be a directory: {output}", context={"output": str(output)})
        if target == source:
            raise InputPathError(
                f"Output path cannot be the same as the input path: {output}",
                context={"output": str(output)},
            )


def output_path_for(root: CandidateFile, input_dir: Path, output_dir: Path) -> Path:
    """Mirror ``root``'s location under ``input_dir`` into ``output_dir``.

    When that lands on the root file itself (building in place), ``.out`` is
    appended so the source is never overwritten.
    """
    try:
        relative = root.path.relative_to(Path(input_dir).resolve())
    except ValueError:
        relative = root.relative_path
    target = Path(output_dir).resolve() / relative
    if target == root.path:
        target = target.with_name(target.name + OUT_SUFFIX)
    return target


class Builder:
    """Discovers files and drives the compositor for each root file."""

    def __init__(self, config: Optional[StitcherConfig] = None, *, stdout: Optional[TextIO] = None) -> None:
        self.config = config or StitcherConfig()
        self.stdout = stdout

    # ---------- discovery ----------

    def discover_for_file(self, root_path: PathLike) -> Tuple[CandidateFile, List[CandidateFile]]:
        root = CandidateFile.from_path(root_path, Path(root_path).resolve().parent)
        partials = discover_files(root.path.parent, self.config.partial_glob, exclude=[root.path])
        self._log_found(partials, "partial")
        return root, partials

    def discover_for_directory(self, input_dir: PathLike) -> Tuple[List[CandidateFile], List[CandidateFile]]:
        roots = discover_files(input_dir, self.config.root_glob, exclude_patterns=self.config.root_exclude)
        self._log_found(roots, "root")
        partials = without(discover_files(input_dir, self.config.partial_glob), roots)
        self._log_found(partials, "partial")
        return roots, partials

    def _log_found(self, files: List[CandidateFile], kind: str) -> None:
        for file in files:
            logger.info("Found %s file %s", kind, file.relative_path)
        if kind == "partial":
            for stem, clashing in shadowed_stems(files).items():
                logger.warning(
                    "Partial name <%s> is claimed by %d files; using %s",
                    stem,
                    len(clashing),
                    clashing[0].path,
                )

    # ---------- building ----------

    def build(
        self,
        input_path: PathLike,
        output: Optional[PathLike] = None,
        *,
        check_only: bool = False,
        keep_going: bool = False,
    ) -> BatchBuildReport:
        """Build a root file or a directory of root files.

        With ``check_only`` nothing is written; every root is rendered into
        a ``NullSink`` to surface errors.
        """
        check_arguments(input_path, output, require_output_for_directory=not check_only)
        if Path(input_path).is_file():
            return self.build_file(input_path, output, check_only=check_only)
        return self.build_directory(input_path, output, check_only=check_only, keep_going=keep_going)

    def build_file(
        self,
        root_path: PathLike,
        output: Optional[PathLike] = None,
        *,
        check_only: bool = False,
    ) -> BatchBuildReport:
        root, partials = self.discover_for_file(root_path)
        target: Optional[Path] = None
        if output is not None and not check_only:
            target = Path(output).resolve()
            if target.is_dir():
                target = target / root.name
            if target == root.path:
                target = target.with_name(target.name + OUT_SUFFIX)

        batch = BatchBuildReport()
        batch.add_report(self.compile_root(root, partials, target, check_only=check_only))
        return batch

    def build_directory(
        self,
        input_dir: PathLike,
        output_dir: Optional[PathLike] = None,
        *,
        check_only: bool = False,
        keep_going: bool = False,
    ) -> BatchBuildReport:
        input_dir = Path(input_dir).resolve()
        roots, partials = self.discover_for_directory(input_dir)
        if output_dir is not None and not check_only:
            ensure_directory(Path(output_dir))

        batch = BatchBuildReport()
        for root in roots:
            target = None
            if output_dir is not None and not check_only:
                target = output_path_for(root, input_dir, Path(output_dir))
            try:
                report = self.compile_root(root, partials, target, check_only=check_only)
            except RenderError as exc:
                if not keep_going:
                    raise
                logger.error("%s", exc)
                report = BuildReport(root=root.path, output=target, error=str(exc))
            batch.add_report(report)
        return batch

    def open_sink(self, target: Optional[Path], *, check_only: bool = False) -> OutputSink:
        if check_only:
            return NullSink()
        if target is None:
            return BufferedStreamSink(self.stdout)
        return AtomicFileSink(target, encoding=self.config.encoding)

    def compile_root(
        self,
        root: CandidateFile,
        partials: List[CandidateFile],
        target: Optional[Path] = None,
        *,
        check_only: bool = False,
    ) -> BuildReport:
        """Render one root file into its sink, committing only on success.

        Raises:
            RenderError: Wrapping the underlying error with the root path.
        """
        logger.info("Building %s", root.name)
        timer = Timer()
        stats = RenderStats()
        sink: Optional[OutputSink] = None
        try:
            sink = self.open_sink(target, check_only=check_only)
            with span("stitcher.build_root", root=str(root.path)):
                render(root, partials, sink, options=self.config.render_options, stats=stats)
            sink.close()
        except (StitcherError, OSError, UnicodeDecodeError, RecursionError) as exc:
            if sink is not None:
                sink.abort()
            raise RenderError(str(root.path), exc) from exc

        report = BuildReport(
            root=root.path,
            output=target,
            elapsed_ms=timer.elapsed_ms(),
            files_rendered=stats.files_rendered,
            partials_rendered=stats.partials_rendered,
            chars_written=sink.chars_written,
        )
        logger.info("%s", report.summary())
        return report


__all__ = ["Builder", "check_arguments", "output_path_for", "OUT_SUFFIX"]
