"""Glob-based discovery of root and partial files."""
from __future__ import annotations

import logging
from fnmatch import fnmatch
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Union

from .models import CandidateFile

logger = logging.getLogger(__name__)


def _is_excluded(path: Path, base_dir: Path, patterns: Sequence[str]) -> bool:
    rel = path.relative_to(base_dir).as_posix()
    return any(fnmatch(path.name, pat) or fnmatch(rel, pat) for pat in patterns)


def discover_files(
    input_dir: Union[str, Path],
    pattern: str,
    *,
    exclude: Iterable[Union[str, Path]] = (),
    exclude_patterns: Sequence[str] = (),
) -> List[CandidateFile]:
    """Return the regular files under ``input_dir`` matching ``pattern``.

    Args:
        input_dir: Directory the glob is evaluated in
        pattern: Glob relative to ``input_dir`` (``**`` recurses)
        exclude: Files to leave out, compared by resolved path
        exclude_patterns: fnmatch patterns checked against the file name and
            the path relative to ``input_dir``

    Returns:
        Candidates sorted by path. Files whose name starts with ``.`` have
        no usable tag name and are skipped.
    """
    base_dir = Path(input_dir).resolve()
    excluded = {Path(p).resolve() for p in exclude}

    found: List[CandidateFile] = []
    for path in sorted(base_dir.glob(pattern)):
        if not path.is_file():
            continue
        resolved = path.resolve()
        if resolved in excluded or _is_excluded(path, base_dir, exclude_patterns):
            continue
        candidate = CandidateFile(resolved, base_dir)
        if not candidate.stem:
            logger.warning("Skipping %s: no tag name before the first '.'", path)
            continue
        found.append(candidate)
    return found


def without(files: Iterable[CandidateFile], remove: Iterable[CandidateFile]) -> List[CandidateFile]:
    """Return ``files`` minus any file whose path appears in ``remove``."""
    removed = {f.path for f in remove}
    return [f for f in files if f.path not in removed]


def shadowed_stems(candidates: Sequence[CandidateFile]) -> Dict[str, List[CandidateFile]]:
    """Return tag names claimed by more than one candidate.

    Only the first candidate (in path order) is ever included for such a name.
    """
    by_stem: Dict[str, List[CandidateFile]] = {}
    for candidate in candidates:
        by_stem.setdefault(candidate.stem, []).append(candidate)
    return {stem: files for stem, files in by_stem.items() if len(files) > 1}


__all__ = ["discover_files", "without", "shadowed_stems"]
