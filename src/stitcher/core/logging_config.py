from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .utils.io import ensure_directory

PACKAGE_LOGGER = "stitcher"

_INSTALLED_HANDLERS: List[logging.Handler] = []


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(
    *,
    level: str = "WARNING",
    log_path: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure the ``stitcher`` package logger.

    Installs a plain-message handler on ``stream`` (stderr by default) and,
    when ``log_path`` is given, a timestamped file handler. Calling it again
    replaces the handlers installed by the previous call.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    _remove_installed(logger)

    numeric = _level_from_name(level)
    logger.setLevel(numeric)
    logger.propagate = False

    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setLevel(numeric)
    console.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console)
    _INSTALLED_HANDLERS.append(console)

    if log_path is not None:
        resolved = Path(log_path).resolve()
        ensure_directory(resolved.parent)
        fh = logging.FileHandler(resolved, encoding="utf-8")
        fh.setLevel(numeric)
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(fh)
        _INSTALLED_HANDLERS.append(fh)

    return logger


def _remove_installed(logger: logging.Logger) -> None:
    while _INSTALLED_HANDLERS:
        handler = _INSTALLED_HANDLERS.pop()
        logger.removeHandler(handler)
        handler.close()


def reset_logging_for_tests() -> None:
    """Test-only: drop installed handlers and restore propagation."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    _remove_installed(logger)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


__all__ = ["configure_logging", "reset_logging_for_tests", "PACKAGE_LOGGER"]
