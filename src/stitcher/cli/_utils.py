"""Shared helpers for CLI commands."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict

from stitcher.core.config import ConfigManager, StitcherConfig
from stitcher.core.logging_config import configure_logging


def project_dir_for(input_path: str) -> Path:
    """Directory searched for ``.stitcher.yml``: the input dir, or the root file's dir."""
    path = Path(input_path).resolve()
    return path if path.is_dir() else path.parent


def config_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Translate CLI flags into config keys; unset flags are left out."""
    overrides: Dict[str, Any] = {}
    if getattr(args, "root_glob", None):
        overrides["rootGlob"] = args.root_glob
    if getattr(args, "partial_glob", None):
        overrides["partialGlob"] = args.partial_glob
    if getattr(args, "verbose", None) is not None:
        overrides["verbose"] = bool(args.verbose)

    render: Dict[str, Any] = {}
    if getattr(args, "detect_cycles", None) is not None:
        render["detectCycles"] = bool(args.detect_cycles)
    if getattr(args, "max_depth", None) is not None:
        render["maxDepth"] = args.max_depth
    if render:
        overrides["render"] = render
    return overrides


def load_config_from_args(args: argparse.Namespace) -> StitcherConfig:
    config_path = getattr(args, "config", None)
    manager = ConfigManager(
        project_dir_for(args.input),
        config_path=Path(config_path) if config_path else None,
    )
    return manager.load(config_overrides(args))


def setup_logging(config: StitcherConfig) -> None:
    configure_logging(level=config.effective_log_level, log_path=config.log_file)


__all__ = ["project_dir_for", "config_overrides", "load_config_from_args", "setup_logging"]
