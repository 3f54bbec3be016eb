"""html-stitcher core library: stitching engine, builder, configuration."""

from . import exceptions  # noqa: F401
from .builder import Builder, check_arguments, output_path_for
from .config import ConfigManager, StitcherConfig, load_config
from .stitching import CandidateFile, MemorySink, RenderOptions, render

__all__ = [
    "exceptions",
    "Builder",
    "check_arguments",
    "output_path_for",
    "ConfigManager",
    "StitcherConfig",
    "load_config",
    "CandidateFile",
    "MemorySink",
    "RenderOptions",
    "render",
]
