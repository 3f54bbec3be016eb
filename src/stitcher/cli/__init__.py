"""
html-stitcher CLI package.

Commands are auto-discovered from ``stitcher/cli/commands/``: each module
exposes ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``.
"""
from ._output import OutputFormatter
from ._args import (
    add_config_flag,
    add_glob_flags,
    add_input_arg,
    add_json_flag,
    add_output_flag,
    add_render_flags,
    add_standard_flags,
    add_verbose_flag,
)
from ._utils import config_overrides, load_config_from_args, project_dir_for, setup_logging

__all__ = [
    "OutputFormatter",
    "add_config_flag",
    "add_glob_flags",
    "add_input_arg",
    "add_json_flag",
    "add_output_flag",
    "add_render_flags",
    "add_standard_flags",
    "add_verbose_flag",
    "config_overrides",
    "load_config_from_args",
    "project_dir_for",
    "setup_logging",
]
