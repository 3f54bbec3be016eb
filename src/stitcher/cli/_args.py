"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output results as JSON",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=None,
        help="Enable verbose output",
    )


def add_input_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "input",
        help="Path of root HTML file or directory of root HTML files to build",
    )


def add_output_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output",
        "-o",
        metavar="OUTPUT",
        help="Path of file or directory to write outputs to",
    )


def add_glob_flags(parser: argparse.ArgumentParser) -> None:
    """Add --root-file-glob / --partial-file-glob (defaults come from config)."""
    parser.add_argument(
        "--root-file-glob",
        "-r",
        dest="root_glob",
        metavar="GLOB",
        help="Root file glob pattern (default: **/*.html, excluding *.partial.html)",
    )
    parser.add_argument(
        "--partial-file-glob",
        "-p",
        dest="partial_glob",
        metavar="GLOB",
        help="Partial file glob pattern (default: **/*.html)",
    )


def add_config_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Config file to use instead of .stitcher.yml in the input directory",
    )


def add_render_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--no-cycle-check",
        dest="detect_cycles",
        action="store_false",
        default=None,
        help="Do not detect indirect partial cycles (A -> B -> A)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        metavar="N",
        help="Fail when partials nest deeper than N levels",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Register the flags shared by every command that reads an input tree."""
    add_input_arg(parser)
    add_glob_flags(parser)
    add_config_flag(parser)
    add_verbose_flag(parser)
    add_json_flag(parser)


__all__ = [
    "add_json_flag",
    "add_verbose_flag",
    "add_input_arg",
    "add_output_flag",
    "add_glob_flags",
    "add_config_flag",
    "add_render_flags",
    "add_standard_flags",
]
