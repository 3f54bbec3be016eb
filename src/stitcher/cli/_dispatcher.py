"""
Auto-discovery CLI dispatcher for html-stitcher.

Every public module in ``stitcher/cli/commands/`` becomes a subcommand.
Adding a command = adding a .py file with SUMMARY, register_args and main.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from contextlib import nullcontext
from functools import lru_cache
from pathlib import Path
from typing import Any

from stitcher.core.utils.profiling import Profiler, enable_profiler, span


@lru_cache(maxsize=1)
def discover_commands() -> dict[str, dict[str, Any]]:
    """Import every command module under cli/commands."""
    commands_dir = Path(__file__).parent / "commands"
    commands: dict[str, dict[str, Any]] = {}

    for item in sorted(commands_dir.glob("*.py")):
        if item.name.startswith("_"):
            continue
        cmd_name = item.stem
        try:
            module = importlib.import_module(f"stitcher.cli.commands.{cmd_name}")
        except ImportError as e:
            print(f"Warning: Could not import command {cmd_name}: {e}", file=sys.stderr)
            continue
        commands[cmd_name] = {
            "module": module,
            "summary": getattr(module, "SUMMARY", cmd_name),
            "register_args": getattr(module, "register_args", None),
            "main": getattr(module, "main", None),
        }

    return commands


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with every discovered command registered."""
    parser = argparse.ArgumentParser(
        prog="stitcher",
        description="Combine multiple HTML files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Print timing spans for discovery, config loading and rendering to stderr",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_name, cmd_info in discover_commands().items():
        primary_name = cmd_name.replace("_", "-")
        aliases = [cmd_name] if primary_name != cmd_name else []
        cmd_parser = subparsers.add_parser(
            primary_name,
            aliases=aliases,
            help=cmd_info["summary"],
        )
        if cmd_info["register_args"]:
            cmd_info["register_args"](cmd_parser)
        if cmd_info["main"]:
            cmd_parser.set_defaults(_func=cmd_info["main"])

    return parser


def _get_version() -> str:
    from stitcher import __version__

    return __version__


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the stitcher CLI.

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    func = getattr(args, "_func", None)
    if func is None:
        parser.print_help()
        return 0

    profiler = Profiler() if args.profile else None
    ctx = enable_profiler(profiler) if profiler else nullcontext()

    with ctx:
        with span("cli.total", command=args.command):
            result = int(func(args) or 0)

    if profiler is not None:
        print(profiler.format_summary(), file=sys.stderr)

    return result


if __name__ == "__main__":
    sys.exit(main())
