"""
stitcher partials command.

SUMMARY: List the root files and partial files a build would use
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from stitcher.cli import OutputFormatter, add_standard_flags, load_config_from_args, setup_logging
from stitcher.core.builder import Builder, check_arguments
from stitcher.core.exceptions import StitcherError
from stitcher.core.stitching.discovery import shadowed_stems

SUMMARY = "List the root files and partial files a build would use"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=args.json)

    try:
        check_arguments(args.input, require_output_for_directory=False)
        config = load_config_from_args(args)
        setup_logging(config)

        builder = Builder(config)
        if Path(args.input).is_file():
            root, partials = builder.discover_for_file(args.input)
            roots = [root]
        else:
            roots, partials = builder.discover_for_directory(args.input)

        shadowed = shadowed_stems(partials)

        if args.json:
            formatter.json_output(
                {
                    "roots": [str(r.path) for r in roots],
                    "partials": [{"tag": p.stem, "path": str(p.path)} for p in partials],
                    "shadowed": {stem: [str(f.path) for f in files] for stem, files in shadowed.items()},
                }
            )
            return 0

        print("Root files:")
        for root in roots:
            print(f"  {root.relative_path}")
        print("Partials:")
        for partial in partials:
            print(f"  <{partial.stem}>  {partial.relative_path}")
        for stem, files in shadowed.items():
            formatter.text(f"Warning: <{stem}> matches {len(files)} files; only {files[0].relative_path} is used")
        return 0

    except StitcherError as e:
        formatter.error(e, error_code="partials_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
