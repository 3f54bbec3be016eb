"""
stitcher build command.

SUMMARY: Build root HTML files by expanding partial elements
"""

from __future__ import annotations

import argparse
import io
import sys

from stitcher.cli import (
    OutputFormatter,
    add_output_flag,
    add_render_flags,
    add_standard_flags,
    load_config_from_args,
    setup_logging,
)
from stitcher.core.builder import Builder
from stitcher.core.exceptions import StitcherError

SUMMARY = "Build root HTML files by expanding partial elements"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)
    add_output_flag(parser)
    add_render_flags(parser)
    parser.add_argument(
        "--keep-going",
        "-k",
        action="store_true",
        help="In batch mode, continue with the remaining root files after a failure",
    )


def main(args: argparse.Namespace) -> int:
    """Build the input file or directory."""
    formatter = OutputFormatter(json_mode=args.json)

    try:
        config = load_config_from_args(args)
        setup_logging(config)

        # Keep stdout pure JSON: capture stdout-bound HTML into the payload instead.
        captured = io.StringIO() if args.json and args.output is None else None
        builder = Builder(config, stdout=captured)
        batch = builder.build(args.input, args.output, keep_going=args.keep_going)

        if args.json:
            payload = batch.to_dict()
            if captured is not None:
                payload["html"] = captured.getvalue()
            formatter.json_output(payload)
        else:
            for report in batch.reports:
                if report.output is not None or not report.ok:
                    formatter.text(report.summary())

        return 0 if batch.ok else 1

    except StitcherError as e:
        formatter.error(e, error_code="build_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
