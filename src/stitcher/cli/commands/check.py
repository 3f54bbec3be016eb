"""
stitcher check command.

SUMMARY: Render every root file without writing output and report errors
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from stitcher.cli import (
    OutputFormatter,
    add_render_flags,
    add_standard_flags,
    load_config_from_args,
    setup_logging,
)
from stitcher.core.builder import Builder
from stitcher.core.exceptions import RenderError, StitcherError
from stitcher.core.stitching.report import BatchBuildReport, BuildReport

SUMMARY = "Render every root file without writing output and report errors"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)
    add_render_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Dry-run the build: every root is rendered into a discarding sink."""
    formatter = OutputFormatter(json_mode=args.json)

    try:
        config = load_config_from_args(args)
        setup_logging(config)

        builder = Builder(config)
        try:
            batch = builder.build(args.input, check_only=True, keep_going=True)
        except RenderError as e:
            # Single-file mode does not keep going; record the one failure.
            batch = BatchBuildReport()
            batch.add_report(BuildReport(root=Path(e.context["root"]), error=str(e)))

        if args.json:
            formatter.json_output(batch.to_dict())
        else:
            for report in batch.reports:
                status = "ok" if report.ok else f"FAILED: {report.error}"
                formatter.text(f"{report.root}: {status}")
            if batch.ok:
                formatter.text(f"✓ {batch.total_count} root file(s) rendered cleanly")
            else:
                formatter.text(f"✗ {batch.error_count} of {batch.total_count} root file(s) failed")

        return 0 if batch.ok else 1

    except StitcherError as e:
        formatter.error(e, error_code="check_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
