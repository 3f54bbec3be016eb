"""CLI output formatting (text or JSON)."""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional


class OutputFormatter:
    """Unified output formatter for CLI commands.

    Human-facing status lines go to stderr so that stitched HTML written to
    stdout stays clean; JSON results go to stdout.
    """

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(self, data: Dict[str, Any], message: str, *, status: str = "success") -> None:
        if self.json_mode:
            output = {"status": status, **data}
            print(json.dumps(output, indent=self.indent, default=str))
        else:
            self.text(message)

    def error(self, error: Exception, message: Optional[str] = None, *, error_code: str = "error") -> None:
        msg = message or str(error)
        if self.json_mode:
            output: Dict[str, Any] = {"error": error_code, "message": msg}
            to_json = getattr(error, "to_json_error", None)
            if callable(to_json):
                output["details"] = to_json()
            print(json.dumps(output, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        print(message, file=sys.stderr)


__all__ = ["OutputFormatter"]
