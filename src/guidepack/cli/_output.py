"""Unified CLI output formatting (JSON/text modes)."""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(
        self,
        data: Dict[str, Any],
        message: str,
        *,
        status: str = "success",
    ) -> None:
        """Output a success result: ``data`` in JSON mode, ``message`` otherwise."""
        if self.json_mode:
            print(format_json({"status": status, **data}, self.indent))
        else:
            print(message)

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Output an error result to stderr.

        JSON mode emits ``{"error", "message", "context"}``; ``context`` comes
        from ``error.context`` when the exception carries one.
        """
        msg = message or str(error)
        if self.json_mode:
            output: Dict[str, Any] = {
                "error": error_code,
                "message": msg,
            }
            context = getattr(error, "context", None)
            if context:
                output["context"] = context
            print(format_json(output, self.indent), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(format_json(data, self.indent))

    def text(self, message: str) -> None:
        print(message)

    def raw(self, content: str) -> None:
        """Write ``content`` to stdout unchanged, ending with one newline."""
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")

    def text_kv(self, key: str, value: Any, prefix: str = "  ") -> None:
        if not self.json_mode:
            print(f"{prefix}{key}: {value}")


def format_json(data: Any, indent: int = 2) -> str:
    return json.dumps(data, indent=indent, default=str)


__all__ = [
    "OutputFormatter",
    "format_json",
]
