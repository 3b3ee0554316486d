"""
guidepack config show command.

SUMMARY: Show the merged configuration

Displays configuration merged from bundled defaults, project overlays and
GUIDEPACK_* environment variables.
"""

from __future__ import annotations

import argparse
import sys

from guidepack.cli import OutputFormatter, add_standard_flags, get_config_manager, report_error
from guidepack.core.exceptions import GuidepackError
from guidepack.core.utils.io import dump_yaml_string

SUMMARY = "Show the merged configuration"


def _nest_key(key: str, value):
    """Nest a dot-notation key into a YAML/JSON-friendly mapping."""
    out = value
    for part in reversed([p for p in str(key).split(".") if p]):
        out = {part: out}
    return out


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "key",
        nargs="?",
        help="Specific configuration key to show (e.g., 'compose.separator')",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Show configuration - delegates to ConfigManager."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        mgr = get_config_manager(args)
        data = mgr.get_all()
    except GuidepackError as e:
        return report_error(formatter, e)

    if args.key:
        missing = object()
        value = mgr.get(args.key, missing)
        if value is missing:
            formatter.error(KeyError(args.key), f"Key not found: {args.key}", error_code="key_not_found")
            return 1
        data = _nest_key(args.key, value)

    if formatter.json_mode:
        formatter.json_output(data)
    else:
        formatter.raw(dump_yaml_string(data))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
