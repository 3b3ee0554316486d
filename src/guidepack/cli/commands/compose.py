"""
guidepack compose command.

SUMMARY: Compose a profile or explicit document list into one text blob

Exit codes: 0 success, 2 unknown profile or document, 3 unreadable
document, 1 any other error. Nothing is written on failure.
"""

from __future__ import annotations

import argparse
import sys
from typing import List

from guidepack.cli import OutputFormatter, add_standard_flags, load_project_catalog, report_error
from guidepack.core.documents import Composer, FileStorage, write_output
from guidepack.core.exceptions import GuidepackError

SUMMARY = "Compose a profile or explicit document list into one text blob"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--profile",
        "-p",
        help="Profile name to compose (see `guidepack profiles list`)",
    )
    source.add_argument(
        "--ids",
        help="Comma-separated document ids, composed in the given order",
    )
    parser.add_argument(
        "--out",
        "-o",
        help="Write the composed text to this file instead of stdout",
    )
    parser.add_argument(
        "--separator",
        help="Separator between documents; \\n and \\t escapes are expanded "
        "(default: compose.separator from config)",
    )
    parser.add_argument(
        "--header",
        help="Per-document header template, e.g. '<!-- {id} -->' "
        "(default: compose.header from config)",
    )
    add_standard_flags(parser)


def parse_ids(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def expand_escapes(value: str) -> str:
    return value.replace("\\n", "\n").replace("\\t", "\t")


def main(args: argparse.Namespace) -> int:
    """Compose - delegates to the resolver and composer."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        mgr, catalog = load_project_catalog(args)
        compose_cfg = mgr.section("compose")

        if args.profile is not None:
            bundle = catalog.resolver.resolve_profile(args.profile)
        else:
            ids = parse_ids(args.ids)
            if not ids:
                formatter.error(ValueError("--ids requires at least one document id"), error_code="usage")
                return 1
            bundle = catalog.resolver.resolve_ids(ids)

        separator = expand_escapes(args.separator) if args.separator is not None else compose_cfg.get("separator", "\n---\n")
        header = args.header if args.header is not None else compose_cfg.get("header")

        composer = Composer(
            FileStorage(),
            strip_trailing_newlines=bool(compose_cfg.get("strip_trailing_newlines", True)),
        )
        output = composer.compose(bundle, separator, header=header or None)

        out_path = write_output(output, args.out) if args.out else None

    except GuidepackError as e:
        return report_error(formatter, e)

    if formatter.json_mode:
        data = {
            "profile": bundle.profile,
            "ids": list(bundle.ids),
            "total_lines": bundle.total_lines,
            "length": output.length,
            "out": str(out_path) if out_path else None,
        }
        if out_path is None:
            data["text"] = output.text
        formatter.success(data, "")
    elif out_path is not None:
        formatter.text(
            f"Composed {len(bundle)} documents ({bundle.total_lines} lines, "
            f"{output.length} chars) -> {out_path}"
        )
    else:
        formatter.raw(output.text)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
