"""
guidepack profiles show command.

SUMMARY: Show the resolved bundle for a profile
"""

from __future__ import annotations

import argparse
import sys

from guidepack.cli import OutputFormatter, add_standard_flags, load_project_catalog, report_error
from guidepack.core.exceptions import GuidepackError

SUMMARY = "Show the resolved bundle for a profile"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("name", help="Profile name")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Resolve the profile without reading any document content."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        _, catalog = load_project_catalog(args)
        profile = catalog.resolver.get_profile(args.name)
        bundle = catalog.resolver.resolve_profile(args.name)
    except GuidepackError as e:
        return report_error(formatter, e)

    if formatter.json_mode:
        data = bundle.to_dict()
        data["description"] = profile.description
        data["extends"] = list(profile.extends)
        formatter.json_output(data)
        return 0

    formatter.text(f"Profile: {profile.name}")
    if profile.description:
        formatter.text_kv("Description", profile.description)
    if profile.extends:
        formatter.text_kv("Extends", ", ".join(profile.extends))
    formatter.text_kv("Documents", len(bundle))
    formatter.text_kv("Total lines", bundle.total_lines)
    formatter.text("")
    for idx, doc in enumerate(bundle, start=1):
        formatter.text(f"  {idx:>2}. {doc.id} [{doc.category.value}] {doc.line_count} lines")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
