"""
guidepack profiles list command.

SUMMARY: List defined profiles
"""

from __future__ import annotations

import argparse
import sys

from guidepack.cli import OutputFormatter, add_standard_flags, load_project_catalog, report_error
from guidepack.core.exceptions import GuidepackError

SUMMARY = "List defined profiles"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        _, catalog = load_project_catalog(args)
        profiles = [catalog.resolver.get_profile(name) for name in catalog.resolver.profiles()]
    except GuidepackError as e:
        return report_error(formatter, e)

    if formatter.json_mode:
        formatter.json_output({
            "profiles": [p.to_dict() for p in profiles],
            "count": len(profiles),
        })
        return 0

    formatter.text(f"Profiles ({len(profiles)}):")
    for profile in profiles:
        extends = f" (extends: {', '.join(profile.extends)})" if profile.extends else ""
        formatter.text(f"  {profile.name}{extends}")
        if profile.description:
            formatter.text(f"    {profile.description}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
