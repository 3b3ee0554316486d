"""
guidepack docs check command.

SUMMARY: Verify declared line counts, readability and profile resolution

Exit codes: 0 when the catalog is consistent, 3 when a document cannot be
read, 1 for line-count drift or broken profiles.
"""

from __future__ import annotations

import argparse
import sys

from guidepack.cli import OutputFormatter, add_standard_flags, load_project_catalog, report_error
from guidepack.cli._utils import EXIT_ERROR, EXIT_READ_ERROR
from guidepack.core.documents import check_catalog
from guidepack.core.exceptions import GuidepackError

SUMMARY = "Verify declared line counts, readability and profile resolution"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        _, catalog = load_project_catalog(args)
    except GuidepackError as e:
        return report_error(formatter, e)

    report = check_catalog(catalog.registry, resolver=catalog.resolver)

    if formatter.json_mode:
        formatter.json_output(report.to_dict())
    else:
        for drift in report.drifts:
            formatter.text(f"DRIFT {drift.id}: declared {drift.declared} lines, found {drift.actual}")
        for doc_id, message in report.unreadable.items():
            formatter.text(f"UNREADABLE {doc_id}: {message}")
        for name, message in report.broken_profiles.items():
            formatter.text(f"PROFILE {name}: {message}")
        status = "OK" if report.ok else "FAILED"
        formatter.text(f"{status}: checked {report.checked} documents")

    if report.unreadable:
        return EXIT_READ_ERROR
    return 0 if report.ok else EXIT_ERROR


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
