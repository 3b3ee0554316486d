"""
guidepack docs list command.

SUMMARY: List registered documents
"""

from __future__ import annotations

import argparse
import sys

from guidepack.cli import OutputFormatter, add_standard_flags, load_project_catalog, report_error
from guidepack.core.documents import Category
from guidepack.core.exceptions import GuidepackError

SUMMARY = "List registered documents"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--category",
        "-c",
        choices=[c.value for c in Category],
        help="Only list documents in this category",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """List documents - delegates to the registry."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        _, catalog = load_project_catalog(args)
        docs = list(catalog.registry.list(args.category))
    except GuidepackError as e:
        return report_error(formatter, e)

    if formatter.json_mode:
        formatter.json_output({
            "documents": [d.to_dict() for d in docs],
            "count": len(docs),
            "total_lines": sum(d.line_count for d in docs),
        })
        return 0

    formatter.text(f"Documents ({len(docs)}):")
    width = max((len(d.id) for d in docs), default=0)
    for doc in docs:
        title = f"  {doc.title}" if doc.title else ""
        formatter.text(f"  {doc.id:<{width}}  [{doc.category.value}] {doc.line_count:>4} lines{title}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
