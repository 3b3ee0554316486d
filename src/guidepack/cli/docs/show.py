"""
guidepack docs show command.

SUMMARY: Show one document's metadata (and optionally its content)
"""

from __future__ import annotations

import argparse
import sys

from guidepack.cli import OutputFormatter, add_standard_flags, load_project_catalog, report_error
from guidepack.core.documents import FileStorage
from guidepack.core.exceptions import GuidepackError

SUMMARY = "Show one document's metadata (and optionally its content)"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument("doc_id", help="Document identifier")
    parser.add_argument(
        "--content",
        action="store_true",
        help="Also print the document content",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        _, catalog = load_project_catalog(args)
        doc = catalog.registry.get(args.doc_id)
        content = FileStorage().read(doc.path) if args.content else None
    except GuidepackError as e:
        return report_error(formatter, e)

    if formatter.json_mode:
        data = doc.to_dict()
        data["source"] = catalog.registry.source_of(doc.id)
        if content is not None:
            data["content"] = content
        formatter.json_output(data)
        return 0

    formatter.text(doc.id)
    formatter.text_kv("Title", doc.title or "N/A")
    formatter.text_kv("Category", doc.category.value)
    formatter.text_kv("Lines", doc.line_count)
    formatter.text_kv("Path", doc.path)
    if doc.description:
        formatter.text_kv("Description", doc.description)
    if content is not None:
        formatter.text("")
        formatter.raw(content)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
