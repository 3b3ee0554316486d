"""
Composer: serialize a Bundle into one text blob.

All document contents are read before anything is joined. A single
unreadable document fails the whole compose with ``ReadError``; no partial
output is ever returned or written.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from guidepack.core.exceptions import CatalogError
from guidepack.core.utils.io import write_text

from .models import Bundle, ComposedOutput, Document
from .storage import DocumentStorage, FileStorage

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "\n---\n"


def render_header(template: str, doc: Document) -> str:
    """Format a per-document header template.

    Available fields: ``id``, ``path``, ``category``, ``title``, ``line_count``.

    Raises:
        CatalogError: If the template references an unknown field or is malformed
    """
    try:
        return template.format(
            id=doc.id,
            path=str(doc.path),
            category=doc.category.value,
            title=doc.title or doc.id,
            line_count=doc.line_count,
        )
    except (AttributeError, IndexError, KeyError, TypeError, ValueError) as exc:
        raise CatalogError(
            f"Invalid header template {template!r}: {exc}",
            context={"header": template},
        ) from exc


class Composer:
    """Concatenate bundle documents read through a storage collaborator."""

    def __init__(
        self,
        storage: Optional[DocumentStorage] = None,
        *,
        strip_trailing_newlines: bool = True,
    ) -> None:
        self.storage: DocumentStorage = storage or FileStorage()
        self.strip_trailing_newlines = strip_trailing_newlines

    def _content(self, doc: Document) -> str:
        text = self.storage.read(doc.path)
        if self.strip_trailing_newlines:
            text = text.rstrip("\r\n")
        return text

    def compose(
        self,
        bundle: Bundle,
        separator: str = DEFAULT_SEPARATOR,
        *,
        header: Optional[str] = None,
    ) -> ComposedOutput:
        """Join document contents in bundle order with ``separator``.

        Args:
            bundle: Resolved bundle to compose
            separator: Text placed between documents
            header: Optional template placed on its own line above each document

        Raises:
            ReadError: If any document's content cannot be read
            CatalogError: If ``header`` is not a valid template
        """
        parts: List[str] = []
        for doc in bundle:
            content = self._content(doc)
            if header:
                content = f"{render_header(header, doc)}\n{content}"
            parts.append(content)

        output = ComposedOutput(text=separator.join(parts), ids=bundle.ids)
        logger.debug("Composed %d documents into %d characters", len(parts), output.length)
        return output


def write_output(output: ComposedOutput, path: Union[str, Path]) -> Path:
    """Atomically write composed text to ``path`` (with a trailing newline)."""
    target = Path(path)
    text = output.text if output.text.endswith("\n") or not output.text else output.text + "\n"
    write_text(target, text)
    logger.info("Wrote %d documents to %s", len(output.ids), target)
    return target


__all__ = ["Composer", "DEFAULT_SEPARATOR", "render_header", "write_output"]
