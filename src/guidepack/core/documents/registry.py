"""
Document Registry.

Holds the catalog of known documents in registration order and answers
lookups by id. The registry is filled once while the catalog loads and is
only read afterwards.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from guidepack.core.exceptions import CatalogError, DuplicateIdError, NotFoundError

from .models import Category, Document

logger = logging.getLogger(__name__)


class DocumentListing:
    """Lazy, restartable view over registry documents.

    Each iteration walks the registry again, so the listing can be consumed
    any number of times.
    """

    def __init__(self, documents: Mapping[str, Document], category: Optional[Category] = None) -> None:
        self._documents = documents
        self._category = category

    def __iter__(self) -> Iterator[Document]:
        for doc in self._documents.values():
            if self._category is None or doc.category is self._category:
                yield doc

    def __repr__(self) -> str:
        cat = self._category.value if self._category else "*"
        return f"DocumentListing(category={cat!r})"


class DocumentRegistry:
    """Catalog of documents keyed by id."""

    def __init__(self) -> None:
        self._documents: Dict[str, Document] = {}
        self._sources: Dict[str, str] = {}

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._documents

    def __len__(self) -> int:
        return len(self._documents)

    def ids(self) -> List[str]:
        return list(self._documents)

    def register(
        self,
        doc_id: str,
        path: Union[str, Path],
        line_count: int,
        category: Union[Category, str],
        *,
        title: Optional[str] = None,
        description: Optional[str] = None,
        source: Optional[str] = None,
    ) -> Document:
        """Register a document.

        Raises:
            DuplicateIdError: If ``doc_id`` is already registered
            CatalogError: If the id is empty, the category is unknown, or the
                line count is not a non-negative integer
        """
        if not isinstance(doc_id, str) or not doc_id.strip():
            raise CatalogError("Document id must be a non-empty string", context={"source": source})
        if doc_id in self._documents:
            raise DuplicateIdError(doc_id, source=source)
        # bool is an int subclass
        if isinstance(line_count, bool) or not isinstance(line_count, int) or line_count < 0:
            raise CatalogError(
                f"Document '{doc_id}': line count must be a non-negative integer, got {line_count!r}",
                context={"id": doc_id},
            )
        try:
            cat = Category.parse(category)
        except ValueError as exc:
            raise CatalogError(f"Document '{doc_id}': {exc}", context={"id": doc_id}) from exc

        doc = Document(
            id=doc_id,
            path=Path(path),
            line_count=line_count,
            category=cat,
            title=title,
            description=description,
        )
        self._documents[doc_id] = doc
        if source:
            self._sources[doc_id] = source
        return doc

    def get(self, doc_id: str) -> Document:
        """Return the document for ``doc_id``.

        Raises:
            NotFoundError: If no such document is registered
        """
        try:
            return self._documents[doc_id]
        except KeyError:
            raise NotFoundError(doc_id) from None

    def list(self, category: Union[Category, str, None] = None) -> DocumentListing:
        """Return documents in registration order, optionally by category.

        Raises:
            CatalogError: If ``category`` is not a known category
        """
        if category is None:
            return DocumentListing(self._documents)
        try:
            cat = Category.parse(category)
        except ValueError as exc:
            raise CatalogError(str(exc), context={"category": str(category)}) from exc
        return DocumentListing(self._documents, cat)

    def source_of(self, doc_id: str) -> Optional[str]:
        """Return the catalog file that registered ``doc_id`` (if recorded)."""
        return self._sources.get(doc_id)

    def load_documents(
        self,
        entries: Iterable[Mapping[str, Any]],
        *,
        base_dir: Path,
        source: Optional[str] = None,
    ) -> List[Document]:
        """Register catalog entries (``{id, path, lines, category, ...}``).

        Relative paths resolve against ``base_dir``.
        """
        loaded: List[Document] = []
        for entry in entries:
            raw_path = Path(str(entry["path"]))
            path = raw_path if raw_path.is_absolute() else (Path(base_dir) / raw_path)
            loaded.append(
                self.register(
                    str(entry["id"]),
                    path,
                    entry["lines"],
                    entry["category"],
                    title=entry.get("title"),
                    description=entry.get("description"),
                    source=source,
                )
            )
        logger.debug("Registered %d documents from %s", len(loaded), source or "<inline>")
        return loaded


__all__ = ["DocumentRegistry", "DocumentListing"]
