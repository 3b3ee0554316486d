"""
Data models for the guidepack document catalog.

- Category: the fixed set of document categories
- Document: a registered unit of guidance text
- Profile: a named, ordered list of document ids
- Bundle: the resolved, deduplicated documents for one request
- ComposedOutput: the text produced from a Bundle
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple


class Category(str, Enum):
    CORE = "core"
    FRONTEND = "frontend"
    BACKEND = "backend"
    LANGUAGE = "language"
    TESTING = "testing"
    WORKFLOW = "workflow"

    @classmethod
    def parse(cls, value: "Category | str") -> "Category":
        """Return the member for ``value``; raises ``ValueError`` when unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(c.value for c in cls)
            raise ValueError(f"Unknown category '{value}' (expected one of: {allowed})") from None


@dataclass(frozen=True)
class Document:
    """A single registered guidance document.

    Attributes:
        id: Unique document identifier
        path: Location of the document content
        line_count: Declared number of lines
        category: Document category
        title: Display title
        description: One-line summary for listings
    """

    id: str
    path: Path
    line_count: int
    category: Category
    title: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "path": str(self.path),
            "lines": self.line_count,
            "category": self.category.value,
            "title": self.title,
            "description": self.description,
        }


@dataclass(frozen=True)
class Profile:
    """A named bundle recommendation.

    ``documents`` is kept exactly as declared, duplicates included; the
    resolver removes them. ``extends`` names profiles expanded before this one.
    """

    name: str
    documents: Tuple[str, ...] = ()
    extends: Tuple[str, ...] = ()
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "extends": list(self.extends),
            "documents": list(self.documents),
        }


@dataclass(frozen=True)
class Bundle:
    """Ordered, duplicate-free sequence of documents."""

    documents: Tuple[Document, ...]
    profile: Optional[str] = None

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for doc in self.documents:
            if doc.id in seen:
                raise ValueError(f"Bundle contains duplicate document '{doc.id}'")
            seen.add(doc.id)

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.documents)

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(doc.id for doc in self.documents)

    @property
    def total_lines(self) -> int:
        return sum(doc.line_count for doc in self.documents)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": self.profile,
            "documents": [doc.to_dict() for doc in self.documents],
            "total_lines": self.total_lines,
        }


@dataclass(frozen=True)
class ComposedOutput:
    """Composed text for a Bundle."""

    text: str
    ids: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def length(self) -> int:
        return len(self.text)


__all__ = [
    "Category",
    "Document",
    "Profile",
    "Bundle",
    "ComposedOutput",
]
