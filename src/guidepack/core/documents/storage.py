"""Storage collaborators that supply raw document content."""
from __future__ import annotations

from pathlib import Path
from typing import Protocol, Union

from guidepack.core.exceptions import ReadError
from guidepack.core.utils.io import read_text


class DocumentStorage(Protocol):
    """Anything that can return the text stored at a document path."""

    def read(self, path: Path) -> str:  # pragma: no cover - protocol
        ...


class FileStorage:
    """Read document content from the local filesystem."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read(self, path: Union[str, Path]) -> str:
        """Return the file's text.

        Raises:
            ReadError: If the file is missing, unreadable, or not valid text
                in ``self.encoding``
        """
        try:
            return read_text(path, encoding=self.encoding)
        except FileNotFoundError as exc:
            raise ReadError(f"Document file not found: {path}", path=path) from exc
        except UnicodeDecodeError as exc:
            raise ReadError(f"Document file is not valid {self.encoding} text: {path}", path=path) from exc
        except OSError as exc:
            raise ReadError(f"Cannot read document file {path}: {exc.strerror or exc}", path=path) from exc


__all__ = ["DocumentStorage", "FileStorage"]
