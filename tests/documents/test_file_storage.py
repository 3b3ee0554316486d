"""Tests for FileStorage error mapping."""
from __future__ import annotations

from pathlib import Path

import pytest

from guidepack.core.documents import FileStorage
from guidepack.core.exceptions import ReadError


def test_reads_text(tmp_path: Path) -> None:
    doc = tmp_path / "core.md"
    doc.write_text("# core\nbody\n", encoding="utf-8")

    assert FileStorage().read(doc) == "# core\nbody\n"


def test_missing_file(tmp_path: Path) -> None:
    target = tmp_path / "gone.md"

    with pytest.raises(ReadError, match="not found") as exc:
        FileStorage().read(target)

    assert exc.value.path == target
    assert exc.value.context == {"path": str(target)}


def test_invalid_utf8_bytes(tmp_path: Path) -> None:
    doc = tmp_path / "binary.md"
    doc.write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(ReadError, match="not valid utf-8") as exc:
        FileStorage().read(doc)

    assert isinstance(exc.value.__cause__, UnicodeDecodeError)
    assert exc.value.context["path"] == str(doc)


def test_other_encoding_is_honoured(tmp_path: Path) -> None:
    doc = tmp_path / "latin.md"
    doc.write_bytes("café\n".encode("latin-1"))

    assert FileStorage(encoding="latin-1").read(doc) == "café\n"


def test_directory_is_not_readable(tmp_path: Path) -> None:
    folder = tmp_path / "docs"
    folder.mkdir()

    with pytest.raises(ReadError, match="Cannot read document file") as exc:
        FileStorage().read(folder)

    assert isinstance(exc.value.__cause__, IsADirectoryError)
    assert isinstance(exc.value, OSError)
