"""Core file I/O primitives.

- Atomic writes with fsync and an advisory lock on the temp file
- Text file read/write operations
- Directory management
"""
from __future__ import annotations

import fcntl
import os
import tempfile
from pathlib import Path
from typing import Callable, Optional, TextIO, Union

PathLike = Union[str, Path]


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory for ``path`` exists."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def ensure_directory(path: Path) -> Path:
    """Create ``path`` (and parents) if missing and return it.

    Raises:
        NotADirectoryError: If path exists but is not a directory
    """
    path = Path(path)
    if path.exists() and not path.is_dir():
        raise NotADirectoryError(f"Path exists but is not a directory: {path}")
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(
    path: Path,
    write_fn: Callable[[TextIO], None],
    *,
    encoding: str = "utf-8",
) -> None:
    """Write to ``path`` atomically using a temp file + fsync + rename.

    The temp file lives next to the target so the final ``os.replace`` stays
    on one filesystem. A leftover temp file is removed on failure; the target
    is never left half-written.

    Args:
        path: Target file path
        write_fn: Callable that writes content to the file object
        encoding: Text encoding (default: utf-8)
    """
    path = Path(path)
    ensure_parent_dir(path)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            dir=str(path.parent),
            prefix=f".{path.name}.",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)

        os.replace(str(tmp_path), str(path))
    finally:
        if tmp_path is not None and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                pass


def read_text(path: PathLike, *, encoding: str = "utf-8") -> str:
    """Read a text file.

    Raises:
        FileNotFoundError: If the file does not exist
        Other I/O and decode errors are propagated to callers
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Text file not found: {path}")
    return path.read_text(encoding=encoding)


def write_text(path: PathLike, content: str, *, encoding: str = "utf-8") -> None:
    """Atomically write text to ``path``."""

    def _writer(f: TextIO) -> None:
        f.write(content)

    atomic_write(Path(path), _writer, encoding=encoding)


__all__ = [
    "PathLike",
    "ensure_parent_dir",
    "ensure_directory",
    "atomic_write",
    "read_text",
    "write_text",
]
