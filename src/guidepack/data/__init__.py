"""
guidepack data resource helpers.

Provides access to bundled configuration defaults, JSON schemas and the
sample guidance catalog using importlib.resources.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Example:
        >>> get_data_path("config", "defaults.yaml")
        PosixPath('/path/to/guidepack/data/config/defaults.yaml')
    """
    pkg = resources.files("guidepack.data")
    base = Path(str(pkg / subpackage))
    return base / filename if filename else base


@lru_cache(maxsize=16)
def read_json(subpackage: str, filename: str) -> dict[str, Any]:
    """Read and parse a bundled JSON file (cached)."""
    path = get_data_path(subpackage, filename)
    return json.loads(path.read_text(encoding="utf-8"))


def clear_caches() -> None:
    """Clear read caches (useful for testing)."""
    read_json.cache_clear()


__all__ = [
    "get_data_path",
    "read_json",
    "clear_caches",
]
