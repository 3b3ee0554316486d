"""I/O utilities for guidepack.

- Core: atomic writes, directory management, text I/O
- YAML: safe loading of catalog and config files
"""
from __future__ import annotations

from .core import (
    PathLike,
    atomic_write,
    ensure_directory,
    ensure_parent_dir,
    read_text,
    write_text,
)
from .yaml import (
    dump_yaml_string,
    iter_yaml_files,
    read_yaml,
)

__all__ = [
    # core
    "PathLike",
    "ensure_parent_dir",
    "ensure_directory",
    "atomic_write",
    "read_text",
    "write_text",
    # yaml
    "read_yaml",
    "dump_yaml_string",
    "iter_yaml_files",
]
