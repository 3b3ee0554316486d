from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from .io import ensure_directory

_INSTALLED_HANDLERS: list[logging.Handler] = []
_NULL_HANDLER_INSTALLED: bool = False

_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_STREAM_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = getattr(logging, str(name).upper(), None)
    return level if isinstance(level, int) else logging.WARNING


def _remove_installed(root: logging.Logger) -> None:
    while _INSTALLED_HANDLERS:
        handler = _INSTALLED_HANDLERS.pop()
        root.removeHandler(handler)
        handler.close()


def configure_stdlib_logging(
    *,
    level: str = "WARNING",
    log_path: Optional[Path] = None,
    stream: bool = True,
) -> None:
    """Configure the root logger for CLI use.

    Installs a stderr handler (unless ``stream`` is False) and, when
    ``log_path`` is given, a file handler, both at ``level``. Calling again
    replaces the handlers installed here and leaves foreign handlers alone.
    """
    root = logging.getLogger()
    lvl = _level_from_name(level)
    root.setLevel(lvl)
    _remove_installed(root)

    if stream:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(lvl)
        sh.setFormatter(logging.Formatter(_STREAM_FORMAT))
        root.addHandler(sh)
        _INSTALLED_HANDLERS.append(sh)

    if log_path is not None:
        resolved = Path(log_path).expanduser().resolve()
        ensure_directory(resolved.parent)
        fh = logging.FileHandler(str(resolved), encoding="utf-8")
        fh.setLevel(lvl)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT))
        root.addHandler(fh)
        _INSTALLED_HANDLERS.append(fh)

    if not _INSTALLED_HANDLERS:
        suppress_lastresort_in_json_mode()


def suppress_lastresort_in_json_mode() -> None:
    """Keep stdlib logging's lastResort handler off stderr in ``--json`` mode.

    With no handlers configured, WARNING+ records go to stderr through the
    implicit ``lastResort`` handler. A NullHandler on the root logger avoids
    that without changing levels.
    """
    global _NULL_HANDLER_INSTALLED

    root = logging.getLogger()
    if root.handlers or _NULL_HANDLER_INSTALLED:
        return
    root.addHandler(logging.NullHandler())
    _NULL_HANDLER_INSTALLED = True


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the handlers installed by this module."""
    global _NULL_HANDLER_INSTALLED
    root = logging.getLogger()
    _remove_installed(root)
    for handler in list(root.handlers):
        if isinstance(handler, logging.NullHandler):
            root.removeHandler(handler)
    _NULL_HANDLER_INSTALLED = False


__all__ = [
    "configure_stdlib_logging",
    "suppress_lastresort_in_json_mode",
    "reset_stdlib_logging_for_tests",
]
