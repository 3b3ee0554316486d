"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
import logging
import re
from pathlib import Path
from typing import Tuple

from guidepack.core.config import ConfigManager
from guidepack.core.documents import Catalog, load_catalog
from guidepack.core.exceptions import NotFoundError, ReadError, UnknownProfileError
from guidepack.core.utils.paths import resolve_project_root

from ._output import OutputFormatter

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2
EXIT_READ_ERROR = 3
EXIT_INTERRUPTED = 130


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get project root from ``--repo-root`` or auto-detect."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).expanduser().resolve()
    return resolve_project_root()


def get_config_manager(args: argparse.Namespace) -> ConfigManager:
    return ConfigManager(repo_root=get_repo_root(args))


def load_project_catalog(args: argparse.Namespace) -> Tuple[ConfigManager, Catalog]:
    """Load config and catalog for the project selected by ``args``."""
    mgr = get_config_manager(args)
    return mgr, load_catalog(mgr)


def exit_code_for(exc: BaseException) -> int:
    """Map an exception to the CLI exit code.

    2 for unknown profiles/documents, 3 for unreadable content, 1 otherwise.
    """
    if isinstance(exc, (UnknownProfileError, NotFoundError)):
        return EXIT_NOT_FOUND
    if isinstance(exc, ReadError):
        return EXIT_READ_ERROR
    return EXIT_ERROR


def _error_code(exc: BaseException) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", type(exc).__name__).lower()


def report_error(formatter: OutputFormatter, exc: Exception) -> int:
    """Print ``exc`` through ``formatter`` and return its exit code."""
    logger.debug("Command failed", exc_info=exc)
    formatter.error(exc, error_code=_error_code(exc))
    return exit_code_for(exc)


__all__ = [
    "EXIT_OK",
    "EXIT_ERROR",
    "EXIT_NOT_FOUND",
    "EXIT_READ_ERROR",
    "EXIT_INTERRUPTED",
    "get_repo_root",
    "get_config_manager",
    "load_project_catalog",
    "exit_code_for",
    "report_error",
]
