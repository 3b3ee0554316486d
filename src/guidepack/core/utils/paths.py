"""Project root and project configuration directory resolution.

Resolution priority for the project root:
1. ``GUIDEPACK_PROJECT_ROOT`` environment variable
2. Git repository root via ``git rev-parse --show-toplevel``
3. The current working directory

The project configuration directory is ``<root>/.guidepack`` unless
``GUIDEPACK_PROJECT_CONFIG_DIR`` names another directory.
"""
from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Optional

from guidepack.core.exceptions import GuidepackError

logger = logging.getLogger(__name__)

PROJECT_ROOT_ENV = "GUIDEPACK_PROJECT_ROOT"
PROJECT_CONFIG_DIR_ENV = "GUIDEPACK_PROJECT_CONFIG_DIR"
DEFAULT_PROJECT_CONFIG_DIR = ".guidepack"


class PathResolutionError(GuidepackError, ValueError):
    """Raised when path resolution fails."""


def _git_toplevel(cwd: Path) -> Optional[Path]:
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=str(cwd),
            text=True,
            capture_output=True,
            check=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.CalledProcessError, subprocess.TimeoutExpired):
        return None
    root_str = (result.stdout or "").strip()
    if not root_str:
        return None
    path = Path(root_str).expanduser().resolve()
    return path if path.exists() else None


def project_config_dir_name() -> str:
    return os.environ.get(PROJECT_CONFIG_DIR_ENV) or DEFAULT_PROJECT_CONFIG_DIR


def resolve_project_root(start: Optional[Path] = None) -> Path:
    """Resolve the project root.

    Args:
        start: Directory to start git discovery from (default: CWD)

    Returns:
        Path: Absolute path to the project root

    Raises:
        PathResolutionError: If ``GUIDEPACK_PROJECT_ROOT`` points at a
            missing path or at the project configuration directory itself.
    """
    env_root = os.environ.get(PROJECT_ROOT_ENV)
    if env_root:
        env_path = Path(env_root).expanduser().resolve()
        if not env_path.exists():
            raise PathResolutionError(f"{PROJECT_ROOT_ENV} points at missing path: {env_path}")
        if env_path.name == project_config_dir_name():
            raise PathResolutionError(
                f"{PROJECT_ROOT_ENV} points to the {env_path.name} directory: {env_path}. "
                "It must point to the project root."
            )
        return env_path

    cwd = (start or Path.cwd()).resolve()
    git_root = _git_toplevel(cwd)
    if git_root is not None:
        return git_root

    logger.debug("No git repository around %s; using it as project root", cwd)
    return cwd


def get_project_config_dir(repo_root: Path) -> Path:
    """Return ``<repo_root>/.guidepack`` (or the configured override)."""
    return Path(repo_root) / project_config_dir_name()


__all__ = [
    "PROJECT_ROOT_ENV",
    "PROJECT_CONFIG_DIR_ENV",
    "DEFAULT_PROJECT_CONFIG_DIR",
    "PathResolutionError",
    "project_config_dir_name",
    "resolve_project_root",
    "get_project_config_dir",
]
