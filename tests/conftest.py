import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'guidepack' and tests/ importable for 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from guidepack.core.utils.stdlib_logging import reset_stdlib_logging_for_tests
from helpers.catalog import write_catalog


@pytest.fixture(autouse=True)
def _isolate_guidepack_env(monkeypatch):
    """Drop GUIDEPACK_* variables from the developer shell for every test."""
    for key in list(os.environ):
        if key.startswith("GUIDEPACK_"):
            monkeypatch.delenv(key, raising=False)
    yield
    reset_stdlib_logging_for_tests()


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch):
    """
    Isolated project root with an empty ``.guidepack/`` directory.

    GUIDEPACK_PROJECT_ROOT points at it and the CWD is moved into it, so
    nothing touches the developer's real project configuration.
    """
    root = tmp_path / "project"
    (root / ".guidepack" / "config").mkdir(parents=True)
    monkeypatch.setenv("GUIDEPACK_PROJECT_ROOT", str(root))
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def project_catalog(isolated_project_env):
    """Project with bundled catalog disabled and a small web catalog.

    Documents: core (10 lines), frontend (20 lines), typescript (3 lines).
    Profile ``web`` declares [core, frontend, core].
    """
    root = isolated_project_env
    (root / ".guidepack" / "config" / "catalog.yml").write_text(
        "catalog:\n  include_bundled: false\n", encoding="utf-8"
    )
    write_catalog(
        root / ".guidepack" / "catalog",
        documents=[
            {"id": "core", "lines": 10, "category": "core", "title": "Core"},
            {"id": "frontend", "lines": 20, "category": "frontend"},
            {"id": "typescript", "lines": 3, "category": "language"},
        ],
        profiles={
            "web": {"documents": ["core", "frontend", "core"], "description": "Web work"},
            "ts-web": {"extends": ["web"], "documents": ["typescript"]},
        },
    )
    return root
