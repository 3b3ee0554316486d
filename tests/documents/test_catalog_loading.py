"""Tests for catalog loading across bundled, project and extra sources."""
from __future__ import annotations

from pathlib import Path

import pytest

from guidepack.core.config import ConfigManager
from guidepack.core.documents import catalog_dirs, load_catalog
from guidepack.core.exceptions import CatalogError, DuplicateIdError
from guidepack.data import get_data_path
from helpers.catalog import write_catalog


def _disable_bundled(root: Path, extra: str = "") -> None:
    (root / ".guidepack" / "config" / "catalog.yml").write_text(
        "catalog:\n  include_bundled: false\n" + extra, encoding="utf-8"
    )


def test_bundled_catalog_is_loaded_by_default(isolated_project_env: Path) -> None:
    catalog = load_catalog(repo_root=isolated_project_env)

    assert catalog.sources == [get_data_path("catalog")]
    assert "core" in catalog.registry
    assert "react-frontend" in catalog.resolver.profiles()


def test_project_catalog_only(project_catalog: Path) -> None:
    catalog = load_catalog(repo_root=project_catalog)

    assert catalog.registry.ids() == ["core", "frontend", "typescript"]
    bundle = catalog.resolver.resolve_profile("web")
    assert bundle.ids == ("core", "frontend")
    assert bundle.total_lines == 30
    doc = catalog.registry.get("core")
    assert doc.path == project_catalog / ".guidepack" / "catalog" / "docs" / "core.md"


def test_project_documents_extend_bundled_catalog(isolated_project_env: Path) -> None:
    write_catalog(
        isolated_project_env / ".guidepack" / "catalog",
        documents=[{"id": "house-style", "lines": 2, "category": "workflow"}],
        profiles={"team": {"extends": ["base"], "documents": ["house-style"]}},
    )

    catalog = load_catalog(repo_root=isolated_project_env)

    assert catalog.resolver.resolve_profile("team").ids == ("core", "communication", "house-style")


def test_project_profile_overrides_bundled_profile(isolated_project_env: Path) -> None:
    write_catalog(
        isolated_project_env / ".guidepack" / "catalog",
        profiles={"base": {"documents": ["core"]}},
    )

    catalog = load_catalog(repo_root=isolated_project_env)

    assert catalog.resolver.resolve_profile("base").ids == ("core",)


def test_duplicate_document_across_sources(isolated_project_env: Path) -> None:
    write_catalog(
        isolated_project_env / ".guidepack" / "catalog",
        documents=[{"id": "core", "lines": 1, "category": "core"}],
    )

    with pytest.raises(DuplicateIdError) as exc:
        load_catalog(repo_root=isolated_project_env)

    assert exc.value.doc_id == "core"
    assert "documents.yml" in exc.value.context["source"]


def test_extra_catalog_paths(project_catalog: Path) -> None:
    write_catalog(
        project_catalog / "team-guides",
        documents=[{"id": "team", "lines": 4, "category": "workflow"}],
    )
    _disable_bundled(project_catalog, "  paths: [team-guides]\n")

    mgr = ConfigManager(repo_root=project_catalog)
    dirs = catalog_dirs(mgr)
    catalog = load_catalog(mgr)

    assert dirs[-1] == project_catalog / "team-guides"
    assert catalog.registry.get("team").line_count == 4


def test_missing_extra_catalog_path(project_catalog: Path) -> None:
    _disable_bundled(project_catalog, "  paths: [nowhere]\n")

    with pytest.raises(CatalogError, match="nowhere"):
        load_catalog(repo_root=project_catalog)


def test_schema_violation_is_catalog_error(isolated_project_env: Path) -> None:
    _disable_bundled(isolated_project_env)
    catalog_dir = isolated_project_env / ".guidepack" / "catalog"
    catalog_dir.mkdir(parents=True)
    (catalog_dir / "documents.yml").write_text(
        "documents:\n  - id: core\n    path: core.md\n    category: core\n",
        encoding="utf-8",
    )

    with pytest.raises(CatalogError) as exc:
        load_catalog(repo_root=isolated_project_env)

    assert "lines" in str(exc.value)
    assert exc.value.context["path"].endswith("documents.yml")


def test_invalid_category_in_catalog(isolated_project_env: Path) -> None:
    _disable_bundled(isolated_project_env)
    write_catalog(
        isolated_project_env / ".guidepack" / "catalog",
        documents=[{"id": "x", "lines": 1, "category": "mobile"}],
    )

    with pytest.raises(CatalogError):
        load_catalog(repo_root=isolated_project_env)


def test_invalid_yaml_is_catalog_error(isolated_project_env: Path) -> None:
    _disable_bundled(isolated_project_env)
    catalog_dir = isolated_project_env / ".guidepack" / "catalog"
    catalog_dir.mkdir(parents=True)
    (catalog_dir / "profiles.yml").write_text("profiles: [unclosed\n", encoding="utf-8")

    with pytest.raises(CatalogError, match="Invalid YAML"):
        load_catalog(repo_root=isolated_project_env)


def test_yaml_extension_is_accepted(isolated_project_env: Path) -> None:
    _disable_bundled(isolated_project_env)
    catalog_dir = isolated_project_env / ".guidepack" / "catalog"
    write_catalog(catalog_dir, documents=[{"id": "a", "lines": 1, "category": "core"}])
    (catalog_dir / "documents.yml").rename(catalog_dir / "documents.yaml")

    catalog = load_catalog(repo_root=isolated_project_env)

    assert catalog.registry.ids() == ["a"]
