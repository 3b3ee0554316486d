"""Tests for ConfigManager layering, env overrides and validation."""
from __future__ import annotations

from pathlib import Path

import pytest

from guidepack.core.config import ConfigManager
from guidepack.core.exceptions import CatalogError


def _overlay(root: Path, name: str, body: str) -> None:
    (root / ".guidepack" / "config" / name).write_text(body, encoding="utf-8")


def test_bundled_defaults(isolated_project_env: Path) -> None:
    cfg = ConfigManager(repo_root=isolated_project_env).load_config()

    assert cfg["compose"]["separator"] == "\n---\n"
    assert cfg["compose"]["header"] is None
    assert cfg["compose"]["strip_trailing_newlines"] is True
    assert cfg["catalog"]["include_bundled"] is True
    assert cfg["logging"]["level"] == "WARNING"


def test_project_overlays_merge_in_name_order(isolated_project_env: Path) -> None:
    _overlay(isolated_project_env, "10-compose.yml", "compose:\n  separator: \"\\n\\n\"\n  header: '# {id}'\n")
    _overlay(isolated_project_env, "20-compose.yml", "compose:\n  header: '<!-- {id} -->'\n")
    _overlay(isolated_project_env, "30-compose.yaml", "compose:\n  strip_trailing_newlines: false\n")

    mgr = ConfigManager(repo_root=isolated_project_env)

    assert mgr.get("compose.separator") == "\n\n"
    assert mgr.get("compose.header") == "<!-- {id} -->"
    assert mgr.get("compose.strip_trailing_newlines") is False


def test_list_append_marker(isolated_project_env: Path) -> None:
    _overlay(isolated_project_env, "a.yml", "catalog:\n  paths: [one]\n")
    _overlay(isolated_project_env, "b.yml", "catalog:\n  paths: ['+', two]\n")

    assert ConfigManager(repo_root=isolated_project_env).get("catalog.paths") == ["one", "two"]


def test_env_overrides_with_coercion(isolated_project_env: Path, monkeypatch) -> None:
    monkeypatch.setenv("GUIDEPACK_compose__strip_trailing_newlines", "false")
    monkeypatch.setenv("GUIDEPACK_CATALOG__PATHS", '["a", "b"]')
    monkeypatch.setenv("GUIDEPACK_logging__level", "debug")

    cfg = ConfigManager(repo_root=isolated_project_env).load_config()

    assert cfg["compose"]["strip_trailing_newlines"] is False
    # Case-insensitive match keeps the existing key
    assert cfg["catalog"]["paths"] == ["a", "b"]
    assert "CATALOG" not in cfg
    assert cfg["logging"]["level"] == "debug"


def test_env_append(isolated_project_env: Path, monkeypatch) -> None:
    monkeypatch.setenv("GUIDEPACK_catalog__paths__APPEND", "extra")

    assert ConfigManager(repo_root=isolated_project_env).get("catalog.paths") == ["extra"]


def test_env_without_double_underscore_is_ignored(isolated_project_env: Path, monkeypatch) -> None:
    monkeypatch.setenv("GUIDEPACK_SOMETHING", "x")

    cfg = ConfigManager(repo_root=isolated_project_env).load_config()

    assert "SOMETHING" not in cfg


def test_malformed_env_key_strict(isolated_project_env: Path, monkeypatch) -> None:
    monkeypatch.setenv("GUIDEPACK_compose____header", "x")
    mgr = ConfigManager(repo_root=isolated_project_env)

    with pytest.raises(CatalogError, match="Malformed"):
        mgr.load_config(validate=True)

    # Non-strict loading skips it
    assert mgr.load_config(validate=False)["compose"]["header"] is None


def test_schema_validation_failure(isolated_project_env: Path) -> None:
    _overlay(isolated_project_env, "bad.yml", "compose:\n  strip_trailing_newlines: sometimes\n")

    with pytest.raises(CatalogError) as exc:
        ConfigManager(repo_root=isolated_project_env).load_config()

    assert "compose.strip_trailing_newlines" in str(exc.value)


def test_invalid_overlay_yaml(isolated_project_env: Path) -> None:
    _overlay(isolated_project_env, "broken.yml", "compose: [\n")

    with pytest.raises(CatalogError, match="Invalid YAML"):
        ConfigManager(repo_root=isolated_project_env).load_config()


def test_project_root_from_env(isolated_project_env: Path) -> None:
    mgr = ConfigManager()

    assert mgr.repo_root == isolated_project_env.resolve()
    assert mgr.project_config_dir == isolated_project_env.resolve() / ".guidepack" / "config"


def test_get_and_section_defaults(isolated_project_env: Path) -> None:
    mgr = ConfigManager(repo_root=isolated_project_env)

    assert mgr.get("compose.nope", "fallback") == "fallback"
    assert mgr.get("compose.separator.deeper") is None
    assert mgr.section("missing") == {}
    assert mgr.section("compose")["separator"] == "\n---\n"


def test_deep_merge_does_not_mutate_inputs() -> None:
    mgr = ConfigManager.__new__(ConfigManager)
    base = {"a": {"b": 1, "c": [1]}}
    override = {"a": {"c": ["=", 2], "d": 3}}

    merged = mgr.deep_merge(base, override)

    assert merged == {"a": {"b": 1, "c": [2], "d": 3}}
    assert base == {"a": {"b": 1, "c": [1]}}
