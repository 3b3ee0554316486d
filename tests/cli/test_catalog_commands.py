"""Tests for the docs, profiles and config command domains."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from guidepack.cli._dispatcher import build_parser, discover_domains, main


def test_domains_are_discovered() -> None:
    assert {"docs", "profiles", "config"} <= set(discover_domains())
    help_text = build_parser().format_help()
    assert "compose" in help_text


def test_version_flag(capsys) -> None:
    from guidepack import __version__

    with pytest.raises(SystemExit):
        main(["--version"])
    assert __version__ in capsys.readouterr().out


def test_no_command_prints_help(capsys) -> None:
    assert main([]) == 0
    assert "usage: guidepack" in capsys.readouterr().out


def test_docs_list(project_catalog: Path, capsys) -> None:
    assert main(["docs", "list"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Documents (3):")
    assert "frontend" in out and "[frontend]" in out


def test_docs_list_by_category_json(project_catalog: Path, capsys) -> None:
    assert main(["docs", "list", "--category", "language", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [d["id"] for d in payload["documents"]] == ["typescript"]
    assert payload["total_lines"] == 3


def test_docs_show_with_content(project_catalog: Path, capsys) -> None:
    assert main(["docs", "show", "core", "--content"]) == 0
    out = capsys.readouterr().out
    assert "Title: Core" in out
    assert "Lines: 10" in out
    assert "core line 10" in out


def test_docs_show_unknown(project_catalog: Path, capsys) -> None:
    assert main(["docs", "show", "ghost"]) == 2
    assert "ghost" in capsys.readouterr().err


def test_docs_check_ok(project_catalog: Path, capsys) -> None:
    assert main(["docs", "check"]) == 0
    assert "OK: checked 3 documents" in capsys.readouterr().out


def test_docs_check_drift(project_catalog: Path, capsys) -> None:
    (project_catalog / ".guidepack" / "catalog" / "docs" / "typescript.md").write_text("x\n", encoding="utf-8")

    assert main(["docs", "check", "--json"]) == 1
    report = json.loads(capsys.readouterr().out)
    assert report["drifts"] == [{"id": "typescript", "declared": 3, "actual": 1}]


def test_docs_check_unreadable(project_catalog: Path, capsys) -> None:
    (project_catalog / ".guidepack" / "catalog" / "docs" / "core.md").unlink()

    assert main(["docs", "check"]) == 3
    assert "UNREADABLE core" in capsys.readouterr().out


def test_profiles_list_and_show(project_catalog: Path, capsys) -> None:
    assert main(["profiles", "list"]) == 0
    out = capsys.readouterr().out
    assert "web" in out
    assert "ts-web (extends: web)" in out

    assert main(["profiles", "show", "ts-web", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [d["id"] for d in payload["documents"]] == ["core", "frontend", "typescript"]
    assert payload["total_lines"] == 33
    assert payload["extends"] == ["web"]


def test_profiles_show_unknown(project_catalog: Path, capsys) -> None:
    assert main(["profiles", "show", "nope"]) == 2


def test_config_show_key(project_catalog: Path, capsys) -> None:
    assert main(["config", "show", "catalog.include_bundled", "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == {"catalog": {"include_bundled": False}}


def test_config_show_missing_key(project_catalog: Path, capsys) -> None:
    assert main(["config", "show", "compose.nothing"]) == 1
    assert "Key not found" in capsys.readouterr().err


def test_verbose_logging_goes_to_stderr(project_catalog: Path, capsys) -> None:
    assert main(["-v", "profiles", "show", "web"]) == 0
    captured = capsys.readouterr()
    assert "Profile: web" in captured.out
    assert "DEBUG" in captured.err


def test_logging_file_from_config(project_catalog: Path, capsys) -> None:
    (project_catalog / ".guidepack" / "config" / "logging.yml").write_text(
        "logging:\n  level: DEBUG\n  file: logs/guidepack.log\n", encoding="utf-8"
    )

    assert main(["compose", "--profile", "web", "--json"]) == 0
    json.loads(capsys.readouterr().out)
    log_text = (project_catalog / "logs" / "guidepack.log").read_text(encoding="utf-8")
    assert "Resolved profile web" in log_text


def test_unopenable_log_file_falls_back_to_stderr(project_catalog: Path, capsys) -> None:
    (project_catalog / "blocker").write_text("not a directory\n", encoding="utf-8")
    (project_catalog / ".guidepack" / "config" / "logging.yml").write_text(
        "logging:\n  file: blocker/sub/log.txt\n", encoding="utf-8"
    )

    assert main(["profiles", "list"]) == 0
    captured = capsys.readouterr()
    assert captured.out.startswith("Profiles (2):")
    assert "Cannot open log file" in captured.err


def test_bad_project_root_reports_json_error(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.setenv("GUIDEPACK_PROJECT_ROOT", str(tmp_path / "nowhere"))

    assert main(["profiles", "list", "--json"]) == 1
    captured = capsys.readouterr()
    err = json.loads(captured.err)
    assert captured.out == ""
    assert err["error"] == "path_resolution_error"
    assert "GUIDEPACK_PROJECT_ROOT" in err["message"]
