"""CLI tests for the rename command."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from click.testing import CliRunner

from uuidify.cli import cli


def _env_with_home(tmp_path: Path) -> dict[str, Any]:
    env = dict(os.environ)
    env["HOME"] = str(tmp_path / "home")
    return env


def _make_tree(root: Path) -> Path:
    (root / "nested").mkdir(parents=True)
    (root / "alpha.txt").write_text("alpha", encoding="utf-8")
    (root / "nested" / "beta.md").write_text("beta", encoding="utf-8")
    return root


def test_rename_directory_reports_summary(tmp_path: Path) -> None:
    root = _make_tree(tmp_path / "drop")
    runner = CliRunner()

    result = runner.invoke(cli, ["rename", str(root)], env=_env_with_home(tmp_path))

    assert result.exit_code == 0, result.output
    assert "Last renamed:" in result.output
    assert "alpha.txt ->" in result.output
    assert "Renamed 2 file(s)." in result.output
    assert not (root / "alpha.txt").exists()
    assert (root / "nested").is_dir()
    assert [path.suffix for path in (root / "nested").iterdir()] == [".md"]


def test_rename_json_output(tmp_path: Path) -> None:
    root = _make_tree(tmp_path / "drop")
    runner = CliRunner()

    result = runner.invoke(cli, ["rename", str(root), "--json"], env=_env_with_home(tmp_path))

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["outcome"] == "completed"
    assert payload["counts"] == {"total": 2, "renamed": 2, "failed": 0, "skipped": 0}
    for entry in payload["renamed"]:
        assert Path(entry["destination"]).exists()
        assert not Path(entry["source"]).exists()


def test_rename_dry_run_leaves_files(tmp_path: Path) -> None:
    root = _make_tree(tmp_path / "drop")
    runner = CliRunner()

    result = runner.invoke(
        cli, ["rename", str(root), "--dry-run", "--json"], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["dry_run"] is True
    assert payload["message"] == "Would rename 2 file(s)"
    assert (root / "alpha.txt").exists()
    assert (root / "nested" / "beta.md").exists()


def test_rename_missing_path_reports_no_files(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli, ["rename", str(tmp_path / "missing")], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 0, result.output
    assert "No files were detected." in result.output


def test_rename_requires_paths(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["rename"], env=_env_with_home(tmp_path))

    assert result.exit_code != 0
    assert "Provide at least one PATH" in result.output


def test_rename_json_rejects_quiet(tmp_path: Path) -> None:
    root = _make_tree(tmp_path / "drop")
    runner = CliRunner()

    result = runner.invoke(
        cli, ["rename", str(root), "--json", "--quiet"], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 1
    payload = json.loads(result.output)
    assert payload["error"]["code"] == "cli_error"
    assert (root / "alpha.txt").exists()


def test_rename_failures_set_exit_code(tmp_path: Path, monkeypatch) -> None:
    root = tmp_path / "drop"
    root.mkdir()
    (root / "locked.txt").write_text("locked", encoding="utf-8")
    (root / "open.txt").write_text("open", encoding="utf-8")
    real_rename = os.rename

    def _rename(source: Any, destination: Any) -> None:
        if Path(source).name == "locked.txt":
            raise PermissionError(13, "Permission denied", str(source))
        real_rename(source, destination)

    monkeypatch.setattr(os, "rename", _rename)
    env = _env_with_home(tmp_path)
    env["UUIDIFY__LOGGING__LEVEL"] = "ERROR"
    runner = CliRunner()

    result = runner.invoke(cli, ["rename", str(root), "--json"], env=env)

    assert result.exit_code == 1
    payload = json.loads(result.output)
    assert payload["failed"] == ["locked.txt"]
    assert payload["counts"]["renamed"] == 1
    assert (root / "locked.txt").exists()
    assert not (root / "open.txt").exists()


def test_rename_quiet_suppresses_output(tmp_path: Path) -> None:
    root = _make_tree(tmp_path / "drop")
    runner = CliRunner()

    result = runner.invoke(cli, ["rename", str(root), "--quiet"], env=_env_with_home(tmp_path))

    assert result.exit_code == 0
    assert result.output.strip() == ""
    assert not (root / "alpha.txt").exists()


def test_rename_summary_omits_details(tmp_path: Path) -> None:
    root = _make_tree(tmp_path / "drop")
    runner = CliRunner()

    result = runner.invoke(cli, ["rename", str(root), "--summary"], env=_env_with_home(tmp_path))

    assert result.exit_code == 0
    assert "Last renamed:" not in result.output
    assert "Renamed 2 file(s)." in result.output


def test_rename_no_hidden_keeps_dotfiles(tmp_path: Path) -> None:
    root = _make_tree(tmp_path / "drop")
    (root / ".env").write_text("SECRET=1", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(
        cli, ["rename", str(root), "--no-hidden", "--json"], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["counts"]["renamed"] == 2
    assert (root / ".env").exists()
