# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""End-to-end tests for the ``lintbridge`` CLI using a stand-in pylint script."""

from __future__ import annotations

import json
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from lintbridge.cli import app, collect_paths


def _write_config(root: Path, prefix: Path, codes: str) -> None:
    (root / ".lintbridge.toml").write_text(
        textwrap.dedent(
            f"""
            [lint.pylint]
            prefix = "{prefix.as_posix()}"

            [lint.pylint.codes]
            {codes}
            """
        ),
        encoding="utf-8",
    )


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    (root / "pkg").mkdir(parents=True)
    (root / "pkg" / "mod.py").write_text("x = 1\n", encoding="utf-8")
    return root


def test_lint_reports_errors_and_exits_non_zero(project: Path, fake_pylint: Callable[..., Path]) -> None:
    _write_config(project, fake_pylint(), 'error = "^E"\nwarning = "^W"')

    result = CliRunner().invoke(
        app, ["lint", "pkg/mod.py", "--root", str(project), "--no-color", "--no-emoji", "-j", "1"]
    )

    assert result.exit_code == 1, result.output
    assert "pkg/mod.py:22" in result.stdout
    assert "[E1101]" in result.stdout
    assert "C0114" not in result.stdout


def test_lint_json_includes_disabled_on_request(project: Path, fake_pylint: Callable[..., Path]) -> None:
    _write_config(project, fake_pylint(), 'warning = "^W"')

    result = CliRunner().invoke(
        app,
        ["lint", "pkg", "--root", str(project), "--format", "json", "--show-disabled", "-j", "1"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    severities = [record["severity"] for record in payload["pkg/mod.py"]]
    assert severities == ["disabled", "warning", "disabled"]


def test_lint_fatal_invocation_exits_with_two(project: Path, fake_pylint: Callable[..., Path]) -> None:
    prefix = fake_pylint(stdout="", stderr="Traceback (most recent call last):\n", returncode=1)
    _write_config(project, prefix, 'error = "^E"')

    result = CliRunner().invoke(app, ["lint", "pkg/mod.py", "--root", str(project), "--no-emoji"])

    assert result.exit_code == 2
    assert "exited with status 1" in result.stdout


def test_lint_without_rules_is_a_configuration_error(project: Path) -> None:
    result = CliRunner().invoke(app, ["lint", "pkg/mod.py", "--root", str(project), "--no-emoji"])

    assert result.exit_code == 2
    assert "have not configured" in result.stdout


def test_collect_paths_expands_directories(project: Path) -> None:
    (project / "pkg" / "a.py").write_text("", encoding="utf-8")
    (project / "pkg" / "notes.txt").write_text("", encoding="utf-8")
    assert collect_paths([Path("pkg"), Path("pkg/a.py")], project) == ["pkg/a.py", "pkg/mod.py"]


def test_lint_defaults_root_to_working_directory(
    project: Path,
    fake_pylint: Callable[..., Path],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _write_config(project, fake_pylint(), 'error = "^E"')
    monkeypatch.chdir(project)
    monkeypatch.setattr("lintbridge.cli.configure_verbose_logging", lambda: None)

    result = CliRunner().invoke(app, ["lint", "pkg/mod.py", "--no-color", "--no-emoji", "-j", "1", "-v"])

    assert result.exit_code == 1, result.output
    assert "Linting 1 file(s) with PyLint using 1 job(s)" in result.stdout
    assert "pkg/mod.py:22" in result.stdout
