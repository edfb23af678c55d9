# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import stat
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from subprocess import CompletedProcess

import pytest

from lintbridge.config import LinterConfig
from lintbridge.runner import BENIGN_STDERR
from lintbridge.severity import SeverityRuleSet

SAMPLE_STDOUT = (
    "************* Module pkg.mod\n"
    "C0114:  1: Missing module docstring\n"
    "W0612: 14: Unused variable 'x'\n"
    "E1101: 22: Instance of 'Foo' has no 'bar' member\n"
    "\n"
)


class FakeRunner:
    """Record invocations and answer with a canned completed process."""

    def __init__(self, returncode: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.calls: list[tuple[tuple[str, ...], dict[str, str]]] = []

    def __call__(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CompletedProcess[str]:
        del cwd
        self.calls.append((tuple(args), dict(env or {})))
        return CompletedProcess(list(args), self.returncode, stdout=self.stdout, stderr=self.stderr)


@pytest.fixture
def rules() -> SeverityRuleSet:
    return SeverityRuleSet(error=[r"^E"], warning=[r"^W"], advice=[r"^C0114$"])


@pytest.fixture
def linter_config(rules: SeverityRuleSet) -> LinterConfig:
    return LinterConfig(prefix="/opt/pylint", rules=rules, python_version="3.12")


@pytest.fixture
def fake_runner_factory() -> Callable[..., FakeRunner]:
    return FakeRunner


@pytest.fixture
def fake_pylint(tmp_path: Path) -> Callable[..., Path]:
    """Write an executable ``<prefix>/bin/pylint`` shell script and return the prefix."""

    def _write(stdout: str = SAMPLE_STDOUT, stderr: str = BENIGN_STDERR, returncode: int = 4) -> Path:
        prefix = tmp_path / "pylint-prefix"
        bin_dir = prefix / "bin"
        bin_dir.mkdir(parents=True, exist_ok=True)
        (prefix / "stdout.txt").write_text(stdout, encoding="utf-8")
        (prefix / "stderr.txt").write_text(stderr, encoding="utf-8")
        script = bin_dir / "pylint"
        script.write_text(
            "#!/bin/sh\n"
            f"cat '{prefix / 'stdout.txt'}'\n"
            f"cat '{prefix / 'stderr.txt'}' >&2\n"
            f"exit {returncode}\n",
            encoding="utf-8",
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return prefix

    return _write


@pytest.fixture
def sample_stdout() -> str:
    return SAMPLE_STDOUT
