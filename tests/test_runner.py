# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for running pylint and disambiguating its exit status."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from pydantic import ValidationError

from lintbridge.errors import InvocationFailedError
from lintbridge.invocation import SEARCH_PATH_ENV, InvocationSpec
from lintbridge.runner import BENIGN_STDERR, RawResult, RunOutcome, classify_completion, execute

_SPEC = InvocationSpec(
    binary="/opt/pylint/bin/pylint",
    options=("--reports=n",),
    search_path="/opt/pylint/lib/python3.12/site-packages:",
    target=Path("pkg/mod.py"),
)


@pytest.mark.parametrize(
    ("returncode", "stderr", "expected"),
    [
        (0, "", RunOutcome.SUCCESS),
        (0, "something odd\n", RunOutcome.SUCCESS),
        (4, BENIGN_STDERR, RunOutcome.EXPECTED_FAILURE),
        (4, BENIGN_STDERR.rstrip("\n"), RunOutcome.FATAL),
        (1, "Traceback (most recent call last):\n", RunOutcome.FATAL),
        (2, "", RunOutcome.FATAL),
    ],
)
def test_classify_completion(returncode: int, stderr: str, expected: RunOutcome) -> None:
    assert classify_completion(returncode, stderr) is expected


def test_benign_stderr_returns_stdout(fake_runner_factory: Callable[..., object]) -> None:
    runner = fake_runner_factory(returncode=4, stdout="W0612: 3: Unused\n", stderr=BENIGN_STDERR)
    result = execute(_SPEC, runner=runner, base_env={})
    assert result.outcome is RunOutcome.EXPECTED_FAILURE
    assert result.ok
    assert result.require_stdout() == "W0612: 3: Unused\n"


def test_traceback_is_fatal_and_carries_streams(fake_runner_factory: Callable[..., object]) -> None:
    runner = fake_runner_factory(
        returncode=1,
        stdout="partial\n",
        stderr="Traceback (most recent call last):\n  boom\n",
    )
    result = execute(_SPEC, runner=runner, base_env={})
    assert result.outcome is RunOutcome.FATAL
    with pytest.raises(InvocationFailedError) as excinfo:
        result.require_stdout()
    error = excinfo.value
    assert error.returncode == 1
    assert error.stdout == "partial\n"
    assert error.stderr.startswith("Traceback (most recent call last):")
    assert error.command == _SPEC.argv


def test_execute_passes_argv_and_search_path(fake_runner_factory: Callable[..., object]) -> None:
    runner = fake_runner_factory(returncode=0, stdout="")
    execute(_SPEC, runner=runner, base_env={SEARCH_PATH_ENV: "/caller"})
    (argv, env), = runner.calls
    assert argv == _SPEC.argv
    assert env == {SEARCH_PATH_ENV: "/opt/pylint/lib/python3.12/site-packages:/caller"}


def test_launch_failure_is_invocation_failure() -> None:
    def _explode(args, *, cwd=None, env=None):
        raise FileNotFoundError("Executable '/opt/pylint/bin/pylint' was not found")

    with pytest.raises(InvocationFailedError, match="could not be launched") as excinfo:
        execute(_SPEC, runner=_explode, base_env={})
    assert excinfo.value.returncode is None


def test_raw_result_is_immutable() -> None:
    result = RawResult(outcome=RunOutcome.SUCCESS, returncode=0, stdout="x")
    with pytest.raises(ValidationError):
        result.stdout = "y"  # type: ignore[misc]
