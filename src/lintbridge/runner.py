# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Execute an invocation and tell "found problems" apart from "failed to run"."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ConfigDict

from .errors import InvocationFailedError
from .process_utils import run_command

if TYPE_CHECKING:
    from .interfaces import CommandRunner
    from .invocation import InvocationSpec

LOGGER = logging.getLogger(__name__)

# pylint exits non-zero whenever it reports anything; this notice on stderr is
# the only output that may accompany such an exit on a healthy run.
BENIGN_STDERR: Final[str] = "No config file found, using default configuration\n"


class RunOutcome(str, Enum):
    """Classification of a completed tool run."""

    SUCCESS = "success"
    EXPECTED_FAILURE = "expected_failure"
    FATAL = "fatal"


def classify_completion(returncode: int, stderr: str | None) -> RunOutcome:
    """Map an exit status and captured stderr onto a :class:`RunOutcome`.

    Args:
        returncode: Process exit status.
        stderr: Captured standard error text.

    Returns:
        RunOutcome: ``SUCCESS`` for a zero exit, ``EXPECTED_FAILURE`` for a
        non-zero exit whose stderr is exactly :data:`BENIGN_STDERR`, otherwise
        ``FATAL``.
    """

    if returncode == 0:
        return RunOutcome.SUCCESS
    if stderr == BENIGN_STDERR:
        return RunOutcome.EXPECTED_FAILURE
    return RunOutcome.FATAL


class RawResult(BaseModel):
    """Captured streams of one run plus its outcome."""

    model_config = ConfigDict(frozen=True)

    outcome: RunOutcome
    returncode: int
    stdout: str = ""
    stderr: str = ""
    command: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        """Return ``True`` unless the run is fatal."""
        return self.outcome is not RunOutcome.FATAL

    def require_stdout(self) -> str:
        """Return captured stdout, raising when the run failed.

        Raises:
            InvocationFailedError: If the outcome is ``FATAL``; both streams are attached.
        """

        if self.outcome is RunOutcome.FATAL:
            raise InvocationFailedError(self.command, self.returncode, self.stdout, self.stderr)
        return self.stdout


def execute(
    spec: InvocationSpec,
    *,
    runner: CommandRunner = run_command,
    base_env: Mapping[str, str] | None = None,
) -> RawResult:
    """Run ``spec`` and classify the result.

    Args:
        spec: Command description produced by the invocation builder.
        runner: Process execution facility.
        base_env: Environment whose search path value is extended; defaults to
            :data:`os.environ`.

    Returns:
        RawResult: Captured output with its outcome.

    Raises:
        InvocationFailedError: If the process could not be launched at all.
    """

    argv = spec.argv
    env = spec.environment(os.environ if base_env is None else base_env)
    try:
        completed = runner(argv, env=env)
    except OSError as exc:
        raise InvocationFailedError(argv, None, "", str(exc)) from exc

    stdout = completed.stdout or ""
    stderr = completed.stderr or ""
    outcome = classify_completion(completed.returncode, stderr)
    LOGGER.debug("%s exited with %s (%s)", spec.binary, completed.returncode, outcome.value)
    return RawResult(
        outcome=outcome,
        returncode=completed.returncode,
        stdout=stdout,
        stderr=stderr,
        command=argv,
    )


__all__ = ["BENIGN_STDERR", "RawResult", "RunOutcome", "classify_completion", "execute"]
