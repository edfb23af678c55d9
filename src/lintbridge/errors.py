# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exception hierarchy shared by the adapter components."""

from __future__ import annotations

from collections.abc import Sequence


class LintBridgeError(Exception):
    """Base class for every error raised by lintbridge."""


class ConfigError(LintBridgeError):
    """Raised when configuration input is missing or invalid."""


class ToolNotInstalledError(ConfigError):
    """Raised when the external analysis binary cannot be located."""


class InvocationFailedError(LintBridgeError):
    """Raised when the external tool failed to run rather than reporting findings."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int | None,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        status = "could not be launched" if returncode is None else f"exited with status {returncode}"
        super().__init__(
            f"Command '{command[0] if command else '<empty>'}' {status}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


__all__ = ("ConfigError", "InvocationFailedError", "LintBridgeError", "ToolNotInstalledError")
