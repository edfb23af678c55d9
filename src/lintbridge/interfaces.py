# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols describing the collaborators the adapter depends on."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from subprocess import CompletedProcess
from typing import Protocol, TypeAlias, runtime_checkable

ConfigValue: TypeAlias = str | list[str] | None


@runtime_checkable
class ConfigStore(Protocol):
    """Key/value lookup the linter configuration is read from."""

    def get(self, key: str) -> ConfigValue:
        """Return the value stored under ``key`` or ``None`` when absent.

        Args:
            key: Dotted configuration key such as ``"lint.pylint.prefix"``.

        Returns:
            ConfigValue: A string, a list of strings, or ``None``.
        """
        ...


class CommandRunner(Protocol):
    """Callable that executes a command and returns the completed process."""

    def __call__(
        self,
        args: Sequence[str],
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CompletedProcess[str]: ...


class PathExists(Protocol):
    """Filesystem existence predicate used during binary resolution."""

    def __call__(self, path: str, /) -> bool: ...


class ExecutableLookup(Protocol):
    """Search-path lookup returning the resolved executable or ``None``."""

    def __call__(self, cmd: str, /) -> str | None: ...


__all__ = ["CommandRunner", "ConfigStore", "ConfigValue", "ExecutableLookup", "PathExists"]
