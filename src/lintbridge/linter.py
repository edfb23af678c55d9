# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint paths with pylint: build, run and parse for each file."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from shutil import which as _which

from .config import LinterConfig
from .interfaces import CommandRunner, ExecutableLookup, PathExists
from .invocation import build_invocation, path_exists
from .models import DiagnosticRecord
from .parser import LINTER_NAME, parse_output
from .process_utils import run_command
from .runner import execute

LOGGER = logging.getLogger(__name__)


class PylintLinter:
    """Adapter that reports pylint diagnostics with user-defined severities.

    The instance holds only immutable configuration and its collaborators, so
    :meth:`lint_path` may be called from several threads at once.
    """

    def __init__(
        self,
        config: LinterConfig,
        *,
        root: Path | None = None,
        runner: CommandRunner = run_command,
        exists: PathExists = path_exists,
        which: ExecutableLookup = _which,
        base_env: Mapping[str, str] | None = None,
    ) -> None:
        self._config = config
        self._root = root
        self._runner = runner
        self._exists = exists
        self._which = which
        self._base_env = base_env

    @property
    def name(self) -> str:
        """Return the display name used on every record."""
        return LINTER_NAME

    def path_on_disk(self, path: str) -> Path:
        """Return the file that is handed to pylint for ``path``."""
        candidate = Path(path)
        if self._root is None or candidate.is_absolute():
            return candidate
        return self._root / candidate

    def lint_path(self, path: str) -> list[DiagnosticRecord]:
        """Return every diagnostic pylint reports for ``path``.

        Args:
            path: Path as known to the host; it is copied onto each record.

        Returns:
            list[DiagnosticRecord]: Records in output order, ``DISABLED`` ones included.

        Raises:
            ConfigError: If no severity rules are configured or pylint is missing.
            InvocationFailedError: If pylint failed to run.
        """

        self._config.rules.ensure_configured()
        spec = build_invocation(
            self._config,
            self.path_on_disk(path),
            exists=self._exists,
            which=self._which,
        )
        result = execute(spec, runner=self._runner, base_env=self._base_env)
        records = parse_output(result.require_stdout(), path, self._config.rules)
        LOGGER.debug("%s: %d diagnostic(s)", path, len(records))
        return records

    def lint_paths(self, paths: Sequence[str], *, jobs: int = 1) -> dict[str, list[DiagnosticRecord]]:
        """Lint several paths, one pylint process per path.

        Args:
            paths: Paths to lint.
            jobs: Maximum number of concurrent pylint processes.

        Returns:
            dict[str, list[DiagnosticRecord]]: Records keyed by path in input order.

        Raises:
            LintBridgeError: The first configuration or invocation error encountered.
        """

        self._config.rules.ensure_configured()
        if jobs <= 1 or len(paths) <= 1:
            return {path: self.lint_path(path) for path in paths}
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            results = list(executor.map(self.lint_path, paths))
        return dict(zip(paths, results, strict=True))


__all__ = ["PylintLinter"]
