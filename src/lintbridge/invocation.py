# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build the structured command used to run pylint against one file."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from shutil import which as _which
from typing import TYPE_CHECKING, Final

from .errors import ToolNotInstalledError

if TYPE_CHECKING:
    from .config import LinterConfig
    from .interfaces import ExecutableLookup, PathExists

LOGGER = logging.getLogger(__name__)

TOOL_NAME: Final[str] = "pylint"
SEARCH_PATH_ENV: Final[str] = "PYTHONPATH"
LIBRARY_SUBPATH_TEMPLATE: Final[str] = "lib/python{version}/site-packages"

# Suppress the end-of-run report and put the message code in front of every line.
BASELINE_OPTIONS: Final[tuple[str, ...]] = (
    "--reports=n",
    "--msg-template={msg_id}: {line}: {msg}",
)

NOT_INSTALLED_MESSAGE: Final[str] = (
    "PyLint does not appear to be installed on this system. Install it "
    "(e.g., with 'pip install pylint') or configure 'lint.pylint.prefix' "
    "to point to the directory where it resides."
)


def path_exists(path: str) -> bool:
    """Return whether ``path`` exists on the local filesystem.

    Args:
        path: Filesystem path to check.

    Returns:
        bool: ``True`` when the path exists.
    """
    return Path(path).exists()


@dataclass(frozen=True, slots=True)
class InvocationSpec:
    """Fully resolved description of one pylint run."""

    binary: str
    options: tuple[str, ...]
    search_path: str
    target: Path
    search_path_env: str = SEARCH_PATH_ENV

    @property
    def argv(self) -> tuple[str, ...]:
        """Return the argument vector passed to the process runner."""
        return (self.binary, *self.options, str(self.target))

    @property
    def joined_options(self) -> str:
        """Return the options as a single space-separated string."""
        return " ".join(self.options)

    def environment(self, base: Mapping[str, str] | None = None) -> dict[str, str]:
        """Return the environment overrides for this run.

        The auxiliary search path is prepended to whatever ``base`` already
        carries for the variable; the trailing separator keeps it intact.

        Args:
            base: Caller environment, defaults to :data:`os.environ`.

        Returns:
            dict[str, str]: Mapping with the single search path variable set.
        """

        source = os.environ if base is None else base
        existing = source.get(self.search_path_env, "")
        return {self.search_path_env: f"{self.search_path}{existing}"}


def resolve_binary(
    prefix: str | None,
    *,
    exists: PathExists = path_exists,
    which: ExecutableLookup = _which,
) -> str:
    """Locate the pylint executable.

    Args:
        prefix: Optional install prefix; the binary is expected in ``<prefix>/bin``.
        exists: Filesystem existence predicate.
        which: Search-path lookup used when the candidate is not a file on disk.

    Returns:
        str: Path of the executable to run.

    Raises:
        ToolNotInstalledError: If the binary is neither on disk nor on the search path.
    """

    candidate = f"{prefix}/bin/{TOOL_NAME}" if prefix is not None else TOOL_NAME
    if exists(candidate):
        return candidate
    resolved = which(candidate)
    if resolved is None:
        raise ToolNotInstalledError(NOT_INSTALLED_MESSAGE)
    return resolved


def library_dir(prefix: str, python_version: str) -> str:
    """Return the site-packages directory below ``prefix``.

    Args:
        prefix: Installation prefix.
        python_version: ``X.Y`` interpreter version used in the subpath.

    Returns:
        str: ``<prefix>/lib/python<X.Y>/site-packages``.
    """
    return f"{prefix}/{LIBRARY_SUBPATH_TEMPLATE.format(version=python_version)}"


def build_search_path(prefixes: Iterable[str | None], python_version: str) -> str:
    """Join the library directories of every configured prefix.

    The result always ends with an empty segment so a pre-existing value of
    the variable can be appended verbatim.

    Args:
        prefixes: Configured prefixes; ``None`` entries are skipped.
        python_version: ``X.Y`` interpreter version used in each subpath.

    Returns:
        str: Library directories joined by :data:`os.pathsep`, ending with a separator.
    """

    segments = [library_dir(prefix, python_version) for prefix in prefixes if prefix is not None]
    segments.append("")
    return os.pathsep.join(segments)


def build_options(extra: Iterable[str] = ()) -> tuple[str, ...]:
    """Return the baseline options followed by ``extra`` in order."""
    return (*BASELINE_OPTIONS, *extra)


def build_invocation(
    config: LinterConfig,
    target: Path,
    *,
    exists: PathExists = path_exists,
    which: ExecutableLookup = _which,
) -> InvocationSpec:
    """Assemble the :class:`InvocationSpec` for linting ``target``.

    Args:
        config: Linter configuration supplied by the host.
        target: File on disk to analyse.
        exists: Filesystem existence predicate.
        which: Search-path lookup.

    Returns:
        InvocationSpec: Command description ready for the process runner.

    Raises:
        ToolNotInstalledError: If the pylint binary cannot be located.
    """

    binary = resolve_binary(config.prefix, exists=exists, which=which)
    spec = InvocationSpec(
        binary=binary,
        options=build_options(config.options),
        search_path=build_search_path(config.library_prefixes, config.python_version),
        target=target,
    )
    LOGGER.debug("pylint invocation: %s (%s=%s)", " ".join(spec.argv), SEARCH_PATH_ENV, spec.search_path)
    return spec


__all__ = [
    "BASELINE_OPTIONS",
    "InvocationSpec",
    "LIBRARY_SUBPATH_TEMPLATE",
    "SEARCH_PATH_ENV",
    "TOOL_NAME",
    "build_invocation",
    "build_options",
    "build_search_path",
    "library_dir",
    "path_exists",
    "resolve_binary",
]
