# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration store, TOML loading and the linter configuration model."""

from __future__ import annotations

import logging
import os
import sys
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ConfigError
from .interfaces import ConfigStore, ConfigValue
from .severity import SeverityRuleSet

LOGGER = logging.getLogger(__name__)

PREFIX_KEY: Final[str] = "lint.pylint.prefix"
ASTNG_PREFIX_KEY: Final[str] = "lint.pylint.logilab_astng.prefix"
COMMON_PREFIX_KEY: Final[str] = "lint.pylint.logilab_common.prefix"
OPTIONS_KEY: Final[str] = "lint.pylint.options"

CONFIG_FILENAME: Final[str] = ".lintbridge.toml"
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "lintbridge"


def default_parallel_jobs() -> int:
    """Return 75% of available CPU cores (minimum of 1)."""
    cores = os.cpu_count() or 1
    return max(1, (cores * 3) // 4)


def _coerce_value(key: str, value: object) -> ConfigValue:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    if isinstance(value, (int, float, bool)):
        return str(value)
    raise ConfigError(f"Configuration key '{key}' must be a string or a list of strings")


class MappingConfigStore(ConfigStore):
    """Serve dotted keys out of a (possibly nested) mapping.

    A key is first looked up verbatim so flat documents such as
    ``{"lint.pylint.prefix": "/opt"}`` work; otherwise the dotted segments are
    walked through nested tables.
    """

    def __init__(self, data: Mapping[str, Any] | None = None, *, source: str = "<memory>") -> None:
        self._data: Mapping[str, Any] = dict(data or {})
        self.source = source

    def get(self, key: str) -> ConfigValue:
        if key in self._data:
            return _coerce_value(key, self._data[key])
        node: object = self._data
        for segment in key.split("."):
            if not isinstance(node, Mapping) or segment not in node:
                return None
            node = node[segment]
        if isinstance(node, Mapping):
            raise ConfigError(f"Configuration key '{key}' in {self.source} is a table, expected a value")
        return _coerce_value(key, node)

    def describe(self) -> str:
        """Return a human readable label for the backing source."""
        return self.source


def _current_python_version() -> str:
    return f"{sys.version_info.major}.{sys.version_info.minor}"


class LinterConfig(BaseModel):
    """Everything a lint pass needs, resolved once from a configuration store."""

    model_config = ConfigDict(frozen=True)

    prefix: str | None = None
    astng_prefix: str | None = None
    common_prefix: str | None = None
    options: tuple[str, ...] = Field(default_factory=tuple)
    rules: SeverityRuleSet = Field(default_factory=SeverityRuleSet)
    python_version: str = Field(default_factory=_current_python_version)

    @field_validator("options", mode="before")
    @classmethod
    def _normalise_options(cls, value: object) -> tuple[str, ...]:
        """Coerce the configured extra options into a tuple.

        Args:
            value: ``None``, a single option string, or a sequence of options.

        Returns:
            tuple[str, ...]: Options in the order given; empty when unset.
        """
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,) if value else ()
        return tuple(str(item) for item in value)

    @field_validator("prefix", "astng_prefix", "common_prefix", mode="before")
    @classmethod
    def _normalise_prefix(cls, value: object) -> object:
        """Reject list values for the single-path prefix settings.

        Args:
            value: Raw value read from the configuration store.

        Returns:
            object: ``value`` unchanged when it is not a list.

        Raises:
            ConfigError: If a list was configured.
        """
        if isinstance(value, list):
            raise ConfigError("prefix settings must be a single path, not a list")
        return value

    @property
    def library_prefixes(self) -> tuple[str | None, ...]:
        """Return the prefixes whose library directories extend the search path."""
        return (self.prefix, self.astng_prefix, self.common_prefix)

    @classmethod
    def from_store(cls, store: ConfigStore) -> LinterConfig:
        """Read every ``lint.pylint.*`` key from ``store``.

        Args:
            store: Configuration store supplied by the host.

        Returns:
            LinterConfig: Immutable configuration for subsequent lint passes.

        Raises:
            ConfigError: If any value has the wrong shape or a pattern is invalid.
        """

        return cls(
            prefix=store.get(PREFIX_KEY),
            astng_prefix=store.get(ASTNG_PREFIX_KEY),
            common_prefix=store.get(COMMON_PREFIX_KEY),
            options=store.get(OPTIONS_KEY),
            rules=SeverityRuleSet.from_store(store),
        )


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Configuration at {path} is not valid TOML: {exc}") from exc


def load_store(root: Path, path: Path | None = None) -> MappingConfigStore:
    """Locate and load the configuration store for ``root``.

    Precedence is an explicit ``path``, then ``.lintbridge.toml`` in ``root``,
    then the ``[tool.lintbridge]`` table of ``pyproject.toml``. When none exist
    an empty store is returned.

    Args:
        root: Project root used to discover configuration files.
        path: Explicit configuration file; it must exist.

    Returns:
        MappingConfigStore: Store backed by the discovered document.

    Raises:
        ConfigError: If the explicit file is missing or any file is malformed.
    """

    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Configuration file not found: {path}")
        document = _read_toml(path)
        if path.name == PYPROJECT_FILENAME:
            document = _pyproject_section(document, path)
        return MappingConfigStore(document, source=str(path))

    candidate = root / CONFIG_FILENAME
    if candidate.is_file():
        return MappingConfigStore(_read_toml(candidate), source=str(candidate))

    pyproject = root / PYPROJECT_FILENAME
    if pyproject.is_file():
        section = _pyproject_section(_read_toml(pyproject), pyproject)
        if section:
            return MappingConfigStore(section, source=f"{pyproject} [tool.lintbridge]")

    return MappingConfigStore(source="<defaults>")


def _pyproject_section(document: Mapping[str, Any], path: Path) -> dict[str, Any]:
    """Return the ``[tool.lintbridge]`` table of a pyproject document.

    Args:
        document: Parsed ``pyproject.toml`` content.
        path: Location of the document, used in error messages.

    Returns:
        dict[str, Any]: The section, or an empty mapping when absent.

    Raises:
        ConfigError: If ``tool`` or ``tool.lintbridge`` is not a table.
    """

    tool = document.get(PYPROJECT_TOOL_KEY, {})
    if not isinstance(tool, Mapping):
        raise ConfigError(f"[tool] in {path} must be a table")
    section = tool.get(PYPROJECT_SECTION_KEY, {})
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.lintbridge] in {path} must be a table")
    return dict(section)


def load_config(root: Path, path: Path | None = None) -> LinterConfig:
    """Return the :class:`LinterConfig` for ``root`` (see :func:`load_store`)."""

    store = load_store(root, path)
    LOGGER.debug("configuration loaded from %s", store.describe())
    return LinterConfig.from_store(store)


__all__ = [
    "ASTNG_PREFIX_KEY",
    "COMMON_PREFIX_KEY",
    "CONFIG_FILENAME",
    "LinterConfig",
    "MappingConfigStore",
    "OPTIONS_KEY",
    "PREFIX_KEY",
    "default_parallel_jobs",
    "load_config",
    "load_store",
]
