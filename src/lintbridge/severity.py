# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity tiers and the ordered regex rules that assign them to codes."""

from __future__ import annotations

import re
from collections.abc import Iterator
from enum import Enum
from re import Pattern
from typing import TYPE_CHECKING, Final

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from .errors import ConfigError

if TYPE_CHECKING:
    from .interfaces import ConfigStore


class Severity(str, Enum):
    """Normalised severity applied to a diagnostic regardless of the tool's own label."""

    ERROR = "error"
    WARNING = "warning"
    ADVICE = "advice"
    DISABLED = "disabled"


ERROR_CODES_KEY: Final[str] = "lint.pylint.codes.error"
WARNING_CODES_KEY: Final[str] = "lint.pylint.codes.warning"
ADVICE_CODES_KEY: Final[str] = "lint.pylint.codes.advice"

UNCONFIGURED_MESSAGE: Final[str] = (
    "You are invoking the PyLint linter but have not configured any of "
    f"'{ERROR_CODES_KEY}', '{WARNING_CODES_KEY}', or '{ADVICE_CODES_KEY}'."
)


def _coerce_patterns(value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value)
    raise ConfigError(f"severity patterns must be a string or a list of strings, got {type(value).__name__}")


class SeverityRuleSet(BaseModel):
    """Ordered mapping from severity tier to the regex patterns that select it.

    Tiers are evaluated as error, then warning, then advice; within a tier the
    patterns are tried in declaration order and the first hit wins. A code that
    matches nothing is :attr:`Severity.DISABLED`.
    """

    model_config = ConfigDict(frozen=True)

    error: tuple[str, ...] = Field(default_factory=tuple)
    warning: tuple[str, ...] = Field(default_factory=tuple)
    advice: tuple[str, ...] = Field(default_factory=tuple)
    _compiled: tuple[tuple[Severity, tuple[Pattern[str], ...]], ...] = PrivateAttr(default_factory=tuple)

    @field_validator("error", "warning", "advice", mode="before")
    @classmethod
    def _normalise_patterns(cls, value: object) -> tuple[str, ...]:
        """Coerce a tier's configured value into a tuple of patterns.

        Args:
            value: ``None``, a single pattern, or a list of patterns.

        Returns:
            tuple[str, ...]: Patterns in declaration order; empty when unset.

        Raises:
            ConfigError: If the value is neither a string nor a list of strings.
        """

        return _coerce_patterns(value)

    @model_validator(mode="after")
    def _compile_patterns(self) -> SeverityRuleSet:
        """Compile every tier once so classification never re-parses a regex."""

        compiled: list[tuple[Severity, tuple[Pattern[str], ...]]] = []
        for severity, patterns in self._tiers():
            try:
                compiled.append((severity, tuple(re.compile(pattern) for pattern in patterns)))
            except re.error as exc:
                raise ConfigError(f"invalid {severity.value} pattern {exc.pattern!r}: {exc}") from exc
        self._compiled = tuple(compiled)
        return self

    def _tiers(self) -> Iterator[tuple[Severity, tuple[str, ...]]]:
        yield Severity.ERROR, self.error
        yield Severity.WARNING, self.warning
        yield Severity.ADVICE, self.advice

    @classmethod
    def from_store(cls, store: ConfigStore) -> SeverityRuleSet:
        """Build a rule set from the ``lint.pylint.codes.*`` keys of ``store``."""

        return cls(
            error=store.get(ERROR_CODES_KEY),
            warning=store.get(WARNING_CODES_KEY),
            advice=store.get(ADVICE_CODES_KEY),
        )

    @property
    def is_configured(self) -> bool:
        """Return ``True`` when at least one tier carries a pattern."""

        return any(patterns for _, patterns in self._tiers())

    def ensure_configured(self) -> None:
        """Raise :class:`ConfigError` when no tier has any pattern.

        Raises:
            ConfigError: If the error, warning and advice tiers are all empty.
        """

        if not self.is_configured:
            raise ConfigError(UNCONFIGURED_MESSAGE)

    def classify(self, code: str) -> Severity:
        """Return the severity of ``code`` under these rules.

        Args:
            code: Diagnostic code reported by the tool, e.g. ``"W0612"``.

        Returns:
            Severity: Tier of the first matching pattern, or ``DISABLED``.

        Raises:
            ConfigError: If the rule set is unconfigured.
        """

        self.ensure_configured()
        for severity, patterns in self._compiled:
            for pattern in patterns:
                if pattern.search(code):
                    return severity
        return Severity.DISABLED


def severity_color(severity: Severity) -> str:
    """Return the rich colour name associated with a severity level."""

    return {
        Severity.ERROR: "red",
        Severity.WARNING: "yellow",
        Severity.ADVICE: "blue",
        Severity.DISABLED: "bright_black",
    }.get(severity, "yellow")


__all__ = [
    "ADVICE_CODES_KEY",
    "ERROR_CODES_KEY",
    "WARNING_CODES_KEY",
    "Severity",
    "SeverityRuleSet",
    "severity_color",
]
