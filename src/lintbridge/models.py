# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic record handed to the reporting sink."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .severity import Severity


class DiagnosticRecord(BaseModel):
    """One diagnostic reported by the tool, with its re-classified severity."""

    model_config = ConfigDict(frozen=True)

    path: str
    line: int
    code: str
    name: str
    description: str
    severity: Severity

    @property
    def location(self) -> str:
        """Return ``path:line`` for display."""
        return f"{self.path}:{self.line}"


__all__ = ["DiagnosticRecord"]
