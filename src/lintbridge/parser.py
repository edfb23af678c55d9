# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn pylint's textual output into :class:`DiagnosticRecord` objects."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Final

from .models import DiagnosticRecord
from .severity import SeverityRuleSet

LINTER_NAME: Final[str] = "PyLint"

# <CODE>: <LINE>: <DESCRIPTION>, e.g. "W0612: 14: Unused variable 'x'".
DIAGNOSTIC_PATTERN: Final[re.Pattern[str]] = re.compile(r"([A-Z]\d+):\s*(\d+):\s*(.*)$")


def iter_lines(stdout: str | Iterable[str]) -> Iterable[str]:
    """Return output lines from either a blob of text or a line sequence.

    Text is split on ``"\\n"`` only; other line-boundary characters may appear
    inside quoted source text and belong to the description.

    Args:
        stdout: Captured output as one string or as pre-split lines.

    Returns:
        Iterable[str]: The individual lines.
    """
    if isinstance(stdout, str):
        return stdout.split("\n")
    return stdout


def parse_output(
    stdout: str | Iterable[str],
    path: str,
    rules: SeverityRuleSet,
    *,
    linter_name: str = LINTER_NAME,
) -> list[DiagnosticRecord]:
    """Parse pylint output for ``path``.

    Lines that do not look like a diagnostic (module banners, blank lines)
    are skipped. Records whose code maps to ``DISABLED`` are still returned.

    Args:
        stdout: Captured standard output.
        path: Path reported on every record.
        rules: Severity rules applied to each code.
        linter_name: Display name prefixed to the code in ``name``.

    Returns:
        list[DiagnosticRecord]: Records in the order they appear in ``stdout``.
    """

    records: list[DiagnosticRecord] = []
    for line in iter_lines(stdout):
        match = DIAGNOSTIC_PATTERN.search(line)
        if not match:
            continue
        code, line_no, description = (group.strip() for group in match.groups())
        records.append(
            DiagnosticRecord(
                path=path,
                line=int(line_no),
                code=code,
                name=f"{linter_name} {code}",
                description=description,
                severity=rules.classify(code),
            )
        )
    return records


__all__ = ["DIAGNOSTIC_PATTERN", "LINTER_NAME", "parse_output"]
