# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Reporting sink: suppression of disabled diagnostics and rendering."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence

from rich.text import Text

from .logging import get_console
from .models import DiagnosticRecord
from .severity import Severity, severity_color


def visible_records(
    records: Iterable[DiagnosticRecord],
    *,
    include_disabled: bool = False,
) -> list[DiagnosticRecord]:
    """Return ``records`` without ``DISABLED`` entries unless requested."""

    if include_disabled:
        return list(records)
    return [record for record in records if record.severity is not Severity.DISABLED]


def format_record_line(record: DiagnosticRecord, location_width: int, color: bool) -> Text:
    """Return ``<severity> <path>:<line> <description> [<code>]`` as rich text."""

    severity_text = Text(record.severity.value.ljust(len(Severity.DISABLED.value)))
    if color:
        severity_text.stylize(severity_color(record.severity))
    location = record.location.ljust(location_width) if location_width else record.location
    code_text = Text(record.code, style="bold" if color else "")
    line = Text("  ")
    line.append_text(severity_text)
    line.append(" ")
    line.append(location)
    line.append(" ")
    line.append(record.description)
    line.append(" [")
    line.append_text(code_text)
    line.append("]")
    return line


def dump_records(records: Sequence[DiagnosticRecord], *, color: bool, emoji: bool) -> None:
    """Print formatted records to the shared console."""

    if not records:
        return
    location_width = max(len(record.location) for record in records)
    console = get_console(color=color, emoji=emoji)
    for record in records:
        console.print(format_record_line(record, location_width, color))


def records_to_json(results: Mapping[str, Sequence[DiagnosticRecord]]) -> str:
    """Serialise per-path records as a JSON document."""

    payload = {path: [record.model_dump(mode="json") for record in records] for path, records in results.items()}
    return json.dumps(payload, indent=2)


def count_by_severity(records: Iterable[DiagnosticRecord]) -> dict[Severity, int]:
    """Return how many records fall into each severity."""

    counts = dict.fromkeys(Severity, 0)
    for record in records:
        counts[record.severity] += 1
    return counts


def exit_code_for(records: Iterable[DiagnosticRecord]) -> int:
    """Return ``1`` when any record is an error, otherwise ``0``."""

    return 1 if any(record.severity is Severity.ERROR for record in records) else 0


__all__ = [
    "count_by_severity",
    "dump_records",
    "exit_code_for",
    "format_record_line",
    "records_to_json",
    "visible_records",
]
