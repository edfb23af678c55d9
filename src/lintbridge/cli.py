# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line entry point that hosts the pylint adapter."""

from __future__ import annotations

from pathlib import Path

import typer

from .config import default_parallel_jobs, load_config
from .errors import InvocationFailedError, LintBridgeError
from .linter import PylintLinter
from .logging import configure_verbose_logging, detect_tty, fail, info, ok, section, warn
from .models import DiagnosticRecord
from .reporting import count_by_severity, dump_records, exit_code_for, records_to_json, visible_records
from .severity import Severity

app = typer.Typer(
    name="lintbridge",
    help="Run pylint and re-classify its diagnostics with configurable severities.",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    """Run pylint and re-classify its diagnostics with configurable severities."""


def collect_paths(paths: list[Path], root: Path) -> list[str]:
    """Expand directories into their ``*.py`` files, relative to ``root`` when possible."""

    collected: list[str] = []
    for raw in paths:
        candidate = raw if raw.is_absolute() else root / raw
        if candidate.is_dir():
            files = sorted(item for item in candidate.rglob("*.py") if item.is_file())
        else:
            files = [candidate]
        for file in files:
            try:
                collected.append(file.relative_to(root).as_posix())
            except ValueError:
                collected.append(str(file))
    return list(dict.fromkeys(collected))


@app.command("lint")
def lint(
    paths: list[Path] = typer.Argument(..., help="Files or directories to lint."),
    root: Path | None = typer.Option(None, "--root", "-r", help="Project root (default: cwd)."),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Explicit TOML configuration file."),
    jobs: int = typer.Option(default_parallel_jobs(), "--jobs", "-j", min=1, help="Concurrent pylint processes."),
    output_format: str = typer.Option("concise", "--format", "-f", help="Output format: concise or json."),
    show_disabled: bool = typer.Option(False, "--show-disabled", help="Also report diagnostics whose codes match no rule."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log invocations to stderr."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable coloured output."),
    no_emoji: bool = typer.Option(False, "--no-emoji", help="Disable emoji in messages."),
) -> None:
    """Lint PATHS with pylint and report diagnostics by configured severity."""

    if output_format not in ("concise", "json"):
        raise typer.BadParameter("--format must be 'concise' or 'json'")
    if verbose:
        configure_verbose_logging()
    use_color = not no_color and detect_tty()
    use_emoji = not no_emoji
    resolved_root = (root or Path.cwd()).resolve()

    try:
        config = load_config(resolved_root, config_file)
        linter = PylintLinter(config, root=resolved_root)
        targets = collect_paths(paths, resolved_root)
        if verbose and output_format == "concise":
            info(
                f"Linting {len(targets)} file(s) with {linter.name} using {jobs} job(s)",
                use_emoji=use_emoji,
                use_color=use_color,
            )
        results = linter.lint_paths(targets, jobs=jobs)
    except InvocationFailedError as exc:
        fail(str(exc), use_emoji=use_emoji, use_color=use_color)
        if exc.stdout:
            typer.echo(exc.stdout, err=True)
        raise typer.Exit(code=2) from exc
    except LintBridgeError as exc:
        fail(str(exc), use_emoji=use_emoji, use_color=use_color)
        raise typer.Exit(code=2) from exc

    shown = {path: visible_records(records, include_disabled=show_disabled) for path, records in results.items()}
    flattened: list[DiagnosticRecord] = [record for records in shown.values() for record in records]
    if output_format == "json":
        typer.echo(records_to_json(shown))
    else:
        _render_concise(
            flattened,
            title=linter.name,
            file_count=len(results),
            use_color=use_color,
            use_emoji=use_emoji,
        )
    raise typer.Exit(code=exit_code_for(flattened))


def _render_concise(
    records: list[DiagnosticRecord],
    *,
    title: str,
    file_count: int,
    use_color: bool,
    use_emoji: bool,
) -> None:
    if not records:
        ok(f"No diagnostics in {file_count} file(s)", use_emoji=use_emoji, use_color=use_color)
        return
    section(title, use_color=use_color)
    dump_records(records, color=use_color, emoji=use_emoji)
    counts = count_by_severity(records)
    summary = ", ".join(f"{counts[severity]} {severity.value}" for severity in Severity if counts[severity])
    message = f"{len(records)} diagnostic(s) in {file_count} file(s): {summary}"
    if counts[Severity.ERROR]:
        fail(message, use_emoji=use_emoji, use_color=use_color)
    else:
        warn(message, use_emoji=use_emoji, use_color=use_color)


__all__ = ["app", "collect_paths", "lint"]
