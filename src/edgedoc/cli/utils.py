"""CLI utilities."""

from __future__ import annotations

import json
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import click

from edgedoc.config.constants import DATA_DIR_NAME
from edgedoc.config.loader import load_config
from edgedoc.config.models import EdgeDocConfig
from edgedoc.core.errors import EdgeDocError
from edgedoc.core.findings import ValidationReport
from edgedoc.core.formatting import pluralize
from edgedoc.core.logging import configure_logging

_ICONS = {"error": click.style("✗", fg="red"), "warning": click.style("!", fg="yellow")}


def find_project_root(start_path: Path | None = None) -> Path:
    """Find the project root from the given path.

    Walks up the directory tree looking for a ``.edgedoc`` or ``.git``
    directory. Falls back to ``start_path`` itself when neither is found.

    Args:
        start_path: Starting directory to search from (default: cwd)

    Returns:
        Path to project root
    """
    if start_path is None:
        start_path = Path.cwd()

    start = start_path.resolve()
    current = start
    while True:
        if (current / DATA_DIR_NAME).is_dir() or (current / ".git").exists():
            return current
        if current == current.parent:
            return start
        current = current.parent


@contextmanager
def engine_errors() -> Iterator[None]:
    """Turn engine errors into click errors (exit code 1 with a message)."""
    try:
        yield
    except EdgeDocError as e:
        raise click.ClickException(str(e)) from e


def load_project(path: Path, *, as_json: bool = False) -> tuple[Path, EdgeDocConfig]:
    """Resolve the project root and load its config.

    Applies the project's logging config unless ``-v`` was given. With
    ``as_json`` no log output is written to stdout.
    """
    root = find_project_root(path)
    with engine_errors():
        config = load_config(root)

    ctx = click.get_current_context(silent=True)
    verbose = bool(ctx and ctx.find_root().obj and ctx.find_root().obj.get("verbose"))
    if not verbose:
        configure_logging(config=config.logging, machine_output=as_json)
    return root, config


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def echo_report(report: ValidationReport) -> None:
    """Human-readable findings followed by a one-line verdict."""
    click.echo(click.style(f"━━━ {report.name} ━━━", bold=True))
    for finding in report.findings:
        where = f"{finding.location}: " if finding.location else ""
        click.echo(f"  {_ICONS[finding.severity]} [{finding.kind.value}] {where}{finding.message}")
        if finding.suggestion:
            click.echo(f"      → {finding.suggestion}")

    counts = (
        f"{pluralize(len(report.errors), 'error')}, "
        f"{pluralize(len(report.warnings), 'warning')}"
    )
    if report.passed:
        click.echo(click.style("✓ passed", fg="green") + f" ({counts})")
    else:
        click.echo(click.style("✗ failed", fg="red") + f" ({counts})")


def finish(reports: list[ValidationReport], *, as_json: bool) -> None:
    """Print reports and exit 1 if any has a hard error."""
    if as_json:
        payload = [r.to_dict() for r in reports]
        echo_json(payload[0] if len(payload) == 1 else payload)
    else:
        for report in reports:
            echo_report(report)

    if not all(r.passed for r in reports):
        click.get_current_context().exit(1)
