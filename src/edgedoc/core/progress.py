"""Progress feedback on stderr for the human-readable CLI output.

Everything here writes to stderr, so stdout stays reserved for results.
While a spinner is drawn, structlog console handlers are muted (see
``ConsoleSuppressingFilter``); file outputs keep logging.
"""

from __future__ import annotations

import sys
import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console

from edgedoc.core.logging import get_logger

log = get_logger(__name__)

_console = Console(stderr=True, highlight=False)

_PREFIXES = {
    "success": "[green]✓[/green] ",
    "error": "[red]✗[/red] ",
    "warning": "[yellow]![/yellow] ",
    "info": "  ",
}

_muted = threading.local()


def is_console_suppressed() -> bool:
    return getattr(_muted, "active", False)


@contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Mute console log handlers for the block."""
    previous = is_console_suppressed()
    _muted.active = True
    try:
        yield
    finally:
        _muted.active = previous


def _interactive() -> bool:
    return sys.stderr.isatty()


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """One styled line, e.g. ``status("Index written", style="success")``."""
    _console.print(" " * indent + _PREFIXES.get(style, "") + message)


@contextmanager
def spinner(message: str, *, enabled: bool = True) -> Iterator[None]:
    """Animated spinner on a terminal, a single ``message...`` line otherwise.

    ``enabled=False`` prints nothing, which is what ``--json`` commands use.
    """
    if not enabled:
        yield
    elif _interactive():
        with suppress_console_logs(), _console.status(f"[cyan]{message}[/cyan]"):
            yield
    else:
        _console.print(f"{message}...")
        yield


@contextmanager
def task(name: str, *, enabled: bool = True) -> Iterator[None]:
    """Spinner plus a timed ``✓ name (0.4s)`` or ``✗ name failed: ...`` line."""
    start = time.perf_counter()
    try:
        with spinner(name, enabled=enabled):
            yield
    except Exception as e:
        log.debug("task_failed", task=name, error=str(e))
        if enabled:
            status(f"{name} failed: {e}", style="error")
        raise
    if enabled:
        status(f"{name} ({time.perf_counter() - start:.1f}s)", style="success")
