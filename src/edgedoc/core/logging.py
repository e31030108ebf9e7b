"""structlog setup for edgedoc commands.

Every CLI invocation gets a short run id that is stamped on each event.
Module loggers are lazy proxies: ``log = get_logger(__name__)`` at import
time picks up whatever ``configure_logging`` installs later.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from edgedoc.config.models import LoggingConfig, LogOutputConfig

_run_id: ContextVar[str | None] = ContextVar("run_id", default=None)

_CONSOLE_DESTINATIONS = ("stderr", "stdout")


def get_run_id() -> str | None:
    return _run_id.get()


def set_run_id(run_id: str | None = None) -> str:
    """Set the run id, generating one when none is given."""
    rid = run_id or uuid4().hex[:12]
    _run_id.set(rid)
    return rid


def clear_run_id() -> None:
    _run_id.set(None)


def _stamp_run_id(
    _logger: structlog.types.WrappedLogger,
    _method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    if rid := get_run_id():
        event_dict["run_id"] = rid
    return event_dict


class ConsoleSuppressingFilter(logging.Filter):
    """Drops console records while a spinner owns the terminal."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: ARG002
        from edgedoc.core.progress import is_console_suppressed

        return not is_console_suppressed()


def _level(name: str | None, fallback: int = logging.WARNING) -> int:
    if not name:
        return fallback
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else fallback


def _build_handler(
    output: LogOutputConfig,
    *,
    machine_output: bool,
    pre_chain: list[structlog.types.Processor],
) -> logging.Handler:
    """One handler per configured output.

    With ``machine_output`` stdout carries the JSON payload, so a console
    output pointed at stdout is written to stderr instead.
    """
    handler: logging.Handler
    destination = output.destination
    if destination == "stdout" and machine_output:
        destination = "stderr"

    if destination in _CONSOLE_DESTINATIONS:
        stream = sys.stdout if destination == "stdout" else sys.stderr
        handler = logging.StreamHandler(stream)
        handler.addFilter(ConsoleSuppressingFilter())
        renderer: structlog.types.Processor = (
            structlog.processors.JSONRenderer()
            if output.format == "json"
            else structlog.dev.ConsoleRenderer(
                colors=stream.isatty(), pad_event_to=0, pad_level=False
            )
        )
    else:
        path = Path(destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a")
        renderer = (
            structlog.processors.JSONRenderer()
            if output.format == "json"
            else structlog.dev.ConsoleRenderer(colors=False, pad_event_to=0, pad_level=False)
        )

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    )
    return handler


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    level: str = "WARNING",
    machine_output: bool = False,
) -> None:
    """Route structlog through stdlib handlers, one per configured output.

    Without ``config`` a single console output on stderr is used at
    ``level``. Can be called again; the previous handlers are replaced.
    """
    from edgedoc.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(level=level, outputs=[LogOutputConfig()])

    root_level = _level(config.level)
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
        _stamp_run_id,  # type: ignore[list-item]
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    for old in list(root_logger.handlers):
        root_logger.removeHandler(old)
        if isinstance(old, logging.FileHandler):
            old.close()
    root_logger.setLevel(root_level)

    for output in config.outputs:
        handler = _build_handler(output, machine_output=machine_output, pre_chain=pre_chain)
        handler.setLevel(_level(output.level, root_level))
        root_logger.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Lazy module logger. Binding happens on first use, after configuration."""
    if name:
        return structlog.get_logger(logger=name)  # type: ignore[no-any-return]
    return structlog.get_logger()  # type: ignore[no-any-return]
