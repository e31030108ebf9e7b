"""Core module exports."""

from edgedoc.core.errors import (
    ConfigError,
    DocumentError,
    EdgeDocError,
    ErrorCode,
    ExtractionError,
    IndexStoreError,
    InternalError,
)
from edgedoc.core.findings import Finding, FindingKind, ValidationReport
from edgedoc.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from edgedoc.core.progress import spinner, status, task

__all__ = [
    # Errors
    "ConfigError",
    "DocumentError",
    "EdgeDocError",
    "ErrorCode",
    "ExtractionError",
    "IndexStoreError",
    "InternalError",
    # Findings
    "Finding",
    "FindingKind",
    "ValidationReport",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "spinner",
    "status",
    "task",
]
