"""edgedoc error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Index (reference snapshot)
- 4xxx: Extraction
- 5xxx: Documents
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Index (3xxx)
    INDEX_NOT_FOUND = 3001
    INDEX_CORRUPT = 3002
    INDEX_WRITE_FAILED = 3003
    INDEX_ENTRY_NOT_FOUND = 3004

    # Extraction (4xxx)
    EXTRACTION_FAILED = 4001
    EXTRACTION_DECODE_ERROR = 4002
    GRAMMAR_UNAVAILABLE = 4003

    # Documents (5xxx)
    DOCUMENT_READ_ERROR = 5001

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class EdgeDocError(Exception):
    """Base error with structured context for CLI and JSON output."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'INDEX_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(EdgeDocError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class IndexStoreError(EdgeDocError):
    """Reference snapshot errors (missing, unreadable, unknown entries)."""

    @classmethod
    def not_found(cls, path: str) -> "IndexStoreError":
        return cls(
            code=ErrorCode.INDEX_NOT_FOUND,
            message=f"Reference index not found at {path}. Run 'edgedoc graph build' first.",
            details={"path": path},
        )

    @classmethod
    def corrupt(cls, path: str, reason: str) -> "IndexStoreError":
        return cls(
            code=ErrorCode.INDEX_CORRUPT,
            message=f"Reference index at {path} is unreadable: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def write_failed(cls, path: str, reason: str) -> "IndexStoreError":
        return cls(
            code=ErrorCode.INDEX_WRITE_FAILED,
            message=f"Failed to write reference index to {path}: {reason}",
            retryable=True,
            details={"path": path, "reason": reason},
        )

    @classmethod
    def entry_not_found(cls, section: str, key: str) -> "IndexStoreError":
        return cls(
            code=ErrorCode.INDEX_ENTRY_NOT_FOUND,
            message=f"No {section} entry named '{key}' in the reference index",
            details={"section": section, "key": key},
        )


class ExtractionError(EdgeDocError):
    """Symbol extraction failures for a single source file."""

    @classmethod
    def malformed(cls, path: str, error_ratio: float) -> "ExtractionError":
        return cls(
            code=ErrorCode.EXTRACTION_FAILED,
            message=f"Too many syntax errors in {path} ({error_ratio:.0%} of nodes)",
            details={"path": path, "error_ratio": round(error_ratio, 3)},
        )

    @classmethod
    def decode_error(cls, path: str, reason: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.EXTRACTION_DECODE_ERROR,
            message=f"Cannot decode {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def grammar_unavailable(cls, grammar: str, reason: str) -> "ExtractionError":
        return cls(
            code=ErrorCode.GRAMMAR_UNAVAILABLE,
            message=f"Tree-sitter grammar '{grammar}' is not available: {reason}",
            details={"grammar": grammar, "reason": reason},
        )


class DocumentError(EdgeDocError):
    """Documentation file errors."""

    @classmethod
    def read_error(cls, path: str, reason: str) -> "DocumentError":
        return cls(
            code=ErrorCode.DOCUMENT_READ_ERROR,
            message=f"Failed to read document {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class InternalError(EdgeDocError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
