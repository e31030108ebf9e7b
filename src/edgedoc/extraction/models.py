"""Facts produced by symbol extractors.

All paths are project-relative POSIX strings. Lines are 1-based and
columns 0-based, matching tree-sitter points shifted by one line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from edgedoc.core.languages import SourceRole


class ExportKind(StrEnum):
    """Kind of an exported symbol."""

    TYPE = "type"
    CLASS = "class"
    FUNCTION = "function"
    VALUE = "value"


@dataclass(frozen=True, slots=True)
class SourceFile:
    """A code file known to the scan."""

    path: str
    language: str
    role: SourceRole


@dataclass(frozen=True, slots=True)
class ImportFact:
    """One import statement (or import-like call) in a source file.

    ``names`` is empty for whole-module imports and ``["*"]`` for wildcard
    and namespace imports.
    """

    file: str
    specifier: str
    names: tuple[str, ...] = ()
    type_only: bool = False
    line: int = 0
    column: int = 0


@dataclass(frozen=True, slots=True)
class ExportFact:
    """One symbol a source file makes available to others."""

    file: str
    name: str
    kind: ExportKind
    is_default: bool = False
    line: int = 0
    column: int = 0


@dataclass
class ExtractionResult:
    """Everything extracted from a single file."""

    file: str
    language: str
    imports: list[ImportFact] = field(default_factory=list)
    exports: list[ExportFact] = field(default_factory=list)

    @property
    def export_names(self) -> list[str]:
        return [e.name for e in self.exports]
