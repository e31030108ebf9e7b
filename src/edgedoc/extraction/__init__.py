"""Per-language symbol extraction (imports and exports)."""

from edgedoc.extraction.base import SymbolExtractor, TreeSitterExtractor
from edgedoc.extraction.models import (
    ExportFact,
    ExportKind,
    ExtractionResult,
    ImportFact,
    SourceFile,
)
from edgedoc.extraction.python import PythonExtractor
from edgedoc.extraction.registry import ExtractorRegistry
from edgedoc.extraction.typescript import TypeScriptExtractor

__all__ = [
    "ExportFact",
    "ExportKind",
    "ExtractionResult",
    "ExtractorRegistry",
    "ImportFact",
    "PythonExtractor",
    "SourceFile",
    "SymbolExtractor",
    "TreeSitterExtractor",
    "TypeScriptExtractor",
]
