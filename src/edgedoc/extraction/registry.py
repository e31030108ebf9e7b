"""Extractor registry keyed by file extension.

The registry is an ordinary object handed to whoever needs it. Built-in
extractors are registered lazily on first lookup, so constructing a
registry is cheap and a grammar is only loaded when a matching file shows up.
Supporting a new language only takes a ``register()`` call.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from edgedoc.core.logging import get_logger
from edgedoc.extraction.base import SymbolExtractor

log = get_logger(__name__)


class ExtractorRegistry:
    """Registry of symbol extractors, keyed by lowercase extension."""

    def __init__(self, *, builtins: bool = True, max_error_ratio: float = 0.5) -> None:
        self._by_extension: dict[str, SymbolExtractor] = {}
        self._extractors: list[SymbolExtractor] = []
        self._builtins_pending = builtins
        self._max_error_ratio = max_error_ratio

    def register(self, extractor: SymbolExtractor) -> None:
        """Register an extractor for every extension it declares.

        A later registration for the same extension replaces the earlier one.
        """
        self._ensure_builtins()
        self._add(extractor)

    def for_path(self, path: str) -> SymbolExtractor | None:
        """Get the extractor for a path, or None when the file is unsupported."""
        self._ensure_builtins()
        extractor = self._by_extension.get(PurePosixPath(path).suffix.lower())
        if extractor is not None and extractor.can_handle(path):
            return extractor
        return None

    def supports(self, path: str) -> bool:
        return self.for_path(path) is not None

    @property
    def extensions(self) -> frozenset[str]:
        """All registered extensions."""
        self._ensure_builtins()
        return frozenset(self._by_extension)

    def extractors(self) -> list[SymbolExtractor]:
        """Registered extractors, in registration order."""
        self._ensure_builtins()
        return list(self._extractors)

    def _add(self, extractor: SymbolExtractor) -> None:
        if extractor not in self._extractors:
            self._extractors.append(extractor)
        for ext in extractor.extensions:
            self._by_extension[ext.lower()] = extractor
        log.debug(
            "extractor_registered",
            extractor=extractor.name,
            extensions=sorted(extractor.extensions),
        )

    def _ensure_builtins(self) -> None:
        if not self._builtins_pending:
            return
        self._builtins_pending = False
        _register_builtin_extractors(self, self._max_error_ratio)


def _register_builtin_extractors(registry: ExtractorRegistry, max_error_ratio: float) -> None:
    """Register all built-in extractors."""
    # Import here to keep registry construction free of grammar imports
    from edgedoc.extraction.python import PythonExtractor
    from edgedoc.extraction.typescript import TypeScriptExtractor

    registry._add(TypeScriptExtractor(max_error_ratio=max_error_ratio))
    registry._add(PythonExtractor(max_error_ratio=max_error_ratio))
