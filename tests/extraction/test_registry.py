"""Tests for the extractor registry."""

from __future__ import annotations

from unittest.mock import patch

from edgedoc.extraction.models import ExportFact, ExportKind, ExtractionResult
from edgedoc.extraction.python import PythonExtractor
from edgedoc.extraction.registry import ExtractorRegistry
from edgedoc.extraction.typescript import TypeScriptExtractor


class ShellExtractor:
    """Minimal third-party extractor used to exercise registration."""

    name = "shell"
    extensions = frozenset({".sh"})

    def can_handle(self, path: str) -> bool:
        return path.endswith(".sh")

    def extract(self, source: str | bytes, path: str) -> ExtractionResult:
        return ExtractionResult(
            file=path,
            language=self.name,
            exports=[ExportFact(file=path, name="main", kind=ExportKind.FUNCTION)],
        )


class TestBuiltins:
    def test_builtins_resolve_by_extension(self) -> None:
        registry = ExtractorRegistry()
        assert isinstance(registry.for_path("src/a.ts"), TypeScriptExtractor)
        assert isinstance(registry.for_path("src/a.MJS"), TypeScriptExtractor)
        assert isinstance(registry.for_path("pkg/a.py"), PythonExtractor)

    def test_unsupported_file_returns_none(self) -> None:
        registry = ExtractorRegistry()
        assert registry.for_path("README.md") is None
        assert not registry.supports("Makefile")

    def test_builtins_are_loaded_lazily(self) -> None:
        with patch("edgedoc.extraction.registry._register_builtin_extractors") as register:
            registry = ExtractorRegistry()
            register.assert_not_called()
            registry.for_path("a.py")
            registry.for_path("b.py")
        register.assert_called_once()

    def test_without_builtins_is_empty(self) -> None:
        registry = ExtractorRegistry(builtins=False)
        assert registry.extensions == frozenset()
        assert registry.for_path("a.py") is None

    def test_error_ratio_is_passed_to_builtins(self) -> None:
        registry = ExtractorRegistry(max_error_ratio=0.2)
        extractor = registry.for_path("a.py")
        assert isinstance(extractor, PythonExtractor)
        assert extractor._max_error_ratio == 0.2


class TestRegistration:
    def test_register_adds_new_language(self) -> None:
        # Given
        registry = ExtractorRegistry()
        shell = ShellExtractor()

        # When
        registry.register(shell)

        # Then
        assert registry.for_path("scripts/build.sh") is shell
        assert ".sh" in registry.extensions
        assert ".py" in registry.extensions
        assert registry.extractors()[-1] is shell

    def test_later_registration_replaces_extension(self) -> None:
        registry = ExtractorRegistry()

        class CustomPython(ShellExtractor):
            name = "custom-python"
            extensions = frozenset({".py"})

            def can_handle(self, path: str) -> bool:
                return path.endswith(".py")

        custom = CustomPython()
        registry.register(custom)
        assert registry.for_path("a.py") is custom

    def test_separate_registries_are_independent(self) -> None:
        first = ExtractorRegistry()
        second = ExtractorRegistry()
        first.register(ShellExtractor())
        assert first.supports("a.sh")
        assert not second.supports("a.sh")
