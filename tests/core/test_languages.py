"""Tests for core/languages.py."""

from __future__ import annotations

import pytest

from edgedoc.core.languages import (
    SourceRole,
    classify_role,
    detect_language,
    is_test_file,
    module_style,
)


class TestDetectLanguage:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("src/a.py", "python"),
            ("types.pyi", "python"),
            ("src/app.ts", "typescript"),
            ("src/App.TSX", "typescript"),
            ("lib/mod.mjs", "javascript"),
            ("index.jsx", "javascript"),
            ("README.md", None),
            ("Makefile", None),
        ],
    )
    def test_by_extension(self, path: str, expected: str | None) -> None:
        assert detect_language(path) == expected


class TestModuleStyle:
    def test_python_is_dotted(self) -> None:
        assert module_style("python") == "dotted"

    def test_typescript_and_unknown_are_paths(self) -> None:
        assert module_style("typescript") == "path"
        assert module_style(None) == "path"


class TestIsTestFile:
    @pytest.mark.parametrize(
        "path",
        [
            "tests/graph/test_dependency.py",
            "pkg/thing_test.py",
            "conftest.py",
            "src/widget.test.ts",
            "src/widget.spec.tsx",
            "src/__tests__/widget.ts",
        ],
    )
    def test_detected(self, path: str) -> None:
        assert is_test_file(path)

    @pytest.mark.parametrize("path", ["src/testing.py", "src/contest.ts", "src/latest.py"])
    def test_not_detected(self, path: str) -> None:
        assert not is_test_file(path)


class TestClassifyRole:
    def test_test_wins(self) -> None:
        assert classify_role("tests/config_test.py") is SourceRole.TEST

    def test_config_by_name(self) -> None:
        assert classify_role("vite.config.ts") is SourceRole.CONFIG
        assert classify_role("settings.json") is SourceRole.CONFIG

    def test_declarations_and_dotfiles_are_config(self) -> None:
        assert classify_role("src/types/env.d.ts") is SourceRole.CONFIG
        assert classify_role(".eslintrc.js") is SourceRole.CONFIG

    def test_source_default(self) -> None:
        assert classify_role("src/a.ts") is SourceRole.SOURCE
