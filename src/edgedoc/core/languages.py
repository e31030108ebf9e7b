"""Canonical language definitions and file-role classification.

This module defines the authoritative mapping of:
- File extensions → language names
- Test file patterns
- Config file extensions

Language names here are the values stored in ``SourceFile.language`` and
used by the import resolver to pick a resolution strategy.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from fnmatch import fnmatch
from pathlib import Path, PurePosixPath


class SourceRole(StrEnum):
    """Role a code file plays in the project."""

    SOURCE = "source"
    TEST = "test"
    CONFIG = "config"


@dataclass(frozen=True, slots=True)
class Language:
    """Canonical definition for a language name.

    Attributes:
        name: Unique identifier (lowercase, e.g., "python", "typescript")
        extensions: File extensions including dot (e.g., ".py", ".ts")
        module_style: "dotted" for package.module imports, "path" for file specifiers
        test_patterns: Glob patterns for test files
    """

    name: str
    extensions: frozenset[str]
    module_style: str = "path"
    test_patterns: tuple[str, ...] = ()


ALL_LANGUAGES: tuple[Language, ...] = (
    Language(
        name="python",
        extensions=frozenset({".py", ".pyi"}),
        module_style="dotted",
        test_patterns=("test_*.py", "*_test.py", "conftest.py"),
    ),
    Language(
        name="typescript",
        extensions=frozenset({".ts", ".tsx", ".mts", ".cts"}),
        test_patterns=("*.test.ts", "*.spec.ts", "*.test.tsx", "*.spec.tsx"),
    ),
    Language(
        name="javascript",
        extensions=frozenset({".js", ".jsx", ".mjs", ".cjs"}),
        test_patterns=("*.test.js", "*.spec.js", "*.test.jsx", "*.spec.jsx"),
    ),
)

LANGUAGES_BY_NAME: dict[str, Language] = {lang.name: lang for lang in ALL_LANGUAGES}

_EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ext: lang.name for lang in ALL_LANGUAGES for ext in lang.extensions
}

# Directory segments marking a test tree
_TEST_DIRS = frozenset({"tests", "test", "__tests__", "spec"})

CONFIG_EXTENSIONS: frozenset[str] = frozenset({".json", ".yaml", ".yml", ".toml", ".ini", ".cfg"})


def detect_language(path: str | Path) -> str | None:
    """Return the language name for a path, or None if unknown."""
    return _EXTENSION_TO_LANGUAGE.get(Path(path).suffix.lower())


def module_style(language: str | None) -> str:
    """Import specifier style for a language ("dotted" or "path")."""
    lang = LANGUAGES_BY_NAME.get(language or "")
    return lang.module_style if lang is not None else "path"


def is_test_file(path: str | Path) -> bool:
    """Check if a file path matches any known test file pattern.

    Patterns are ``fnmatch``-style globs matched against the filename.
    A file inside a ``tests/``, ``test/``, ``__tests__/`` or ``spec/``
    directory is a test file too.
    """
    p = PurePosixPath(Path(path).as_posix())
    if any(part in _TEST_DIRS for part in p.parts[:-1]):
        return True
    name = p.name
    return any(fnmatch(name, pattern) for lang in ALL_LANGUAGES for pattern in lang.test_patterns)


def classify_role(path: str | Path) -> SourceRole:
    """Classify a code file as test, config or source."""
    if is_test_file(path):
        return SourceRole.TEST
    p = Path(path)
    name = p.name.lower()
    if p.suffix.lower() in CONFIG_EXTENSIONS or "config" in name:
        return SourceRole.CONFIG
    # type declarations and dotfiles (.eslintrc.js)
    if name.endswith(".d.ts") or name.startswith("."):
        return SourceRole.CONFIG
    return SourceRole.SOURCE
