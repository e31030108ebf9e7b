"""Canonical exclude patterns with tiered architecture.

Tier 0 (HARDCODED_DIRS): Never traversed, not user-configurable.
    - VCS internals, the edgedoc data directory

Tier 1 (DEFAULT_PRUNABLE_DIRS): Excluded by default, user can opt back in
    through ``sources.include_dirs``.
    - Dependencies, caches, build outputs
"""

from __future__ import annotations

import os
from collections.abc import Collection, Iterator
from pathlib import Path

# =============================================================================
# Tier 0: HARDCODED - Never traverse, not user-configurable
# =============================================================================

HARDCODED_DIRS: frozenset[str] = frozenset(
    (
        # VCS internals
        ".git",
        ".svn",
        ".hg",
        ".bzr",
        # edgedoc data
        ".edgedoc",
    )
)

# =============================================================================
# Tier 1: DEFAULT_PRUNABLE - Excluded by default, user can override
# =============================================================================

DEFAULT_PRUNABLE_DIRS: frozenset[str] = frozenset(
    (
        # -------------------------------------------------------------------------
        # JavaScript/Node.js ecosystem
        # -------------------------------------------------------------------------
        "node_modules",
        ".npm",
        ".yarn",
        ".pnpm-store",
        "bower_components",
        ".next",  # Next.js build
        ".nuxt",  # Nuxt.js build
        ".turbo",  # Turborepo cache
        # -------------------------------------------------------------------------
        # Python ecosystem
        # -------------------------------------------------------------------------
        "venv",
        ".venv",
        ".virtualenv",
        "virtualenv",
        "__pycache__",
        ".pytest_cache",
        ".mypy_cache",
        ".ruff_cache",
        ".tox",
        ".nox",
        ".eggs",
        "site-packages",
        ".ipynb_checkpoints",
        ".hypothesis",
        "htmlcov",
        # -------------------------------------------------------------------------
        # Generic build/output directories
        # -------------------------------------------------------------------------
        "dist",
        "build",
        "out",
        "coverage",
        ".coverage",
        ".nyc_output",
        # -------------------------------------------------------------------------
        # IDE/Editor directories
        # -------------------------------------------------------------------------
        ".idea",
        ".vscode",
        ".vs",
        # -------------------------------------------------------------------------
        # Misc caches
        # -------------------------------------------------------------------------
        ".cache",
        "tmp",
        "temp",
        "vendor",
    )
)

PRUNABLE_DIRS: frozenset[str] = HARDCODED_DIRS | DEFAULT_PRUNABLE_DIRS


def is_hardcoded_dir(dirname: str) -> bool:
    """Check if directory is hardcoded (never traversable, not overridable)."""
    return dirname in HARDCODED_DIRS


def is_default_prunable(dirname: str) -> bool:
    """Check if directory is prunable by default (but user can override)."""
    return dirname in DEFAULT_PRUNABLE_DIRS


def should_prune(
    dirname: str,
    *,
    extra_excludes: Collection[str] = (),
    include_dirs: Collection[str] = (),
) -> bool:
    """Decide whether a directory is skipped during a project walk."""
    if is_hardcoded_dir(dirname):
        return True
    if dirname in extra_excludes:
        return True
    return is_default_prunable(dirname) and dirname not in include_dirs


def iter_project_files(
    root: Path,
    *,
    suffixes: Collection[str] | None = None,
    extra_excludes: Collection[str] = (),
    include_dirs: Collection[str] = (),
) -> Iterator[str]:
    """Yield project-relative POSIX paths of files under ``root``.

    Directories are pruned in place so excluded trees are never entered.
    Output is sorted per directory, so the walk order is deterministic.

    Args:
        root: Project root.
        suffixes: Lowercase suffixes to keep (e.g. ``{".py", ".ts"}``). None keeps all.
        extra_excludes: Additional directory names to prune.
        include_dirs: Default-prunable directory names to walk anyway.
    """
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            d
            for d in dirnames
            if not should_prune(d, extra_excludes=extra_excludes, include_dirs=include_dirs)
        )
        rel_dir = Path(dirpath).relative_to(root)
        for filename in sorted(filenames):
            if suffixes is not None and Path(filename).suffix.lower() not in suffixes:
                continue
            yield (rel_dir / filename).as_posix()
