"""Shared fixtures for index tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from edgedoc.index.builder import BuildResult, ReferenceIndexBuilder


@pytest.fixture
def built(sample_project: Path) -> BuildResult:
    """The sample project's index, built in memory."""
    return ReferenceIndexBuilder(sample_project).build()
