"""Shared graph fixtures built from hand-written facts."""

from __future__ import annotations

import pytest

from edgedoc.core.languages import SourceRole
from edgedoc.extraction.models import (
    ExportFact,
    ExportKind,
    ExtractionResult,
    ImportFact,
    SourceFile,
)
from edgedoc.graph.dependency import DependencyGraph, build_dependency_graph


def _source(path: str, role: SourceRole = SourceRole.SOURCE) -> SourceFile:
    return SourceFile(path=path, language="typescript", role=role)


@pytest.fixture
def abc_graph() -> tuple[DependencyGraph, dict[str, list[ExportFact]]]:
    """b imports a; c is standalone; b also pulls in an npm package.

    a exports Foo, c exports Bar, b exports nothing.
    """
    files = {p: _source(p) for p in ("src/a.ts", "src/b.ts", "src/c.ts")}
    results = {
        "src/a.ts": ExtractionResult(
            file="src/a.ts",
            language="typescript",
            exports=[ExportFact("src/a.ts", "Foo", ExportKind.CLASS, line=1)],
        ),
        "src/b.ts": ExtractionResult(
            file="src/b.ts",
            language="typescript",
            imports=[
                ImportFact("src/b.ts", "./a", ("Foo",), line=1),
                ImportFact("src/b.ts", "lodash", ("merge",), line=2),
            ],
        ),
        "src/c.ts": ExtractionResult(
            file="src/c.ts",
            language="typescript",
            exports=[ExportFact("src/c.ts", "Bar", ExportKind.FUNCTION, line=3)],
        ),
    }
    graph = build_dependency_graph(files, results)
    exports = {path: result.exports for path, result in results.items()}
    return graph, exports
