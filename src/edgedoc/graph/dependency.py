"""File-level dependency graph built from extracted import facts.

Forward (imports) and reverse (imported by) adjacency are filled in the
same single pass over the facts, so ``B in forward[A]`` holds iff
``A in reverse[B]``. Unresolved specifiers are kept as external
dependencies and never become edges.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from edgedoc.core.logging import get_logger
from edgedoc.extraction.models import ExtractionResult, SourceFile
from edgedoc.graph.resolver import ImportResolver

log = get_logger(__name__)


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UnresolvedImport:
    """An import that points outside the project (or nowhere)."""

    file: str
    specifier: str
    line: int = 0


@dataclass
class DependencyGraph:
    """Directed file graph with both adjacency directions."""

    nodes: set[str] = field(default_factory=set)
    forward: dict[str, set[str]] = field(default_factory=dict)
    reverse: dict[str, set[str]] = field(default_factory=dict)
    external: list[UnresolvedImport] = field(default_factory=list)

    def imports_of(self, path: str) -> set[str]:
        return self.forward.get(path, set())

    def importers_of(self, path: str) -> set[str]:
        return self.reverse.get(path, set())

    def external_of(self, path: str) -> list[str]:
        return sorted({u.specifier for u in self.external if u.file == path})

    def edges(self) -> Iterator[tuple[str, str]]:
        for source in sorted(self.forward):
            for target in sorted(self.forward[source]):
                yield source, target

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.forward.values())

    def is_symmetric(self) -> bool:
        """Check every forward edge has its reverse entry and vice versa."""
        for source, targets in self.forward.items():
            if any(source not in self.reverse.get(t, ()) for t in targets):
                return False
        for target, sources in self.reverse.items():
            if any(target not in self.forward.get(s, ()) for s in sources):
                return False
        return True


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def build_dependency_graph(
    files: Mapping[str, SourceFile],
    results: Mapping[str, ExtractionResult],
    *,
    python_roots: tuple[str, ...] | list[str] = ("", "src"),
) -> DependencyGraph:
    """Resolve every import fact and build the graph in one pass.

    Args:
        files: All known source files (graph nodes), keyed by path.
        results: Extraction results for the files that extracted cleanly.
        python_roots: Roots for absolute dotted imports.
    """
    resolver = ImportResolver(files.keys(), python_roots=python_roots)
    graph = DependencyGraph(nodes=set(files))
    for path in graph.nodes:
        graph.forward[path] = set()
        graph.reverse[path] = set()

    for path in sorted(results):
        result = results[path]
        language = files[path].language if path in files else result.language
        for fact in result.imports:
            targets = resolver.resolve_fact(fact, language)
            if not targets:
                graph.external.append(UnresolvedImport(path, fact.specifier, fact.line))
                continue
            for target in targets:
                graph.forward.setdefault(path, set()).add(target)
                graph.reverse.setdefault(target, set()).add(path)

    log.debug(
        "dependency_graph_built",
        nodes=len(graph.nodes),
        edges=graph.edge_count,
        external=len(graph.external),
    )
    return graph
