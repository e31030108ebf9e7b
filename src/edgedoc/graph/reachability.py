"""Reachability from documented files, spec-orphan and orphan-file detection.

A file is *reachable* when it is documented (a seed) or transitively
imported by a documented file. Exports of files that are neither are
"spec orphans". Analysis never fails: seeds missing from the graph still
count as seeds, and files absent from the graph are simply unreachable.

An *orphan file* is the coarser, file-level check: a file that no document
names and nothing imports.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field

from edgedoc.extraction.models import ExportFact, ExportKind
from edgedoc.graph.dependency import DependencyGraph


@dataclass(frozen=True, slots=True)
class OrphanExport:
    """An exported symbol whose file no document reaches."""

    file: str
    name: str
    kind: ExportKind
    line: int = 0


@dataclass
class OrphanReport:
    """Result of a spec-orphan analysis."""

    seeds: frozenset[str]
    reachable: frozenset[str]
    orphans: list[OrphanExport] = field(default_factory=list)

    @property
    def orphan_files(self) -> list[str]:
        return sorted({o.file for o in self.orphans})

    def is_reachable(self, path: str) -> bool:
        return path in self.seeds or path in self.reachable


def normalize_reference(path: str) -> str:
    """Normalize a documented code path to project-relative form."""
    path = path.strip().replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path.lstrip("/")


def compute_reachable(graph: DependencyGraph, seeds: Iterable[str]) -> frozenset[str]:
    """Breadth-first closure of ``seeds`` over forward edges (seeds included).

    The visited set guarantees termination on cycles, and running the
    closure again on its own output returns the same set.
    """
    visited: set[str] = set()
    frontier: deque[str] = deque()
    for seed in seeds:
        if seed not in visited:
            visited.add(seed)
            frontier.append(seed)

    while frontier:
        current = frontier.popleft()
        for target in graph.forward.get(current, ()):
            if target not in visited:
                visited.add(target)
                frontier.append(target)

    return frozenset(visited)


def find_orphans(
    graph: DependencyGraph,
    exports_by_file: Mapping[str, Collection[ExportFact]],
    seeds: Iterable[str],
    *,
    exclude: Collection[str] = (),
) -> OrphanReport:
    """Find exports whose file is neither documented nor reachable.

    Args:
        graph: Dependency graph over the scanned files.
        exports_by_file: Exports per file path.
        seeds: Files named by any document's code references.
        exclude: Files never reported (e.g. tests).
    """
    seed_set = frozenset(normalize_reference(s) for s in seeds)
    reachable = compute_reachable(graph, seed_set)

    orphans: list[OrphanExport] = []
    for path in sorted(exports_by_file):
        if path in reachable or path in exclude:
            continue
        for export in exports_by_file[path]:
            orphans.append(OrphanExport(path, export.name, export.kind, export.line))

    return OrphanReport(seeds=seed_set, reachable=reachable, orphans=orphans)


def find_orphan_files(
    graph: DependencyGraph,
    files: Iterable[str],
    referenced: Iterable[str],
    *,
    exclude: Collection[str] = (),
) -> list[str]:
    """Files that no document names and no other file imports.

    Unlike ``find_orphans`` this is one level deep: a file imported only by
    another orphan is not itself reported.
    """
    named = {normalize_reference(r) for r in referenced}
    return sorted(
        path
        for path in files
        if path not in named and path not in exclude and not graph.reverse.get(path)
    )
