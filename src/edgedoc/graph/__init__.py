"""Dependency graph over source files and reachability analysis."""

from edgedoc.graph.dependency import DependencyGraph, UnresolvedImport, build_dependency_graph
from edgedoc.graph.reachability import (
    OrphanExport,
    OrphanReport,
    compute_reachable,
    find_orphans,
    normalize_reference,
)
from edgedoc.graph.resolver import ImportResolver
from edgedoc.graph.scan import ScanFailure, ScanResult, scan_sources

__all__ = [
    "DependencyGraph",
    "ImportResolver",
    "OrphanExport",
    "OrphanReport",
    "ScanFailure",
    "ScanResult",
    "UnresolvedImport",
    "build_dependency_graph",
    "compute_reachable",
    "find_orphans",
    "normalize_reference",
    "scan_sources",
]
