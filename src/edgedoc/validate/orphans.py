"""Orphan detection.

Two views over the same scan:

- spec orphans: exports of files that no document reaches, directly or
  through imports (warnings),
- orphan files: source files that no feature, interface or shared document
  names and no other file imports (errors).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from edgedoc.config.models import EdgeDocConfig
from edgedoc.core.findings import Finding, FindingKind, ValidationReport
from edgedoc.core.languages import SourceRole
from edgedoc.core.logging import get_logger
from edgedoc.docs.loader import load_documents
from edgedoc.docs.models import DocumentSet
from edgedoc.extraction.registry import ExtractorRegistry
from edgedoc.graph.dependency import DependencyGraph, build_dependency_graph
from edgedoc.graph.reachability import OrphanReport, find_orphan_files, find_orphans
from edgedoc.graph.scan import ScanResult, scan_sources

log = get_logger(__name__)


@dataclass
class ProjectScan:
    """Documents, scanned sources and the import graph of one project."""

    documents: DocumentSet
    scan: ScanResult
    graph: DependencyGraph

    def files_with_role(self, role: SourceRole) -> set[str]:
        return {p for p, f in self.scan.files.items() if f.role is role}


def scan_project(
    root: Path,
    config: EdgeDocConfig | None = None,
    registry: ExtractorRegistry | None = None,
) -> ProjectScan:
    config = config or EdgeDocConfig()
    registry = registry or ExtractorRegistry(max_error_ratio=config.sources.max_error_ratio)

    documents = load_documents(root, config.docs)
    scan = scan_sources(root, registry, config.sources)
    graph = build_dependency_graph(
        scan.files, scan.results, python_roots=tuple(config.sources.python_roots)
    )
    return ProjectScan(documents=documents, scan=scan, graph=graph)


def _failure_findings(scan: ScanResult) -> list[Finding]:
    return [
        Finding(
            kind=FindingKind.EXTRACTION_FAILED,
            severity="warning",
            subject=failure.path,
            message=f"Could not extract symbols: {failure.error}",
            file=failure.path,
        )
        for failure in scan.failures
    ]


@dataclass
class OrphanAnalysis:
    """Orphan report plus the scan and graph it was computed from."""

    report: OrphanReport
    scan: ScanResult
    graph: DependencyGraph

    def to_validation_report(self) -> ValidationReport:
        """Orphans and extraction failures as warnings; never a hard failure."""
        validation = ValidationReport(name="spec-orphans")
        for orphan in self.report.orphans:
            validation.add(
                Finding(
                    kind=FindingKind.SPEC_ORPHAN,
                    severity="warning",
                    subject=orphan.name,
                    message=(
                        f"{orphan.kind.value} '{orphan.name}' is exported by an "
                        "undocumented, unreachable file"
                    ),
                    file=orphan.file,
                    line=orphan.line,
                    suggestion="Add the file to a feature's code_references",
                )
            )
        for finding in _failure_findings(self.scan):
            validation.add(finding)
        validation.stats = {
            "files": len(self.scan.files),
            "seeds": len(self.report.seeds),
            "reachable": len(self.report.reachable),
            "orphan_files": len(self.report.orphan_files),
            "orphan_exports": len(self.report.orphans),
        }
        return validation


def find_spec_orphans(
    root: Path,
    config: EdgeDocConfig | None = None,
    registry: ExtractorRegistry | None = None,
) -> OrphanAnalysis:
    """Scan the project and report exports of files no document reaches.

    Seeds are every path named in a feature, interface or shared document
    (including feature test files).
    """
    config = config or EdgeDocConfig()
    project = scan_project(root, config, registry)

    exclude: set[str] = set()
    if not config.orphans.include_tests:
        exclude = project.files_with_role(SourceRole.TEST)

    report = find_orphans(
        project.graph,
        project.scan.exports_by_file(),
        project.documents.code_references().keys(),
        exclude=exclude,
    )
    log.info(
        "spec_orphans_found",
        files=len(report.orphan_files),
        exports=len(report.orphans),
        reachable=len(report.reachable),
    )
    return OrphanAnalysis(report=report, scan=project.scan, graph=project.graph)


@dataclass
class OrphanFilesAnalysis:
    """Files that are neither documented nor imported."""

    orphans: list[str]
    referenced: frozenset[str]
    scan: ScanResult

    def to_validation_report(self) -> ValidationReport:
        validation = ValidationReport(name="orphans")
        for path in self.orphans:
            validation.add(
                Finding(
                    kind=FindingKind.ORPHAN_FILE,
                    severity="error",
                    subject=path,
                    message=(
                        f"'{path}' is not referenced by any document "
                        "and not imported by any file"
                    ),
                    file=path,
                    suggestion="Reference it in code_references or entry_point, or delete it",
                )
            )
        for finding in _failure_findings(self.scan):
            validation.add(finding)
        validation.stats = {
            "files": len(self.scan.files),
            "referenced": len(self.referenced),
            "orphan_files": len(self.orphans),
        }
        return validation


def find_orphan_source_files(
    root: Path,
    config: EdgeDocConfig | None = None,
    registry: ExtractorRegistry | None = None,
) -> OrphanFilesAnalysis:
    """Scan the project and list source files nothing points at.

    A file counts as referenced when a document lists it in
    ``code_references`` or ``test_files``, or a feature names it as
    ``entry_point``. Config-like files (``*.config.*``, ``.d.ts``, dotfiles)
    are never reported, and test files only with ``orphans.include_tests``.
    """
    config = config or EdgeDocConfig()
    project = scan_project(root, config, registry)

    referenced = set(project.documents.code_references())
    referenced.update(
        f.entry_point for f in project.documents.features.values() if f.entry_point
    )
    exclude = project.files_with_role(SourceRole.CONFIG)
    if not config.orphans.include_tests:
        exclude |= project.files_with_role(SourceRole.TEST)

    orphans = find_orphan_files(project.graph, project.scan.files, referenced, exclude=exclude)
    log.info("orphan_files_found", files=len(orphans), scanned=len(project.scan.files))
    return OrphanFilesAnalysis(
        orphans=orphans, referenced=frozenset(referenced), scan=project.scan
    )
