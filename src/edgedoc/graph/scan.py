"""Source tree scan: discover code files and extract their facts.

A failure in one file never aborts the batch. It is logged at warning
level and recorded in ``ScanResult.failures``. The file stays a graph node
with no facts.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from edgedoc.config.models import SourcesConfig
from edgedoc.core.errors import EdgeDocError
from edgedoc.core.excludes import iter_project_files
from edgedoc.core.languages import classify_role, detect_language
from edgedoc.core.logging import get_logger
from edgedoc.extraction.models import ExportFact, ExtractionResult, SourceFile
from edgedoc.extraction.registry import ExtractorRegistry

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ScanFailure:
    """A file whose extraction failed."""

    path: str
    error: str
    code: str | None = None


@dataclass
class ScanResult:
    """Files found by a scan and the facts extracted from them."""

    files: dict[str, SourceFile] = field(default_factory=dict)
    results: dict[str, ExtractionResult] = field(default_factory=dict)
    failures: list[ScanFailure] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def paths(self) -> set[str]:
        return set(self.files)

    def exports_by_file(self) -> dict[str, list[ExportFact]]:
        return {path: result.exports for path, result in self.results.items()}


def scan_sources(
    root: Path,
    registry: ExtractorRegistry,
    config: SourcesConfig | None = None,
    *,
    paths: Iterable[str] | None = None,
) -> ScanResult:
    """Extract facts from every supported file under ``root``.

    Args:
        root: Project root; all stored paths are relative to it.
        registry: Extractors to use. Files without one are ignored.
        config: Size limits and directory excludes.
        paths: Explicit project-relative paths to scan instead of walking.
    """
    config = config or SourcesConfig()
    max_bytes = config.max_file_size_kb * 1024

    if paths is None:
        paths = iter_project_files(
            root,
            suffixes=registry.extensions,
            extra_excludes=config.exclude_dirs,
            include_dirs=config.include_dirs,
        )

    result = ScanResult()
    for rel_path in paths:
        extractor = registry.for_path(rel_path)
        if extractor is None:
            continue

        full_path = root / rel_path
        try:
            size = full_path.stat().st_size
        except OSError as e:
            log.warning("source_unreadable", file=rel_path, error=str(e))
            result.failures.append(ScanFailure(rel_path, str(e)))
            continue
        if size > max_bytes:
            log.info("source_skipped_too_large", file=rel_path, size=size)
            result.skipped.append(rel_path)
            continue

        result.files[rel_path] = SourceFile(
            path=rel_path,
            language=detect_language(rel_path) or extractor.name,
            role=classify_role(rel_path),
        )

        try:
            result.results[rel_path] = extractor.extract(full_path.read_bytes(), rel_path)
        except EdgeDocError as e:
            log.warning("extraction_failed", file=rel_path, error=e.message, code=e.error_name)
            result.failures.append(ScanFailure(rel_path, e.message, e.error_name))
        except Exception as e:  # noqa: BLE001
            # Third-party parser errors are isolated to the file like ours
            log.warning("extraction_failed", file=rel_path, error=str(e))
            result.failures.append(ScanFailure(rel_path, str(e)))

    log.debug(
        "scan_complete",
        files=len(result.files),
        failures=len(result.failures),
        skipped=len(result.skipped),
    )
    return result
