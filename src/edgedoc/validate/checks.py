"""Project-level validation entry points used by the CLI."""

from __future__ import annotations

from pathlib import Path

from edgedoc.config.loader import get_index_path
from edgedoc.config.models import EdgeDocConfig
from edgedoc.core.errors import IndexStoreError
from edgedoc.core.findings import ValidationReport
from edgedoc.extraction.registry import ExtractorRegistry
from edgedoc.index.consistency import validate_index_consistency, validate_interface_links
from edgedoc.index.store import load_index
from edgedoc.terms.loader import load_term_registry
from edgedoc.validate.orphans import find_orphan_source_files, find_spec_orphans


def validate_terms(root: Path, config: EdgeDocConfig | None = None) -> ValidationReport:
    """Uniqueness, completeness, scope, acyclicity and liveness of terms."""
    config = config or EdgeDocConfig()
    return load_term_registry(root, config).validate(config.terms.rules)


def validate_spec_orphans(
    root: Path,
    config: EdgeDocConfig | None = None,
    registry: ExtractorRegistry | None = None,
) -> ValidationReport:
    return find_spec_orphans(root, config, registry).to_validation_report()


def validate_orphan_files(
    root: Path,
    config: EdgeDocConfig | None = None,
    registry: ExtractorRegistry | None = None,
) -> ValidationReport:
    """Source files that no document names and no file imports."""
    return find_orphan_source_files(root, config, registry).to_validation_report()


def validate_interfaces(
    root: Path,
    config: EdgeDocConfig | None = None,
    *,
    feature: str | None = None,
    namespace: str | None = None,
) -> ValidationReport:
    """Interface link checks over the saved snapshot.

    Raises:
        IndexStoreError: If the snapshot is missing or corrupt, or
            ``feature`` isn't in it.
    """
    index = load_index(get_index_path(root, config))
    if feature is not None and feature not in index.features:
        raise IndexStoreError.entry_not_found("feature", feature)
    return validate_interface_links(index, feature=feature, namespace=namespace)


def validate_index(root: Path, config: EdgeDocConfig | None = None) -> ValidationReport:
    """Bidirectional consistency of the saved snapshot."""
    return validate_index_consistency(load_index(get_index_path(root, config)))


def validate_all(
    root: Path,
    config: EdgeDocConfig | None = None,
    registry: ExtractorRegistry | None = None,
) -> list[ValidationReport]:
    """Every validator; snapshot checks run only when a snapshot exists."""
    config = config or EdgeDocConfig()
    reports = [
        validate_terms(root, config),
        validate_spec_orphans(root, config, registry),
    ]
    if get_index_path(root, config).is_file():
        reports.append(validate_interfaces(root, config))
        reports.append(validate_index(root, config))
    return reports
