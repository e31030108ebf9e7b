"""Validators that turn project state into findings."""

from edgedoc.validate.checks import (
    validate_all,
    validate_index,
    validate_interfaces,
    validate_orphan_files,
    validate_spec_orphans,
    validate_terms,
)
from edgedoc.validate.orphans import (
    OrphanAnalysis,
    OrphanFilesAnalysis,
    ProjectScan,
    find_orphan_source_files,
    find_spec_orphans,
    scan_project,
)

__all__ = [
    "OrphanAnalysis",
    "OrphanFilesAnalysis",
    "ProjectScan",
    "find_orphan_source_files",
    "find_spec_orphans",
    "scan_project",
    "validate_all",
    "validate_index",
    "validate_interfaces",
    "validate_orphan_files",
    "validate_spec_orphans",
    "validate_terms",
]
