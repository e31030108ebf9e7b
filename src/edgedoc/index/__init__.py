"""Bidirectional reference index: build, persist, query and check."""

from edgedoc.index.builder import BuildResult, IndexStats, ReferenceIndexBuilder, assemble_index
from edgedoc.index.consistency import (
    check_bidirectional_links,
    check_index_symmetry,
    check_sibling_coverage,
    validate_index_consistency,
    validate_interface_links,
)
from edgedoc.index.models import ReferenceIndex
from edgedoc.index.query import code_references, feature_details, overview, term_usage
from edgedoc.index.store import load_index, save_index

__all__ = [
    "BuildResult",
    "IndexStats",
    "ReferenceIndex",
    "ReferenceIndexBuilder",
    "assemble_index",
    "check_bidirectional_links",
    "check_index_symmetry",
    "check_sibling_coverage",
    "code_references",
    "feature_details",
    "load_index",
    "overview",
    "save_index",
    "term_usage",
    "validate_index_consistency",
    "validate_interface_links",
]
