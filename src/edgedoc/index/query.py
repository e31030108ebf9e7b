"""Read-only queries over a loaded reference index."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from edgedoc.core.errors import IndexStoreError
from edgedoc.graph.reachability import normalize_reference
from edgedoc.index.models import CodeEntry, FeatureEntry, ReferenceIndex, TermEntry


@dataclass
class CodeReferences:
    """Everything the index knows about one code file."""

    path: str
    entry: CodeEntry
    features: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "features": self.features, **self.entry.model_dump()}


def _features_by_file(index: ReferenceIndex) -> dict[str, str]:
    return {entry.file: fid for fid, entry in index.features.items()}


def feature_details(index: ReferenceIndex, feature_id: str) -> FeatureEntry:
    """Full entry of one feature.

    Raises:
        IndexStoreError: If the feature isn't in the index.
    """
    entry = index.features.get(feature_id)
    if entry is None:
        raise IndexStoreError.entry_not_found("feature", feature_id)
    return entry


def code_references(index: ReferenceIndex, path: str) -> CodeReferences:
    """Imports, importers and documenting features of a code file.

    Raises:
        IndexStoreError: If the file isn't in the index.
    """
    key = normalize_reference(path)
    entry = index.code.get(key)
    if entry is None:
        raise IndexStoreError.entry_not_found("code", key)
    owners = _features_by_file(index)
    features = sorted({owners[doc] for doc in entry.documented_in if doc in owners})
    return CodeReferences(path=key, entry=entry, features=features)


def term_usage(index: ReferenceIndex, name: str) -> TermEntry:
    """Definition and references of a term, by canonical name or alias.

    Raises:
        IndexStoreError: If no term or alias matches.
    """
    entry = index.terms.get(name)
    if entry is not None:
        return entry
    for term in index.terms.values():
        if name in term.definition.aliases:
            return term
    raise IndexStoreError.entry_not_found("term", name)


def overview(index: ReferenceIndex) -> dict[str, Any]:
    """Summary counts for the whole snapshot."""
    code = index.code.values()
    return {
        "version": index.version,
        "generated": index.generated.isoformat(),
        **index.counts(),
        "documented_code": sum(1 for e in code if e.documented_in),
        "missing_code": sum(1 for e in code if not e.exists),
        "import_edges": sum(len(e.imports) for e in code),
        "term_references": sum(t.usage_count for t in index.terms.values()),
    }
