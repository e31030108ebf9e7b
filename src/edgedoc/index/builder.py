"""Reference index builder.

Builds in two passes:

1. **Forward**: read documents, source facts and terms into one-directional
   maps (feature → code, code → imports, interface → from/to, …).
2. **Invert**: derive every reverse relation (code → documenting documents,
   code → importers, dependency → dependents, interface → providers and
   consumers, term → references) from the forward maps.

``assemble_index`` is pure. ``ReferenceIndexBuilder`` adds discovery,
scanning and the snapshot write around it.
"""

from __future__ import annotations

import time
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from edgedoc.config.loader import get_index_path
from edgedoc.config.models import EdgeDocConfig
from edgedoc.core.languages import classify_role, detect_language
from edgedoc.core.logging import get_logger
from edgedoc.docs.loader import load_documents
from edgedoc.docs.models import DocumentSet
from edgedoc.extraction.registry import ExtractorRegistry
from edgedoc.graph.dependency import DependencyGraph, build_dependency_graph
from edgedoc.graph.scan import ScanResult, scan_sources
from edgedoc.index.models import (
    CodeEntry,
    ExportEntry,
    FeatureCodeLinks,
    FeatureEntry,
    FeatureFeatureLinks,
    FeatureInterfaceLinks,
    FeatureTermLinks,
    FeatureTestLinks,
    InterfaceEntry,
    ReferenceIndex,
    TermDefinitionEntry,
    TermEntry,
    TermReferenceEntry,
)
from edgedoc.index.store import save_index
from edgedoc.terms.loader import load_term_registry
from edgedoc.terms.registry import TermRegistry

log = get_logger(__name__)


@dataclass
class IndexStats:
    """Counts reported after a build."""

    features: int
    code_files: int
    interfaces: int
    terms: int
    term_references: int
    import_edges: int
    external_imports: int
    extraction_failures: int
    elapsed_ms: float = 0.0


@dataclass
class BuildResult:
    """A built index plus the intermediate structures it came from."""

    index: ReferenceIndex
    stats: IndexStats
    documents: DocumentSet
    scan: ScanResult
    graph: DependencyGraph
    terms: TermRegistry
    output_path: Path | None = None


def _sorted(values: set[str] | list[str]) -> list[str]:
    return sorted(set(values))


def assemble_index(
    documents: DocumentSet,
    scan: ScanResult,
    graph: DependencyGraph,
    terms: TermRegistry,
    *,
    include_symbols: bool = True,
    path_exists: Callable[[str], bool] | None = None,
) -> ReferenceIndex:
    """Combine documents, code facts and terms into a bidirectional index."""
    features = documents.features

    # ---------------------------------------------------------------
    # Pass one: forward maps
    # ---------------------------------------------------------------

    provides: dict[str, set[str]] = {fid: set(f.provides) for fid, f in features.items()}
    uses: dict[str, set[str]] = {fid: set(f.uses) for fid, f in features.items()}
    for iid, interface in documents.interfaces.items():
        if interface.from_feature in provides:
            provides[interface.from_feature].add(iid)
        if interface.to_feature in uses:
            uses[interface.to_feature].add(iid)

    term_defs_by_file: dict[str, set[str]] = defaultdict(set)
    for definition in terms.definitions():
        term_defs_by_file[definition.file].add(definition.name)
    term_uses_by_file: dict[str, set[str]] = defaultdict(set)
    for reference in terms.references:
        term_uses_by_file[reference.file].add(terms.resolve(reference.text))

    feature_entries: dict[str, FeatureEntry] = {}
    for fid, feature in sorted(features.items()):
        feature_entries[fid] = FeatureEntry(
            file=feature.file,
            entry_point=feature.entry_point,
            code=FeatureCodeLinks(uses=_sorted(feature.code_references)),
            features=FeatureFeatureLinks(
                related=_sorted([r for r in feature.related_features if r != fid]),
                depends_on=_sorted(feature.depends_on),
            ),
            interfaces=FeatureInterfaceLinks(
                provides=_sorted(provides[fid]),
                uses=_sorted(uses[fid]),
            ),
            terms=FeatureTermLinks(
                defines=_sorted(term_defs_by_file.get(feature.file, set())),
                uses=_sorted(term_uses_by_file.get(feature.file, set())),
            ),
            tests=FeatureTestLinks(tested_by=_sorted(feature.test_files)),
            shared_types=_sorted(feature.shared_types),
        )

    code_entries: dict[str, CodeEntry] = {}
    for path in sorted(scan.files):
        source = scan.files[path]
        result = scan.results.get(path)
        exports: list[ExportEntry] = []
        if include_symbols and result is not None:
            exports = [
                ExportEntry(name=e.name, kind=e.kind.value, line=e.line, default=e.is_default)
                for e in result.exports
            ]
        code_entries[path] = CodeEntry(
            type=source.role.value,
            language=source.language,
            imports=_sorted(graph.imports_of(path)),
            external_imports=graph.external_of(path),
            exports=exports,
        )

    interface_entries: dict[str, InterfaceEntry] = {}
    for iid, interface in sorted(documents.interfaces.items()):
        interface_entries[iid] = InterfaceEntry(
            file=interface.file,
            from_feature=interface.from_feature,
            to_feature=interface.to_feature,
            type=interface.type,
            shared_types=_sorted(interface.shared_types),
        )

    # ---------------------------------------------------------------
    # Pass two: inversion
    # ---------------------------------------------------------------

    # code -> documenting documents (documented paths the scan didn't see get an entry too)
    for path, owners in documents.code_references().items():
        entry = code_entries.get(path)
        if entry is None:
            entry = CodeEntry(
                type=classify_role(path).value,
                language=detect_language(path),
                exists=path_exists(path) if path_exists else False,
            )
            code_entries[path] = entry
        entry.documented_in = _sorted(entry.documented_in + owners)

    # code -> importers
    for path, entry in code_entries.items():
        entry.imported_by = _sorted(graph.importers_of(path))

    # feature -> files that import its code without being documented by it
    for fid, entry in feature_entries.items():
        own = set(entry.code.uses)
        importers: set[str] = set()
        for path in own:
            importers |= graph.importers_of(path)
        entry.code.used_by = _sorted(importers - own)

    # depends_on -> used_by; related is an unordered edge
    for fid, feature in features.items():
        for target in feature.depends_on:
            if target in feature_entries:
                feature_entries[target].features.used_by.append(fid)
        for target in feature.related_features:
            if target in feature_entries and target != fid:
                feature_entries[target].features.related.append(fid)
    for entry in feature_entries.values():
        entry.features.used_by = _sorted(entry.features.used_by)
        entry.features.related = _sorted(entry.features.related)

    # interface -> providers / consumers
    for fid in sorted(feature_entries):
        for iid in provides[fid]:
            if iid in interface_entries:
                interface_entries[iid].providers.append(fid)
        for iid in uses[fid]:
            if iid in interface_entries:
                interface_entries[iid].consumers.append(fid)

    # term -> references
    term_entries: dict[str, TermEntry] = {}
    for name in terms.names:
        definition = terms.get(name)
        if definition is None:
            continue
        refs = terms.references_to(name)
        term_entries[name] = TermEntry(
            definition=TermDefinitionEntry(
                file=definition.file,
                line=definition.line,
                scope=definition.scope.value,
                kind=definition.kind.value,
                definition=definition.definition,
                aliases=list(definition.aliases),
                related=list(definition.related),
                parent=definition.parent,
            ),
            references=[
                TermReferenceEntry(file=r.file, line=r.line, context=r.context) for r in refs
            ],
            usage_count=len(refs),
        )

    return ReferenceIndex(
        features=feature_entries,
        code=dict(sorted(code_entries.items())),
        interfaces=interface_entries,
        terms=term_entries,
    )


class ReferenceIndexBuilder:
    """Discovers, scans and assembles a project's reference index."""

    def __init__(
        self,
        root: Path,
        config: EdgeDocConfig | None = None,
        registry: ExtractorRegistry | None = None,
    ) -> None:
        self._root = root
        self._config = config or EdgeDocConfig()
        self._registry = registry or ExtractorRegistry(
            max_error_ratio=self._config.sources.max_error_ratio
        )

    def build(self, *, include_symbols: bool | None = None) -> BuildResult:
        """Build the index in memory."""
        start = time.perf_counter()
        config = self._config
        if include_symbols is None:
            include_symbols = config.index.include_symbols

        documents = load_documents(self._root, config.docs)
        scan = scan_sources(self._root, self._registry, config.sources)
        graph = build_dependency_graph(
            scan.files, scan.results, python_roots=tuple(config.sources.python_roots)
        )
        terms = load_term_registry(self._root, config)

        index = assemble_index(
            documents,
            scan,
            graph,
            terms,
            include_symbols=include_symbols,
            path_exists=lambda p: (self._root / p).exists(),
        )

        stats = IndexStats(
            features=len(index.features),
            code_files=len(index.code),
            interfaces=len(index.interfaces),
            terms=len(index.terms),
            term_references=len(terms.references),
            import_edges=graph.edge_count,
            external_imports=len(graph.external),
            extraction_failures=len(scan.failures),
            elapsed_ms=(time.perf_counter() - start) * 1000,
        )
        log.info(
            "reference_index_built",
            features=stats.features,
            code_files=stats.code_files,
            interfaces=stats.interfaces,
            terms=stats.terms,
            elapsed_ms=round(stats.elapsed_ms, 1),
        )
        return BuildResult(
            index=index,
            stats=stats,
            documents=documents,
            scan=scan,
            graph=graph,
            terms=terms,
        )

    def build_and_save(
        self,
        output_path: Path | None = None,
        *,
        include_symbols: bool | None = None,
    ) -> BuildResult:
        """Build the index and write the snapshot atomically."""
        result = self.build(include_symbols=include_symbols)
        path = output_path or get_index_path(self._root, self._config)
        save_index(result.index, path)
        result.output_path = path
        return result
