"""Tests for the reference index builder."""

from __future__ import annotations

import json
from pathlib import Path

from edgedoc.config.models import EdgeDocConfig, IndexConfig, SourcesConfig
from edgedoc.core.languages import SourceRole
from edgedoc.docs.models import DocumentSet, FeatureDoc, InterfaceDoc
from edgedoc.extraction.models import ExtractionResult, ImportFact, SourceFile
from edgedoc.graph.dependency import build_dependency_graph
from edgedoc.graph.scan import ScanResult
from edgedoc.index.builder import BuildResult, ReferenceIndexBuilder, assemble_index
from edgedoc.index.consistency import check_index_symmetry
from edgedoc.terms.registry import TermRegistry


class TestBuild:
    """Building the sample project."""

    def test_top_level_sections(self, built: BuildResult) -> None:
        data = json.loads(built.index.to_json())
        assert list(data) == ["version", "generated", "features", "code", "interfaces", "terms"]
        assert sorted(data["features"]) == ["core", "graph", "terms"]

    def test_every_link_has_its_reverse(self, built: BuildResult) -> None:
        assert check_index_symmetry(built.index) == []

    def test_code_is_linked_to_documents_and_importers(self, built: BuildResult) -> None:
        code = built.index.code

        graph_ts = code["src/graph.ts"]
        assert graph_ts.documented_in == ["tasks/features/graph.md"]
        assert graph_ts.imports == ["src/core.ts"]
        assert graph_ts.imported_by == ["src/terms.ts", "tests/graph.test.ts"]
        assert graph_ts.external_imports == ["lodash"]
        assert [e.name for e in graph_ts.exports] == ["build"]

        assert code["src/core.ts"].imported_by == ["src/graph.ts"]
        assert code["src/orphan.ts"].documented_in == []
        assert code["tests/graph.test.ts"].type == "test"

    def test_documented_but_absent_file_gets_entry(self, built: BuildResult) -> None:
        missing = built.index.code["src/missing.ts"]
        assert missing.exists is False
        assert missing.documented_in == ["tasks/features/terms.md"]
        assert missing.language == "typescript"

    def test_feature_links(self, built: BuildResult) -> None:
        features = built.index.features

        graph = features["graph"]
        assert graph.code.uses == ["src/graph.ts"]
        assert graph.code.used_by == ["src/terms.ts", "tests/graph.test.ts"]
        assert graph.tests.tested_by == ["tests/graph.test.ts"]
        assert graph.features.depends_on == ["core"]
        assert features["core"].features.used_by == ["graph"]

    def test_related_features_are_unordered(self, built: BuildResult) -> None:
        features = built.index.features
        assert features["graph"].features.related == ["terms"]
        assert features["terms"].features.related == ["graph"]

    def test_interface_links(self, built: BuildResult) -> None:
        interface = built.index.interfaces["cli/build"]
        assert interface.providers == ["graph"]
        assert interface.consumers == ["terms"]
        assert interface.from_feature == "graph"
        assert built.index.features["graph"].interfaces.provides == ["cli/build"]
        assert built.index.features["terms"].interfaces.uses == ["cli/build"]

    def test_terms_are_keyed_by_name_with_usage(self, built: BuildResult) -> None:
        terms = built.index.terms
        assert sorted(terms) == ["Dependency Graph", "Term"]
        graph_term = terms["Dependency Graph"]
        assert graph_term.usage_count == 2
        assert graph_term.definition.scope == "global"
        assert sorted(r.file for r in graph_term.references) == [
            "tasks/features/graph.md",
            "tasks/features/terms.md",
        ]
        assert terms["Term"].definition.scope == "document"

    def test_feature_term_links(self, built: BuildResult) -> None:
        features = built.index.features
        assert features["terms"].terms.defines == ["Term"]
        assert features["terms"].terms.uses == ["Dependency Graph", "Term"]
        assert features["graph"].terms.uses == ["Dependency Graph"]

    def test_stats(self, built: BuildResult) -> None:
        stats = built.stats
        assert (stats.features, stats.interfaces, stats.terms) == (3, 1, 2)
        assert stats.code_files == 6
        assert stats.import_edges == 3
        assert stats.external_imports == 1
        assert stats.extraction_failures == 0

    def test_symbols_can_be_left_out(self, sample_project: Path) -> None:
        config = EdgeDocConfig(index=IndexConfig(include_symbols=False))
        result = ReferenceIndexBuilder(sample_project, config).build()
        assert all(entry.exports == [] for entry in result.index.code.values())

    def test_build_and_save_writes_default_snapshot(self, sample_project: Path) -> None:
        result = ReferenceIndexBuilder(sample_project).build_and_save()
        assert result.output_path == sample_project / ".edgedoc" / "references.json"
        assert result.output_path.is_file()

    def test_malformed_source_does_not_stop_the_build(self, sample_project: Path) -> None:
        (sample_project / "src" / "broken.ts").write_text("export class {{{{ ]]] ))) ;;; <<<")
        config = EdgeDocConfig(sources=SourcesConfig(max_error_ratio=0.01))

        result = ReferenceIndexBuilder(sample_project, config).build()

        assert [f.path for f in result.scan.failures] == ["src/broken.ts"]
        assert "src/broken.ts" in result.index.code
        assert result.index.code["src/broken.ts"].exports == []
        assert "src/graph.ts" in result.index.code


class TestAssembleIndex:
    """The pure assembly step, from hand-made inputs."""

    def _inputs(self) -> tuple[DocumentSet, ScanResult]:
        docs = DocumentSet(
            features={
                "a": FeatureDoc(
                    id="a",
                    file="docs/a.md",
                    code_references=["src/a.ts"],
                    related_features=["a", "b", "ghost"],
                ),
                "b": FeatureDoc(id="b", file="docs/b.md", code_references=["src/gone.ts"]),
            },
            interfaces={
                "api/x": InterfaceDoc(id="api/x", file="i/x.md", from_feature="a", to_feature="b"),
            },
        )
        scan = ScanResult(
            files={
                "src/a.ts": SourceFile("src/a.ts", "typescript", SourceRole.SOURCE),
                "src/b.ts": SourceFile("src/b.ts", "typescript", SourceRole.SOURCE),
            },
            results={
                "src/b.ts": ExtractionResult(
                    "src/b.ts", "typescript", imports=[ImportFact("src/b.ts", "./a")]
                ),
            },
        )
        return docs, scan

    def test_interface_from_and_to_become_provides_and_uses(self) -> None:
        docs, scan = self._inputs()
        graph = build_dependency_graph(scan.files, scan.results)

        index = assemble_index(docs, scan, graph, TermRegistry())

        assert index.features["a"].interfaces.provides == ["api/x"]
        assert index.features["b"].interfaces.uses == ["api/x"]
        assert index.interfaces["api/x"].providers == ["a"]
        assert index.interfaces["api/x"].consumers == ["b"]

    def test_self_relation_is_dropped_and_unknown_kept(self) -> None:
        docs, scan = self._inputs()
        graph = build_dependency_graph(scan.files, scan.results)

        index = assemble_index(docs, scan, graph, TermRegistry())

        assert index.features["a"].features.related == ["b", "ghost"]
        assert index.features["b"].features.related == ["a"]

    def test_path_exists_callback(self) -> None:
        docs, scan = self._inputs()
        graph = build_dependency_graph(scan.files, scan.results)

        index = assemble_index(
            docs, scan, graph, TermRegistry(), path_exists=lambda p: p == "src/gone.ts"
        )

        assert index.code["src/gone.ts"].exists is True
        assert index.features["a"].code.used_by == ["src/b.ts"]
