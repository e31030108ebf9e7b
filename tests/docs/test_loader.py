"""Tests for loading feature, interface and shared documents."""

from __future__ import annotations

from pathlib import Path

from edgedoc.config.models import DocsConfig
from edgedoc.docs.loader import load_documents


def _write(root: Path, rel: str, text: str) -> None:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


FEATURE = """\
---
feature: graph
entry_point: src/graph/index.ts
code_references:
  - ./src/graph/build.ts
  - path: src/graph/query.ts
related_features: [terms]
depends_on: [scan]
interfaces: [cli/build]
uses_interfaces: [core/config]
test_files: [tests/graph.test.ts]
---
# Graph
"""


class TestLoadDocuments:
    def test_feature_fields(self, tmp_path: Path) -> None:
        # Given
        _write(tmp_path, "tasks/features/graph.md", FEATURE)

        # When
        docs = load_documents(tmp_path)

        # Then
        feature = docs.features["graph"]
        assert feature.file == "tasks/features/graph.md"
        assert feature.entry_point == "src/graph/index.ts"
        assert feature.code_references == ["src/graph/build.ts", "src/graph/query.ts"]
        assert feature.related_features == ["terms"]
        assert feature.depends_on == ["scan"]
        assert feature.provides == ["cli/build"]
        assert feature.uses == ["core/config"]
        assert feature.test_files == ["tests/graph.test.ts"]

    def test_ids_default_to_paths(self, tmp_path: Path) -> None:
        _write(tmp_path, "tasks/features/terms.md", "# Terms\n")
        _write(tmp_path, "tasks/interfaces/cli/build.md", "---\nfrom: graph\nto: cli\n---\n")
        _write(tmp_path, "tasks/shared/config.md", "---\ncode_references: src/config.ts\n---\n")

        docs = load_documents(tmp_path)

        assert list(docs.features) == ["terms"]
        interface = docs.interfaces["cli/build"]
        assert (interface.from_feature, interface.to_feature) == ("graph", "cli")
        assert interface.namespace == "cli"
        assert docs.shared["config"].code_references == ["src/config.ts"]

    def test_explicit_interface_id(self, tmp_path: Path) -> None:
        _write(tmp_path, "tasks/interfaces/x.md", "---\ninterface: api/query\n---\n")
        docs = load_documents(tmp_path)
        assert list(docs.interfaces) == ["api/query"]

    def test_duplicate_feature_keeps_first(self, tmp_path: Path) -> None:
        _write(tmp_path, "tasks/features/a.md", "---\nfeature: dup\n---\n")
        _write(tmp_path, "tasks/features/b.md", "---\nfeature: dup\n---\n")

        docs = load_documents(tmp_path)

        assert docs.features["dup"].file == "tasks/features/a.md"

    def test_malformed_frontmatter_does_not_stop_the_batch(self, tmp_path: Path) -> None:
        _write(tmp_path, "tasks/features/bad.md", "---\nfeature: [oops\n---\n")
        _write(tmp_path, "tasks/features/good.md", "---\nfeature: good\n---\n")
        (tmp_path / "tasks/features/binary.md").write_bytes(b"\xff\xfe")

        docs = load_documents(tmp_path)

        assert sorted(docs.features) == ["bad", "good"]

    def test_custom_layout(self, tmp_path: Path) -> None:
        _write(tmp_path, "docs/specs/feat/x.md", "# X\n")
        config = DocsConfig(base_dir="docs/specs", features_dir="feat")
        assert list(load_documents(tmp_path, config).features) == ["x"]

    def test_missing_base_dir_is_empty(self, tmp_path: Path) -> None:
        docs = load_documents(tmp_path)
        assert docs.features == {} and docs.interfaces == {} and docs.shared == {}


class TestCodeReferences:
    def test_maps_code_to_documenting_files(self, tmp_path: Path) -> None:
        _write(tmp_path, "tasks/features/graph.md", FEATURE)
        _write(
            tmp_path,
            "tasks/interfaces/cli/build.md",
            "---\ncode_references: [src/graph/build.ts]\n---\n",
        )

        refs = load_documents(tmp_path).code_references()

        assert refs["src/graph/build.ts"] == [
            "tasks/features/graph.md",
            "tasks/interfaces/cli/build.md",
        ]
        assert refs["tests/graph.test.ts"] == ["tasks/features/graph.md"]
        assert "src/graph/index.ts" not in refs
