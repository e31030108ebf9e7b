"""Tests for edgedoc validate commands."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from edgedoc.cli.main import cli

runner = CliRunner()


def _build(project: Path) -> None:
    result = runner.invoke(cli, ["graph", "build", str(project), "--json"])
    assert result.exit_code == 0, result.output


class TestValidateTerms:
    """Tests for edgedoc validate terms."""

    def test_clean_project_passes(self, sample_project: Path) -> None:
        result = runner.invoke(cli, ["validate", "terms", str(sample_project)])

        assert result.exit_code == 0, result.output
        assert "━━━ terms ━━━" in result.output
        assert "✓ passed" in result.output

    def test_undefined_term_fails(self, sample_project: Path) -> None:
        # Given
        (sample_project / "notes.md").write_text("Mentions [[Dependency Grap]].\n")

        # When
        result = runner.invoke(cli, ["validate", "terms", str(sample_project), "--json"])

        # Then
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["passed"] is False
        [finding] = data["findings"]
        assert finding["kind"] == "undefined_term"
        assert finding["file"] == "notes.md"
        assert finding["suggestion"] == "Did you mean 'Dependency Graph'?"

    def test_human_output_lists_findings(self, sample_project: Path) -> None:
        (sample_project / "notes.md").write_text("Mentions [[Nothing]].\n")

        result = runner.invoke(cli, ["validate", "terms", str(sample_project)])

        assert result.exit_code == 1
        assert "[undefined_term] notes.md:1:" in result.output
        assert "✗ failed (1 error, 0 warnings)" in result.output


class TestValidateSpecOrphans:
    """Tests for edgedoc validate spec-orphans."""

    def test_orphans_are_warnings(self, sample_project: Path) -> None:
        result = runner.invoke(cli, ["validate", "spec-orphans", str(sample_project), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [f["subject"] for f in data["findings"]] == ["unused"]
        assert data["warnings"] == 1


class TestValidateOrphans:
    """Tests for edgedoc validate orphans."""

    def test_orphan_file_fails(self, sample_project: Path) -> None:
        result = runner.invoke(cli, ["validate", "orphans", str(sample_project), "--json"])

        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["name"] == "orphans"
        assert [f["subject"] for f in data["findings"]] == ["src/orphan.ts"]

    def test_passes_once_file_is_imported(self, sample_project: Path) -> None:
        (sample_project / "src" / "core.ts").write_text(
            "import { unused } from './orphan';\nexport const VERSION = unused;\n"
        )

        result = runner.invoke(cli, ["validate", "orphans", str(sample_project)])

        assert result.exit_code == 0, result.output
        assert "━━━ orphans ━━━" in result.output


class TestSnapshotCommands:
    """Tests for validate interfaces / index."""

    def test_interfaces_without_snapshot_fails(self, sample_project: Path) -> None:
        result = runner.invoke(cli, ["validate", "interfaces", str(sample_project)])
        assert result.exit_code == 1
        assert "edgedoc graph build" in result.output

    def test_interfaces_pass(self, sample_project: Path) -> None:
        _build(sample_project)

        result = runner.invoke(
            cli,
            ["validate", "interfaces", str(sample_project), "--namespace", "cli", "--json"],
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["stats"]["interfaces"] == 1

    def test_interfaces_unknown_feature(self, sample_project: Path) -> None:
        _build(sample_project)
        result = runner.invoke(
            cli, ["validate", "interfaces", str(sample_project), "--feature", "ghost"]
        )
        assert result.exit_code == 1
        assert "ghost" in result.output

    def test_index_reports_missing_code(self, sample_project: Path) -> None:
        _build(sample_project)

        result = runner.invoke(cli, ["validate", "index", str(sample_project), "--json"])

        assert result.exit_code == 1
        kinds = [f["kind"] for f in json.loads(result.stdout)["findings"]]
        assert kinds == ["missing_code_reference"]


class TestValidateAll:
    """Tests for edgedoc validate all."""

    def test_json_list_of_reports(self, sample_project: Path) -> None:
        _build(sample_project)

        result = runner.invoke(cli, ["validate", "all", str(sample_project), "--json"])

        assert result.exit_code == 1
        names = [r["name"] for r in json.loads(result.stdout)]
        assert names == ["terms", "spec-orphans", "interfaces", "index"]

    def test_passes_once_missing_file_exists(self, sample_project: Path) -> None:
        (sample_project / "src" / "missing.ts").write_text("export const here = true;\n")
        _build(sample_project)

        result = runner.invoke(cli, ["validate", "all", str(sample_project)])

        assert result.exit_code == 0, result.output
        assert result.output.count("✓ passed") == 4
