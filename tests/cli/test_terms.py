"""Tests for edgedoc terms commands."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from edgedoc.cli.main import cli

runner = CliRunner()


class TestTermsList:
    """Tests for edgedoc terms list."""

    def test_json(self, sample_project: Path) -> None:
        result = runner.invoke(cli, ["terms", "list", str(sample_project), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert [(t["name"], t["scope"], t["usage_count"]) for t in data] == [
            ("Dependency Graph", "global", 2),
            ("Term", "document", 1),
        ]
        assert data[0]["file"] == "docs/GLOSSARY.md"
        assert data[0]["definition"] == "Imports between source files."

    def test_scope_filter(self, sample_project: Path) -> None:
        result = runner.invoke(
            cli, ["terms", "list", str(sample_project), "--scope", "document", "--json"]
        )
        assert [t["name"] for t in json.loads(result.stdout)] == ["Term"]

    def test_human(self, sample_project: Path) -> None:
        result = runner.invoke(cli, ["terms", "list", str(sample_project)])

        assert result.exit_code == 0, result.output
        assert "Dependency Graph [global] docs/GLOSSARY.md:3 (2 uses)" in result.output
        assert result.output.rstrip().endswith("2 terms")

    def test_bad_scope(self, sample_project: Path) -> None:
        result = runner.invoke(cli, ["terms", "list", str(sample_project), "--scope", "world"])
        assert result.exit_code == 2


class TestTermsFind:
    """Tests for edgedoc terms find."""

    def test_matches_name_then_definition(self, sample_project: Path) -> None:
        result = runner.invoke(cli, ["terms", "find", "word", str(sample_project), "--json"])

        assert result.exit_code == 0, result.output
        assert [t["name"] for t in json.loads(result.stdout)] == ["Term"]

    def test_no_match(self, sample_project: Path) -> None:
        result = runner.invoke(cli, ["terms", "find", "zebra", str(sample_project)])
        assert result.exit_code == 0
        assert "No terms match 'zebra'" in result.output
