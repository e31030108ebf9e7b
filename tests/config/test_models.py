"""Tests for config/models.py."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from edgedoc.config.models import (
    EdgeDocConfig,
    LogOutputConfig,
    SourcesConfig,
    TermRulesConfig,
)


class TestLogOutputConfig:
    def test_console_destinations(self) -> None:
        assert LogOutputConfig(destination="stdout").destination == "stdout"

    def test_relative_file_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LogOutputConfig(destination="logs/edgedoc.log")


class TestSourcesConfig:
    @pytest.mark.parametrize("ratio", [0.0, -0.1, 1.5])
    def test_error_ratio_bounds(self, ratio: float) -> None:
        with pytest.raises(ValidationError):
            SourcesConfig(max_error_ratio=ratio)

    def test_ratio_of_one_allowed(self) -> None:
        assert SourcesConfig(max_error_ratio=1.0).max_error_ratio == 1.0


class TestTermRulesConfig:
    def test_defaults(self) -> None:
        rules = TermRulesConfig()
        assert (rules.uniqueness, rules.completeness, rules.scope) == ("error",) * 3
        assert (rules.acyclicity, rules.liveness) == ("warning",) * 2

    def test_unknown_severity_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TermRulesConfig(liveness="fatal")  # type: ignore[arg-type]

    def test_yaml_boolean_off_disables_rule(self) -> None:
        rules = TermRulesConfig.model_validate({"liveness": False, "scope": "off"})
        assert (rules.liveness, rules.scope) == ("off", "off")

    def test_boolean_on_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TermRulesConfig.model_validate({"liveness": True})


class TestEdgeDocConfig:
    def test_defaults(self) -> None:
        config = EdgeDocConfig()
        assert config.docs.base_dir == "tasks"
        assert config.index.include_symbols is True
        assert config.orphans.include_tests is False
        assert config.sources.python_roots == ["", "src"]

    def test_from_nested_dict(self) -> None:
        config = EdgeDocConfig.model_validate({"terms": {"rules": {"scope": "warning"}}})
        assert config.terms.rules.scope == "warning"
        assert config.terms.rules.uniqueness == "error"
