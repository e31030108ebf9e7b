"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence
- get_index_path() function
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from edgedoc.config.loader import (
    GLOBAL_CONFIG_PATH,
    _deep_merge,
    _load_yaml,
    get_index_path,
    load_config,
)
from edgedoc.config.models import LoggingConfig
from edgedoc.core.errors import ConfigError, ErrorCode


def _repo_config(root: Path, text: str) -> None:
    data_dir = root / ".edgedoc"
    data_dir.mkdir(exist_ok=True)
    (data_dir / "config.yaml").write_text(text)


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("docs:\n  base_dir: documentation\n")
        assert _load_yaml(yaml_file) == {"docs": {"base_dir": "documentation"}}

    def test_returns_empty_for_yaml_null(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "null.yaml"
        yaml_file.write_text("null\n")
        assert _load_yaml(yaml_file) == {}

    def test_raises_config_error_for_invalid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "invalid.yaml"
        yaml_file.write_text("logging:\n  level:\n    - invalid: [unclosed")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code is ErrorCode.CONFIG_PARSE_ERROR

    def test_raises_config_error_for_non_mapping(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_nested_merge(self) -> None:
        base = {"terms": {"rules": {"liveness": "warning", "scope": "error"}}}
        override = {"terms": {"rules": {"liveness": "off"}}}
        assert _deep_merge(base, override) == {
            "terms": {"rules": {"liveness": "off", "scope": "error"}}
        }

    def test_override_replaces_non_dict(self) -> None:
        base: dict[str, Any] = {"a": {"nested": 1}}
        assert _deep_merge(base, {"a": "simple"}) == {"a": "simple"}

    def test_does_not_mutate_base(self) -> None:
        base = {"a": 1}
        _deep_merge(base, {"b": 2})
        assert base == {"a": 1}


class TestLoadConfig:
    """Tests for load_config precedence."""

    def test_returns_default_config_when_no_files(self, tmp_path: Path) -> None:
        with patch("edgedoc.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path)
        assert config.logging.level == "WARNING"
        assert config.docs.base_dir == "tasks"
        assert config.terms.rules.acyclicity == "warning"

    def test_loads_repo_config(self, tmp_path: Path) -> None:
        _repo_config(tmp_path, "docs:\n  base_dir: documentation\n")

        with patch("edgedoc.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path)
        assert config.docs.base_dir == "documentation"
        assert config.docs.features_dir == "features"

    def test_repo_config_overrides_global(self, tmp_path: Path) -> None:
        global_file = tmp_path / "global.yaml"
        global_file.write_text(
            "terms:\n  rules:\n    liveness: off\n    scope: warning\n"
        )
        _repo_config(tmp_path, "terms:\n  rules:\n    scope: error\n")

        with patch("edgedoc.config.loader.GLOBAL_CONFIG_PATH", global_file):
            config = load_config(tmp_path)
        assert config.terms.rules.scope == "error"
        assert config.terms.rules.liveness == "off"

    def test_env_vars_override_yaml(self, tmp_path: Path) -> None:
        _repo_config(tmp_path, "logging:\n  level: INFO\n")

        with (
            patch("edgedoc.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            patch.dict(os.environ, {"EDGEDOC__LOGGING__LEVEL": "ERROR"}),
        ):
            config = load_config(tmp_path)
        assert config.logging.level == "ERROR"

    def test_kwargs_override_all(self, tmp_path: Path) -> None:
        with patch("edgedoc.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path, logging=LoggingConfig(level="DEBUG"))
        assert config.logging.level == "DEBUG"

    def test_raises_config_error_for_invalid_value(self, tmp_path: Path) -> None:
        _repo_config(tmp_path, "sources:\n  max_error_ratio: 2.5\n")

        with (
            patch("edgedoc.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"),
            pytest.raises(ConfigError) as exc_info,
        ):
            load_config(tmp_path)
        assert exc_info.value.code is ErrorCode.CONFIG_INVALID_VALUE

    def test_unquoted_off_in_repo_yaml(self, tmp_path: Path) -> None:
        _repo_config(tmp_path, "terms:\n  rules:\n    liveness: off\n    acyclicity: off\n")

        with patch("edgedoc.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            config = load_config(tmp_path)
        assert config.terms.rules.liveness == "off"
        assert config.terms.rules.acyclicity == "off"


class TestGetIndexPath:
    """Tests for get_index_path function."""

    def test_returns_default_path(self, tmp_path: Path) -> None:
        with patch("edgedoc.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            assert get_index_path(tmp_path) == tmp_path / ".edgedoc" / "references.json"

    def test_relative_output_path_is_project_relative(self, tmp_path: Path) -> None:
        _repo_config(tmp_path, "index:\n  output_path: build/refs.json\n")

        with patch("edgedoc.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            assert get_index_path(tmp_path) == tmp_path / "build" / "refs.json"

    def test_absolute_output_path_kept(self, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere" / "refs.json"
        _repo_config(tmp_path, f"index:\n  output_path: {target}\n")

        with patch("edgedoc.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
            assert get_index_path(tmp_path) == target


class TestGlobalConfigPath:
    def test_is_in_user_config(self) -> None:
        assert isinstance(GLOBAL_CONFIG_PATH, Path)
        assert "edgedoc" in str(GLOBAL_CONFIG_PATH)
