"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (EDGEDOC__SECTION__KEY)
3. Repo config (.edgedoc/config.yaml)
4. Global config (~/.config/edgedoc/config.yaml)
5. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from edgedoc.config.constants import CONFIG_FILE_NAME, DATA_DIR_NAME, INDEX_FILE_NAME
from edgedoc.config.models import (
    DocsConfig,
    EdgeDocConfig,
    IndexConfig,
    LoggingConfig,
    OrphansConfig,
    SourcesConfig,
    TerminologyConfig,
    TermsConfig,
)
from edgedoc.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/edgedoc/config.yaml").expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class bound to one merged YAML config."""

    class EdgeDocSettings(BaseSettings):
        """Root config. Env vars: EDGEDOC__LOGGING__LEVEL, EDGEDOC__DOCS__BASE_DIR, etc."""

        model_config = SettingsConfigDict(
            env_prefix="EDGEDOC__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        docs: DocsConfig = DocsConfig()
        terminology: TerminologyConfig = TerminologyConfig()
        terms: TermsConfig = TermsConfig()
        sources: SourcesConfig = SourcesConfig()
        index: IndexConfig = IndexConfig()
        orphans: OrphansConfig = OrphansConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return EdgeDocSettings


EdgeDocSettings = _make_settings_class({})


def load_config(project_root: Path | None = None, **kwargs: Any) -> EdgeDocConfig:
    """Load config: defaults < global yaml < repo yaml < env vars < kwargs.

    Args:
        project_root: Project root to load config from.
                      Defaults to current working directory.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax or validation errors.
    """
    project_root = project_root or Path.cwd()
    repo_config = _load_yaml(project_root / DATA_DIR_NAME / CONFIG_FILE_NAME)

    yaml_config = repo_config
    global_config = _load_yaml(GLOBAL_CONFIG_PATH)
    if global_config:
        yaml_config = _deep_merge(global_config, repo_config)

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    return EdgeDocConfig.model_validate(settings.model_dump())


def get_index_path(project_root: Path, config: EdgeDocConfig | None = None) -> Path:
    """Snapshot path for a project, respecting config.index.output_path."""
    config = config or load_config(project_root)
    if config.index.output_path:
        path = Path(config.index.output_path).expanduser()
        return path if path.is_absolute() else project_root / path
    return project_root / DATA_DIR_NAME / INDEX_FILE_NAME
