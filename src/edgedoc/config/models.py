"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (EDGEDOC__SECTION__KEY)
3. Repo YAML (.edgedoc/config.yaml)
4. Global YAML (~/.config/edgedoc/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    EDGEDOC__<SECTION>__<KEY>=<VALUE>

Examples:
    EDGEDOC__LOGGING__LEVEL=DEBUG
    EDGEDOC__DOCS__BASE_DIR=docs/tasks
    EDGEDOC__TERMS__RULES__LIVENESS=off
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from edgedoc.core.findings import RuleSeverity

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        EDGEDOC__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. Extraction failures are logged at WARNING.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class DocsConfig(BaseModel):
    """Documentation tree layout.

    Env vars:
        EDGEDOC__DOCS__BASE_DIR: Root of the feature/interface/shared docs
    """

    base_dir: str = Field(
        default="tasks",
        description="Directory (relative to the project root) holding the doc folders.",
    )
    features_dir: str = Field(default="features", description="Feature docs, under base_dir.")
    interfaces_dir: str = Field(default="interfaces", description="Interface docs, under base_dir.")
    shared_dir: str = Field(default="shared", description="Shared-type docs, under base_dir.")


class TerminologyConfig(BaseModel):
    """Term scoping configuration.

    Env vars:
        EDGEDOC__TERMINOLOGY__GLOBAL_SCOPE_PATHS: JSON list of glossary files/dirs
    """

    global_scope_paths: list[str] = Field(
        default_factory=lambda: ["docs/GLOSSARY.md", "docs/terms/"],
        description="Files, or directory prefixes ending in '/', whose definitions are global.",
    )
    glossary_filename_hint: bool = Field(
        default=True,
        description="Treat any markdown file whose name contains 'glossary' as global scope.",
    )


class TermRulesConfig(BaseModel):
    """Per-rule severity for term validation. 'off' disables a rule."""

    uniqueness: RuleSeverity = "error"
    completeness: RuleSeverity = "error"
    scope: RuleSeverity = "error"
    acyclicity: RuleSeverity = "warning"
    liveness: RuleSeverity = "warning"

    @field_validator("*", mode="before")
    @classmethod
    def yaml_off(cls, v: Any) -> Any:
        # YAML 1.1 reads an unquoted `off` as False
        if v is False:
            return "off"
        return v


class TermsConfig(BaseModel):
    """Term validation configuration.

    Env vars:
        EDGEDOC__TERMS__RULES__<RULE>: error, warning or off
    """

    rules: TermRulesConfig = Field(default_factory=TermRulesConfig)


class SourcesConfig(BaseModel):
    """Source scanning configuration.

    Env vars:
        EDGEDOC__SOURCES__MAX_FILE_SIZE_KB: Skip files larger than this
        EDGEDOC__SOURCES__MAX_ERROR_RATIO: Syntax error ratio that fails extraction
    """

    max_file_size_kb: int = Field(
        default=1024,
        description="Skip source files larger than this (KB).",
    )
    max_error_ratio: float = Field(
        default=0.5,
        description="Share of ERROR/missing parse nodes above which a file is malformed.",
    )
    python_roots: list[str] = Field(
        default_factory=lambda: ["", "src"],
        description="Directories that absolute Python imports are resolved against.",
    )
    exclude_dirs: list[str] = Field(
        default_factory=list,
        description="Extra directory names to skip during the scan.",
    )
    include_dirs: list[str] = Field(
        default_factory=list,
        description="Directory names excluded by default that should be scanned anyway.",
    )

    @field_validator("max_error_ratio")
    @classmethod
    def validate_ratio(cls, v: float) -> float:
        if not (0.0 < v <= 1.0):
            raise ValueError(f"max_error_ratio must be in (0, 1], got {v}")
        return v


class IndexConfig(BaseModel):
    """Reference index configuration.

    Env vars:
        EDGEDOC__INDEX__OUTPUT_PATH: Override snapshot location
        EDGEDOC__INDEX__INCLUDE_SYMBOLS: Record export symbols per code file
    """

    output_path: str | None = Field(
        default=None,
        description="Snapshot location. Default: .edgedoc/references.json in the project.",
    )
    include_symbols: bool = Field(
        default=True,
        description="Store each code file's exported symbols in the snapshot.",
    )


class OrphansConfig(BaseModel):
    """Spec-orphan analysis configuration."""

    include_tests: bool = Field(
        default=False,
        description="Report exports of test files as orphans too.",
    )


class EdgeDocConfig(BaseModel):
    """Root configuration for edgedoc.

    All settings can be configured via:
    1. Environment variables: EDGEDOC__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    docs: DocsConfig = Field(default_factory=DocsConfig)
    terminology: TerminologyConfig = Field(default_factory=TerminologyConfig)
    terms: TermsConfig = Field(default_factory=TermsConfig)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    index: IndexConfig = Field(default_factory=IndexConfig)
    orphans: OrphansConfig = Field(default_factory=OrphansConfig)
