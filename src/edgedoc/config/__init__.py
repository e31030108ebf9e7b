"""Config module exports."""

from edgedoc.config.loader import EdgeDocSettings, get_index_path, load_config
from edgedoc.config.models import (
    DocsConfig,
    EdgeDocConfig,
    IndexConfig,
    LoggingConfig,
    SourcesConfig,
    TerminologyConfig,
    TermsConfig,
)

__all__ = [
    "load_config",
    "get_index_path",
    "EdgeDocConfig",
    "EdgeDocSettings",
    "DocsConfig",
    "IndexConfig",
    "LoggingConfig",
    "SourcesConfig",
    "TerminologyConfig",
    "TermsConfig",
]
