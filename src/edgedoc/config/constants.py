"""Configuration constants.

Values here are fixed formats and file layout, not user-configurable.
For configurable values, see models.py.
"""

# =============================================================================
# Project layout
# =============================================================================

DATA_DIR_NAME = ".edgedoc"
"""Per-project data directory (config and snapshot)."""

CONFIG_FILE_NAME = "config.yaml"
"""Repo config file, inside DATA_DIR_NAME."""

INDEX_FILE_NAME = "references.json"
"""Default snapshot file, inside DATA_DIR_NAME."""

# =============================================================================
# Snapshot format
# =============================================================================

INDEX_VERSION = "1.0"
"""Schema version written into every snapshot."""
