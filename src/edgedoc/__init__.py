"""edgedoc - cross-reference graph engine for docs and code."""

__version__ = "0.1.0"
