"""Structured documentation (features, interfaces, shared types)."""

from edgedoc.docs.frontmatter import split_frontmatter
from edgedoc.docs.loader import iter_markdown, load_documents, read_document
from edgedoc.docs.models import DocumentSet, FeatureDoc, InterfaceDoc, SharedDoc

__all__ = [
    "DocumentSet",
    "FeatureDoc",
    "InterfaceDoc",
    "SharedDoc",
    "iter_markdown",
    "load_documents",
    "read_document",
    "split_frontmatter",
]
