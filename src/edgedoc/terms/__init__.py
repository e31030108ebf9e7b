"""Term definitions, references, and the term registry."""

from edgedoc.terms.models import (
    ParsedDocument,
    TermDefinition,
    TermKind,
    TermReference,
    TermScope,
)
from edgedoc.terms.loader import load_term_registry, parse_project_terms
from edgedoc.terms.parser import default_scope, parse_document
from edgedoc.terms.registry import ResolvedReference, TermRegistry

__all__ = [
    "ParsedDocument",
    "ResolvedReference",
    "TermDefinition",
    "TermKind",
    "TermReference",
    "TermRegistry",
    "TermScope",
    "default_scope",
    "load_term_registry",
    "parse_document",
    "parse_project_terms",
]
