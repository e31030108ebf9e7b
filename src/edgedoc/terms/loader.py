"""Build a term registry from every markdown file in a project."""

from __future__ import annotations

from pathlib import Path

from edgedoc.config.models import EdgeDocConfig
from edgedoc.core.errors import DocumentError
from edgedoc.core.logging import get_logger
from edgedoc.docs.frontmatter import split_frontmatter
from edgedoc.docs.loader import iter_markdown, read_document
from edgedoc.terms.models import ParsedDocument
from edgedoc.terms.parser import parse_document
from edgedoc.terms.registry import TermRegistry

log = get_logger(__name__)


def _without_frontmatter(text: str, path: str) -> str:
    """Blank the frontmatter block, keeping line numbers stable."""
    _meta, body = split_frontmatter(text, path)
    header = text[: len(text) - len(body)]
    return "\n" * header.count("\n") + body


def parse_project_terms(root: Path, config: EdgeDocConfig | None = None) -> list[ParsedDocument]:
    config = config or EdgeDocConfig()
    documents: list[ParsedDocument] = []
    for rel_path in iter_markdown(root, config.sources):
        try:
            text = read_document(root, rel_path)
        except DocumentError as e:
            log.warning("document_skipped", file=rel_path, error=e.message)
            continue
        documents.append(
            parse_document(
                _without_frontmatter(text, rel_path),
                rel_path,
                config=config.terminology,
            )
        )
    return documents


def load_term_registry(root: Path, config: EdgeDocConfig | None = None) -> TermRegistry:
    """Parse every markdown file under ``root`` into one registry."""
    documents = parse_project_terms(root, config)
    registry = TermRegistry.from_documents(documents)
    log.debug(
        "terms_loaded",
        documents=len(documents),
        terms=len(registry.names),
        references=len(registry.references),
    )
    return registry
