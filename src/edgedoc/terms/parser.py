"""Markdown term parser.

Definitions are headings of the form ``## [[Name]]`` (any level from 2 up).
The lines below a definition heading, up to the next heading, may carry
metadata::

    ## [[Widget]]

    **Type**: entity
    **Aliases**: widget, UI widget
    **Related**: [[Gadget]], [[Layout]]
    **Parent**: [[Component]]
    **Not to Confuse**: [[Window]]

    A renderable element placed in a layout. <- first paragraph = definition

References are ``[[Name]]`` or ``[[Name|label]]`` anywhere else. Fenced
code blocks and inline code spans never contain references.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from edgedoc.config.models import TerminologyConfig
from edgedoc.core.formatting import truncate_at_word
from edgedoc.core.logging import get_logger
from edgedoc.terms.models import (
    ParsedDocument,
    TermDefinition,
    TermKind,
    TermReference,
    TermScope,
)

log = get_logger(__name__)

_DEFINITION_RE = re.compile(r"^#{2,6}\s+\[\[([^\[\]|]+)\]\]")
_HEADING_RE = re.compile(r"^#{1,6}\s")
_REFERENCE_RE = re.compile(r"\[\[([^\[\]\n]+?)\]\]")
_INLINE_CODE_RE = re.compile(r"(`+)(.+?)\1")
_FENCE_RE = re.compile(r"^\s{0,3}(`{3,}|~{3,})")
_METADATA_RE = re.compile(r"^(?:[-*]\s+)?\*\*(?P<key>[^*]+)\*\*\s*:\s*(?P<value>.*)$")
_RULE_RE = re.compile(r"^(?:-{3,}|\*{3,}|_{3,})\s*$")

_CONTEXT_LEN = 80


def default_scope(file: str, config: TerminologyConfig | None = None) -> TermScope:
    """Scope of definitions in ``file`` when no ``**Scope**:`` line says otherwise."""
    config = config or TerminologyConfig()
    for entry in config.global_scope_paths:
        entry = entry.removeprefix("./")
        if entry.endswith("/"):
            if file.startswith(entry):
                return TermScope.GLOBAL
        elif file == entry:
            return TermScope.GLOBAL
    if config.glossary_filename_hint and "glossary" in PurePosixPath(file).name.lower():
        return TermScope.GLOBAL
    return TermScope.DOCUMENT


def strip_inline_code(line: str) -> str:
    """Blank out inline code spans so their contents can't match references."""
    return _INLINE_CODE_RE.sub(lambda m: " " * len(m.group(0)), line)


def reference_target(raw: str) -> str:
    """``Name|label`` → ``Name``."""
    return raw.split("|", 1)[0].strip()


def _bracketed_names(value: str) -> tuple[str, ...]:
    names = [reference_target(m) for m in _REFERENCE_RE.findall(value)]
    if not names:
        names = [part.strip() for part in value.split(",")]
    return tuple(n for n in names if n)


@dataclass
class _PendingDefinition:
    name: str
    line: int
    scope: TermScope
    kind: TermKind = TermKind.CONCEPT
    aliases: tuple[str, ...] = ()
    related: tuple[str, ...] = ()
    parent: str | None = None
    not_to_confuse: tuple[str, ...] = ()
    paragraph: list[str] = field(default_factory=list)
    paragraph_done: bool = False

    def apply_metadata(self, key: str, value: str, file: str) -> bool:
        key = key.strip().lower()
        value = value.strip()
        if key == "type":
            try:
                self.kind = TermKind(value.lower())
            except ValueError:
                log.debug("unknown_term_kind", term=self.name, file=file, kind=value)
        elif key == "aliases":
            self.aliases = tuple(a.strip() for a in value.split(",") if a.strip())
        elif key == "related":
            self.related = _bracketed_names(value)
        elif key == "parent":
            parents = _bracketed_names(value)
            self.parent = parents[0] if parents else None
        elif key == "not to confuse":
            self.not_to_confuse = _bracketed_names(value)
        elif key == "scope":
            try:
                self.scope = TermScope(value.lower())
            except ValueError:
                log.debug("unknown_term_scope", term=self.name, file=file, scope=value)
        else:
            return False
        return True

    def add_prose(self, stripped: str) -> None:
        if self.paragraph_done:
            return
        if stripped:
            self.paragraph.append(stripped)
        elif self.paragraph:
            self.paragraph_done = True

    def end_paragraph(self) -> None:
        if self.paragraph:
            self.paragraph_done = True

    def build(self, file: str) -> TermDefinition:
        return TermDefinition(
            name=self.name,
            file=file,
            line=self.line,
            scope=self.scope,
            kind=self.kind,
            definition=" ".join(self.paragraph),
            aliases=self.aliases,
            related=self.related,
            parent=self.parent,
            not_to_confuse=self.not_to_confuse,
        )


def parse_document(
    text: str,
    file: str,
    *,
    config: TerminologyConfig | None = None,
) -> ParsedDocument:
    """Extract term definitions and references from one markdown document."""
    scope = default_scope(file, config)
    doc = ParsedDocument(file=file)
    current: _PendingDefinition | None = None
    fence: str | None = None

    def finish() -> None:
        nonlocal current
        if current is not None:
            doc.definitions.append(current.build(file))
            current = None

    for line_no, raw in enumerate(text.splitlines(), start=1):
        fence_match = _FENCE_RE.match(raw)
        if fence is not None:
            if fence_match and fence_match.group(1).startswith(fence):
                fence = None
            continue
        if fence_match:
            marker = fence_match.group(1)
            fence = marker[0] * len(marker)
            if current is not None:
                current.end_paragraph()
            continue

        definition = _DEFINITION_RE.match(raw)
        if definition:
            finish()
            current = _PendingDefinition(
                name=definition.group(1).strip(), line=line_no, scope=scope
            )
            continue

        stripped = raw.strip()
        if _HEADING_RE.match(raw):
            finish()
        elif current is not None:
            meta = _METADATA_RE.match(stripped)
            if not (meta and current.apply_metadata(meta["key"], meta["value"], file)):
                if _RULE_RE.match(stripped):
                    current.end_paragraph()
                else:
                    current.add_prose(stripped)

        searchable = strip_inline_code(raw)
        for match in _REFERENCE_RE.finditer(searchable):
            target = reference_target(match.group(1))
            if target:
                doc.references.append(
                    TermReference(
                        text=target,
                        file=file,
                        line=line_no,
                        context=truncate_at_word(stripped, _CONTEXT_LEN),
                    )
                )

    finish()
    return doc
