"""Term definition and reference records."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum


class TermKind(StrEnum):
    CONCEPT = "concept"
    ENTITY = "entity"
    PROCESS = "process"
    ATTRIBUTE = "attribute"
    RELATIONSHIP = "relationship"
    ABBREVIATION = "abbreviation"


class TermScope(StrEnum):
    """Where a definition is visible.

    Global definitions are visible everywhere. Document definitions are
    visible only inside the file that defines them.
    """

    GLOBAL = "global"
    DOCUMENT = "document"


_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    return _SLUG_RE.sub("-", name.lower()).strip("-")


@dataclass(frozen=True, slots=True)
class TermDefinition:
    """A ``## [[Name]]`` heading plus its metadata block."""

    name: str
    file: str
    line: int
    scope: TermScope
    kind: TermKind = TermKind.CONCEPT
    definition: str = ""
    aliases: tuple[str, ...] = ()
    related: tuple[str, ...] = ()
    parent: str | None = None
    not_to_confuse: tuple[str, ...] = ()

    @property
    def id(self) -> str:
        return slugify(self.name)

    @property
    def location(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass(frozen=True, slots=True)
class TermReference:
    """A ``[[Name]]`` occurrence in body text.

    ``text`` is what the author wrote. The registry maps it to a canonical
    name when the reference is resolved.
    """

    text: str
    file: str
    line: int
    context: str = ""


@dataclass
class ParsedDocument:
    """Definitions and references found in one markdown file."""

    file: str
    definitions: list[TermDefinition] = field(default_factory=list)
    references: list[TermReference] = field(default_factory=list)
