"""Term registry: definitions, aliases, scoping and validation.

Scoping rules:
- Global definitions are visible from every document.
- A document definition is visible only in its own file, where it shadows
  a global definition with the same name.

Uniqueness rules:
- Two global definitions of one name with different text conflict.
- Two document definitions of one name with different text conflict,
  whether or not they live in the same file.
- Redefinitions with identical text are tolerated; the first one wins.
- An alias may map to only one canonical name and may not shadow one.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from edgedoc.config.models import TermRulesConfig
from edgedoc.core.findings import Finding, FindingKind, ValidationReport, apply_severity
from edgedoc.core.logging import get_logger
from edgedoc.terms.models import ParsedDocument, TermDefinition, TermReference, TermScope

log = get_logger(__name__)

ReferenceStatus = Literal["ok", "undefined", "out_of_scope"]


@dataclass(frozen=True, slots=True)
class ResolvedReference:
    """A reference after alias resolution and scope lookup."""

    reference: TermReference
    term: str
    status: ReferenceStatus
    definition: TermDefinition | None = None


@dataclass(frozen=True, slots=True)
class DefinitionConflict:
    existing: TermDefinition
    incoming: TermDefinition


@dataclass(frozen=True, slots=True)
class AliasConflict:
    alias: str
    existing: str
    incoming: TermDefinition


class TermRegistry:
    """All term definitions and references of a project."""

    def __init__(self) -> None:
        self._global: dict[str, TermDefinition] = {}
        self._document: dict[tuple[str, str], TermDefinition] = {}
        self._document_by_name: dict[str, list[TermDefinition]] = defaultdict(list)
        self._aliases: dict[str, str] = {}
        self._references: list[TermReference] = []
        self.conflicts: list[DefinitionConflict] = []
        self.alias_conflicts: list[AliasConflict] = []

    @classmethod
    def from_documents(cls, documents: Iterable[ParsedDocument]) -> TermRegistry:
        """Register every definition first, then every reference."""
        docs = list(documents)
        registry = cls()
        for doc in docs:
            for definition in doc.definitions:
                registry.add_definition(definition)
        for doc in docs:
            for reference in doc.references:
                registry.add_reference(reference)
        return registry

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_definition(self, definition: TermDefinition) -> None:
        name = definition.name
        if name in self._aliases and self._aliases[name] != name:
            self.alias_conflicts.append(AliasConflict(name, self._aliases[name], definition))

        if definition.scope is TermScope.GLOBAL:
            existing = self._global.get(name)
            if existing is None:
                self._global[name] = definition
            elif existing.definition != definition.definition:
                self.conflicts.append(DefinitionConflict(existing, definition))
        else:
            rival = next(
                (
                    d
                    for d in self._document_by_name.get(name, ())
                    if d.definition != definition.definition
                ),
                None,
            )
            if rival is not None:
                self.conflicts.append(DefinitionConflict(rival, definition))
            key = (definition.file, name)
            if key not in self._document:
                self._document[key] = definition
                self._document_by_name[name].append(definition)

        for alias in definition.aliases:
            self._add_alias(alias, definition)

    def _add_alias(self, alias: str, definition: TermDefinition) -> None:
        if alias == definition.name:
            return
        if self.is_defined(alias):
            self.alias_conflicts.append(AliasConflict(alias, alias, definition))
            return
        existing = self._aliases.get(alias)
        if existing is not None and existing != definition.name:
            self.alias_conflicts.append(AliasConflict(alias, existing, definition))
            return
        self._aliases[alias] = definition.name

    def add_reference(self, reference: TermReference) -> None:
        self._references.append(reference)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def is_defined(self, name: str) -> bool:
        return name in self._global or bool(self._document_by_name.get(name))

    def resolve(self, name: str) -> str:
        """Map an alias to its canonical name; anything else maps to itself."""
        if self.is_defined(name):
            return name
        return self._aliases.get(name, name)

    def lookup(self, name: str, file: str) -> TermDefinition | None:
        """The definition visible from ``file`` for ``name`` (or an alias of it)."""
        canonical = self.resolve(name)
        return self._document.get((file, canonical)) or self._global.get(canonical)

    def get(self, name: str) -> TermDefinition | None:
        """Primary definition of a term: the global one, else the first document one."""
        canonical = self.resolve(name)
        if canonical in self._global:
            return self._global[canonical]
        defs = self._document_by_name.get(canonical)
        return defs[0] if defs else None

    def resolve_reference(self, reference: TermReference) -> ResolvedReference:
        canonical = self.resolve(reference.text)
        visible = self.lookup(canonical, reference.file)
        if visible is not None:
            return ResolvedReference(reference, canonical, "ok", visible)
        defs = self._document_by_name.get(canonical)
        if defs:
            return ResolvedReference(reference, canonical, "out_of_scope", defs[0])
        return ResolvedReference(reference, canonical, "undefined")

    @property
    def names(self) -> list[str]:
        """Canonical names, sorted."""
        return sorted(set(self._global) | {n for n, d in self._document_by_name.items() if d})

    @property
    def aliases(self) -> dict[str, str]:
        return dict(self._aliases)

    @property
    def references(self) -> list[TermReference]:
        return list(self._references)

    def definitions(self) -> list[TermDefinition]:
        """Every registered definition, ordered by location."""
        all_defs = list(self._global.values()) + list(self._document.values())
        return sorted(all_defs, key=lambda d: (d.file, d.line))

    def references_to(self, name: str) -> list[TermReference]:
        canonical = self.resolve(name)
        return [r for r in self._references if self.resolve(r.text) == canonical]

    def usage_count(self, name: str) -> int:
        return len(self.references_to(name))

    def search(self, query: str) -> list[TermDefinition]:
        """Case-insensitive search ranked by name, then alias, then definition text.

        Tiers: exact name, name substring, alias substring, definition substring.
        """
        q = query.strip().lower()
        if not q:
            return []
        ranked: list[tuple[int, str, TermDefinition]] = []
        for name in self.names:
            definition = self.get(name)
            if definition is None:
                continue
            lname = name.lower()
            if lname == q:
                tier = 0
            elif q in lname:
                tier = 1
            elif any(q in alias.lower() for alias in definition.aliases):
                tier = 2
            elif q in definition.definition.lower():
                tier = 3
            else:
                continue
            ranked.append((tier, lname, definition))
        ranked.sort(key=lambda item: (item[0], item[1]))
        return [definition for _tier, _name, definition in ranked]

    # ------------------------------------------------------------------
    # Relations
    # ------------------------------------------------------------------

    def relation_graph(self) -> dict[str, list[str]]:
        """Edges from each term to its related and parent terms (defined ones only)."""
        graph: dict[str, list[str]] = {}
        for definition in self.definitions():
            targets = graph.setdefault(definition.name, [])
            linked = list(definition.related)
            if definition.parent:
                linked.append(definition.parent)
            for raw in linked:
                target = self.resolve(raw)
                if self.is_defined(target) and target not in targets:
                    targets.append(target)
        return graph

    def find_cycles(self) -> list[list[str]]:
        """Every elementary cycle over related/parent links, each reported once.

        Cycles are rooted at their smallest term name: from each start term
        the DFS only walks terms that sort after it and keeps the current
        path as its recursion stack, so overlapping cycles (A→B→C→A and
        A→C→A) are both found and diamonds (A→B→D, A→C→D) never are.
        """
        graph = self.relation_graph()
        cycles: list[list[str]] = []

        def visit(start: str, path: list[str]) -> None:
            for target in graph.get(path[-1], ()):
                if target == start:
                    cycles.append([*path, start])
                elif target > start and target not in path:
                    path.append(target)
                    visit(start, path)
                    path.pop()

        for start in sorted(graph):
            visit(start, [start])
        return cycles

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, rules: TermRulesConfig | None = None) -> ValidationReport:
        """Run every enabled rule and collect findings."""
        rules = rules or TermRulesConfig()
        report = ValidationReport(name="terms")
        resolved = [self.resolve_reference(r) for r in self._references]

        if severity := apply_severity(rules.uniqueness):
            for conflict in self.conflicts:
                a, b = conflict.existing, conflict.incoming
                report.add(
                    Finding(
                        kind=FindingKind.CONFLICTING_DEFINITION,
                        severity=severity,
                        subject=b.name,
                        message=(
                            f"'{b.name}' is defined differently at {a.location} and {b.location}"
                        ),
                        file=b.file,
                        line=b.line,
                        suggestion="Merge the definitions or rename one of them",
                    )
                )
            for alias_conflict in self.alias_conflicts:
                incoming = alias_conflict.incoming
                report.add(
                    Finding(
                        kind=FindingKind.ALIAS_CONFLICT,
                        severity=severity,
                        subject=alias_conflict.alias,
                        message=(
                            f"Alias '{alias_conflict.alias}' of '{incoming.name}' already "
                            f"refers to '{alias_conflict.existing}'"
                        ),
                        file=incoming.file,
                        line=incoming.line,
                    )
                )

        completeness = apply_severity(rules.completeness)
        scope = apply_severity(rules.scope)
        for item in resolved:
            ref = item.reference
            if item.status == "undefined" and completeness:
                report.add(
                    Finding(
                        kind=FindingKind.UNDEFINED_TERM,
                        severity=completeness,
                        subject=item.term,
                        message=f"'{ref.text}' is referenced but never defined",
                        file=ref.file,
                        line=ref.line,
                        suggestion=self._suggest(item.term),
                    )
                )
            elif item.status == "out_of_scope" and scope and item.definition is not None:
                report.add(
                    Finding(
                        kind=FindingKind.SCOPE_VIOLATION,
                        severity=scope,
                        subject=item.term,
                        message=(
                            f"'{item.term}' is document-scoped to {item.definition.file} "
                            f"but referenced from {ref.file}"
                        ),
                        file=ref.file,
                        line=ref.line,
                        suggestion="Move the definition to a glossary to make it global",
                    )
                )

        if severity := apply_severity(rules.acyclicity):
            for cycle in self.find_cycles():
                first = self.get(cycle[0])
                report.add(
                    Finding(
                        kind=FindingKind.CIRCULAR_REFERENCE,
                        severity=severity,
                        subject=cycle[0],
                        message="Circular term relation: " + " -> ".join(cycle),
                        file=first.file if first else None,
                        line=first.line if first else None,
                    )
                )

        if severity := apply_severity(rules.liveness):
            used = {
                (item.definition.file, item.definition.name)
                for item in resolved
                if item.definition is not None
            }
            for definition in self.definitions():
                if (definition.file, definition.name) not in used:
                    report.add(
                        Finding(
                            kind=FindingKind.UNUSED_DEFINITION,
                            severity=severity,
                            subject=definition.name,
                            message=f"'{definition.name}' is defined but never referenced",
                            file=definition.file,
                            line=definition.line,
                        )
                    )

        report.stats = {
            "definitions": len(self.definitions()),
            "global": len(self._global),
            "document": len(self._document),
            "aliases": len(self._aliases),
            "references": len(self._references),
        }
        log.debug("terms_validated", errors=len(report.errors), warnings=len(report.warnings))
        return report

    def _suggest(self, name: str) -> str | None:
        matches = self.search(name)
        if matches:
            return f"Did you mean '{matches[0].name}'?"
        return None
