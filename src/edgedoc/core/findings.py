"""Validation findings shared by every validator.

A finding is data, not an exception: validators collect all of them and
the caller decides what to do with the aggregate. ``ValidationReport.passed``
is true when no finding has error severity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Literal

Severity = Literal["error", "warning"]
RuleSeverity = Literal["error", "warning", "off"]


class FindingKind(StrEnum):
    """What a finding is about."""

    # Terms
    CONFLICTING_DEFINITION = "conflicting_definition"
    ALIAS_CONFLICT = "alias_conflict"
    UNDEFINED_TERM = "undefined_term"
    SCOPE_VIOLATION = "scope_violation"
    CIRCULAR_REFERENCE = "circular_reference"
    UNUSED_DEFINITION = "unused_definition"

    # Code
    SPEC_ORPHAN = "spec_orphan"
    ORPHAN_FILE = "orphan_file"
    EXTRACTION_FAILED = "extraction_failed"

    # Interfaces
    MISSING_PROVIDER = "missing_provider"
    UNUSED_INTERFACE = "unused_interface"
    SELF_REFERENCE = "self_reference"
    INCOMPLETE_SIBLING_COVERAGE = "incomplete_sibling_coverage"

    # Index
    ASYMMETRIC_LINK = "asymmetric_link"
    MISSING_CODE_REFERENCE = "missing_code_reference"


@dataclass(frozen=True, slots=True)
class Finding:
    """A single validation problem."""

    kind: FindingKind
    severity: Severity
    subject: str
    message: str
    file: str | None = None
    line: int | None = None
    suggestion: str | None = None

    @property
    def location(self) -> str | None:
        if self.file is None:
            return None
        return f"{self.file}:{self.line}" if self.line else self.file

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "severity": self.severity,
            "subject": self.subject,
            "message": self.message,
            "file": self.file,
            "line": self.line,
            "suggestion": self.suggestion,
        }


@dataclass
class ValidationReport:
    """Aggregated findings for one validation run."""

    name: str
    findings: list[Finding] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == "error"]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == "warning"]

    @property
    def passed(self) -> bool:
        """True when there are no hard errors."""
        return not self.errors

    def add(self, finding: Finding) -> None:
        self.findings.append(finding)

    def extend(self, findings: list[Finding]) -> None:
        self.findings.extend(findings)

    def of_kind(self, kind: FindingKind) -> list[Finding]:
        return [f for f in self.findings if f.kind == kind]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "passed": self.passed,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "stats": self.stats,
            "findings": [f.to_dict() for f in self.findings],
        }


def apply_severity(severity: RuleSeverity) -> Severity | None:
    """Map a configured rule severity to a finding severity (None = rule disabled)."""
    if severity == "off":
        return None
    return severity
