"""Reference index snapshot schema.

The snapshot is a single JSON document with the top-level sections
``version``, ``generated``, ``features``, ``code``, ``interfaces`` and
``terms``. Every link is stored in both directions.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from edgedoc.config.constants import INDEX_VERSION


class _Entry(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------


class FeatureCodeLinks(_Entry):
    uses: list[str] = Field(default_factory=list)
    used_by: list[str] = Field(default_factory=list)


class FeatureFeatureLinks(_Entry):
    related: list[str] = Field(default_factory=list)
    depends_on: list[str] = Field(default_factory=list)
    used_by: list[str] = Field(default_factory=list)


class FeatureInterfaceLinks(_Entry):
    provides: list[str] = Field(default_factory=list)
    uses: list[str] = Field(default_factory=list)


class FeatureTermLinks(_Entry):
    defines: list[str] = Field(default_factory=list)
    uses: list[str] = Field(default_factory=list)


class FeatureTestLinks(_Entry):
    tested_by: list[str] = Field(default_factory=list)


class FeatureEntry(_Entry):
    file: str
    entry_point: str | None = None
    code: FeatureCodeLinks = Field(default_factory=FeatureCodeLinks)
    features: FeatureFeatureLinks = Field(default_factory=FeatureFeatureLinks)
    interfaces: FeatureInterfaceLinks = Field(default_factory=FeatureInterfaceLinks)
    terms: FeatureTermLinks = Field(default_factory=FeatureTermLinks)
    tests: FeatureTestLinks = Field(default_factory=FeatureTestLinks)
    shared_types: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Code
# ---------------------------------------------------------------------------


class ExportEntry(_Entry):
    name: str
    kind: str
    line: int = 0
    default: bool = False


class CodeEntry(_Entry):
    type: str = "source"
    language: str | None = None
    exists: bool = True
    documented_in: list[str] = Field(default_factory=list)
    imports: list[str] = Field(default_factory=list)
    imported_by: list[str] = Field(default_factory=list)
    external_imports: list[str] = Field(default_factory=list)
    exports: list[ExportEntry] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------


class InterfaceEntry(_Entry):
    file: str
    from_feature: str | None = Field(default=None, alias="from")
    to_feature: str | None = Field(default=None, alias="to")
    type: str | None = None
    shared_types: list[str] = Field(default_factory=list)
    providers: list[str] = Field(default_factory=list)
    consumers: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Terms
# ---------------------------------------------------------------------------


class TermDefinitionEntry(_Entry):
    file: str
    line: int
    scope: str
    kind: str
    definition: str = ""
    aliases: list[str] = Field(default_factory=list)
    related: list[str] = Field(default_factory=list)
    parent: str | None = None


class TermReferenceEntry(_Entry):
    file: str
    line: int
    context: str = ""


class TermEntry(_Entry):
    definition: TermDefinitionEntry
    references: list[TermReferenceEntry] = Field(default_factory=list)
    usage_count: int = 0


# ---------------------------------------------------------------------------
# Snapshot
# ---------------------------------------------------------------------------


class ReferenceIndex(_Entry):
    """The persisted cross-reference snapshot."""

    version: str = INDEX_VERSION
    generated: datetime = Field(default_factory=lambda: datetime.now(UTC))
    features: dict[str, FeatureEntry] = Field(default_factory=dict)
    code: dict[str, CodeEntry] = Field(default_factory=dict)
    interfaces: dict[str, InterfaceEntry] = Field(default_factory=dict)
    terms: dict[str, TermEntry] = Field(default_factory=dict)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)

    @classmethod
    def from_json(cls, data: str | bytes) -> ReferenceIndex:
        return cls.model_validate_json(data)

    def counts(self) -> dict[str, int]:
        return {
            "features": len(self.features),
            "code": len(self.code),
            "interfaces": len(self.interfaces),
            "terms": len(self.terms),
        }
