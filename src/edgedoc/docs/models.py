"""Documentation records read from frontmatter."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FeatureDoc:
    """A feature document (``<base>/features/*.md``)."""

    id: str
    file: str
    entry_point: str | None = None
    code_references: list[str] = field(default_factory=list)
    related_features: list[str] = field(default_factory=list)
    depends_on: list[str] = field(default_factory=list)
    provides: list[str] = field(default_factory=list)
    uses: list[str] = field(default_factory=list)
    test_files: list[str] = field(default_factory=list)
    shared_types: list[str] = field(default_factory=list)


@dataclass
class InterfaceDoc:
    """An interface document (``<base>/interfaces/**.md``).

    The id is the path below the interfaces directory without ``.md``,
    so ``interfaces/cli/build.md`` is ``cli/build`` in namespace ``cli``.
    """

    id: str
    file: str
    from_feature: str | None = None
    to_feature: str | None = None
    type: str | None = None
    shared_types: list[str] = field(default_factory=list)
    code_references: list[str] = field(default_factory=list)

    @property
    def namespace(self) -> str | None:
        if "/" not in self.id:
            return None
        return self.id.rsplit("/", 1)[0]


@dataclass
class SharedDoc:
    """A shared-type document (``<base>/shared/*.md``)."""

    id: str
    file: str
    code_references: list[str] = field(default_factory=list)


@dataclass
class DocumentSet:
    """All structured documents of a project."""

    features: dict[str, FeatureDoc] = field(default_factory=dict)
    interfaces: dict[str, InterfaceDoc] = field(default_factory=dict)
    shared: dict[str, SharedDoc] = field(default_factory=dict)

    def code_references(self) -> dict[str, list[str]]:
        """Documented code path → documenting files, across every document kind.

        Feature test files count as documented too.
        """
        refs: dict[str, list[str]] = {}
        docs = [*self.features.values(), *self.interfaces.values(), *self.shared.values()]
        for doc in docs:
            paths = list(doc.code_references)
            if isinstance(doc, FeatureDoc):
                paths.extend(doc.test_files)
            for path in paths:
                owners = refs.setdefault(path, [])
                if doc.file not in owners:
                    owners.append(doc.file)
        return refs
