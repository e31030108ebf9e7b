"""Bidirectional-consistency checks over a loaded reference index.

Interface checks work from the features' ``provides``/``uses`` sets, so an
interface referenced by features but never documented is still checked.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator

from edgedoc.core.findings import Finding, FindingKind, ValidationReport
from edgedoc.core.formatting import summarize
from edgedoc.index.models import ReferenceIndex


def interface_parent(interface_id: str) -> str | None:
    """``cli/build`` → ``cli``; top-level ids have no parent."""
    if "/" not in interface_id:
        return None
    return interface_id.rsplit("/", 1)[0]


def _in_namespace(interface_id: str, namespace: str | None) -> bool:
    if namespace is None:
        return True
    return interface_id == namespace or interface_id.startswith(namespace.rstrip("/") + "/")


def _interface_users(
    index: ReferenceIndex,
) -> tuple[dict[str, list[str]], dict[str, list[str]]]:
    providers: dict[str, list[str]] = defaultdict(list)
    consumers: dict[str, list[str]] = defaultdict(list)
    for fid in sorted(index.features):
        links = index.features[fid].interfaces
        for iid in links.provides:
            providers[iid].append(fid)
        for iid in links.uses:
            consumers[iid].append(fid)
    return providers, consumers


# ---------------------------------------------------------------------------
# Interface checks
# ---------------------------------------------------------------------------


def check_bidirectional_links(
    index: ReferenceIndex,
    *,
    feature: str | None = None,
    namespace: str | None = None,
) -> list[Finding]:
    """Used-but-unprovided (error), provided-but-unused and self-use (warnings)."""
    providers, consumers = _interface_users(index)
    findings: list[Finding] = []

    def involved(fids: list[str]) -> bool:
        return feature is None or feature in fids

    for iid in sorted(consumers):
        users = consumers[iid]
        if not _in_namespace(iid, namespace) or not involved(users):
            continue
        if iid not in providers:
            findings.append(
                Finding(
                    kind=FindingKind.MISSING_PROVIDER,
                    severity="error",
                    subject=iid,
                    message=f"Interface '{iid}' is used by {summarize(users)} "
                    "but no feature provides it",
                    file=index.interfaces[iid].file if iid in index.interfaces else None,
                    suggestion="Add it to the providing feature's 'interfaces' list",
                )
            )

    for iid in sorted(providers):
        owners = providers[iid]
        if not _in_namespace(iid, namespace) or not involved(owners):
            continue
        if iid not in consumers:
            findings.append(
                Finding(
                    kind=FindingKind.UNUSED_INTERFACE,
                    severity="warning",
                    subject=iid,
                    message=f"Interface '{iid}' is provided by {summarize(owners)} "
                    "but no feature uses it",
                    file=index.interfaces[iid].file if iid in index.interfaces else None,
                )
            )

    for fid in sorted(index.features):
        if feature is not None and fid != feature:
            continue
        entry = index.features[fid]
        for iid in sorted(set(entry.interfaces.provides) & set(entry.interfaces.uses)):
            if not _in_namespace(iid, namespace):
                continue
            findings.append(
                Finding(
                    kind=FindingKind.SELF_REFERENCE,
                    severity="warning",
                    subject=fid,
                    message=f"Feature '{fid}' both provides and uses interface '{iid}'",
                    file=entry.file,
                )
            )

    return findings


def check_sibling_coverage(
    index: ReferenceIndex,
    *,
    feature: str | None = None,
    namespace: str | None = None,
) -> list[Finding]:
    """Warn when a feature provides some, but not all, interfaces of a namespace."""
    siblings: dict[str, set[str]] = defaultdict(set)
    for iid in index.interfaces:
        parent = interface_parent(iid)
        if parent is not None:
            siblings[parent].add(iid)

    findings: list[Finding] = []
    for fid in sorted(index.features):
        if feature is not None and fid != feature:
            continue
        entry = index.features[fid]
        by_parent: dict[str, set[str]] = defaultdict(set)
        for iid in entry.interfaces.provides:
            parent = interface_parent(iid)
            if parent is not None and _in_namespace(iid, namespace):
                by_parent[parent].add(iid)

        for parent in sorted(by_parent):
            provided = by_parent[parent]
            missing = sorted(siblings.get(parent, set()) - provided)
            if not missing:
                continue
            total = len(siblings[parent] | provided)
            findings.append(
                Finding(
                    kind=FindingKind.INCOMPLETE_SIBLING_COVERAGE,
                    severity="warning",
                    subject=fid,
                    message=f"Feature '{fid}' provides {len(provided)}/{total} interfaces "
                    f"in namespace '{parent}'; missing {summarize(missing)}",
                    file=entry.file,
                )
            )
    return findings


def validate_interface_links(
    index: ReferenceIndex,
    *,
    feature: str | None = None,
    namespace: str | None = None,
) -> ValidationReport:
    """Run every interface check, optionally narrowed to a feature or namespace."""
    report = ValidationReport(name="interfaces")
    report.extend(check_bidirectional_links(index, feature=feature, namespace=namespace))
    report.extend(check_sibling_coverage(index, feature=feature, namespace=namespace))
    report.stats = {
        "interfaces": sum(1 for iid in index.interfaces if _in_namespace(iid, namespace)),
        "features": 1 if feature is not None else len(index.features),
    }
    return report


# ---------------------------------------------------------------------------
# Snapshot symmetry
# ---------------------------------------------------------------------------


def _pairs(index: ReferenceIndex) -> Iterator[tuple[str, str, bool, str | None]]:
    """Yield (relation, target, reverse_present, file) for every forward link."""
    features = index.features
    code = index.code

    for fid, entry in features.items():
        for path in [*entry.code.uses, *entry.tests.tested_by]:
            target = code.get(path)
            yield (
                f"feature '{fid}' documents '{path}'",
                path,
                target is not None and entry.file in target.documented_in,
                entry.file,
            )
        for other in entry.features.depends_on:
            if other in features:
                yield (
                    f"feature '{fid}' depends on '{other}'",
                    other,
                    fid in features[other].features.used_by,
                    entry.file,
                )
        for other in entry.features.related:
            if other in features:
                yield (
                    f"feature '{fid}' is related to '{other}'",
                    other,
                    fid in features[other].features.related,
                    entry.file,
                )
        for iid in entry.interfaces.provides:
            if iid in index.interfaces:
                yield (
                    f"feature '{fid}' provides '{iid}'",
                    iid,
                    fid in index.interfaces[iid].providers,
                    entry.file,
                )
        for iid in entry.interfaces.uses:
            if iid in index.interfaces:
                yield (
                    f"feature '{fid}' uses '{iid}'",
                    iid,
                    fid in index.interfaces[iid].consumers,
                    entry.file,
                )

    for path, entry in code.items():
        for target in entry.imports:
            other = code.get(target)
            yield (
                f"'{path}' imports '{target}'",
                target,
                other is not None and path in other.imported_by,
                path,
            )
        for target in entry.imported_by:
            other = code.get(target)
            yield (
                f"'{path}' is imported by '{target}'",
                target,
                other is not None and path in other.imports,
                path,
            )


def check_index_symmetry(index: ReferenceIndex) -> list[Finding]:
    """Every forward link must have its reverse entry."""
    return [
        Finding(
            kind=FindingKind.ASYMMETRIC_LINK,
            severity="error",
            subject=subject,
            message=f"{relation} but the reverse link is missing",
            file=file,
        )
        for relation, subject, present, file in _pairs(index)
        if not present
    ]


def check_code_references(index: ReferenceIndex) -> list[Finding]:
    """Documented code paths that don't exist on disk."""
    findings: list[Finding] = []
    for path, entry in index.code.items():
        if entry.exists:
            continue
        findings.append(
            Finding(
                kind=FindingKind.MISSING_CODE_REFERENCE,
                severity="error",
                subject=path,
                message=f"'{path}' is documented in {summarize(entry.documented_in)} "
                "but does not exist",
                file=entry.documented_in[0] if entry.documented_in else None,
            )
        )
    return findings


def validate_index_consistency(index: ReferenceIndex) -> ValidationReport:
    """Symmetry plus dangling code references for a whole snapshot."""
    report = ValidationReport(name="index")
    report.extend(check_index_symmetry(index))
    report.extend(check_code_references(index))
    report.stats = index.counts()
    return report
