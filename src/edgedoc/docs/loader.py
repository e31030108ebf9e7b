"""Discovery and loading of feature, interface and shared documents."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path, PurePosixPath

from edgedoc.config.models import DocsConfig, SourcesConfig
from edgedoc.core.errors import DocumentError
from edgedoc.core.excludes import iter_project_files
from edgedoc.core.logging import get_logger
from edgedoc.docs.frontmatter import as_optional_str, as_str_list, split_frontmatter
from edgedoc.docs.models import DocumentSet, FeatureDoc, InterfaceDoc, SharedDoc
from edgedoc.graph.reachability import normalize_reference

log = get_logger(__name__)

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})


def read_document(root: Path, rel_path: str) -> str:
    """Read a project document as UTF-8 text.

    Raises:
        DocumentError: If the file can't be read or decoded.
    """
    try:
        return (root / rel_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError.read_error(rel_path, str(e)) from e


def iter_markdown(root: Path, sources: SourcesConfig | None = None) -> Iterator[str]:
    """Project-relative paths of every markdown file, pruned like the source scan."""
    sources = sources or SourcesConfig()
    yield from iter_project_files(
        root,
        suffixes=MARKDOWN_SUFFIXES,
        extra_excludes=sources.exclude_dirs,
        include_dirs=sources.include_dirs,
    )


def _docs_under(root: Path, directory: str) -> list[str]:
    base = root / directory
    if not base.is_dir():
        return []
    return [
        PurePosixPath(directory, rel).as_posix()
        for rel in iter_project_files(base, suffixes=MARKDOWN_SUFFIXES)
    ]


def _paths(value: object) -> list[str]:
    return [p for p in (normalize_reference(v) for v in as_str_list(value)) if p]


def load_feature(root: Path, rel_path: str) -> FeatureDoc:
    meta, _body = split_frontmatter(read_document(root, rel_path), rel_path)
    return FeatureDoc(
        id=as_optional_str(meta.get("feature")) or PurePosixPath(rel_path).stem,
        file=rel_path,
        entry_point=as_optional_str(meta.get("entry_point")),
        code_references=_paths(meta.get("code_references")),
        related_features=as_str_list(meta.get("related_features")),
        depends_on=as_str_list(meta.get("depends_on")),
        provides=as_str_list(meta.get("interfaces")),
        uses=as_str_list(meta.get("uses_interfaces")),
        test_files=_paths(meta.get("test_files")),
        shared_types=as_str_list(meta.get("shared_types")),
    )


def load_interface(root: Path, rel_path: str, interfaces_dir: str) -> InterfaceDoc:
    meta, _body = split_frontmatter(read_document(root, rel_path), rel_path)
    relative = PurePosixPath(rel_path).relative_to(interfaces_dir)
    default_id = relative.with_suffix("").as_posix()
    return InterfaceDoc(
        id=as_optional_str(meta.get("interface")) or default_id,
        file=rel_path,
        from_feature=as_optional_str(meta.get("from")),
        to_feature=as_optional_str(meta.get("to")),
        type=as_optional_str(meta.get("type")),
        shared_types=as_str_list(meta.get("shared_types")),
        code_references=_paths(meta.get("code_references")),
    )


def load_shared(root: Path, rel_path: str) -> SharedDoc:
    meta, _body = split_frontmatter(read_document(root, rel_path), rel_path)
    return SharedDoc(
        id=as_optional_str(meta.get("shared_type") or meta.get("type"))
        or PurePosixPath(rel_path).stem,
        file=rel_path,
        code_references=_paths(meta.get("code_references")),
    )


def load_documents(root: Path, config: DocsConfig | None = None) -> DocumentSet:
    """Load every structured document under the configured docs directory.

    Unreadable documents are logged and skipped. A duplicate id keeps the
    first document (in path order) and logs the second.
    """
    config = config or DocsConfig()
    base = PurePosixPath(config.base_dir)
    features_dir = (base / config.features_dir).as_posix()
    interfaces_dir = (base / config.interfaces_dir).as_posix()
    shared_dir = (base / config.shared_dir).as_posix()

    docs = DocumentSet()

    for rel_path in _docs_under(root, features_dir):
        try:
            feature = load_feature(root, rel_path)
        except DocumentError as e:
            log.warning("document_skipped", file=rel_path, error=e.message)
            continue
        if feature.id in docs.features:
            log.warning("duplicate_feature_id", feature=feature.id, file=rel_path)
            continue
        docs.features[feature.id] = feature

    for rel_path in _docs_under(root, interfaces_dir):
        try:
            interface = load_interface(root, rel_path, interfaces_dir)
        except DocumentError as e:
            log.warning("document_skipped", file=rel_path, error=e.message)
            continue
        if interface.id in docs.interfaces:
            log.warning("duplicate_interface_id", interface=interface.id, file=rel_path)
            continue
        docs.interfaces[interface.id] = interface

    for rel_path in _docs_under(root, shared_dir):
        try:
            shared = load_shared(root, rel_path)
        except DocumentError as e:
            log.warning("document_skipped", file=rel_path, error=e.message)
            continue
        docs.shared.setdefault(shared.id, shared)

    log.debug(
        "documents_loaded",
        features=len(docs.features),
        interfaces=len(docs.interfaces),
        shared=len(docs.shared),
    )
    return docs
