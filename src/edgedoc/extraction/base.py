"""Symbol extraction protocol and tree-sitter base class.

Defines the interface every language extractor implements, plus a base
class that owns grammar loading, parsing and malformed-input detection.
"""

from __future__ import annotations

import importlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import tree_sitter
from tree_sitter import Query as _TSQuery
from tree_sitter import QueryCursor as _TSQueryCursor

from edgedoc.core.errors import ExtractionError
from edgedoc.core.languages import detect_language
from edgedoc.extraction.models import ExtractionResult

if TYPE_CHECKING:
    from tree_sitter import Node, Tree


# =============================================================================
# Protocol
# =============================================================================


@runtime_checkable
class SymbolExtractor(Protocol):
    """Protocol for language-specific import/export extraction."""

    @property
    def name(self) -> str:
        """Language name stored on extracted files (e.g. "python")."""
        ...

    @property
    def extensions(self) -> frozenset[str]:
        """Lowercase file extensions this extractor handles, with dot."""
        ...

    def can_handle(self, path: str) -> bool:
        """Whether this extractor accepts the given path."""
        ...

    def extract(self, source: str | bytes, path: str) -> ExtractionResult:
        """Extract import and export facts from one file's content."""
        ...


# =============================================================================
# Tree-sitter base
# =============================================================================


@dataclass(frozen=True, slots=True)
class Grammar:
    """Where to load a tree-sitter grammar from."""

    name: str
    module: str
    language_func: str = "language"


@dataclass
class ParsedSource:
    """A parsed file plus its error statistics."""

    tree: Tree
    error_count: int
    total_nodes: int

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def error_ratio(self) -> float:
        return self.error_count / self.total_nodes if self.total_nodes else 0.0


class TreeSitterExtractor(ABC):
    """Base class for tree-sitter backed extractors.

    Subclasses declare their extensions and grammars and implement
    ``_extract_imports`` and ``_extract_exports`` over the parse tree.
    """

    #: Lowercase extensions with dot
    EXTENSIONS: frozenset[str] = frozenset()

    def __init__(self, *, max_error_ratio: float = 0.5) -> None:
        self._max_error_ratio = max_error_ratio
        self._languages: dict[str, Any] = {}
        self._queries: dict[tuple[str, str], Any] = {}

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    def extensions(self) -> frozenset[str]:
        return self.EXTENSIONS

    def can_handle(self, path: str) -> bool:
        return PurePosixPath(path).suffix.lower() in self.extensions

    @abstractmethod
    def _grammar_for(self, path: str) -> Grammar:
        """Pick the grammar used to parse a path."""

    @abstractmethod
    def _extract_imports(self, parsed: ParsedSource, path: str) -> list[Any]: ...

    @abstractmethod
    def _extract_exports(self, parsed: ParsedSource, path: str) -> list[Any]: ...

    def extract(self, source: str | bytes, path: str) -> ExtractionResult:
        """Parse ``source`` and return its import/export facts.

        Raises:
            ExtractionError: If the content can't be decoded, the grammar is
                missing, or the parse tree is mostly errors.
        """
        if isinstance(source, str):
            content = source.encode("utf-8")
        else:
            try:
                source.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ExtractionError.decode_error(path, str(e)) from e
            content = source

        parsed = self._parse(content, self._grammar_for(path))
        if parsed.root.has_error and parsed.error_ratio > self._max_error_ratio:
            raise ExtractionError.malformed(path, parsed.error_ratio)

        return ExtractionResult(
            file=path,
            language=detect_language(path) or self.name,
            imports=self._extract_imports(parsed, path),
            exports=self._extract_exports(parsed, path),
        )

    # ------------------------------------------------------------------
    # Grammar and parsing
    # ------------------------------------------------------------------

    def _get_language(self, grammar: Grammar) -> Any:
        """Get or load a tree-sitter language."""
        if grammar.name in self._languages:
            return self._languages[grammar.name]
        try:
            mod = importlib.import_module(grammar.module)
            lang_fn = getattr(mod, grammar.language_func)
            lang = tree_sitter.Language(lang_fn())
        except (ImportError, AttributeError) as e:
            raise ExtractionError.grammar_unavailable(grammar.name, str(e)) from e
        self._languages[grammar.name] = lang
        return lang

    def _parse(self, content: bytes, grammar: Grammar) -> ParsedSource:
        parser = tree_sitter.Parser(self._get_language(grammar))
        tree = parser.parse(content)

        error_count = 0
        total_nodes = 0
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            total_nodes += 1
            if node.type == "ERROR" or node.is_missing:
                error_count += 1
            stack.extend(node.children)

        return ParsedSource(tree=tree, error_count=error_count, total_nodes=total_nodes)

    def _query_nodes(self, parsed: ParsedSource, query_src: str, capture: str) -> list[Node]:
        """Run a query against the tree and return the nodes of one capture."""
        lang = parsed.tree.language
        key = (str(id(lang)), query_src)
        query = self._queries.get(key)
        if query is None:
            query = _TSQuery(lang, query_src)
            self._queries[key] = query
        cursor = _TSQueryCursor(query)
        matches: list[tuple[int, dict[str, list[Any]]]] = cursor.matches(parsed.root)
        nodes: list[Node] = []
        for _pattern_idx, captures in matches:
            nodes.extend(captures.get(capture, []))
        nodes.sort(key=lambda n: n.start_byte)
        return nodes


# =============================================================================
# Node helpers
# =============================================================================


def node_text(node: Node | None) -> str:
    if node is None or not node.text:
        return ""
    return node.text.decode("utf-8")


def node_line(node: Node) -> int:
    return node.start_point[0] + 1


def node_column(node: Node) -> int:
    return node.start_point[1]


def strip_quotes(text: str) -> str:
    """Remove matching string delimiters from a literal."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
        return text[1:-1]
    return text
