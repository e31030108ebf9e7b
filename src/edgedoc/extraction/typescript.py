"""TypeScript / JavaScript symbol extraction.

Uses tree-sitter-typescript. ``.ts``, ``.mts`` and ``.cts`` are parsed with
the TypeScript grammar. Everything that may contain JSX (``.tsx`` and the
JavaScript family) is parsed with the TSX grammar.

Imports:
    - ``import a, { b as c } from "m"``: names ``["a", "b"]``
    - ``import * as ns from "m"``: names ``["*"]``
    - ``import type { T } from "m"``: ``type_only``
    - ``import "m"``, ``require("m")``, ``import("m")``: no names
    - ``export { x } from "m"`` / ``export * from "m"``: re-exports are imports too

Exports:
    - declarations (class, function, interface, type alias, enum, const/let/var)
    - export clauses (``export { a as b }``), with the exported (aliased) name
    - ``export default ...``; anonymous defaults are named ``default``
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from edgedoc.extraction.base import (
    Grammar,
    ParsedSource,
    TreeSitterExtractor,
    node_column,
    node_line,
    node_text,
    strip_quotes,
)
from edgedoc.extraction.models import ExportFact, ExportKind, ImportFact

if TYPE_CHECKING:
    from tree_sitter import Node

_TYPESCRIPT = Grammar("typescript", "tree_sitter_typescript", "language_typescript")
_TSX = Grammar("tsx", "tree_sitter_typescript", "language_tsx")

_TS_ONLY_EXTENSIONS = frozenset({".ts", ".mts", ".cts"})

_IMPORT_QUERY = """
    (import_statement) @import_node
    (call_expression) @import_node
"""

_CLASS_TYPES = frozenset({"class_declaration", "abstract_class_declaration", "class"})
_FUNCTION_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_signature",
        "function_expression",
        "function",
        "generator_function",
        "arrow_function",
    }
)
_TYPE_TYPES = frozenset({"interface_declaration", "type_alias_declaration", "enum_declaration"})
_VARIABLE_TYPES = frozenset({"lexical_declaration", "variable_declaration"})
_NAMESPACE_TYPES = frozenset({"internal_module", "module"})
_PATTERN_NAME_TYPES = frozenset({"identifier", "shorthand_property_identifier_pattern"})


class TypeScriptExtractor(TreeSitterExtractor):
    """Import/export extraction for TypeScript and JavaScript."""

    EXTENSIONS = frozenset({".ts", ".tsx", ".mts", ".cts", ".js", ".jsx", ".mjs", ".cjs"})

    @property
    def name(self) -> str:
        return "typescript"

    def _grammar_for(self, path: str) -> Grammar:
        lower = path.lower()
        if any(lower.endswith(ext) for ext in _TS_ONLY_EXTENSIONS):
            return _TYPESCRIPT
        return _TSX

    # ------------------------------------------------------------------
    # Imports
    # ------------------------------------------------------------------

    def _extract_imports(self, parsed: ParsedSource, path: str) -> list[ImportFact]:
        imports: list[ImportFact] = []
        for node in self._query_nodes(parsed, _IMPORT_QUERY, "import_node"):
            fact = (
                self._import_statement(node, path)
                if node.type == "import_statement"
                else self._import_call(node, path)
            )
            if fact is not None:
                imports.append(fact)

        for node in parsed.root.children:
            if node.type == "export_statement" and node.child_by_field_name("source"):
                imports.append(self._reexport(node, path))

        imports.sort(key=lambda f: (f.line, f.column))
        return imports

    def _import_statement(self, node: Node, path: str) -> ImportFact | None:
        source_node = node.child_by_field_name("source")
        names: list[str] = []

        for child in node.children:
            if child.type == "import_require_clause":
                # import x = require("m")
                source_node = child.child_by_field_name("source")
                names.extend(node_text(c) for c in child.children if c.type == "identifier")
            elif child.type == "import_clause":
                names.extend(_import_clause_names(child))

        if source_node is None:
            return None

        return ImportFact(
            file=path,
            specifier=strip_quotes(node_text(source_node)),
            names=tuple(names),
            type_only=any(c.type == "type" for c in node.children),
            line=node_line(node),
            column=node_column(node),
        )

    def _import_call(self, node: Node, path: str) -> ImportFact | None:
        """``require("m")`` and dynamic ``import("m")``."""
        func_node = node.child_by_field_name("function")
        if func_node is None:
            return None
        if not (func_node.type == "import" or node_text(func_node) == "require"):
            return None

        args_node = node.child_by_field_name("arguments")
        if args_node is None:
            return None
        first = next(iter(args_node.named_children), None)
        if first is None or first.type != "string":
            return None

        return ImportFact(
            file=path,
            specifier=strip_quotes(node_text(first)),
            line=node_line(node),
            column=node_column(node),
        )

    def _reexport(self, node: Node, path: str) -> ImportFact:
        names: list[str] = []
        for child in node.children:
            if child.type == "export_clause":
                for spec in child.named_children:
                    if spec.type == "export_specifier":
                        names.append(node_text(spec.child_by_field_name("name")))
            elif child.type in ("*", "namespace_export"):
                names = ["*"]
        return ImportFact(
            file=path,
            specifier=strip_quotes(node_text(node.child_by_field_name("source"))),
            names=tuple(names),
            type_only=any(c.type == "type" for c in node.children),
            line=node_line(node),
            column=node_column(node),
        )

    # ------------------------------------------------------------------
    # Exports
    # ------------------------------------------------------------------

    def _extract_exports(self, parsed: ParsedSource, path: str) -> list[ExportFact]:
        exports: list[ExportFact] = []
        for node in parsed.root.children:
            if node.type == "export_statement":
                exports.extend(self._export_statement(node, path))
        return exports

    def _export_statement(self, node: Node, path: str) -> list[ExportFact]:
        is_default = any(c.type == "default" for c in node.children)
        type_only = any(c.type == "type" for c in node.children)

        def fact(name: str, kind: ExportKind, at: Node) -> ExportFact:
            return ExportFact(
                file=path,
                name=name,
                kind=kind,
                is_default=is_default,
                line=node_line(at),
                column=node_column(at),
            )

        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            return [
                fact(name, kind, at)
                for name, kind, at in _declared_names(declaration, is_default=is_default)
            ]

        if is_default:
            value = node.child_by_field_name("value")
            if value is None:
                return [fact("default", ExportKind.VALUE, node)]
            if value.type == "identifier":
                return [fact(node_text(value), ExportKind.VALUE, value)]
            return [fact(name, kind, at) for name, kind, at in _declared_names(value, True)]

        results: list[ExportFact] = []
        for child in node.children:
            if child.type == "export_clause":
                for spec in child.named_children:
                    if spec.type != "export_specifier":
                        continue
                    exported = spec.child_by_field_name("alias") or spec.child_by_field_name(
                        "name"
                    )
                    kind = ExportKind.TYPE if type_only else ExportKind.VALUE
                    results.append(fact(node_text(exported), kind, spec))
            elif child.type == "namespace_export":
                # export * as ns from "m"
                for name_node in child.named_children:
                    results.append(fact(strip_quotes(node_text(name_node)), ExportKind.VALUE, child))
        return results


# =============================================================================
# Helpers
# =============================================================================


def _import_clause_names(clause: Node) -> list[str]:
    names: list[str] = []
    for child in clause.children:
        if child.type == "identifier":
            names.append(node_text(child))
        elif child.type == "named_imports":
            for spec in child.named_children:
                if spec.type == "import_specifier":
                    names.append(node_text(spec.child_by_field_name("name")))
        elif child.type == "namespace_import":
            names.append("*")
    return names


def _declared_names(decl: Node, is_default: bool = False) -> list[tuple[str, ExportKind, Node]]:
    """Names (with kinds) introduced by an exported declaration or default value."""
    name_node = decl.child_by_field_name("name")
    fallback = "default" if is_default else ""

    if decl.type in _CLASS_TYPES:
        name = node_text(name_node) or fallback
        return [(name, ExportKind.CLASS, decl)] if name else []

    if decl.type in _FUNCTION_TYPES:
        name = node_text(name_node) or fallback
        return [(name, ExportKind.FUNCTION, decl)] if name else []

    if decl.type in _TYPE_TYPES:
        return [(node_text(name_node), ExportKind.TYPE, decl)]

    if decl.type in _NAMESPACE_TYPES:
        return [(strip_quotes(node_text(name_node)), ExportKind.VALUE, decl)]

    if decl.type in _VARIABLE_TYPES:
        results: list[tuple[str, ExportKind, Node]] = []
        for declarator in decl.named_children:
            if declarator.type != "variable_declarator":
                continue
            target = declarator.child_by_field_name("name")
            if target is None:
                continue
            value = declarator.child_by_field_name("value")
            kind = (
                ExportKind.FUNCTION
                if value is not None and value.type in _FUNCTION_TYPES
                else ExportKind.VALUE
            )
            for name in _pattern_names(target):
                results.append((name, kind, declarator))
        return results

    if decl.type == "ambient_declaration":
        # export declare const x: T;
        results = []
        for child in decl.named_children:
            results.extend(_declared_names(child, is_default))
        return results

    return [(fallback, ExportKind.VALUE, decl)] if fallback else []


def _pattern_names(target: Node) -> list[str]:
    """Identifiers bound by a declarator target (plain name or destructuring)."""
    if target.type == "identifier":
        return [node_text(target)]
    names: list[str] = []
    stack = [target]
    while stack:
        node = stack.pop()
        if node.type in _PATTERN_NAME_TYPES:
            names.append(node_text(node))
        elif node.type == "pair_pattern":
            value = node.child_by_field_name("value")
            if value is not None:
                stack.append(value)
        elif node.type in ("assignment_pattern", "object_assignment_pattern"):
            left = node.child_by_field_name("left")
            if left is not None:
                stack.append(left)
        else:
            stack.extend(reversed(node.named_children))
    return names
