"""Python symbol extraction.

Python has no export keyword: every top-level ``def``, ``class`` and
assignment target whose name doesn't start with ``_`` is treated as
exported. Imports keep their relative dots so the resolver can anchor
them to the importing package.
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
)
from edgedoc.extraction.models import ExportFact, ExportKind, ImportFact

if TYPE_CHECKING:
    from tree_sitter import Node

_PYTHON = Grammar("python", "tree_sitter_python")

_IMPORT_QUERY = """
    (import_statement) @import_node
    (import_from_statement) @import_node
"""

_TARGET_NAME_TYPES = frozenset({"identifier"})


class PythonExtractor(TreeSitterExtractor):
    """Import/export extraction for Python."""

    EXTENSIONS = frozenset({".py", ".pyi"})

    @property
    def name(self) -> str:
        return "python"

    def _grammar_for(self, path: str) -> Grammar:  # noqa: ARG002
        return _PYTHON

    # ------------------------------------------------------------------
    # Imports
    # ------------------------------------------------------------------

    def _extract_imports(self, parsed: ParsedSource, path: str) -> list[ImportFact]:
        imports: list[ImportFact] = []
        for node in self._query_nodes(parsed, _IMPORT_QUERY, "import_node"):
            type_only = _under_type_checking(node)
            if node.type == "import_statement":
                # import a.b, c as d  ->  one fact per module
                for child in node.children_by_field_name("name"):
                    module = (
                        child.child_by_field_name("name")
                        if child.type == "aliased_import"
                        else child
                    )
                    imports.append(
                        ImportFact(
                            file=path,
                            specifier=node_text(module),
                            type_only=type_only,
                            line=node_line(node),
                            column=node_column(node),
                        )
                    )
            else:
                module_node = node.child_by_field_name("module_name")
                if module_node is None:
                    continue
                imports.append(
                    ImportFact(
                        file=path,
                        specifier=node_text(module_node),
                        names=tuple(_from_import_names(node)),
                        type_only=type_only,
                        line=node_line(node),
                        column=node_column(node),
                    )
                )
        return imports

    # ------------------------------------------------------------------
    # Exports
    # ------------------------------------------------------------------

    def _extract_exports(self, parsed: ParsedSource, path: str) -> list[ExportFact]:
        exports: list[ExportFact] = []
        for node in parsed.root.children:
            for name, kind, at in _top_level_names(node):
                if name and not name.startswith("_"):
                    exports.append(
                        ExportFact(
                            file=path,
                            name=name,
                            kind=kind,
                            line=node_line(at),
                            column=node_column(at),
                        )
                    )
        return exports


# =============================================================================
# Helpers
# =============================================================================


def _from_import_names(node: Node) -> list[str]:
    names: list[str] = []
    for child in node.children_by_field_name("name"):
        if child.type == "aliased_import":
            names.append(node_text(child.child_by_field_name("name")))
        else:
            names.append(node_text(child))
    if any(c.type == "wildcard_import" for c in node.children):
        names.append("*")
    return names


def _under_type_checking(node: Node) -> bool:
    """True when the import sits inside an ``if TYPE_CHECKING:`` block."""
    parent = node.parent
    while parent is not None:
        if parent.type == "if_statement":
            condition = parent.child_by_field_name("condition")
            if "TYPE_CHECKING" in node_text(condition):
                return True
        parent = parent.parent
    return False


def _top_level_names(node: Node) -> list[tuple[str, ExportKind, Node]]:
    if node.type == "decorated_definition":
        definition = node.child_by_field_name("definition")
        return _top_level_names(definition) if definition is not None else []

    if node.type == "class_definition":
        return [(node_text(node.child_by_field_name("name")), ExportKind.CLASS, node)]

    if node.type == "function_definition":
        return [(node_text(node.child_by_field_name("name")), ExportKind.FUNCTION, node)]

    if node.type == "type_alias_statement":
        # type Alias[T] = ...
        left = node_text(node.child_by_field_name("left"))
        return [(left.split("[", 1)[0].strip(), ExportKind.TYPE, node)]

    if node.type == "expression_statement":
        results: list[tuple[str, ExportKind, Node]] = []
        for child in node.named_children:
            # a = b = 1 nests the second assignment as the right side
            assignment: Node | None = child
            while assignment is not None and assignment.type == "assignment":
                left = assignment.child_by_field_name("left")
                if left is not None:
                    results.extend((name, ExportKind.VALUE, child) for name in _target_names(left))
                assignment = assignment.child_by_field_name("right")
        return results

    return []


def _target_names(target: Node) -> list[str]:
    """Plain names bound by an assignment target (``a``, ``a, b``, ``(a, b)``)."""
    if target.type in _TARGET_NAME_TYPES:
        return [node_text(target)]
    if target.type in ("pattern_list", "tuple_pattern", "list_pattern"):
        names: list[str] = []
        for child in target.named_children:
            names.extend(_target_names(child))
        return names
    # attribute / subscript targets don't bind module names
    return []
