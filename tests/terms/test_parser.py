"""Tests for the markdown term parser."""

from __future__ import annotations

import pytest

from edgedoc.config.models import TerminologyConfig
from edgedoc.terms.models import TermKind, TermScope
from edgedoc.terms.parser import (
    default_scope,
    parse_document,
    reference_target,
    strip_inline_code,
)

GLOSSARY = """\
# Glossary

## [[Widget]]

**Type**: entity
**Aliases**: widget, UI widget
**Related**: [[Gadget]], [[Layout|layouts]]
**Parent**: [[Component]]

A renderable element
placed in a layout.

More prose that is not part of the definition.

### [[Gadget]]

A tool.
"""


class TestDefinitions:
    """``## [[Name]]`` headings and their metadata."""

    def test_given_glossary_when_parsed_then_definitions_with_metadata(self) -> None:
        # Given / When
        doc = parse_document(GLOSSARY, "docs/GLOSSARY.md")

        # Then
        assert [d.name for d in doc.definitions] == ["Widget", "Gadget"]
        widget = doc.definitions[0]
        assert widget.line == 3
        assert widget.scope is TermScope.GLOBAL
        assert widget.kind is TermKind.ENTITY
        assert widget.aliases == ("widget", "UI widget")
        assert widget.related == ("Gadget", "Layout")
        assert widget.parent == "Component"
        assert widget.definition == "A renderable element placed in a layout."

    def test_definition_heading_is_not_a_reference(self) -> None:
        doc = parse_document("## [[Solo]]\n\nJust text.\n", "notes.md")
        assert doc.references == []

    def test_top_level_heading_is_not_a_definition(self) -> None:
        doc = parse_document("# [[Title]]\n", "notes.md")
        assert doc.definitions == []
        assert [r.text for r in doc.references] == ["Title"]

    def test_next_heading_ends_definition(self) -> None:
        doc = parse_document("## [[A]]\n\nFirst.\n\n## Other\n\nNot A.\n", "notes.md")
        assert doc.definitions[0].definition == "First."

    def test_scope_metadata_overrides_default(self) -> None:
        doc = parse_document("## [[Local]]\n**Scope**: global\n\nText.\n", "notes.md")
        assert doc.definitions[0].scope is TermScope.GLOBAL

    def test_unknown_type_keeps_concept(self) -> None:
        doc = parse_document("## [[A]]\n**Type**: gizmo\n", "notes.md")
        assert doc.definitions[0].kind is TermKind.CONCEPT


class TestReferences:
    """``[[Name]]`` occurrences."""

    def test_references_with_lines_and_labels(self) -> None:
        text = "Intro\n\nUse the [[Widget]] and [[Gadget|gadgets]] here.\n"
        doc = parse_document(text, "tasks/features/ui.md")
        assert [(r.text, r.line) for r in doc.references] == [("Widget", 3), ("Gadget", 3)]
        assert doc.references[0].context == "Use the [[Widget]] and [[Gadget|gadgets]] here."

    def test_inline_code_is_ignored(self) -> None:
        doc = parse_document("Write `[[Widget]]` to link, or ``[[Gadget]]``.\n", "a.md")
        assert doc.references == []

    def test_fenced_code_is_ignored(self) -> None:
        text = (
            "Before [[A]]\n"
            "```markdown\n"
            "[[B]]\n"
            "~~~\n"
            "[[C]]\n"
            "```\n"
            "After [[D]]\n"
            "~~~~\n"
            "[[E]]\n"
            "~~~~\n"
        )
        doc = parse_document(text, "a.md")
        assert [r.text for r in doc.references] == ["A", "D"]

    def test_fence_inside_definition_ends_paragraph(self) -> None:
        text = "## [[A]]\nLine one\n```\ncode\n```\nLine two\n"
        doc = parse_document(text, "a.md")
        assert doc.definitions[0].definition == "Line one"

    def test_metadata_references_count(self) -> None:
        doc = parse_document(GLOSSARY, "docs/GLOSSARY.md")
        assert [r.text for r in doc.references] == ["Gadget", "Layout", "Component"]

    def test_long_context_is_truncated(self) -> None:
        line = "The [[Widget]] " + "word " * 40
        doc = parse_document(line, "a.md")
        assert len(doc.references[0].context) <= 80


class TestDefaultScope:
    @pytest.mark.parametrize(
        ("path", "scope"),
        [
            ("docs/GLOSSARY.md", TermScope.GLOBAL),
            ("docs/terms/ui.md", TermScope.GLOBAL),
            ("design/project-glossary.md", TermScope.GLOBAL),
            ("tasks/features/ui.md", TermScope.DOCUMENT),
        ],
    )
    def test_defaults(self, path: str, scope: TermScope) -> None:
        assert default_scope(path) is scope

    def test_hint_can_be_disabled(self) -> None:
        config = TerminologyConfig(global_scope_paths=[], glossary_filename_hint=False)
        assert default_scope("glossary.md", config) is TermScope.DOCUMENT


class TestHelpers:
    def test_strip_inline_code_keeps_length(self) -> None:
        line = "a `[[X]]` b"
        assert len(strip_inline_code(line)) == len(line)
        assert "[[" not in strip_inline_code(line)

    def test_reference_target(self) -> None:
        assert reference_target(" Widget | label ") == "Widget"
