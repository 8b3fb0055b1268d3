#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/transforms/test_serialize_passes.py
"""Unit tests for the passes run before writing Markdown."""

import pytest

from mdbridge.ast import (
    Code,
    Document,
    Heading,
    LineBreak,
    Paragraph,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
)
from mdbridge.options import MarkdownRendererOptions
from mdbridge.transforms import (
    EscapeMarkdownTransform,
    StripTrailingBreaksTransform,
    serialize_passes,
    strip_trailing_breaks,
)


def escape(*inlines) -> list:
    doc = Document(children=[Paragraph(content=list(inlines))])
    return EscapeMarkdownTransform().transform(doc).children[0].content


@pytest.mark.unit
class TestEscapeMarkdown:
    """Tests for escaping text before serialization."""

    def test_paired_delimiters_and_heading_marker(self):
        assert escape(Text("# a *b*")) == [Text("\\# a \\*b\\*")]

    def test_ordinary_prose_untouched(self):
        assert escape(Text("snake_case and a lone *")) == [Text("snake_case and a lone *")]

    def test_marker_after_hard_break(self):
        content = escape(Text("a"), LineBreak(), Text("1. x"))
        assert content[2] == Text("1\\. x")

    def test_marker_after_soft_break_in_same_text(self):
        assert escape(Text("a\n> b")) == [Text("a\n\\> b")]

    def test_marker_mid_line_untouched(self):
        content = escape(Strong(content=[Text("a")]), Text("# b"))
        assert content[1] == Text("# b")

    def test_text_inside_formatting(self):
        content = escape(Strong(content=[Text("`x`")]))
        assert content == [Strong(content=[Text("\\`x\\`")])]

    def test_code_untouched(self):
        assert escape(Code("*a*")) == [Code("*a*")]

    def test_html_tags_untouched(self):
        assert escape(Text("<span>*x*</span>")) == [Text("<span>\\*x\\*</span>")]

    def test_pipes_in_table_cells(self):
        table = Table(header=TableRow(cells=[TableCell(content=[Text("a|b")])], is_header=True))
        result = EscapeMarkdownTransform().transform(Document(children=[table]))
        assert result.children[0].header.cells[0].content == [Text("a\\|b")]

    def test_pipes_outside_tables_untouched(self):
        assert escape(Text("a|b")) == [Text("a|b")]


@pytest.mark.unit
class TestStripTrailingBreaks:
    """Tests for removing hard breaks that end a container."""

    def test_trailing_break_removed(self):
        assert strip_trailing_breaks([Text("a"), LineBreak(), Text("  ")]) == [Text("a")]

    def test_whitespace_after_break_removed_with_it(self):
        assert strip_trailing_breaks([Text("a"), LineBreak(), Text(" "), LineBreak(), Text("\t")]) == [Text("a")]

    def test_trailing_whitespace_without_break_kept(self):
        nodes = [Text("a"), Text("  ")]
        assert strip_trailing_breaks(nodes) == nodes

    def test_inner_break_kept(self):
        nodes = [Text("a"), LineBreak(), Text("b")]
        assert strip_trailing_breaks(nodes) == nodes

    def test_soft_break_kept(self):
        nodes = [Text("a"), LineBreak(soft=True)]
        assert strip_trailing_breaks(nodes) == nodes

    def test_transform_reaches_nested_containers(self):
        doc = Document(
            children=[
                Heading(level=1, content=[Text("t"), LineBreak()]),
                Paragraph(content=[Strong(content=[Text("a"), LineBreak()])]),
            ]
        )
        heading, paragraph = StripTrailingBreaksTransform().transform(doc).children
        assert heading.content == [Text("t")]
        assert paragraph.content == [Strong(content=[Text("a")])]


@pytest.mark.unit
class TestSerializePasses:
    """Tests for selecting serialization passes from options."""

    def test_default_passes(self):
        passes = serialize_passes()
        assert [type(p) for p in passes] == [EscapeMarkdownTransform, StripTrailingBreaksTransform]

    def test_passes_disabled(self):
        options = MarkdownRendererOptions(escape_special=False, strip_trailing_breaks=False)
        assert serialize_passes(options) == []
