#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/renderers/test_markdown_renderer.py
"""Unit tests for the Markdown renderer.

Tests cover:
- The fixed output style for every block type
- Code fences and spans that contain backticks
- Escaping and trailing hard breaks
- Link destinations and titles
- Component serialization

"""

import io

import pytest

from mdbridge.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    ComponentBlock,
    ComponentInline,
    Definition,
    Document,
    Emphasis,
    Heading,
    HTMLBlock,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from mdbridge.exceptions import InvalidOptionsError, ValidationError
from mdbridge.options import HtmlRendererOptions, MarkdownRendererOptions
from mdbridge import ast_to_markdown
from mdbridge.renderers import MarkdownRenderer
from mdbridge.utils.components import encode_component_payload


def render(*blocks, shortcodes=None, options=None) -> str:
    return ast_to_markdown(Document(children=list(blocks)), shortcodes, options)


def para(*inlines) -> Paragraph:
    return Paragraph(content=list(inlines))


def item(*inlines) -> ListItem:
    return ListItem(children=[para(*inlines)])


def row(*texts) -> TableRow:
    return TableRow(cells=[TableCell(content=[Text(text)]) for text in texts])


@pytest.mark.unit
class TestBlocks:
    """Tests for block output."""

    def test_none_renders_empty(self):
        assert ast_to_markdown(None) == ""

    def test_headings(self):
        assert render(Heading(level=3, content=[Text("T")])) == "### T"

    def test_empty_heading(self):
        assert render(Heading(level=2, content=[])) == "##"

    def test_heading_soft_break_becomes_space(self):
        assert render(Heading(level=1, content=[Text("a"), LineBreak(soft=True), Text("b")])) == "# a b"

    def test_blocks_separated_by_blank_line(self):
        assert render(para(Text("a")), ThematicBreak(), para(Text("b"))) == "a\n\n---\n\nb"

    def test_code_block_with_info_string(self):
        block = CodeBlock("x = 1", language="py", metadata={"info_string": "py title=a.py"})
        assert render(block) == "```py title=a.py\nx = 1\n```"

    def test_code_fence_grows_past_backticks(self):
        assert render(CodeBlock("a ``` b")) == "````\na ``` b\n````"

    def test_empty_code_block(self):
        assert render(CodeBlock("")) == "```\n```"

    def test_block_quote(self):
        assert render(BlockQuote(children=[para(Text("a")), para(Text("b"))])) == "> a\n>\n> b"

    def test_tight_bullet_list(self):
        assert render(List(ordered=False, items=[item(Text("a")), item(Text("b"))])) == "* a\n* b"

    def test_loose_list(self):
        lst = List(ordered=False, tight=False, items=[item(Text("a")), item(Text("b"))])
        assert render(lst) == "* a\n\n* b"

    def test_ordered_list_numbers_from_start(self):
        lst = List(ordered=True, start=3, items=[item(Text("a")), item(Text("b"))])
        assert render(lst) == "3. a\n4. b"

    def test_nested_list_indented(self):
        inner = List(ordered=False, items=[item(Text("b"))])
        outer = List(ordered=False, items=[ListItem(children=[para(Text("a")), inner])])
        assert render(outer) == "* a\n  * b"

    def test_empty_list_item(self):
        assert render(List(ordered=False, items=[ListItem(children=[])])) == "*"

    def test_table(self):
        table = Table(header=row("a", "b"), rows=[row("1", "2")], alignments=[None, "center"])
        assert render(table) == "| a | b |\n|---|:---:|\n| 1 | 2 |"

    def test_table_without_header_uses_first_row(self):
        assert render(Table(rows=[row("a"), row("b")])) == "| a |\n|---|\n| b |"

    def test_short_rows_padded(self):
        table = Table(header=row("a", "b"), rows=[row("1")])
        assert render(table) == "| a | b |\n|---|---|\n| 1 |  |"

    def test_pipe_in_cell_escaped(self):
        assert render(Table(header=row("a|b"))) == "| a\\|b |\n|---|"

    def test_html_block_verbatim(self):
        assert render(HTMLBlock("<div>\n*x*\n</div>")) == "<div>\n*x*\n</div>"

    def test_definition(self):
        assert render(Definition(identifier="x", label="x", url="/u", title="T")) == '[x]: /u "T"'


@pytest.mark.unit
class TestInlines:
    """Tests for inline output."""

    def test_formatting_markers(self):
        paragraph = para(
            Strong(content=[Text("b")]),
            Text(" "),
            Emphasis(content=[Text("i")]),
            Text(" "),
            Strikethrough(content=[Text("s")]),
        )
        assert render(paragraph) == "**b** _i_ ~~s~~"

    def test_edge_whitespace_kept_outside_markers(self):
        assert render(para(Text("x"), Strong(content=[Text(" a ")]), Text("y"))) == "x **a** y"

    def test_empty_wrapper_writes_nothing(self):
        assert render(para(Text("a"), Strong(content=[Text("")]))) == "a"

    def test_code_span_with_backtick(self):
        assert render(para(Code("a`b"))) == "``a`b``"

    def test_code_span_starting_with_backtick(self):
        assert render(para(Code("`a"))) == "`` `a ``"

    def test_link_with_title(self):
        assert render(para(Link(url="/u", content=[Text("t")], title='say "hi"'))) == '[t](/u "say \\"hi\\"")'

    def test_link_destination_with_space(self):
        assert render(para(Link(url="a b", content=[Text("t")]))) == "[t](<a b>)"

    def test_image_alt_brackets_escaped(self):
        assert render(para(Text("x "), Image(url="i.png", alt_text="a [b]"))) == "x ![a \\[b\\]](i.png)"

    def test_hard_break(self):
        assert render(para(Text("a"), LineBreak(), Text("b"))) == "a\\\nb"

    def test_soft_break(self):
        assert render(para(Text("a"), LineBreak(soft=True), Text("b"))) == "a\nb"

    def test_trailing_hard_break_stripped(self):
        assert render(para(Text("a"), LineBreak())) == "a"

    def test_trailing_hard_break_kept_when_disabled(self):
        options = MarkdownRendererOptions(strip_trailing_breaks=False)
        assert render(para(Text("a"), LineBreak()), options=options) == "a\\"

    def test_emphasis_inside_word_uses_asterisk(self):
        assert render(para(Text("a"), Emphasis(content=[Text("b")]), Text("c"))) == "a*b*c"

    def test_emphasis_before_word_uses_asterisk(self):
        assert render(para(Emphasis(content=[Text("a")]), Text("b"))) == "*a*b"

    def test_emphasis_around_underscore_uses_asterisk(self):
        assert render(para(Emphasis(content=[Text("_")]))) == "*_*"

    def test_emphasis_between_spaces_uses_underscore(self):
        assert render(para(Text("a "), Emphasis(content=[Text("b")]), Text(" c"))) == "a _b_ c"

    def test_emphasis_with_padding_next_to_word(self):
        assert render(para(Text("a"), Emphasis(content=[Text(" b")]))) == "a _b_"


@pytest.mark.unit
class TestEscaping:
    """Tests for text escaping during rendering."""

    def test_markup_in_text_escaped(self):
        assert render(para(Text("*a* and # b"))) == "\\*a\\* and # b"

    def test_line_start_marker_escaped(self):
        assert render(para(Text("- not a list"))) == "\\- not a list"

    def test_thematic_break_text_escaped(self):
        assert render(para(Text("---"))) == "\\---"

    def test_setext_underline_escaped(self):
        assert render(para(Text("x"), LineBreak(soft=True), Text("==="))) == "x\n\\==="

    def test_backslash_doubled(self):
        assert render(para(Text("a\\b"))) == "a\\\\b"

    def test_escaping_disabled(self):
        options = MarkdownRendererOptions(escape_special=False)
        assert render(para(Text("*a*")), options=options) == "*a*"

    def test_code_not_escaped(self):
        assert render(para(Code("*a*"))) == "`*a*`"


@pytest.mark.unit
class TestComponents:
    """Tests for writing component nodes."""

    def test_fenced_block_expanded(self, shortcodes):
        block = ComponentBlock(name="callout", values={"kind": "note"})
        assert render(block, shortcodes=shortcodes) == "::: callout\nkind: note\n:::"

    def test_empty_values(self, shortcodes):
        assert render(ComponentBlock(name="callout"), shortcodes=shortcodes) == "::: callout\n:::"

    def test_pattern_syntax(self):
        block = ComponentBlock(name="image", values={"image": "c.png", "alt": "a", "title": ""}, syntax="pattern")
        assert render(block) == "![a](c.png)"

    def test_unknown_component_dropped(self, caplog):
        assert render(para(Text("a")), ComponentBlock(name="nope")) == "a"
        assert "nope" in caplog.text

    def test_inline_component_stays_encoded(self, shortcodes):
        paragraph = para(Text("hi "), ComponentInline(name="mention", values={"user": "bob"}), Text(" x"))
        payload = encode_component_payload("user: bob\n")
        assert render(paragraph, shortcodes=shortcodes) == f"hi ::: mention {payload} x"


@pytest.mark.unit
class TestMarkdownRendererApi:
    """Tests for the renderer's entry points."""

    def test_rejects_non_document(self):
        with pytest.raises(ValidationError):
            MarkdownRenderer().render_to_string(Paragraph())

    def test_rejects_wrong_options(self):
        with pytest.raises(InvalidOptionsError):
            MarkdownRenderer(HtmlRendererOptions())

    def test_render_to_stream(self):
        stream = io.StringIO()
        MarkdownRenderer().render(Document(children=[para(Text("a"))]), stream)
        assert stream.getvalue() == "a"

    def test_render_to_path(self, tmp_path):
        target = tmp_path / "out.md"
        MarkdownRenderer().render(Document(children=[para(Text("é"))]), target)
        assert target.read_text(encoding="utf-8") == "é"
