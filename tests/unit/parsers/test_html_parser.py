#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_html_parser.py
"""Unit tests for pasted HTML to syntax tree conversion.

Tests cover:
- Element mapping for blocks and inlines
- Whitespace collapsing and text protection
- Dropped, unwrapped and raw elements
- Dropbox Paper emoji images
- Option validation

"""

import pytest

from mdbridge.ast import (
    BlockQuote,
    CodeBlock,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
    List,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    Text,
    ThematicBreak,
)
from mdbridge.exceptions import ValidationError
from mdbridge.options import HtmlParserOptions
from mdbridge.parsers import HtmlToAstConverter


def parse(html: str, **options):
    return HtmlToAstConverter(HtmlParserOptions(**options)).parse(html)


@pytest.mark.unit
class TestBlockElements:
    """Tests for block-level element mapping."""

    def test_paragraph_with_formatting(self):
        [paragraph] = parse("<p>Hello <b>world</b></p>").children
        assert paragraph == Paragraph(content=[Text("Hello "), Strong(content=[Text("world")])])

    def test_heading_text_is_trimmed(self):
        [heading] = parse("<h2>  Title </h2>").children
        assert heading == Heading(level=2, content=[Text("Title")])

    def test_unordered_list(self):
        [lst] = parse("<ul><li>a</li><li>b</li></ul>").children
        assert isinstance(lst, List)
        assert lst.ordered is False
        assert [item.children for item in lst.items] == [
            [Paragraph(content=[Text("a")])],
            [Paragraph(content=[Text("b")])],
        ]

    def test_ordered_list_start(self):
        [lst] = parse('<ol start="4"><li>a</li></ol>').children
        assert lst.ordered is True
        assert lst.start == 4

    def test_ordered_list_bad_start(self):
        [lst] = parse('<ol start="x"><li>a</li></ol>').children
        assert lst.start == 1

    def test_pre_with_language_class(self):
        [code] = parse('<pre><code class="language-python">x = 1\n</code></pre>').children
        assert code == CodeBlock("x = 1", language="python")

    def test_pre_keeps_whitespace(self):
        [code] = parse("<pre>a\n    b</pre>").children
        assert code.content == "a\n    b"
        assert code.language is None

    def test_blockquote(self):
        [quote] = parse("<blockquote><p>q</p></blockquote>").children
        assert quote == BlockQuote(children=[Paragraph(content=[Text("q")])])

    def test_table_with_thead(self):
        html = (
            "<table><thead><tr><th>h1</th><th>h2</th></tr></thead>"
            '<tbody><tr><td>a</td><td style="text-align: right">b</td></tr></tbody></table>'
        )
        [table] = parse(html).children
        assert isinstance(table, Table)
        assert [cell.content for cell in table.header.cells] == [[Text("h1")], [Text("h2")]]
        assert table.alignments == [None, None]
        assert table.rows[0].cells[1].alignment == "right"

    def test_table_without_header_row(self):
        [table] = parse("<table><tr><td>a</td></tr><tr><td>b</td></tr></table>").children
        assert table.header is None
        assert len(table.rows) == 2

    def test_horizontal_rule(self):
        assert parse("<hr>").children == [ThematicBreak()]

    def test_div_groups_inline_runs(self):
        children = parse("<div>a<p>b</p>c</div>").children
        assert children == [
            Paragraph(content=[Text("a")]),
            Paragraph(content=[Text("b")]),
            Paragraph(content=[Text("c")]),
        ]

    def test_raw_block_element(self):
        [html] = parse('<iframe src="x"></iframe>').children
        assert html == HTMLBlock('<iframe src="x"></iframe>')

    def test_whitespace_between_blocks_ignored(self):
        assert len(parse("<p>a</p>\n\n<p>b</p>").children) == 2


@pytest.mark.unit
class TestInlineElements:
    """Tests for inline element mapping."""

    def test_formatting_aliases(self):
        [paragraph] = parse("<p><i>a</i><em>b</em><s>c</s><del>d</del><strong>e</strong></p>").children
        assert paragraph.content == [
            Emphasis(content=[Text("a")]),
            Emphasis(content=[Text("b")]),
            Strikethrough(content=[Text("c")]),
            Strikethrough(content=[Text("d")]),
            Strong(content=[Text("e")]),
        ]

    def test_link(self):
        [paragraph] = parse('<p><a href="/u" title="T">t</a></p>').children
        assert paragraph.content == [Link(url="/u", content=[Text("t")], title="T")]

    def test_anchor_without_href_is_unwrapped(self):
        [paragraph] = parse("<p><a name='x'>t</a></p>").children
        assert paragraph.content == [Text("t")]

    def test_image(self):
        [paragraph] = parse('<p>x <img src="i.png" alt="a"></p>').children
        assert paragraph.content == [Text("x "), Image(url="i.png", alt_text="a")]

    def test_image_without_src_dropped(self):
        [paragraph] = parse('<p>x<img alt="a"></p>').children
        assert paragraph.content == [Text("x")]

    def test_line_break(self):
        [paragraph] = parse("<p>a<br>b</p>").children
        assert paragraph.content == [Text("a"), LineBreak(soft=False), Text("b")]

    def test_unknown_inline_is_unwrapped(self):
        [paragraph] = parse("<p><span class='x'>a</span></p>").children
        assert paragraph.content == [Text("a")]

    def test_whitespace_collapsed(self):
        [paragraph] = parse("<p>a\n    b</p>").children
        assert paragraph.content == [Text("a b")]

    def test_decoded_markup_is_protected(self):
        [paragraph] = parse("<p>use &lt;div&gt; &amp;amp;</p>").children
        assert paragraph.content == [Text("use &lt;div> &amp;amp;")]


@pytest.mark.unit
class TestDroppedContent:
    """Tests for content that does not survive import."""

    def test_script_and_style_dropped(self):
        children = parse("<p>a</p><script>alert(1)</script><style>p {}</style>").children
        assert children == [Paragraph(content=[Text("a")])]

    def test_comments_dropped(self):
        [paragraph] = parse("<p>a<!-- note -->b</p>").children
        assert paragraph.content == [Text("a"), Text("b")]

    def test_comments_kept_as_html(self):
        [paragraph] = parse("<p>a<!-- note --></p>", strip_comments=False).children
        assert paragraph.content == [Text("a"), HTMLInline("<!-- note -->")]


@pytest.mark.unit
class TestPaperEmoji:
    """Tests for emoji images pasted from Dropbox Paper."""

    def test_emoji_image_becomes_text(self):
        [paragraph] = parse('<p>hi <img data-emoji-ch="👋" src="e.png"></p>').children
        assert not any(isinstance(node, Image) for node in paragraph.content)
        assert "".join(node.content for node in paragraph.content) == "hi 👋"

    def test_conversion_disabled(self):
        [paragraph] = parse('<p>hi <img data-emoji-ch="👋" src="e.png"></p>', convert_paper_emoji=False).children
        assert isinstance(paragraph.content[-1], Image)


@pytest.mark.unit
class TestHtmlParserValidation:
    """Tests for input and option validation."""

    def test_non_string_input(self):
        with pytest.raises(ValidationError):
            HtmlToAstConverter().parse(None)

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="parser must be one of"):
            HtmlParserOptions(parser="nope")
