#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_conversion_api.py
"""Integration tests for the top-level conversion functions.

Tests cover:
- markdown_to_richdoc and richdoc_to_markdown, including editor dict input
- markdown_to_html with raw HTML and components
- html_to_richdoc for pasted content
- markdown_to_ast as the low-level parse without normalization
"""

import pytest

from mdbridge import (
    RichDocument,
    ShortcodeError,
    ValidationError,
    html_to_richdoc,
    markdown_to_ast,
    markdown_to_html,
    markdown_to_richdoc,
    richdoc_to_markdown,
)
from mdbridge.ast import Definition, Heading, LinkReference, Paragraph


def paragraph_of(*leaves) -> dict:
    return {
        "kind": "block",
        "type": "root",
        "nodes": [{"kind": "block", "type": "paragraph", "nodes": [{"kind": "text", "leaves": list(leaves)}]}],
    }


@pytest.mark.integration
class TestRichDocPipelines:
    """Test conversions between Markdown and rich documents."""

    def test_markdown_to_richdoc_returns_model(self):
        assert isinstance(markdown_to_richdoc("# T"), RichDocument)

    def test_as_dict(self):
        doc = markdown_to_richdoc("_`a`_", as_dict=True)
        assert doc["kind"] == "document"
        assert doc["nodes"][0]["nodes"][0]["leaves"][0]["marks"] == [{"type": "code"}, {"type": "italic"}]

    def test_round_trip_through_model(self):
        assert richdoc_to_markdown(markdown_to_richdoc("# T\n\n* a\n* b")) == "# T\n\n* a\n* b"

    def test_nested_formatting_canonicalized(self):
        assert richdoc_to_markdown(markdown_to_richdoc("**a _b_ c**")) == "**a** _**b**_ **c**"

    def test_trailing_space_moved_outside_bold(self):
        doc = paragraph_of({"text": "foo ", "marks": [{"type": "bold"}]}, {"text": "bar"})
        assert richdoc_to_markdown(doc) == "**foo** bar"

    def test_leading_space_moved_outside_bold(self):
        doc = paragraph_of({"text": "foo"}, {"text": " bar", "marks": ["bold"]})
        assert richdoc_to_markdown(doc) == "foo **bar**"

    def test_rejects_non_document(self):
        with pytest.raises(ValidationError):
            richdoc_to_markdown(123)

    def test_rejects_unknown_root(self):
        with pytest.raises(ValidationError):
            richdoc_to_markdown({"kind": "inline", "nodes": []})

    def test_unknown_component_raises(self):
        doc = {
            "kind": "document",
            "nodes": [{"kind": "block", "type": "component", "data": {"name": "nope", "values": {}}}],
        }
        with pytest.raises(ShortcodeError):
            richdoc_to_markdown(doc)


@pytest.mark.integration
class TestMarkdownToHtml:
    """Test Markdown previews."""

    def test_inline_html_passes_through(self):
        assert markdown_to_html("**a** <kbd>b</kbd>") == "<p><strong>a</strong> <kbd>b</kbd></p>"

    def test_component_rendered(self, shortcodes):
        html = markdown_to_html("::: callout\nkind: note\n:::", shortcodes)
        assert html == '<aside class="note"></aside>'

    def test_reference_links_resolved(self):
        assert markdown_to_html("[a][x]\n\n[x]: /u") == '<p><a href="/u">a</a></p>'


@pytest.mark.integration
class TestHtmlToRichDoc:
    """Test importing pasted HTML."""

    def test_link_padding_moved_outside(self):
        doc = html_to_richdoc('<p>see<a href="x"> here </a>now</p>')
        assert richdoc_to_markdown(doc) == "see [here](x) now"

    def test_as_dict(self):
        doc = html_to_richdoc("<h2>T</h2>", as_dict=True)
        assert doc["nodes"][0]["type"] == "heading"

    def test_block_inside_inline_repaired(self, caplog):
        doc = html_to_richdoc("<p><b>a<div>b</div></b></p>", as_dict=True)
        assert [node["type"] for node in doc["nodes"]] == ["paragraph", "paragraph"]
        assert "malformed" not in caplog.text


@pytest.mark.integration
class TestMarkdownToAst:
    """Test the low-level parse."""

    def test_references_left_unresolved(self):
        document = markdown_to_ast("[a][x]\n\n[x]: /u")
        paragraph, definition = document.children
        assert isinstance(paragraph, Paragraph)
        assert isinstance(paragraph.content[0], LinkReference)
        assert isinstance(definition, Definition)

    def test_heading(self):
        assert isinstance(markdown_to_ast("# T").children[0], Heading)
