#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_roundtrip.py
"""Markdown -> rich document -> Markdown round trips.

Tests cover:
- Inputs that must survive unchanged
- Inputs whose overlapping formatting is rewritten into canonical nesting
- Idempotence of the canonical output
- Component blocks and standalone images

"""

import pytest

from mdbridge import markdown_to_richdoc, richdoc_to_markdown
from mdbridge.richdoc import RichText
from mdbridge.utils.components import encode_component_payload

UNCHANGED = [
    "<code>&lt;div&gt;</code>",
    "**a[b](c)d**",
    "**[a](b)**",
    "**![a](b)**",
    "_`a`_",
    "_`a`b_",
    "**a**b**c**",
    "a ![b](c)",
    "<span>*</span>",
    "a*b*c",
    "*a*b",
    "*_*",
    "\\---",
    "x\n\\===",
    "a\\\\*b",
]

CANONICALIZED = [
    ("**a ~~b~~~~c~~**", "**a** ~~**bc**~~"),
    ("**a ~~b~~~~[c](d)~~**", "**a** ~~**b[c](d)**~~"),
    ("**a _b_ c**", "**a** _**b**_ **c**"),
]


def round_trip(markdown: str, shortcodes=None) -> str:
    return richdoc_to_markdown(markdown_to_richdoc(markdown, shortcodes), shortcodes)


def leaf_marks(nodes) -> list:
    leaves = []
    for node in nodes:
        if isinstance(node, RichText):
            leaves.extend((leaf.text, sorted(leaf.marks)) for leaf in node.leaves)
        else:
            leaves.extend(leaf_marks(node.nodes))
    return leaves


@pytest.mark.unit
class TestRoundTrip:
    """Tests for the fixed round-trip corpus."""

    @pytest.mark.parametrize("markdown", UNCHANGED)
    def test_unchanged(self, markdown):
        """These inputs are already canonical."""
        assert round_trip(markdown) == markdown

    @pytest.mark.parametrize("markdown,expected", CANONICALIZED)
    def test_canonicalized(self, markdown, expected):
        """Overlapping marks are rewritten in the fixed nesting order."""
        assert round_trip(markdown) == expected

    @pytest.mark.parametrize("markdown,expected", CANONICALIZED)
    def test_canonical_output_is_stable(self, markdown, expected):
        """A second round trip changes nothing."""
        assert round_trip(expected) == expected

    def test_sample_document(self, sample_markdown):
        """A document in canonical style survives every block type."""
        assert round_trip(sample_markdown) == sample_markdown

    def test_empty_input(self):
        """Empty Markdown gives an empty string back."""
        assert round_trip("") == ""


@pytest.mark.unit
class TestComponentRoundTrip:
    """Tests for component blocks surviving a round trip."""

    def test_fenced_component(self, shortcodes):
        """A YAML-bodied component block is written back as a block."""
        markdown = "::: callout\nkind: warning\ntext: hi\n:::"
        assert round_trip(markdown, shortcodes) == markdown

    def test_fenced_component_between_paragraphs(self, shortcodes):
        """Surrounding paragraphs are untouched."""
        markdown = "before\n\n::: callout\nkind: note\n:::\n\nafter"
        assert round_trip(markdown, shortcodes) == markdown

    def test_unknown_component_kept_as_text(self, shortcodes):
        """A component without a definition survives as literal text."""
        markdown = "::: unknown\nbody\n:::"
        assert round_trip(markdown, shortcodes) == markdown

    def test_standalone_image_becomes_component(self):
        """An image alone in a paragraph is an image block and comes back unchanged."""
        markdown = '![a cat](cat.png "Cat")'
        doc = markdown_to_richdoc(markdown)

        block = doc.nodes[0]
        assert block.type == "component"
        assert block.data["name"] == "image"
        assert block.data["values"] == {"image": "cat.png", "alt": "a cat", "title": "Cat"}
        assert richdoc_to_markdown(doc) == markdown

    def test_inline_component(self, shortcodes):
        """An inline component stays inline in its paragraph."""
        markdown = f"hi ::: mention {encode_component_payload('user: bob' + chr(10))} there"
        doc = markdown_to_richdoc(markdown, shortcodes)

        paragraph = doc.nodes[0]
        assert [node.kind for node in paragraph.nodes] == ["text", "inline", "text"]
        assert paragraph.nodes[1].data["values"] == {"user": "bob"}
        assert richdoc_to_markdown(doc, shortcodes) == markdown


@pytest.mark.unit
class TestMarksSurvive:
    """Tests for italic text written next to words and markers."""

    @pytest.mark.parametrize("markdown", ["a*b*c", "*a*b", "*_*", "a _b_ c", "x*y* z*w*"])
    def test_leaf_marks_unchanged(self, markdown):
        before = leaf_marks(markdown_to_richdoc(markdown).nodes)
        assert leaf_marks(markdown_to_richdoc(round_trip(markdown)).nodes) == before

    def test_italic_inside_word_kept(self):
        assert leaf_marks(markdown_to_richdoc(round_trip("a*b*c")).nodes) == [
            ("a", []),
            ("b", ["italic"]),
            ("c", []),
        ]
