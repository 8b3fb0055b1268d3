#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/ast/test_tree_helpers.py
"""Unit tests for tree helpers, collectors and the structural validator."""

import pytest

from mdbridge.ast import (
    ComponentBlock,
    Document,
    Emphasis,
    Heading,
    HTMLInline,
    Image,
    LineBreak,
    List,
    ListItem,
    Paragraph,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ValidationVisitor,
    clone_node,
    extract_nodes,
    get_node_children,
    get_text_content,
    replace_node_children,
)


@pytest.fixture
def doc():
    return Document(
        children=[
            Heading(level=1, content=[Text("Title")]),
            Paragraph(content=[Text("a"), Strong(content=[Text("b")]), LineBreak(), Image(url="x", alt_text="c")]),
            List(ordered=False, items=[ListItem(children=[Paragraph(content=[Text("item")])])]),
        ]
    )


@pytest.mark.unit
class TestChildren:
    """Test child access and replacement."""

    def test_get_children(self, doc):
        assert len(get_node_children(doc)) == 3
        assert get_node_children(doc.children[1])[0] == Text("a")
        assert get_node_children(Text("x")) == []

    def test_table_children(self):
        header = TableRow(cells=[TableCell(content=[Text("h")])], is_header=True)
        body = TableRow(cells=[TableCell(content=[Text("b")])])
        assert get_node_children(Table(header=header, rows=[body])) == [header, body]

    def test_replace_returns_copy(self):
        paragraph = Paragraph(content=[Text("a")])
        updated = replace_node_children(paragraph, [Text("b")])
        assert updated.content == [Text("b")]
        assert paragraph.content == [Text("a")]

    def test_replace_table_rows(self):
        header = TableRow(cells=[], is_header=True)
        body = TableRow(cells=[])
        table = replace_node_children(Table(), [body, header])
        assert table.header is header
        assert table.rows == [body]

    def test_replace_table_rejects_non_rows(self):
        with pytest.raises(ValueError):
            replace_node_children(Table(), [Text("x")])

    def test_replace_leaf(self):
        text = Text("x")
        assert replace_node_children(text, []) is text
        with pytest.raises(ValueError):
            replace_node_children(text, [Text("y")])


@pytest.mark.unit
class TestTextAndCollection:
    """Test text flattening and node extraction."""

    def test_get_text_content(self, doc):
        assert get_text_content(doc.children[1]) == "ab\nc"

    def test_html_contributes_nothing(self):
        assert get_text_content(Paragraph(content=[Text("a"), HTMLInline("<br>")])) == "a"

    def test_extract_in_document_order(self, doc):
        assert [node.content for node in extract_nodes(doc, Text)] == ["Title", "a", "b", "item"]

    def test_extract_all(self, doc):
        nodes = extract_nodes(doc)
        assert nodes[0] is doc
        assert len(nodes) == 13

    def test_clone_is_deep(self, doc):
        copy = clone_node(doc)
        assert copy == doc
        copy.children[0].content[0].content = "Changed"
        assert doc.children[0].content[0].content == "Title"


@pytest.mark.unit
class TestValidationVisitor:
    """Test block/inline containment checks."""

    def test_valid_tree(self, doc):
        validator = ValidationVisitor()
        doc.accept(validator)
        assert validator.errors == []

    def test_block_in_inline_strict(self):
        doc = Document(children=[Paragraph(content=[Paragraph(content=[Text("x")])])])
        with pytest.raises(ValueError, match="Paragraph holds Paragraph at position 0; expected inline content"):
            doc.accept(ValidationVisitor())

    def test_non_strict_collects_errors(self):
        doc = Document(children=[Text("a"), Paragraph(content=[Emphasis(content=[ComponentBlock(name="")])])])
        validator = ValidationVisitor(strict=False)
        doc.accept(validator)
        assert validator.errors == [
            "Document holds Text at position 0; expected block content",
            "Emphasis holds ComponentBlock at position 0; expected inline content",
            "ComponentBlock without a name",
        ]

    def test_negative_list_start(self):
        validator = ValidationVisitor(strict=False)
        List(ordered=True, start=-1, items=[]).accept(validator)
        assert validator.errors == ["Ordered list starts at -1"]

    def test_list_items_checked(self):
        validator = ValidationVisitor(strict=False)
        List(ordered=False, items=[Text("x")]).accept(validator)
        assert validator.errors == ["List holds Text at position 0; expected ListItem"]
