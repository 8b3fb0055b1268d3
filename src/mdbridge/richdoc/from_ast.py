#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/richdoc/from_ast.py
"""Convert a syntax tree to the rich document model.

Nested Markdown formatting is flattened onto leaves: every mark node
(``Strong``, ``Emphasis``, ``Strikethrough``, ``Code``) pushes its mark and
every leaf produced below it, including the leaves of links and the empty
leaf of void nodes, carries it.

Examples
--------
    >>> from mdbridge.parsers.markdown import markdown_to_ast
    >>> doc = AstToRichDocConverter().convert(markdown_to_ast("**a ~~b~~~~c~~**"))
    >>> [(leaf.text, sorted(leaf.marks)) for leaf in doc.nodes[0].nodes[0].leaves]
    [('a ', ['bold']), ('bc', ['bold', 'strikethrough'])]

"""

from __future__ import annotations

import copy
import logging
from typing import Any

from mdbridge.ast.nodes import (
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
    HTMLInline,
    Image,
    ImageReference,
    LineBreak,
    Link,
    LinkReference,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from mdbridge.ast.visitors import NodeVisitor
from mdbridge.richdoc.nodes import Leaf, RichBlock, RichDocument, RichInline, RichNode, RichText, void_node
from mdbridge.shortcodes.base import ShortcodeLookup
from mdbridge.shortcodes.registry import resolve_shortcodes

logger = logging.getLogger(__name__)


def _empty_text() -> RichText:
    return RichText(leaves=[Leaf(text="")])


def _normalize_children(nodes: list[RichNode]) -> list[RichNode]:
    """Merge adjacent text nodes and same-mark leaves, recursively."""
    result: list[RichNode] = []
    for node in nodes:
        if isinstance(node, RichText):
            if result and isinstance(result[-1], RichText):
                result[-1] = RichText(leaves=result[-1].leaves + node.leaves)
            else:
                result.append(RichText(leaves=list(node.leaves)))
        else:
            node.nodes = _normalize_children(node.nodes)
            result.append(node)

    for index, node in enumerate(result):
        if isinstance(node, RichText):
            result[index] = RichText(leaves=_merge_leaves(node.leaves))
    return result


def _merge_leaves(leaves: list[Leaf]) -> list[Leaf]:
    merged: list[Leaf] = []
    for leaf in leaves:
        if not leaf.text and (merged or len(leaves) > 1):
            continue
        if merged and merged[-1].marks == leaf.marks:
            merged[-1] = Leaf(text=merged[-1].text + leaf.text, marks=leaf.marks)
        else:
            merged.append(Leaf(text=leaf.text, marks=leaf.marks))
    return merged or [Leaf(text="")]


def normalize_document(document: RichDocument) -> RichDocument:
    """Merge adjacent text nodes and adjacent leaves with identical marks.

    Empty leaves are dropped unless a text node would be left without any.
    The document is modified in place and returned.

    Parameters
    ----------
    document : RichDocument
        Document to normalize

    Returns
    -------
    RichDocument
        The same document

    """
    document.nodes = _normalize_children(document.nodes)
    return document


class AstToRichDocConverter(NodeVisitor):
    """Convert a syntax tree ``Document`` to a ``RichDocument``.

    Parameters
    ----------
    shortcodes : ShortcodeLookup or None, default = None
        Definitions known to the editor; None uses ``default_shortcodes()``

    """

    def __init__(self, shortcodes: ShortcodeLookup | None = None):
        """Initialize the converter."""
        self.shortcodes = resolve_shortcodes(shortcodes)
        self._marks: list[str] = []

    def convert(self, document: Document) -> RichDocument:
        """Convert and normalize a document.

        An empty document becomes a single empty paragraph, since the editor
        always needs one block to place the cursor in.
        """
        self._marks = []
        result: RichDocument = document.accept(self)
        if not result.nodes:
            result.nodes = [RichBlock(type="paragraph", nodes=[_empty_text()])]
        return normalize_document(result)

    def _blocks(self, children: list[Node]) -> list[RichNode]:
        blocks: list[RichNode] = []
        for child in children:
            converted = child.accept(self)
            if converted is not None:
                blocks.append(converted)
        return blocks

    def _inlines(self, content: list[Node]) -> list[RichNode]:
        nodes: list[RichNode] = []
        for child in content:
            nodes.extend(child.accept(self))
        return nodes or [RichText(leaves=[Leaf(text="", marks=frozenset(self._marks))])]

    def _with_mark(self, mark: str, content: list[Node]) -> list[RichNode]:
        self._marks.append(mark)
        try:
            return self._inlines(content)
        finally:
            self._marks.pop()

    def _component_data(self, name: str, values: dict[str, Any], syntax: str) -> dict[str, Any]:
        if self.shortcodes.get(name) is None:
            logger.warning("Component '%s' has no shortcode definition", name)
        return {"name": name, "values": copy.deepcopy(values), "syntax": syntax}

    def _leaf(self, text: str, *extra_marks: str) -> RichText:
        return RichText(leaves=[Leaf(text=text, marks=frozenset(self._marks).union(extra_marks))])

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> RichDocument:
        """Convert the document's blocks."""
        return RichDocument(nodes=self._blocks(node.children))

    def visit_heading(self, node: Heading) -> RichBlock:
        """Convert a heading, keeping its level."""
        return RichBlock(type="heading", nodes=self._inlines(node.content), data={"level": node.level})

    def visit_paragraph(self, node: Paragraph) -> RichBlock:
        """Convert a paragraph."""
        return RichBlock(type="paragraph", nodes=self._inlines(node.content))

    def visit_code_block(self, node: CodeBlock) -> RichBlock:
        """Convert a code block; its text is one unmarked leaf."""
        data: dict[str, Any] = {"language": node.language}
        info = node.metadata.get("info_string")
        if info and info != node.language:
            data["info"] = info
        return RichBlock(type="code", nodes=[RichText(leaves=[Leaf(text=node.content)])], data=data)

    def visit_block_quote(self, node: BlockQuote) -> RichBlock:
        """Convert a block quote."""
        return RichBlock(type="quote", nodes=self._blocks(node.children) or [self._empty_paragraph()])

    def visit_list(self, node: List) -> RichBlock:
        """Convert a list with its ordering, start number and tightness."""
        return RichBlock(
            type="list",
            nodes=self._blocks(node.items),  # type: ignore[arg-type]
            data={"ordered": node.ordered, "start": node.start, "tight": node.tight},
        )

    def visit_list_item(self, node: ListItem) -> RichBlock:
        """Convert a list item."""
        return RichBlock(type="list-item", nodes=self._blocks(node.children) or [self._empty_paragraph()])

    @staticmethod
    def _empty_paragraph() -> RichBlock:
        return RichBlock(type="paragraph", nodes=[_empty_text()])

    def visit_table(self, node: Table) -> RichBlock:
        """Convert a table; the header row comes first and is flagged."""
        rows: list[RichNode] = []
        if node.header is not None:
            rows.append(node.header.accept(self))
        rows.extend(row.accept(self) for row in node.rows)
        return RichBlock(type="table", nodes=rows, data={"alignments": list(node.alignments)})

    def visit_table_row(self, node: TableRow) -> RichBlock:
        """Convert a table row."""
        return RichBlock(
            type="table-row", nodes=[cell.accept(self) for cell in node.cells], data={"header": node.is_header}
        )

    def visit_table_cell(self, node: TableCell) -> RichBlock:
        """Convert a table cell."""
        data = {"align": node.alignment} if node.alignment else {}
        return RichBlock(type="table-cell", nodes=self._inlines(node.content), data=data)

    def visit_thematic_break(self, node: ThematicBreak) -> RichBlock:
        """Convert a thematic break to a void block."""
        return void_node(RichBlock, "thematic-break")  # type: ignore[return-value]

    def visit_html_block(self, node: HTMLBlock) -> RichBlock:
        """Convert block HTML to an atomic void block."""
        return void_node(RichBlock, "html", {"html": node.content})  # type: ignore[return-value]

    def visit_definition(self, node: Definition) -> None:
        """Skip a reference definition; references are resolved beforehand."""
        logger.debug("Skipping reference definition '%s'", node.label)
        return None

    def visit_component_block(self, node: ComponentBlock) -> RichBlock:
        """Convert a block component to a void block."""
        data = self._component_data(node.name, node.values, node.syntax)
        return void_node(RichBlock, "component", data)  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> list[RichNode]:
        """Convert text to a leaf carrying the enclosing marks."""
        return [self._leaf(node.content)]

    def visit_emphasis(self, node: Emphasis) -> list[RichNode]:
        """Push the italic mark onto the content."""
        return self._with_mark("italic", node.content)

    def visit_strong(self, node: Strong) -> list[RichNode]:
        """Push the bold mark onto the content."""
        return self._with_mark("bold", node.content)

    def visit_strikethrough(self, node: Strikethrough) -> list[RichNode]:
        """Push the strikethrough mark onto the content."""
        return self._with_mark("strikethrough", node.content)

    def visit_code(self, node: Code) -> list[RichNode]:
        """Convert inline code to a leaf with the code mark."""
        return [self._leaf(node.content, "code")]

    def visit_link(self, node: Link) -> list[RichNode]:
        """Convert a link to an inline whose leaves carry the enclosing marks."""
        data = {"url": node.url, "title": node.title}
        return [RichInline(type="link", nodes=self._inlines(node.content), data=data)]

    def visit_image(self, node: Image) -> list[RichNode]:
        """Convert an image to a void inline."""
        data = {"url": node.url, "alt": node.alt_text, "title": node.title}
        return [void_node(RichInline, "image", data, self._marks)]

    def visit_link_reference(self, node: LinkReference) -> list[RichNode]:
        """Keep an unresolved link reference as its bracket text."""
        return [self._leaf("["), *self._inlines(node.content), self._leaf(f"][{node.label}]")]

    def visit_image_reference(self, node: ImageReference) -> list[RichNode]:
        """Keep an unresolved image reference as its bracket text."""
        return [self._leaf(f"![{node.alt_text}][{node.label}]")]

    def visit_line_break(self, node: LineBreak) -> list[RichNode]:
        """Convert a soft break to a newline and a hard break to a void inline."""
        if node.soft:
            return [self._leaf("\n")]
        return [void_node(RichInline, "break", None, self._marks)]

    def visit_html_inline(self, node: HTMLInline) -> list[RichNode]:
        """Convert inline HTML to an atomic void inline."""
        return [void_node(RichInline, "html", {"html": node.content}, self._marks)]

    def visit_component_inline(self, node: ComponentInline) -> list[RichNode]:
        """Convert an inline component to a void inline."""
        data = self._component_data(node.name, node.values, node.syntax)
        return [void_node(RichInline, "component", data, self._marks)]


def ast_to_richdoc(document: Document, shortcodes: ShortcodeLookup | None = None) -> RichDocument:
    """Convert a syntax tree to a normalized rich document."""
    return AstToRichDocConverter(shortcodes).convert(document)
