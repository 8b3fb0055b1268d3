#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/richdoc/to_ast.py
"""Convert a rich document back to the syntax tree.

Flat mark sets are turned back into nested formatting nodes. Each leaf is
wrapped in its marks in one canonical order, outermost first:
strikethrough, italic, bold, with code always innermost. Inline nodes such
as links are wrapped in the marks all of their leaves share. The resulting
sequence is then consolidated: adjacent wrappers of the same kind merge,
edge whitespace moves outside wrappers and empty wrappers disappear.

Examples
--------
    >>> from mdbridge.richdoc.nodes import Leaf, RichBlock, RichDocument, RichText
    >>> doc = RichDocument(nodes=[RichBlock("paragraph", nodes=[
    ...     RichText([Leaf("foo ", {"bold"}), Leaf("bar")]),
    ... ])])
    >>> from mdbridge.renderers.markdown import ast_to_markdown
    >>> ast_to_markdown(RichDocToAstConverter().convert(doc))
    '**foo** bar'

"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, Optional

from mdbridge.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    ComponentBlock,
    ComponentInline,
    Document,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    Image,
    LineBreak,
    Link,
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
from mdbridge.ast.transforms import InlineFormattingConsolidator
from mdbridge.constants import MARK_NESTING_ORDER
from mdbridge.exceptions import ShortcodeError, ValidationError
from mdbridge.richdoc.nodes import Leaf, RichBlock, RichDocument, RichInline, RichNode, RichText
from mdbridge.shortcodes.base import ShortcodeDefinition, ShortcodeLookup
from mdbridge.shortcodes.registry import resolve_shortcodes

logger = logging.getLogger(__name__)

_MARK_WRAPPERS: dict[str, Callable[[list[Node]], Node]] = {
    "strikethrough": lambda content: Strikethrough(content=content),
    "italic": lambda content: Emphasis(content=content),
    "bold": lambda content: Strong(content=content),
}

_ALIGNMENTS = frozenset({"left", "center", "right"})


def wrap_in_marks(nodes: list[Node], marks: frozenset[str]) -> list[Node]:
    """Wrap nodes in formatting nodes for ``marks``, outermost first.

    ``code`` is ignored here; it is expressed by the ``Code`` node itself.

    Examples
    --------
        >>> [outer] = wrap_in_marks([Text("a")], frozenset({"bold", "strikethrough"}))
        >>> type(outer).__name__, type(outer.content[0]).__name__
        ('Strikethrough', 'Strong')

    """
    for mark in reversed(MARK_NESTING_ORDER):
        if mark in marks:
            nodes = [_MARK_WRAPPERS[mark](nodes)]
    return nodes


def _collect_leaves(nodes: list[RichNode]) -> list[Leaf]:
    leaves: list[Leaf] = []
    for node in nodes:
        if isinstance(node, RichText):
            leaves.extend(node.leaves)
        else:
            leaves.extend(_collect_leaves(node.nodes))
    return leaves


def _shared_marks(node: RichInline) -> frozenset[str]:
    """Marks carried by every non-empty leaf of an inline, code excluded."""
    leaves = [leaf for leaf in _collect_leaves(node.nodes) if leaf.text] or _collect_leaves(node.nodes)
    if not leaves:
        return frozenset()
    shared = frozenset.intersection(*(leaf.marks for leaf in leaves))
    return shared - {"code"}


def _plain_text(nodes: list[RichNode]) -> str:
    return "".join(leaf.text for leaf in _collect_leaves(nodes))


class RichDocToAstConverter:
    """Convert a ``RichDocument`` into a syntax tree ``Document``.

    Parameters
    ----------
    shortcodes : ShortcodeLookup or None, default = None
        Definitions component nodes are validated against; None uses
        ``default_shortcodes()``

    Raises
    ------
    ValidationError
        From ``convert``, for unknown block or inline types
    ShortcodeError
        From ``convert``, for components with no registered definition

    """

    def __init__(self, shortcodes: ShortcodeLookup | None = None):
        """Initialize the converter and its dispatch tables."""
        self.shortcodes = resolve_shortcodes(shortcodes)
        self.consolidator = InlineFormattingConsolidator()
        self._block_handlers: dict[str, Callable[[RichBlock], Optional[Node]]] = {
            "paragraph": self._convert_paragraph,
            "heading": self._convert_heading,
            "quote": self._convert_quote,
            "code": self._convert_code,
            "list": self._convert_list,
            "list-item": self._convert_orphan_list_item,
            "thematic-break": lambda block: ThematicBreak(),
            "html": lambda block: HTMLBlock(content=str(block.data.get("html", ""))),
            "component": self._convert_component_block,
            "table": self._convert_table,
        }
        self._inline_handlers: dict[str, Callable[[RichInline], Node]] = {
            "link": self._convert_link,
            "image": self._convert_image,
            "break": lambda inline: LineBreak(soft=False),
            "html": lambda inline: HTMLInline(content=str(inline.data.get("html", ""))),
            "component": self._convert_component_inline,
        }

    def convert(self, document: RichDocument) -> Document:
        """Convert a rich document.

        Parameters
        ----------
        document : RichDocument
            Document to convert

        Returns
        -------
        Document
            Syntax tree

        """
        if not isinstance(document, RichDocument):
            raise ValidationError(
                f"Expected a RichDocument, got {type(document).__name__}",
                parameter_name="document",
                parameter_value=document,
            )
        return Document(children=self._convert_blocks(document.nodes))

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _convert_blocks(self, nodes: list[RichNode]) -> list[Node]:
        result: list[Node] = []
        for node in nodes:
            if not isinstance(node, RichBlock):
                raise ValidationError(
                    f"Expected a block node, got {node.kind} node", parameter_name="kind", parameter_value=node.kind
                )
            handler = self._block_handlers.get(node.type)
            if handler is None:
                raise ValidationError(
                    f"Unknown block type: {node.type!r}", parameter_name="type", parameter_value=node.type
                )
            converted = handler(node)
            if converted is not None:
                result.append(converted)
        return result

    def _convert_paragraph(self, block: RichBlock) -> Paragraph:
        return Paragraph(content=self._convert_inlines(block.nodes))

    def _convert_heading(self, block: RichBlock) -> Heading:
        try:
            level = int(block.data.get("level", 1))
        except (TypeError, ValueError) as e:
            raise ValidationError(
                "Heading level must be an integer", parameter_name="level", parameter_value=block.data.get("level")
            ) from e
        return Heading(level=min(6, max(1, level)), content=self._convert_inlines(block.nodes))

    def _convert_quote(self, block: RichBlock) -> BlockQuote:
        return BlockQuote(children=self._convert_blocks(block.nodes))

    def _convert_code(self, block: RichBlock) -> CodeBlock:
        language = block.data.get("language") or None
        metadata: dict[str, Any] = {}
        if block.data.get("info"):
            metadata["info_string"] = block.data["info"]
        return CodeBlock(content=_plain_text(block.nodes), language=language, metadata=metadata)

    def _convert_list_item(self, block: RichBlock) -> ListItem:
        if block.type != "list-item":
            raise ValidationError(
                f"List children must be list items, got {block.type!r}",
                parameter_name="type",
                parameter_value=block.type,
            )
        return ListItem(children=self._convert_blocks(block.nodes))

    def _convert_list(self, block: RichBlock) -> List:
        items = [self._convert_list_item(node) for node in block.nodes if isinstance(node, RichBlock)]
        return List(
            ordered=bool(block.data.get("ordered", False)),
            items=items,
            start=int(block.data.get("start") or 1),
            tight=bool(block.data.get("tight", True)),
        )

    def _convert_orphan_list_item(self, block: RichBlock) -> List:
        return List(ordered=False, items=[self._convert_list_item(block)])

    def _convert_table(self, block: RichBlock) -> Table:
        header: TableRow | None = None
        rows: list[TableRow] = []
        for node in block.nodes:
            if not isinstance(node, RichBlock) or node.type != "table-row":
                raise ValidationError("Table children must be table rows", parameter_name="type")
            row = self._convert_table_row(node)
            if row.is_header and header is None and not rows:
                header = row
            else:
                row.is_header = False
                rows.append(row)

        alignments = [
            alignment if alignment in _ALIGNMENTS else None for alignment in block.data.get("alignments") or []
        ]
        return Table(rows=rows, header=header, alignments=alignments)  # type: ignore[arg-type]

    def _convert_table_row(self, block: RichBlock) -> TableRow:
        cells: list[TableCell] = []
        for node in block.nodes:
            if not isinstance(node, RichBlock) or node.type != "table-cell":
                raise ValidationError("Table row children must be table cells", parameter_name="type")
            alignment = node.data.get("align")
            cells.append(
                TableCell(
                    content=self._convert_inlines(node.nodes),
                    alignment=alignment if alignment in _ALIGNMENTS else None,
                )
            )
        return TableRow(cells=cells, is_header=bool(block.data.get("header", False)))

    def _lookup_component(self, data: dict[str, Any]) -> tuple[ShortcodeDefinition, dict[str, Any], str]:
        name = data.get("name")
        definition = self.shortcodes.get(name) if isinstance(name, str) else None
        if definition is None:
            raise ShortcodeError(f"Unknown component: {name!r}", shortcode_name=name if isinstance(name, str) else None)
        values = data.get("values") or {}
        if not isinstance(values, dict):
            raise ValidationError("Component values must be an object", parameter_name="values", parameter_value=values)
        syntax = data.get("syntax") or "fenced"
        if syntax == "pattern" and definition.pattern is None:
            syntax = "fenced"
        return definition, copy.deepcopy(values), syntax

    def _convert_component_block(self, block: RichBlock) -> Node:
        definition, values, syntax = self._lookup_component(block.data)
        if definition.level == "inline":
            return Paragraph(content=[ComponentInline(name=definition.name, values=values, syntax=syntax)])  # type: ignore[arg-type]
        return ComponentBlock(name=definition.name, values=values, syntax=syntax)  # type: ignore[arg-type]

    # ------------------------------------------------------------------
    # Inlines
    # ------------------------------------------------------------------

    def _convert_inlines(self, nodes: list[RichNode], exclude: frozenset[str] = frozenset()) -> list[Node]:
        """Rebuild nested formatting for an inline sequence.

        Parameters
        ----------
        nodes : list of RichNode
            Text and inline nodes
        exclude : frozenset of str, default = empty
            Marks already applied by an enclosing inline

        """
        pieces: list[Node] = []
        for node in nodes:
            if isinstance(node, RichText):
                for leaf in node.leaves:
                    pieces.extend(self._convert_leaf(leaf, exclude))
            elif isinstance(node, RichInline):
                pieces.extend(self._convert_inline(node, exclude))
            else:
                raise ValidationError(
                    f"Block node {node.type!r} inside inline content", parameter_name="type", parameter_value=node.type
                )
        return self.consolidator.consolidate(pieces)

    def _convert_leaf(self, leaf: Leaf, exclude: frozenset[str]) -> list[Node]:
        if not leaf.text:
            return []
        marks = leaf.marks - exclude
        base: Node = Code(content=leaf.text) if "code" in marks else Text(content=leaf.text)
        return wrap_in_marks([base], marks)

    def _convert_inline(self, inline: RichInline, exclude: frozenset[str]) -> list[Node]:
        handler = self._inline_handlers.get(inline.type)
        if handler is None:
            raise ValidationError(
                f"Unknown inline type: {inline.type!r}", parameter_name="type", parameter_value=inline.type
            )

        if inline.type == "break":
            return [handler(inline)]

        marks = _shared_marks(inline) - exclude
        if inline.type == "link":
            converted = self._convert_link(inline, exclude | marks)
        else:
            converted = handler(inline)
        return wrap_in_marks([converted], marks)

    def _convert_link(self, inline: RichInline, exclude: frozenset[str] = frozenset()) -> Link:
        return Link(
            url=str(inline.data.get("url") or ""),
            content=self._convert_inlines(inline.nodes, exclude),
            title=inline.data.get("title") or None,
        )

    def _convert_image(self, inline: RichInline) -> Image:
        return Image(
            url=str(inline.data.get("url") or ""),
            alt_text=str(inline.data.get("alt") or ""),
            title=inline.data.get("title") or None,
        )

    def _convert_component_inline(self, inline: RichInline) -> ComponentInline:
        definition, values, syntax = self._lookup_component(inline.data)
        return ComponentInline(name=definition.name, values=values, syntax=syntax)  # type: ignore[arg-type]


def richdoc_to_ast(document: RichDocument, shortcodes: ShortcodeLookup | None = None) -> Document:
    """Convert a rich document to a syntax tree."""
    return RichDocToAstConverter(shortcodes).convert(document)
