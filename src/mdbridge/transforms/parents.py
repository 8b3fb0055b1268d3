#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/transforms/parents.py
"""Repair parent/child placement in trees built from pasted HTML.

Browsers happily produce ``<strong><p>a</p></strong>`` or a ``<ul>`` inside
a ``<span>``. Markdown cannot express a block inside inline content, so:

- blocks found in inline content are hoisted to the nearest block
  container, splitting the inline ancestors around them;
- block HTML inside inline content becomes inline HTML;
- inside table cells, which only hold inline content, blocks are flattened;
- inline runs directly in a block container get a paragraph;
- paragraphs left empty are dropped.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from mdbridge.ast.nodes import (
    BLOCK_NODE_TYPES,
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    HTMLBlock,
    HTMLInline,
    LineBreak,
    Link,
    LinkReference,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    TableCell,
    Text,
    get_text_content,
)
from mdbridge.ast.transforms import NodeTransformer, TransformResult

logger = logging.getLogger(__name__)

_INLINE_WRAPPER_TYPES: tuple[type[Node], ...] = (Strong, Emphasis, Strikethrough, Link, LinkReference)

# (is_block, node)
Segment = tuple[bool, Node]


def _is_blank(nodes: list[Node]) -> bool:
    return all(
        isinstance(node, LineBreak) or (isinstance(node, Text) and not node.content.strip()) for node in nodes
    )


class AssertParentsTransform(NodeTransformer):
    """Move every node under a parent that may hold it.

    Examples
    --------
        >>> doc = Document(children=[Paragraph(content=[
        ...     Strong(content=[Text("a"), Paragraph(content=[Text("b")])]),
        ... ])])
        >>> [type(n).__name__ for n in AssertParentsTransform().transform(doc).children]
        ['Paragraph', 'Paragraph']

    """

    def _split_inline(self, nodes: list[Node]) -> list[Segment]:
        """Flatten inline content into inline and hoisted block segments."""
        segments: list[Segment] = []
        for node in nodes:
            if isinstance(node, HTMLBlock):
                segments.append((False, HTMLInline(content=node.content, metadata=node.metadata.copy())))
            elif isinstance(node, BLOCK_NODE_TYPES):
                segments.append((True, node))
            elif isinstance(node, _INLINE_WRAPPER_TYPES):
                inner = self._split_inline(node.content)  # type: ignore[attr-defined]
                if not any(is_block for is_block, _ in inner):
                    content = [child for _, child in inner]
                    segments.append((False, replace(node, content=content)))  # type: ignore[type-var]
                    continue
                logger.debug("Splitting %s around hoisted block content", type(node).__name__)
                run: list[Node] = []
                for is_block, child in inner:
                    if is_block:
                        if run:
                            segments.append((False, replace(node, content=run)))  # type: ignore[type-var]
                            run = []
                        segments.append((True, child))
                    else:
                        run.append(child)
                if run:
                    segments.append((False, replace(node, content=run)))  # type: ignore[type-var]
            else:
                segments.append((False, node))
        return segments

    def _rebuild_inline_container(self, node: Paragraph | Heading) -> list[Node]:
        """Split an inline container around hoisted blocks."""
        result: list[Node] = []
        run: list[Node] = []

        def flush() -> None:
            if run and not _is_blank(run):
                result.append(replace(node, content=list(run)))
            run.clear()

        for is_block, child in self._split_inline(node.content):
            if is_block:
                flush()
                result.extend(self._as_list(self.transform(child)))
            else:
                run.append(child)
        flush()
        return result

    def _normalize_blocks(self, children: list[Node]) -> list[Node]:
        """Transform block children, wrapping stray inline runs in paragraphs."""
        result: list[Node] = []
        run: list[Node] = []

        def flush() -> None:
            if run and not _is_blank(run):
                logger.debug("Wrapping %d stray inline node(s) in a paragraph", len(run))
                result.extend(self._rebuild_inline_container(Paragraph(content=list(run))))
            run.clear()

        for child in children:
            if isinstance(child, BLOCK_NODE_TYPES):
                flush()
                for block in self._as_list(self.transform(child)):
                    if isinstance(block, ListItem):
                        block = List(ordered=False, items=[block])
                    result.append(block)
            else:
                run.append(child)
        flush()
        return result

    @staticmethod
    def _as_list(result: TransformResult) -> list[Node]:
        if result is None:
            return []
        return result if isinstance(result, list) else [result]

    def _flatten_cell_content(self, nodes: list[Node]) -> list[Node]:
        """Reduce cell content to inline nodes."""
        result: list[Node] = []
        for node in nodes:
            if isinstance(node, (Paragraph, Heading)):
                if result:
                    result.append(Text(content=" "))
                result.extend(self._flatten_cell_content(node.content))
            elif isinstance(node, HTMLBlock):
                result.append(HTMLInline(content=node.content, metadata=node.metadata.copy()))
            elif isinstance(node, CodeBlock):
                result.append(Code(content=node.content))
            elif isinstance(node, BLOCK_NODE_TYPES):
                text = " ".join(get_text_content(node).split())
                if text:
                    if result:
                        result.append(Text(content=" "))
                    result.append(Text(content=text))
            elif isinstance(node, _INLINE_WRAPPER_TYPES):
                result.append(replace(node, content=self._flatten_cell_content(node.content)))  # type: ignore[type-var]
            else:
                result.append(node)
        return result

    def visit_document(self, node: Document) -> TransformResult:
        """Normalize the document's children."""
        return Document(children=self._normalize_blocks(node.children), metadata=node.metadata.copy())

    def visit_block_quote(self, node: BlockQuote) -> TransformResult:
        """Normalize a quote's children."""
        return BlockQuote(children=self._normalize_blocks(node.children), metadata=node.metadata.copy())

    def visit_list_item(self, node: ListItem) -> TransformResult:
        """Normalize a list item's children."""
        return ListItem(children=self._normalize_blocks(node.children), metadata=node.metadata.copy())

    def visit_paragraph(self, node: Paragraph) -> TransformResult:
        """Split a paragraph around block content; drop it when empty."""
        return self._rebuild_inline_container(node)

    def visit_heading(self, node: Heading) -> TransformResult:
        """Split a heading around block content."""
        return self._rebuild_inline_container(node)

    def visit_table_cell(self, node: TableCell) -> TransformResult:
        """Flatten block content inside a table cell."""
        return replace(node, content=self._flatten_cell_content(node.content))
