#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/transforms/html_wrap.py
"""Wrap inline HTML that sits directly in a block container."""

from __future__ import annotations

import logging

from mdbridge.ast.nodes import BlockQuote, Document, HTMLInline, ListItem, Node, Paragraph
from mdbridge.ast.transforms import NodeTransformer, TransformResult

logger = logging.getLogger(__name__)


class WrapHtmlTransform(NodeTransformer):
    """Give stray inline HTML a paragraph parent.

    Consecutive inline HTML nodes share one paragraph. Block HTML is left
    as it is.
    """

    def _wrap(self, children: list[Node]) -> list[Node]:
        result: list[Node] = []
        for child in self._transform_children(children):
            if not isinstance(child, HTMLInline):
                result.append(child)
                continue
            previous = result[-1] if result else None
            if isinstance(previous, Paragraph) and previous.metadata.get("wrapped_html"):
                previous.content.append(child)
            else:
                logger.debug("Wrapping inline HTML in a paragraph")
                result.append(Paragraph(content=[child], metadata={"wrapped_html": True}))
        return result

    def visit_document(self, node: Document) -> TransformResult:
        """Wrap stray inline HTML among the document's children."""
        return Document(children=self._wrap(node.children), metadata=node.metadata.copy())

    def visit_block_quote(self, node: BlockQuote) -> TransformResult:
        """Wrap stray inline HTML inside a quote."""
        return BlockQuote(children=self._wrap(node.children), metadata=node.metadata.copy())

    def visit_list_item(self, node: ListItem) -> TransformResult:
        """Wrap stray inline HTML inside a list item."""
        return ListItem(children=self._wrap(node.children), metadata=node.metadata.copy())
