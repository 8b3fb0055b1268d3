#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/transforms/escape.py
"""Escape text values before serializing them as Markdown.

The Markdown renderer writes text verbatim, so any character sequence that
would parse back as markup is escaped here. Raw HTML, code and components
are never touched.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from mdbridge.ast.nodes import LineBreak, Node, Paragraph, TableCell, Text
from mdbridge.ast.transforms import NodeTransformer, TransformResult
from mdbridge.utils.escape import escape_block_markers, escape_markdown

logger = logging.getLogger(__name__)


class EscapeMarkdownTransform(NodeTransformer):
    """Backslash-escape markup in text nodes.

    Paired delimiters are escaped everywhere; block markers only where a
    text node starts a line of a paragraph; ``|`` inside table cells.

    Examples
    --------
        >>> doc = Document(children=[Paragraph(content=[Text("# a *b*")])])
        >>> EscapeMarkdownTransform().transform(doc).children[0].content[0].content
        '\\\\# a \\\\*b\\\\*'

    """

    def __init__(self) -> None:
        """Initialize traversal state."""
        self._in_table_cell = False

    def visit_paragraph(self, node: Paragraph) -> TransformResult:
        """Escape the paragraph's content, tracking line starts."""
        content: list[Node] = []
        at_line_start = True
        for child in node.content:
            if isinstance(child, Text):
                escaped = escape_block_markers(escape_markdown(child.content), at_line_start=at_line_start)
                content.append(replace(child, content=escaped))
                at_line_start = escaped.endswith("\n") if escaped else at_line_start
                continue

            transformed = self.transform(child)
            if isinstance(transformed, list):
                content.extend(transformed)
            elif transformed is not None:
                content.append(transformed)
            at_line_start = isinstance(child, LineBreak)
        return replace(node, content=content)

    def visit_table_cell(self, node: TableCell) -> TransformResult:
        """Escape cell content, including column separators."""
        self._in_table_cell = True
        try:
            return self._generic_transform(node)
        finally:
            self._in_table_cell = False

    def visit_text(self, node: Text) -> TransformResult:
        """Escape paired delimiters in a text value."""
        escaped = escape_markdown(node.content)
        if self._in_table_cell:
            escaped = escaped.replace("|", "\\|")
        return replace(node, content=escaped)
