#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/transforms/links.py
"""Move whitespace at the edges of link text outside the link.

``<a href="x"> here </a>`` would otherwise become ``[ here ](x)``, which
editors display with underlined spaces.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from mdbridge.ast.nodes import Emphasis, Link, Node, Strikethrough, Strong, Text
from mdbridge.ast.transforms import NodeTransformer, TransformResult

logger = logging.getLogger(__name__)

_MARK_TYPES = (Strong, Emphasis, Strikethrough)


def _take_leading_whitespace(nodes: list[Node]) -> tuple[str, list[Node]]:
    """Remove leading whitespace from the first text, looking through marks."""
    if not nodes:
        return "", nodes
    first = nodes[0]
    if isinstance(first, Text):
        stripped = first.content.lstrip()
        padding = first.content[: len(first.content) - len(stripped)]
        rest = ([replace(first, content=stripped)] if stripped else []) + nodes[1:]
        if not stripped and padding:
            more, rest = _take_leading_whitespace(rest)
            padding += more
        return padding, rest
    if isinstance(first, _MARK_TYPES):
        padding, inner = _take_leading_whitespace(first.content)
        return padding, ([replace(first, content=inner)] if inner else []) + nodes[1:]
    return "", nodes


def _take_trailing_whitespace(nodes: list[Node]) -> tuple[str, list[Node]]:
    """Remove trailing whitespace from the last text, looking through marks."""
    if not nodes:
        return "", nodes
    last = nodes[-1]
    if isinstance(last, Text):
        stripped = last.content.rstrip()
        padding = last.content[len(stripped) :]
        rest = nodes[:-1] + ([replace(last, content=stripped)] if stripped else [])
        if not stripped and padding:
            more, rest = _take_trailing_whitespace(rest)
            padding = more + padding
        return padding, rest
    if isinstance(last, _MARK_TYPES):
        padding, inner = _take_trailing_whitespace(last.content)
        return padding, nodes[:-1] + ([replace(last, content=inner)] if inner else [])
    return "", nodes


class PaddedLinksTransform(NodeTransformer):
    """Hoist leading and trailing link text whitespace out of links.

    Links whose text is nothing but whitespace are left alone.

    Examples
    --------
        >>> link = Link(url="x", content=[Text(" here ")])
        >>> [type(n).__name__ for n in PaddedLinksTransform().transform(link)]
        ['Text', 'Link', 'Text']

    """

    def visit_link(self, node: Link) -> TransformResult:
        """Split padding off the link's content."""
        content = self._transform_children(node.content)
        leading, trimmed = _take_leading_whitespace(content)
        trailing, trimmed = _take_trailing_whitespace(trimmed)

        if not trimmed or not (leading or trailing):
            return replace(node, content=content)

        logger.debug("Moved padding outside link to %s", node.url)
        result: list[Node] = []
        if leading:
            result.append(Text(content=leading))
        result.append(replace(node, content=trimmed))
        if trailing:
            result.append(Text(content=trailing))
        return result
