#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/transforms/breaks.py
"""Remove hard line breaks that end their inline container.

A trailing ``\\`` line break has nothing to break before; written out it
would leave a stray backslash at the end of the paragraph.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from mdbridge.ast.nodes import INLINE_CONTAINER_TYPES, LineBreak, Node, Text, get_node_children
from mdbridge.ast.transforms import NodeTransformer, TransformResult

logger = logging.getLogger(__name__)


def strip_trailing_breaks(nodes: list[Node]) -> list[Node]:
    """Drop hard breaks followed only by whitespace-only text.

    Parameters
    ----------
    nodes : list of Node
        Inline sequence

    Returns
    -------
    list of Node
        The sequence without trailing hard breaks

    """
    result = list(nodes)
    index = len(result)
    end = len(result)
    while index > 0:
        node = result[index - 1]
        if isinstance(node, Text) and not node.content.strip():
            index -= 1
            continue
        if isinstance(node, LineBreak) and not node.soft:
            index -= 1
            end = index
            continue
        break
    return result[:end]


class StripTrailingBreaksTransform(NodeTransformer):
    """Apply ``strip_trailing_breaks`` to every inline container."""

    def transform(self, node: Node) -> TransformResult:
        """Transform a node, trimming its inline content if it has any."""
        result = super().transform(node)
        if isinstance(result, INLINE_CONTAINER_TYPES):
            content = get_node_children(result)
            stripped = strip_trailing_breaks(content)
            if len(stripped) != len(content):
                logger.debug("Removed trailing hard break(s) from %s", type(result).__name__)
                return replace(result, content=stripped)  # type: ignore[type-var]
        return result
