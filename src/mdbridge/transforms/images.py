#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/transforms/images.py
"""Demote standalone images to their Markdown source text.

An image alone in a top-level paragraph is an image *block* in the editor.
Turning it into the literal ``![alt](url "title")`` text lets the image
shortcode claim the paragraph in the next pass; without an image shortcode
the text simply survives as written.
"""

from __future__ import annotations

import logging

from mdbridge.ast.nodes import Document, Image, Node, Paragraph, Text
from mdbridge.ast.transforms import NodeTransformer, TransformResult

logger = logging.getLogger(__name__)


def image_source(image: Image) -> str:
    """Return the inline Markdown source of an image.

    Examples
    --------
        >>> image_source(Image(url="cat.png", alt_text="a cat", title="Cat"))
        '![a cat](cat.png "Cat")'

    """
    title = f' "{image.title}"' if image.title else ""
    return f"![{image.alt_text}]({image.url}{title})"


class ImagesToTextTransform(NodeTransformer):
    """Replace the image of every image-only top-level paragraph with text.

    Images nested in quotes, lists or mixed with other inline content are
    left alone.
    """

    def visit_document(self, node: Document) -> TransformResult:
        """Rewrite image-only paragraphs among the document's children."""
        children: list[Node] = []
        demoted = 0
        for child in node.children:
            if isinstance(child, Paragraph) and len(child.content) == 1 and isinstance(child.content[0], Image):
                children.append(
                    Paragraph(content=[Text(content=image_source(child.content[0]))], metadata=child.metadata.copy())
                )
                demoted += 1
            else:
                children.append(child)

        if demoted:
            logger.debug("Demoted %d standalone image(s) to text", demoted)
        return Document(children=children, metadata=node.metadata.copy())
