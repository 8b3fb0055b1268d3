#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/transforms/references.py
"""Resolve reference-style links and images into inline ones.

The rich document model has no notion of link definitions, so
``[text][label]`` plus ``[label]: url`` collapses into a plain
``[text](url)``. References whose label has no definition fall back to
their literal bracket text.
"""

from __future__ import annotations

import logging

from mdbridge.ast.nodes import (
    Definition,
    Document,
    Image,
    ImageReference,
    Link,
    LinkReference,
    Node,
    Text,
    get_text_content,
)
from mdbridge.ast.transforms import NodeTransformer, TransformResult, extract_nodes

logger = logging.getLogger(__name__)


def normalize_reference_label(label: str) -> str:
    """Normalize a reference label for matching.

    Internal whitespace runs collapse to one space and case is folded.

    Examples
    --------
        >>> normalize_reference_label("  Foo\\n  Bar ")
        'foo bar'

    """
    return " ".join(label.split()).casefold()


class SquashReferencesTransform(NodeTransformer):
    """Replace references with inline links/images and drop definitions.

    The first definition of a label wins, matching Markdown's own rule.

    Examples
    --------
        >>> doc = Document(children=[
        ...     Paragraph(content=[LinkReference(identifier="a", label="A", content=[Text("x")])]),
        ...     Definition(identifier="a", label="A", url="/x"),
        ... ])
        >>> result = SquashReferencesTransform().transform(doc)
        >>> result.children[0].content[0].url
        '/x'

    """

    def __init__(self) -> None:
        """Initialize with an empty definition table."""
        self._definitions: dict[str, Definition] = {}

    def visit_document(self, node: Document) -> TransformResult:
        """Collect the document's definitions, then rewrite its children."""
        self._definitions = {}
        for definition in extract_nodes(node, Definition):
            key = normalize_reference_label(definition.identifier)  # type: ignore[attr-defined]
            self._definitions.setdefault(key, definition)  # type: ignore[arg-type]

        if self._definitions:
            logger.debug("Resolving references against %d definition(s)", len(self._definitions))
        return super().visit_document(node)

    def _lookup(self, identifier: str) -> Definition | None:
        return self._definitions.get(normalize_reference_label(identifier))

    def visit_definition(self, node: Definition) -> TransformResult:
        """Drop definitions; their targets now live on the links."""
        return None

    def visit_link_reference(self, node: LinkReference) -> TransformResult:
        """Resolve a link reference or degrade it to bracket text."""
        content = self._transform_children(node.content)
        definition = self._lookup(node.identifier)
        if definition is not None:
            return Link(url=definition.url, content=content, title=definition.title, metadata=node.metadata.copy())

        logger.debug("Unresolved link reference '%s' kept as text", node.label)
        result: list[Node] = [Text(content="["), *content, Text(content="]")]
        # Shortcut references ([label]) carry their label as link text
        if get_text_content(node) != node.label:
            result.append(Text(content=f"[{node.label}]"))
        return result

    def visit_image_reference(self, node: ImageReference) -> TransformResult:
        """Resolve an image reference or degrade it to bracket text."""
        definition = self._lookup(node.identifier)
        if definition is not None:
            return Image(
                url=definition.url, alt_text=node.alt_text, title=definition.title, metadata=node.metadata.copy()
            )

        logger.debug("Unresolved image reference '%s' kept as text", node.label)
        if node.alt_text == node.label:
            return Text(content=f"![{node.alt_text}]")
        return Text(content=f"![{node.alt_text}][{node.label}]")
