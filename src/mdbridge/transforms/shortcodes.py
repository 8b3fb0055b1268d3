#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/transforms/shortcodes.py
"""Turn encoded component lines and shortcode literals into component nodes.

Block position is a paragraph whose entire text is either one encoded
component line (``::: name payload``) or a match for a definition's literal
pattern. Inline position is an encoded component embedded in a text run,
which only inline-level definitions accept.

Anything that cannot be resolved (unknown name, wrong level, a payload
that does not decode, a body the definition rejects) stays literal text.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Optional

from mdbridge.ast.nodes import ComponentBlock, ComponentInline, Node, Paragraph, Text
from mdbridge.ast.transforms import NodeTransformer, TransformResult
from mdbridge.constants import ENCODED_COMPONENT_INLINE_PATTERN, ENCODED_COMPONENT_LINE_PATTERN
from mdbridge.exceptions import ShortcodeError
from mdbridge.shortcodes.base import ShortcodeDefinition, ShortcodeLookup
from mdbridge.shortcodes.registry import resolve_shortcodes
from mdbridge.utils.components import decode_component_payload

logger = logging.getLogger(__name__)


class ResolveShortcodesTransform(NodeTransformer):
    """Resolve components against a shortcode lookup.

    Parameters
    ----------
    shortcodes : ShortcodeLookup or None, default = None
        Available definitions; None uses ``default_shortcodes()``

    Examples
    --------
        >>> doc = Document(children=[Paragraph(content=[Text('![a](b.png)')])])
        >>> ResolveShortcodesTransform().transform(doc).children[0].name
        'image'

    """

    def __init__(self, shortcodes: ShortcodeLookup | None = None):
        """Initialize with the shortcode lookup to resolve against."""
        self.shortcodes = resolve_shortcodes(shortcodes)

    def _parse_values(self, definition: ShortcodeDefinition, raw: str) -> Optional[dict[str, Any]]:
        """Run a definition's parser, returning None when it rejects the body."""
        try:
            return definition.parse(raw)
        except ShortcodeError as e:
            logger.warning("Component '%s' left as text: %s", definition.name, e)
            return None

    def _decode_encoded(self, name: str, payload: str, level: str) -> Optional[tuple[ShortcodeDefinition, dict]]:
        definition = self.shortcodes.get(name)
        if definition is None:
            logger.warning("Unknown component '%s' left as text", name)
            return None
        if level == "inline" and definition.level != "inline":
            logger.debug("Block component '%s' inside a text run left as text", name)
            return None

        body = decode_component_payload(payload)
        if body is None:
            logger.warning("Component '%s' has an undecodable payload; left as text", name)
            return None

        values = self._parse_values(definition, body)
        if values is None:
            return None
        return definition, values

    def _wrap_block(self, definition: ShortcodeDefinition, values: dict, syntax: str, paragraph: Paragraph) -> Node:
        if definition.level == "inline":
            component = ComponentInline(name=definition.name, values=values, syntax=syntax)  # type: ignore[arg-type]
            return Paragraph(content=[component], metadata=paragraph.metadata.copy())
        return ComponentBlock(
            name=definition.name,
            values=values,
            syntax=syntax,  # type: ignore[arg-type]
            metadata=paragraph.metadata.copy(),
        )

    def _resolve_block(self, paragraph: Paragraph) -> Optional[Node]:
        if not paragraph.content or not all(isinstance(child, Text) for child in paragraph.content):
            return None
        text = "".join(child.content for child in paragraph.content)  # type: ignore[attr-defined]

        match = ENCODED_COMPONENT_LINE_PATTERN.fullmatch(text)
        if match:
            resolved = self._decode_encoded(match.group(1), match.group(2), level="block")
            if resolved is None:
                return None
            definition, values = resolved
            return self._wrap_block(definition, values, "fenced", paragraph)

        for definition in self.shortcodes:
            if definition.pattern is None or not definition.pattern.fullmatch(text):
                continue
            values = self._parse_values(definition, text)
            if values is None:
                continue
            return self._wrap_block(definition, values, "pattern", paragraph)

        return None

    def visit_paragraph(self, node: Paragraph) -> TransformResult:
        """Resolve a block component, or inline components in the text runs."""
        block = self._resolve_block(node)
        if block is not None:
            return block
        return self._generic_transform(node)

    def visit_text(self, node: Text) -> TransformResult:
        """Split encoded inline components out of a text run."""
        if ":::" not in node.content:
            return replace(node)

        result: list[Node] = []
        position = 0
        for match in ENCODED_COMPONENT_INLINE_PATTERN.finditer(node.content):
            resolved = self._decode_encoded(match.group(1), match.group(2), level="inline")
            if resolved is None:
                continue
            definition, values = resolved
            if match.start() > position:
                result.append(Text(content=node.content[position : match.start()]))
            result.append(ComponentInline(name=definition.name, values=values, syntax="fenced"))
            position = match.end()

        if not result:
            return replace(node)
        if position < len(node.content):
            result.append(Text(content=node.content[position:]))
        return result
