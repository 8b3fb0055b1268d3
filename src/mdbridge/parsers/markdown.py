#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/parsers/markdown.py
"""Markdown to syntax tree converter.

This module parses Markdown with mistune and maps its token stream onto the
mdbridge syntax tree. Component blocks are collapsed to their single-line
encoded form first so the block grammar leaves them alone, and bare-URL
autolinking is disabled through the inline rule guard.

HTML entities are not decoded: ``&lt;div&gt;`` stays literal in text and
code spans so that it is written back exactly as it was read.

"""

from __future__ import annotations

import logging
from typing import Any

from mdbridge.ast import (
    BlockQuote,
    Code,
    CodeBlock,
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
from mdbridge.constants import DEPS_MARKDOWN
from mdbridge.options.markdown import MarkdownParserOptions
from mdbridge.parsers.base import BaseParser
from mdbridge.parsers.rules import remove_inline_rules
from mdbridge.utils.components import decode_component_blocks, encode_component_blocks
from mdbridge.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)


class MarkdownToAstConverter(BaseParser):
    r"""Convert Markdown to the mdbridge syntax tree.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> converter = MarkdownToAstConverter()
        >>> doc = converter.parse("# Hello\\n\\nThis is **bold**.")

    Re-enabling bare URL autolinking:

        >>> options = MarkdownParserOptions(disabled_inline_rules=())
        >>> doc = MarkdownToAstConverter(options).parse("see https://example.com")

    Notes
    -----
    Reference links are kept as ``LinkReference``/``ImageReference`` nodes
    and the reference definitions are appended as ``Definition`` nodes; the
    reference squashing pass folds them into plain links.

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the Markdown parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options

    @requires_dependencies("markdown", DEPS_MARKDOWN)
    def parse(self, input_data: str) -> Document:
        """Parse Markdown text into a syntax tree.

        Parameters
        ----------
        input_data : str
            Markdown source

        Returns
        -------
        Document
            Syntax tree root

        Raises
        ------
        ValidationError
            If ``input_data`` is not a string

        """
        markdown_content = self._validate_text_input(input_data, "markdown")

        if self.options.encode_component_blocks:
            markdown_content = encode_component_blocks(markdown_content)

        import mistune

        # url_link is registered so that the guard below decides whether it runs
        plugins = ["url"]
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.append("table")

        # A fresh instance per call: the guard mutates its rule list
        markdown = mistune.create_markdown(renderer=None, plugins=plugins)
        removed = remove_inline_rules(markdown, self.options.disabled_inline_rules)
        if removed:
            logger.debug("Disabled inline rules: %s", ", ".join(removed))

        tokens, state = markdown.parse(markdown_content)

        children = self._process_tokens(tokens) if isinstance(tokens, list) else []
        children.extend(self._process_definitions(state.env.get("ref_links", {})))

        return Document(children=children)

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process a list of block tokens into syntax tree nodes."""
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_token(token)
            if node is not None:
                if isinstance(node, list):
                    nodes.extend(node)
                else:
                    nodes.append(node)

        return nodes

    def _process_token(self, token: dict[str, Any]) -> Node | list[Node] | None:
        """Process a single block token.

        Parameters
        ----------
        token : dict
            Mistune token dictionary with 'type' and other fields

        Returns
        -------
        Node, list of Node, or None
            Resulting node(s); None for tokens without a tree counterpart
            such as blank lines

        """
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            # block_text is used for tight list items
            return self._process_paragraph(token)
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return self._process_html_block(token)

        return None

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        """Process heading token.

        Parameters
        ----------
        token : dict
            Heading token with 'attrs' (level) and 'children'

        Returns
        -------
        Heading
            Heading node

        """
        attrs = token.get("attrs", {})
        level = attrs.get("level", 1) if isinstance(attrs, dict) else 1
        if not isinstance(level, int) or level < 1 or level > 6:
            level = 1

        content = self._process_inline_tokens(token.get("children", []))
        return Heading(level=level, content=content, metadata={"style": token.get("style", "atx")})

    def _process_paragraph(self, token: dict[str, Any]) -> Paragraph:
        """Process paragraph token."""
        return Paragraph(content=self._process_inline_tokens(token.get("children", [])))

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process code block token.

        The info string is kept whole in ``metadata['info_string']``; its
        first word becomes the language.

        """
        code_content = decode_component_blocks(token.get("raw", ""))
        if code_content.endswith("\n"):
            code_content = code_content[:-1]

        attrs = token.get("attrs", {})
        info_string = (attrs.get("info") or "").strip() if isinstance(attrs, dict) else ""

        metadata: dict[str, Any] = {}
        language = None
        if info_string:
            metadata["info_string"] = info_string
            language = info_string.split(maxsplit=1)[0]

        return CodeBlock(content=code_content, language=language, metadata=metadata)

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process list token.

        Parameters
        ----------
        token : dict
            List token with 'children', 'tight' and 'attrs' (ordered, start)

        Returns
        -------
        List
            List node

        """
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}

        ordered = bool(attrs.get("ordered", False))
        start = attrs.get("start", 1)
        tight = bool(token.get("tight", True))

        children = token.get("children", [])
        items = [
            ListItem(children=self._process_tokens(child.get("children", [])))
            for child in children
            if isinstance(child, dict)
        ]

        return List(ordered=ordered, items=items, start=start, tight=tight)

    def _process_table(self, token: dict[str, Any]) -> Table:
        """Process table token.

        Parameters
        ----------
        token : dict
            Table token whose children are 'table_head' and 'table_body'

        Returns
        -------
        Table
            Table node

        """
        header = None
        rows = []
        alignments = []

        for section in token.get("children", []):
            section_type = section.get("type", "")
            if section_type == "table_head":
                # Header cells are direct children of table_head
                cells = self._process_table_cells(section.get("children", []))
                header = TableRow(cells=cells, is_header=True)
                alignments = [cell.alignment for cell in cells]
            elif section_type == "table_body":
                for row_token in section.get("children", []):
                    rows.append(TableRow(cells=self._process_table_cells(row_token.get("children", []))))

        return Table(header=header, rows=rows, alignments=alignments)

    def _process_table_cells(self, cell_tokens: list[dict[str, Any]]) -> list[TableCell]:
        cells = []
        for cell_token in cell_tokens:
            if cell_token.get("type") != "table_cell":
                continue
            alignment = cell_token.get("attrs", {}).get("align", None)
            content = self._process_inline_tokens(cell_token.get("children", []))
            cells.append(TableCell(content=content, alignment=alignment))
        return cells

    def _process_html_block(self, token: dict[str, Any]) -> HTMLBlock:
        """Process HTML block token, restoring any component blocks it swallowed."""
        content = decode_component_blocks(token.get("raw", ""))
        return HTMLBlock(content=content.rstrip("\n"))

    def _process_definitions(self, ref_links: dict[str, dict[str, Any]]) -> list[Node]:
        """Turn mistune's reference definition map into Definition nodes."""
        definitions: list[Node] = []
        for key, data in ref_links.items():
            definitions.append(
                Definition(
                    identifier=key,
                    label=data.get("label", key),
                    url=data.get("url", ""),
                    title=data.get("title"),
                )
            )
        return definitions

    def _process_inline_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Process inline tokens, merging adjacent text runs.

        Parameters
        ----------
        tokens : list of dict
            Inline token dictionaries

        Returns
        -------
        list of Node
            Inline nodes

        """
        nodes: list[Node] = []

        for token in tokens:
            node = self._process_inline_token(token)
            if node is None:
                continue
            if isinstance(node, Text) and nodes and isinstance(nodes[-1], Text):
                nodes[-1] = Text(content=nodes[-1].content + node.content)
            else:
                nodes.append(node)

        return nodes

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        """Handle text token."""
        return Text(content=token.get("raw", ""))

    def _handle_strong_token(self, token: dict[str, Any]) -> Strong:
        """Handle strong token."""
        return Strong(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_emphasis_token(self, token: dict[str, Any]) -> Emphasis:
        """Handle emphasis token."""
        return Emphasis(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_strikethrough_token(self, token: dict[str, Any]) -> Strikethrough:
        """Handle strikethrough token."""
        return Strikethrough(content=self._process_inline_tokens(token.get("children", [])))

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        """Handle codespan token."""
        return Code(content=token.get("raw", ""))

    def _handle_link_token(self, token: dict[str, Any]) -> Link | LinkReference:
        """Handle link token, keeping reference links unresolved."""
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        content = self._process_inline_tokens(token.get("children", []))

        if "ref" in token:
            return LinkReference(identifier=token["ref"], label=token.get("label", token["ref"]), content=content)

        return Link(url=attrs.get("url", ""), content=content, title=attrs.get("title"))

    def _handle_image_token(self, token: dict[str, Any]) -> Image | ImageReference:
        """Handle image token; alt text is flattened from the children."""
        attrs = token.get("attrs", {})
        if not isinstance(attrs, dict):
            attrs = {}
        alt_text = _flatten_token_text(token.get("children", []))

        if "ref" in token:
            return ImageReference(identifier=token["ref"], label=token.get("label", token["ref"]), alt_text=alt_text)

        return Image(url=attrs.get("url", ""), alt_text=alt_text, title=attrs.get("title"))

    def _handle_linebreak_token(self, token: dict[str, Any]) -> LineBreak:
        """Handle hard line break token."""
        return LineBreak(soft=False)

    def _handle_softbreak_token(self, token: dict[str, Any]) -> LineBreak:
        """Handle soft line break token."""
        return LineBreak(soft=True)

    def _handle_inline_html_token(self, token: dict[str, Any]) -> HTMLInline:
        """Handle inline_html token."""
        return HTMLInline(content=token.get("raw", ""))

    def _process_inline_token(self, token: dict[str, Any]) -> Node | None:
        """Process a single inline token.

        Parameters
        ----------
        token : dict
            Inline token dictionary

        Returns
        -------
        Node or None
            Inline node, or None for unknown token types

        """
        token_type = token.get("type", "")

        handler_map: dict[str, Any] = {
            "text": self._handle_text_token,
            "strong": self._handle_strong_token,
            "emphasis": self._handle_emphasis_token,
            "strikethrough": self._handle_strikethrough_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_softbreak_token,
            "inline_html": self._handle_inline_html_token,
        }

        handler = handler_map.get(token_type)
        if handler:
            return handler(token)

        logger.debug("Ignoring unsupported inline token type '%s'", token_type)
        return None


def _flatten_token_text(tokens: list[dict[str, Any]]) -> str:
    parts = []
    for token in tokens:
        if not isinstance(token, dict):
            continue
        if "raw" in token:
            parts.append(token["raw"])
        elif token.get("type") == "softbreak":
            parts.append("\n")
        else:
            parts.append(_flatten_token_text(token.get("children", [])))
    return "".join(parts)


def markdown_to_ast(markdown_content: str, options: MarkdownParserOptions | None = None) -> Document:
    r"""Convert a Markdown string to a syntax tree, without normalization.

    Parameters
    ----------
    markdown_content : str
        Markdown text to parse
    options : MarkdownParserOptions or None, default = None
        Parser configuration

    Returns
    -------
    Document
        Syntax tree root

    Examples
    --------
    >>> from mdbridge.parsers.markdown import markdown_to_ast
    >>> doc = markdown_to_ast("# Hello\\n\\nWorld")
    >>> len(doc.children)
    2

    """
    converter = MarkdownToAstConverter(options)
    return converter.parse(markdown_content)
