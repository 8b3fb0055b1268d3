#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/parsers/html.py
"""HTML to syntax tree converter for pasted content.

Pasted HTML is parsed with BeautifulSoup and mapped element by element onto
the syntax tree. The mapping is intentionally literal: a ``<p>`` inside a
``<strong>`` produces a Paragraph inside a Strong node. Such structurally
invalid combinations are repaired afterwards by the parent assertion pass
rather than being guessed at here.

"""

from __future__ import annotations

import logging
import re
from typing import Any

from mdbridge.ast import (
    BlockQuote,
    Code,
    CodeBlock,
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
from mdbridge.constants import DEPS_HTML
from mdbridge.exceptions import DependencyError
from mdbridge.options.html import HtmlParserOptions
from mdbridge.parsers.base import BaseParser
from mdbridge.transforms.emoji import PaperEmojiFilter
from mdbridge.utils.decorators import requires_dependencies
from mdbridge.utils.escape import protect_html_in_text

logger = logging.getLogger(__name__)

_BLOCK_HANDLED_ELEMENTS = frozenset(
    {"p", "h1", "h2", "h3", "h4", "h5", "h6", "ul", "ol", "li", "pre", "blockquote", "table", "hr"}
)

_WHITESPACE_RUN = re.compile(r"\s+")
_LANGUAGE_CLASS = re.compile(r"^(?:language|lang)-(\S+)$")


class HtmlToAstConverter(BaseParser):
    """Convert an HTML fragment to the mdbridge syntax tree.

    Parameters
    ----------
    options : HtmlParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
        >>> doc = HtmlToAstConverter().parse("<p>Hello <b>world</b></p>")

    """

    # Elements that only group other blocks
    BLOCK_CONTAINERS = frozenset(
        {
            "div",
            "section",
            "article",
            "header",
            "footer",
            "nav",
            "aside",
            "main",
            "body",
            "html",
            "figure",
            "figcaption",
            "address",
            "hgroup",
        }
    )

    # Elements kept verbatim as raw HTML blocks
    RAW_BLOCK_ELEMENTS = frozenset({"iframe", "video", "audio", "details", "svg", "embed", "object", "canvas"})

    # Elements dropped together with their content
    DROPPED_ELEMENTS = frozenset({"script", "style", "head", "title", "meta", "link", "template", "noscript"})

    _ELEMENT_HANDLERS = {
        "p": "_process_paragraph_to_ast",
        "h1": "_process_heading_to_ast",
        "h2": "_process_heading_to_ast",
        "h3": "_process_heading_to_ast",
        "h4": "_process_heading_to_ast",
        "h5": "_process_heading_to_ast",
        "h6": "_process_heading_to_ast",
        "ul": "_process_list_to_ast",
        "ol": "_process_list_to_ast",
        "li": "_process_list_item_to_ast",
        "pre": "_process_code_block_to_ast",
        "blockquote": "_process_blockquote_to_ast",
        "table": "_process_table_to_ast",
        "hr": "_process_thematic_break_to_ast",
        "br": "_process_line_break_to_ast",
        "strong": "_process_strong_to_ast",
        "b": "_process_strong_to_ast",
        "em": "_process_emphasis_to_ast",
        "i": "_process_emphasis_to_ast",
        "del": "_process_strikethrough_to_ast",
        "s": "_process_strikethrough_to_ast",
        "strike": "_process_strikethrough_to_ast",
        "code": "_process_code_to_ast",
        "a": "_process_link_to_ast",
        "img": "_process_image_to_ast",
    }

    def __init__(self, options: HtmlParserOptions | None = None):
        """Initialize the HTML parser with options."""
        BaseParser._validate_options_type(options, HtmlParserOptions, "html")
        options = options or HtmlParserOptions()
        super().__init__(options)
        self.options: HtmlParserOptions = options

    @requires_dependencies("html", DEPS_HTML)
    def parse(self, input_data: str) -> Document:
        """Parse an HTML fragment into a syntax tree.

        Parameters
        ----------
        input_data : str
            HTML source

        Returns
        -------
        Document
            Syntax tree root; may hold block nodes nested inside inline
            nodes where the HTML did

        Raises
        ------
        ValidationError
            If ``input_data`` is not a string
        DependencyError
            If the selected BeautifulSoup parser backend is not installed

        """
        html_content = self._validate_text_input(input_data, "html")

        from bs4 import BeautifulSoup
        from bs4.exceptions import FeatureNotFound

        try:
            soup = BeautifulSoup(html_content, self.options.parser)
        except FeatureNotFound as e:
            raise DependencyError(
                converter_name="html",
                missing_packages=[(self.options.parser, "")],
                message=f"BeautifulSoup parser '{self.options.parser}' is not available: {e}",
            ) from e

        if self.options.convert_paper_emoji:
            PaperEmojiFilter().apply(soup)

        return Document(children=self._process_block_container(soup))

    def _process_node_to_ast(self, node: Any) -> Node | list[Node] | None:
        """Process a BeautifulSoup node to syntax tree nodes.

        Parameters
        ----------
        node : Any
            BeautifulSoup node to process

        Returns
        -------
        Node, list of Node, or None
            Resulting node(s)

        """
        from bs4.element import Comment, Doctype, NavigableString

        if isinstance(node, Comment):
            if self.options.strip_comments:
                return None
            return HTMLInline(content=f"<!--{node}-->")

        if isinstance(node, Doctype):
            return None

        if isinstance(node, NavigableString):
            text = _WHITESPACE_RUN.sub(" ", str(node))
            if not text:
                return None
            return Text(content=protect_html_in_text(text))

        name = getattr(node, "name", None)
        if not isinstance(name, str) or name in self.DROPPED_ELEMENTS:
            return None

        handler_name = self._ELEMENT_HANDLERS.get(name)
        if handler_name:
            return getattr(self, handler_name)(node)

        if name in self.RAW_BLOCK_ELEMENTS:
            return HTMLBlock(content=str(node))

        if name in self.BLOCK_CONTAINERS:
            return self._process_block_container(node)

        # Unknown inline element: keep its content only
        return self._process_children(node)

    def _is_block_element(self, node: Any) -> bool:
        """Check if a node produces block-level output."""
        name = getattr(node, "name", None)
        if not isinstance(name, str):
            return False
        if name in self._ELEMENT_HANDLERS:
            return name in _BLOCK_HANDLED_ELEMENTS
        return name in self.BLOCK_CONTAINERS or name in self.RAW_BLOCK_ELEMENTS

    def _process_children(self, node: Any) -> list[Node]:
        """Process all children of a node in order, without regrouping."""
        result: list[Node] = []
        for child in node.children:
            ast_nodes = self._process_node_to_ast(child)
            if ast_nodes is None:
                continue
            if isinstance(ast_nodes, list):
                result.extend(ast_nodes)
            else:
                result.append(ast_nodes)
        return result

    def _process_block_container(self, node: Any) -> list[Node]:
        """Process a block container element (div, section, root, etc.).

        Runs of inline content between block children are wrapped in
        paragraphs; whitespace-only runs are dropped.

        Parameters
        ----------
        node : Any
            Block container element

        Returns
        -------
        list of Node
            Block nodes

        """
        children: list[Node] = []
        inline_buffer: list[Node] = []

        def flush() -> None:
            paragraph = _make_paragraph(inline_buffer)
            if paragraph is not None:
                children.append(paragraph)
            inline_buffer.clear()

        for child in node.children:
            if self._is_block_element(child):
                flush()
                block_node = self._process_node_to_ast(child)
                if isinstance(block_node, list):
                    children.extend(block_node)
                elif block_node is not None:
                    children.append(block_node)
            else:
                inline_nodes = self._process_node_to_ast(child)
                if isinstance(inline_nodes, list):
                    inline_buffer.extend(inline_nodes)
                elif inline_nodes is not None:
                    inline_buffer.append(inline_nodes)

        flush()
        return children

    def _process_paragraph_to_ast(self, node: Any) -> Paragraph | None:
        """Process ``<p>``; block children stay nested for later repair."""
        return _make_paragraph(self._process_children(node))

    def _process_heading_to_ast(self, node: Any) -> Heading:
        """Process heading element (h1-h6) to Heading node."""
        level = int(node.name[1])
        return Heading(level=level, content=_trim_inline(self._process_children(node)))

    def _process_list_to_ast(self, node: Any) -> List:
        """Process list element (ul or ol) to List node.

        Parameters
        ----------
        node : Any
            List element

        Returns
        -------
        List
            List node with items

        """
        ordered = node.name == "ol"
        start = 1
        if ordered:
            try:
                start = int(node.get("start", 1))
            except (TypeError, ValueError):
                start = 1

        items: list[ListItem] = [self._process_list_item_to_ast(li) for li in node.find_all("li", recursive=False)]
        return List(ordered=ordered, items=items, start=start)

    def _process_list_item_to_ast(self, node: Any) -> ListItem:
        """Process ``<li>`` to ListItem, grouping inline runs into paragraphs."""
        return ListItem(children=self._process_block_container(node))

    def _process_code_block_to_ast(self, node: Any) -> CodeBlock:
        """Process ``<pre>`` to CodeBlock, keeping its whitespace exactly."""
        code = node.get_text()
        if code.endswith("\n"):
            code = code[:-1]
        return CodeBlock(content=code, language=self._extract_language_from_attrs(node))

    def _process_blockquote_to_ast(self, node: Any) -> BlockQuote:
        """Process ``<blockquote>`` to BlockQuote."""
        return BlockQuote(children=self._process_block_container(node))

    def _process_table_to_ast(self, node: Any) -> Table:
        """Process ``<table>`` to Table.

        The first row is the header when it sits in ``<thead>`` or consists
        only of ``<th>`` cells.

        """
        header: TableRow | None = None
        rows: list[TableRow] = []

        for index, tr in enumerate(node.find_all("tr")):
            # Skip rows of nested tables
            if tr.find_parent("table") is not node:
                continue
            cell_tags = tr.find_all(["th", "td"], recursive=False)
            in_head = tr.find_parent("thead") is not None
            is_header = header is None and not rows and (in_head or all(c.name == "th" for c in cell_tags))
            cells = [
                TableCell(content=_trim_inline(self._process_children(cell)), alignment=_get_alignment(cell))
                for cell in cell_tags
            ]
            row = TableRow(cells=cells, is_header=is_header)
            if is_header:
                header = row
            else:
                rows.append(row)

        alignments = [cell.alignment for cell in header.cells] if header else []
        return Table(header=header, rows=rows, alignments=alignments)

    def _process_thematic_break_to_ast(self, node: Any) -> ThematicBreak:
        return ThematicBreak()

    def _process_line_break_to_ast(self, node: Any) -> LineBreak:
        return LineBreak(soft=False)

    def _process_strong_to_ast(self, node: Any) -> Strong:
        """Process ``<strong>``/``<b>`` to Strong."""
        return Strong(content=self._process_children(node))

    def _process_emphasis_to_ast(self, node: Any) -> Emphasis:
        """Process ``<em>``/``<i>`` to Emphasis."""
        return Emphasis(content=self._process_children(node))

    def _process_strikethrough_to_ast(self, node: Any) -> Strikethrough:
        """Process ``<del>``/``<s>``/``<strike>`` to Strikethrough."""
        return Strikethrough(content=self._process_children(node))

    def _process_code_to_ast(self, node: Any) -> Code:
        """Process inline ``<code>``; code spans are literal so no entity protection."""
        return Code(content=node.get_text())

    def _process_link_to_ast(self, node: Any) -> Link | list[Node]:
        """Process ``<a>``; anchors without ``href`` are unwrapped."""
        href = node.get("href")
        if not href:
            return self._process_children(node)
        return Link(url=href, content=self._process_children(node), title=node.get("title"))

    def _process_image_to_ast(self, node: Any) -> Image | None:
        """Process ``<img>``; images without ``src`` are dropped."""
        src = node.get("src")
        if not src:
            return None
        return Image(url=src, alt_text=node.get("alt", ""), title=node.get("title"))

    def _extract_language_from_attrs(self, node: Any) -> str | None:
        """Find a ``language-*``/``lang-*`` class on ``<pre>`` or its ``<code>``."""
        candidates = [node]
        code = node.find("code")
        if code is not None:
            candidates.append(code)
        for element in candidates:
            for css_class in element.get("class", []) or []:
                match = _LANGUAGE_CLASS.match(css_class)
                if match:
                    return match.group(1)
            data_lang = element.get("data-lang") or element.get("data-language")
            if data_lang:
                return data_lang
        return None


def _get_alignment(cell: Any) -> str | None:
    align = (cell.get("align") or "").lower()
    if not align:
        style = cell.get("style") or ""
        match = re.search(r"text-align\s*:\s*(left|center|right)", style, re.IGNORECASE)
        align = match.group(1).lower() if match else ""
    return align if align in ("left", "center", "right") else None


def _trim_inline(nodes: list[Node]) -> list[Node]:
    """Strip whitespace at the edges of an inline run, dropping emptied text."""
    result = list(nodes)
    if result and isinstance(result[0], Text):
        stripped = result[0].content.lstrip()
        result = ([Text(content=stripped)] if stripped else []) + result[1:]
    if result and isinstance(result[-1], Text):
        stripped = result[-1].content.rstrip()
        result = result[:-1] + ([Text(content=stripped)] if stripped else [])
    return result


def _make_paragraph(nodes: list[Node]) -> Paragraph | None:
    content = _trim_inline(nodes)
    if not content:
        return None
    return Paragraph(content=content)
