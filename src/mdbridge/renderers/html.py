#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/renderers/html.py
"""HTML rendering from the syntax tree.

This module provides the HtmlRenderer class which converts syntax tree
nodes to an HTML fragment. Raw HTML nodes pass through unchanged and
components are expanded by their shortcode definition's ``render``.

"""

from __future__ import annotations

import logging

from mdbridge.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    ComponentBlock,
    ComponentInline,
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
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from mdbridge.ast.visitors import NodeVisitor
from mdbridge.exceptions import ShortcodeError, ValidationError
from mdbridge.options.html import HtmlRendererOptions
from mdbridge.renderers.base import BaseRenderer, InlineContentMixin
from mdbridge.shortcodes.base import ShortcodeLookup
from mdbridge.shortcodes.registry import resolve_shortcodes
from mdbridge.utils.escape import escape_html

logger = logging.getLogger(__name__)


class HtmlRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render syntax tree nodes to an HTML fragment.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering options
    shortcodes : ShortcodeLookup or None, default = None
        Definitions used to render component nodes

    Examples
    --------
        >>> from mdbridge.ast import Document, Paragraph, Strong, Text
        >>> doc = Document(children=[Paragraph(content=[Strong(content=[Text("hi")])])])
        >>> HtmlRenderer().render_to_string(doc)
        '<p><strong>hi</strong></p>'

    """

    def __init__(self, options: HtmlRendererOptions | None = None, shortcodes: ShortcodeLookup | None = None):
        """Initialize the HTML renderer with options."""
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options
        self.shortcodes = resolve_shortcodes(shortcodes)
        self._output: list[str] = []

    def render_to_string(self, document: Document) -> str:
        """Render a document to an HTML string.

        Parameters
        ----------
        document : Document
            The document node to render

        Returns
        -------
        str
            HTML fragment without trailing whitespace

        """
        if not isinstance(document, Document):
            raise ValidationError(
                f"Expected a Document to render, got {type(document).__name__}",
                parameter_name="document",
                parameter_value=document,
            )
        self._output = []
        document.accept(self)
        result = "".join(self._output)
        self._output = []
        return result.rstrip()

    def _text(self, text: str) -> str:
        if not self.options.escape_html:
            return text
        return escape_html(text, quote=False, keep_entities=True)

    def _attribute(self, value: str) -> str:
        return escape_html(value, quote=True, keep_entities=True)

    def _raw_html(self, content: str) -> str:
        if self.options.allow_dangerous_html:
            return content
        return escape_html(content, quote=False)

    def _render_component(self, name: str, values: dict, tag: str) -> str:
        if self.options.render_components:
            definition = self.shortcodes.get(name)
            if definition is None:
                logger.warning("No shortcode definition for component '%s'; rendering placeholder", name)
            else:
                try:
                    return definition.render(values)
                except ShortcodeError as e:
                    logger.warning("Could not render component '%s': %s", name, e)
        return f'<{tag} data-component="{self._attribute(name)}"></{tag}>'

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render a Document node."""
        for child in node.children:
            child.accept(self)

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node."""
        level = min(6, max(1, node.level))
        content = self._render_inline_content(node.content)
        self._output.append(f"<h{level}>{content}</h{level}>\n")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        content = self._render_inline_content(node.content)
        self._output.append(f"<p>{content}</p>\n")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node."""
        class_attr = f' class="language-{self._attribute(node.language)}"' if node.language else ""
        content = node.content
        if content and not content.endswith("\n"):
            content += "\n"
        self._output.append(f"<pre><code{class_attr}>{escape_html(content, quote=False)}</code></pre>\n")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node."""
        self._output.append("<blockquote>\n")
        for child in node.children:
            child.accept(self)
        self._output.append("</blockquote>\n")

    def visit_list(self, node: List) -> None:
        """Render a List node.

        Items of tight lists render their paragraphs without ``<p>``.
        """
        tag = "ol" if node.ordered else "ul"
        start_attr = f' start="{node.start}"' if node.ordered and node.start != 1 else ""
        self._output.append(f"<{tag}{start_attr}>\n")
        for item in node.items:
            self._render_list_item(item, node.tight)
        self._output.append(f"</{tag}>\n")

    def _render_list_item(self, node: ListItem, tight: bool) -> None:
        self._output.append("<li>")
        for child in node.children:
            if tight and isinstance(child, Paragraph):
                self._output.append(self._render_inline_content(child.content))
            else:
                if self._output[-1] == "<li>":
                    self._output.append("\n")
                child.accept(self)
        self._output.append("</li>\n")

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node."""
        self._render_list_item(node, tight=False)

    def _cell_attrs(self, node: Table, index: int) -> str:
        if node.alignments and index < len(node.alignments) and node.alignments[index]:
            return f' style="text-align: {node.alignments[index]}"'
        return ""

    def visit_table(self, node: Table) -> None:
        """Render a Table node."""
        self._output.append("<table>\n")

        if node.header:
            self._output.append("<thead>\n<tr>")
            for i, cell in enumerate(node.header.cells):
                content = self._render_inline_content(cell.content)
                self._output.append(f"<th{self._cell_attrs(node, i)}>{content}</th>")
            self._output.append("</tr>\n</thead>\n")

        if node.rows:
            self._output.append("<tbody>\n")
            for row in node.rows:
                self._output.append("<tr>")
                for i, cell in enumerate(row.cells):
                    content = self._render_inline_content(cell.content)
                    self._output.append(f"<td{self._cell_attrs(node, i)}>{content}</td>")
                self._output.append("</tr>\n")
            self._output.append("</tbody>\n")

        self._output.append("</table>\n")

    def visit_table_row(self, node: TableRow) -> None:
        """Render a TableRow node (handled by visit_table)."""
        pass

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a TableCell node (handled by visit_table)."""
        pass

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._output.append("<hr />\n")

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Render an HTMLBlock node."""
        content = self._raw_html(node.content)
        if content:
            self._output.append(content)
            if not content.endswith("\n"):
                self._output.append("\n")

    def visit_definition(self, node: Definition) -> None:
        """Skip a reference definition; it produces no output."""
        pass

    def visit_component_block(self, node: ComponentBlock) -> None:
        """Render a ComponentBlock through its shortcode definition."""
        self._output.append(self._render_component(node.name, node.values, "div") + "\n")

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render a Text node."""
        self._output.append(self._text(node.content))

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._output.append(f"<em>{self._render_inline_content(node.content)}</em>")

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._output.append(f"<strong>{self._render_inline_content(node.content)}</strong>")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node."""
        self._output.append(f"<del>{self._render_inline_content(node.content)}</del>")

    def visit_code(self, node: Code) -> None:
        """Render a Code node."""
        self._output.append(f"<code>{escape_html(node.content, quote=False)}</code>")

    def visit_link(self, node: Link) -> None:
        """Render a Link node."""
        content = self._render_inline_content(node.content)
        title_attr = f' title="{self._attribute(node.title)}"' if node.title else ""
        self._output.append(f'<a href="{self._attribute(node.url)}"{title_attr}>{content}</a>')

    def visit_image(self, node: Image) -> None:
        """Render an Image node."""
        title_attr = f' title="{self._attribute(node.title)}"' if node.title else ""
        src = self._attribute(node.url)
        alt = self._attribute(node.alt_text)
        self._output.append(f'<img src="{src}" alt="{alt}"{title_attr} />')

    def visit_link_reference(self, node: LinkReference) -> None:
        """Render an unresolved LinkReference as its bracket text."""
        content = self._render_inline_content(node.content)
        self._output.append(f"[{content}][{self._text(node.label)}]")

    def visit_image_reference(self, node: ImageReference) -> None:
        """Render an unresolved ImageReference as its bracket text."""
        self._output.append(f"![{self._text(node.alt_text)}][{self._text(node.label)}]")

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node."""
        self._output.append("\n" if node.soft else "<br />\n")

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Render an HTMLInline node."""
        self._output.append(self._raw_html(node.content))

    def visit_component_inline(self, node: ComponentInline) -> None:
        """Render a ComponentInline through its shortcode definition."""
        self._output.append(self._render_component(node.name, node.values, "span"))


def ast_to_html(
    document: Document,
    shortcodes: ShortcodeLookup | None = None,
    options: HtmlRendererOptions | None = None,
) -> str:
    """Render a syntax tree to an HTML fragment.

    Parameters
    ----------
    document : Document
        Document to render
    shortcodes : ShortcodeLookup or None, default = None
        Definitions used to render components
    options : HtmlRendererOptions or None, default = None
        Rendering options

    Returns
    -------
    str
        HTML fragment

    """
    return HtmlRenderer(options, shortcodes).render_to_string(document)
