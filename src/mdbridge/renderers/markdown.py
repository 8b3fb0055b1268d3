#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/renderers/markdown.py
"""Markdown rendering from the syntax tree.

This module provides the MarkdownRenderer class which converts syntax tree
nodes to Markdown text in one fixed style (see ``constants``): ``**`` for
strong, ``_`` for emphasis (``*`` where ``_`` cannot open or close),
``~~`` for strikethrough, ``*`` bullets, ATX headings, backtick fences and
backslash hard breaks.

Text values are written verbatim; escaping is done beforehand by the
``EscapeMarkdownTransform`` pass, which the renderer runs itself.

"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

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
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    get_text_content,
)
from mdbridge.ast.visitors import NodeVisitor
from mdbridge.constants import (
    MARKDOWN_BULLET,
    MARKDOWN_CODE_FENCE_CHAR,
    MARKDOWN_EMPHASIS_MARKER,
    MARKDOWN_HARD_BREAK,
    MARKDOWN_LIST_ITEM_INDENT,
    MARKDOWN_MIN_CODE_FENCE_LENGTH,
    MARKDOWN_ORDERED_DELIMITER,
    MARKDOWN_STRIKETHROUGH_MARKER,
    MARKDOWN_STRONG_MARKER,
    MARKDOWN_THEMATIC_BREAK,
)
from mdbridge.exceptions import ShortcodeError, ValidationError
from mdbridge.options.markdown import MarkdownRendererOptions
from mdbridge.renderers.base import BaseRenderer, InlineContentMixin
from mdbridge.shortcodes.base import ShortcodeDefinition, ShortcodeLookup
from mdbridge.shortcodes.registry import resolve_shortcodes
from mdbridge.transforms.pipeline import run_transforms, serialize_passes
from mdbridge.utils.components import decode_component_blocks, encode_component_payload
from mdbridge.utils.escape import escape_inline_code

logger = logging.getLogger(__name__)

_URL_NEEDS_BRACKETS = re.compile(r"[\s()<>]")
_WORD_CHAR = re.compile(r"\w")
_ALTERNATE_EMPHASIS_MARKER = "*"


def _indent_continuation(text: str, indent: str) -> str:
    """Indent every line but the first, leaving blank lines empty."""
    lines = text.split("\n")
    return "\n".join([lines[0]] + [indent + line if line else line for line in lines[1:]])


def _format_destination(url: str) -> str:
    if _URL_NEEDS_BRACKETS.search(url):
        return "<" + url.replace("<", "%3C").replace(">", "%3E") + ">"
    return url


def _format_title(title: Optional[str]) -> str:
    if not title:
        return ""
    escaped = title.replace("\\", "\\\\").replace('"', '\\"')
    return f' "{escaped}"'


class MarkdownRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render syntax tree nodes to Markdown text.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Rendering options
    shortcodes : ShortcodeLookup or None, default = None
        Definitions used to write component nodes; None uses
        ``default_shortcodes()``

    Examples
    --------
        >>> from mdbridge.ast import Document, Heading, Text
        >>> doc = Document(children=[Heading(level=1, content=[Text(content="Title")])])
        >>> print(MarkdownRenderer().render_to_string(doc))
        # Title

    """

    def __init__(
        self,
        options: MarkdownRendererOptions | None = None,
        shortcodes: ShortcodeLookup | None = None,
    ):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownRendererOptions, "markdown")
        options = options or MarkdownRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownRendererOptions = options
        self.shortcodes = resolve_shortcodes(shortcodes)
        self._output: list[str] = []
        self._following = ""

    def render_to_string(self, document: Document | None) -> str:
        """Render a document to a Markdown string.

        Parameters
        ----------
        document : Document or None
            Document to render; None renders as an empty document

        Returns
        -------
        str
            Markdown text without trailing whitespace

        Raises
        ------
        ValidationError
            If ``document`` is neither a Document nor None

        """
        if document is None:
            document = Document(children=[Paragraph(content=[Text(content="")])])
        if not isinstance(document, Document):
            raise ValidationError(
                f"Expected a Document to render, got {type(document).__name__}",
                parameter_name="document",
                parameter_value=document,
            )

        document = run_transforms(document, serialize_passes(self.options))

        self._output = []
        document.accept(self)
        result = "".join(self._output)
        self._output = []

        return decode_component_blocks(result).rstrip()

    def _render_block(self, node: Node) -> str:
        return self._render_inline_content([node])

    def _render_blocks(self, nodes: list[Node], separator: str = "\n\n") -> str:
        return separator.join(self._render_block(node) for node in nodes)

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render inline nodes, recording the first character after each one."""
        saved_output, saved_following = self._output, self._following
        self._output = []

        for index, node in enumerate(content):
            following = content[index + 1] if index + 1 < len(content) else None
            self._following = following.content[:1] if isinstance(following, Text) else ""
            node.accept(self)

        result = "".join(self._output)
        self._output, self._following = saved_output, saved_following
        return result

    def _wrap_marks(self, content: list[Node], marker: str) -> None:
        """Write ``content`` between markers, keeping edge whitespace outside."""
        preceding = "".join(self._output)[-1:]
        following = self._following
        rendered = self._render_inline_content(content)
        core = rendered.strip()
        if not core:
            self._output.append(rendered)
            return
        start = rendered.index(core)
        leading, trailing = rendered[:start], rendered[start + len(core) :]
        if marker == MARKDOWN_EMPHASIS_MARKER:
            marker = self._emphasis_marker(core, leading or preceding, trailing or following)
        self._output.append(f"{leading}{marker}{core}{marker}{trailing}")

    @staticmethod
    def _emphasis_marker(core: str, before: str, after: str) -> str:
        """Pick an emphasis marker that can open and close around ``core``.

        ``_`` does not open or close inside a word and merges with a ``_`` at
        the edge of the core, so ``*`` is used there instead.
        """
        if _WORD_CHAR.match(before) or _WORD_CHAR.match(after) or "_" in (core[0], core[-1]):
            return _ALTERNATE_EMPHASIS_MARKER
        return MARKDOWN_EMPHASIS_MARKER

    def _lookup_definition(self, name: str) -> ShortcodeDefinition | None:
        definition = self.shortcodes.get(name)
        if definition is None:
            logger.warning("No shortcode definition for component '%s'; component dropped", name)
        return definition

    def _serialize_component(self, name: str, values: dict[str, Any], syntax: str) -> str | None:
        """Write a component through its definition, or None if it cannot be."""
        definition = self._lookup_definition(name)
        if definition is None:
            return None
        try:
            body = definition.serialize(values)
        except ShortcodeError as e:
            logger.warning("Could not serialize component '%s': %s", name, e)
            return None
        if syntax == "pattern":
            return body
        return f"::: {name} {encode_component_payload(body)}"

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render a Document node."""
        self._output.append(self._render_blocks(node.children))

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node in ATX style."""
        content = self._render_inline_content(node.content).replace("\n", " ").strip()
        prefix = "#" * node.level
        self._output.append(f"{prefix} {content}" if content else prefix)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        self._output.append(self._render_inline_content(node.content))

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node as a fenced block.

        The fence grows past the longest backtick run in the content, and the
        original info string is preferred over the bare language.
        """
        runs = re.findall(re.escape(MARKDOWN_CODE_FENCE_CHAR) + "+", node.content)
        fence_length = max([MARKDOWN_MIN_CODE_FENCE_LENGTH] + [len(run) + 1 for run in runs])
        fence = MARKDOWN_CODE_FENCE_CHAR * fence_length
        info = node.metadata.get("info_string") or node.language or ""

        content = node.content
        if content and not content.endswith("\n"):
            content += "\n"
        self._output.append(f"{fence}{info}\n{content}{fence}")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node, prefixing every line with ``>``."""
        quoted = self._render_blocks(node.children)
        lines = [f"> {line}" if line else ">" for line in quoted.split("\n")]
        self._output.append("\n".join(lines))

    def visit_list(self, node: List) -> None:
        """Render a List node."""
        separator = "\n" if node.tight else "\n\n"
        items: list[str] = []
        for index, item in enumerate(node.items):
            if node.ordered:
                marker = f"{node.start + index}{MARKDOWN_ORDERED_DELIMITER}"
            else:
                marker = MARKDOWN_BULLET
            items.append(self._render_list_item(item, marker, node.tight))
        self._output.append(separator.join(items))

    def _render_list_item(self, item: ListItem, marker: str, tight: bool) -> str:
        content = self._render_blocks(item.children, "\n" if tight else "\n\n")
        if not content:
            return marker
        indent = " " * (len(marker) + MARKDOWN_LIST_ITEM_INDENT)
        return marker + " " * MARKDOWN_LIST_ITEM_INDENT + _indent_continuation(content, indent)

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem outside a list as a bullet item."""
        self._output.append(self._render_list_item(node, MARKDOWN_BULLET, tight=True))

    def visit_table(self, node: Table) -> None:
        """Render a Table node as a pipe table.

        Tables without a header row use their first row as the header,
        since pipe tables always have one.
        """
        rows: list[TableRow] = ([node.header] if node.header else []) + list(node.rows)
        if not rows:
            return

        num_cols = self._compute_table_columns(rows)
        rendered_rows: list[list[str]] = []
        for row in rows:
            cells = [self._render_cell(cell) for cell in row.cells]
            cells.extend([""] * (num_cols - len(cells)))
            rendered_rows.append(cells)

        lines = ["| " + " | ".join(rendered_rows[0]) + " |", self._alignment_row(node, num_cols)]
        lines.extend("| " + " | ".join(cells) + " |" for cells in rendered_rows[1:])
        self._output.append("\n".join(lines))

    def _render_cell(self, cell: TableCell) -> str:
        return self._render_inline_content(cell.content).replace("\n", " ").strip()

    @staticmethod
    def _alignment_row(node: Table, num_cols: int) -> str:
        alignments: list[str] = []
        for index in range(num_cols):
            alignment = node.alignments[index] if index < len(node.alignments) else None
            if alignment == "center":
                alignments.append(":---:")
            elif alignment == "right":
                alignments.append("---:")
            elif alignment == "left":
                alignments.append(":---")
            else:
                alignments.append("---")
        return "|" + "|".join(alignments) + "|"

    def visit_table_row(self, node: TableRow) -> None:
        """Render a TableRow node (handled by visit_table)."""
        pass

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a TableCell node (handled by visit_table)."""
        pass

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._output.append(MARKDOWN_THEMATIC_BREAK)

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Render an HTMLBlock node verbatim."""
        self._output.append(node.content)

    def visit_definition(self, node: Definition) -> None:
        """Render a link reference definition."""
        self._output.append(f"[{node.label}]: {_format_destination(node.url) or '<>'}{_format_title(node.title)}")

    def visit_component_block(self, node: ComponentBlock) -> None:
        """Render a ComponentBlock through its shortcode definition."""
        written = self._serialize_component(node.name, node.values, node.syntax)
        if written is not None:
            self._output.append(written)

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render a Text node verbatim."""
        self._output.append(node.content)

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._wrap_marks(node.content, MARKDOWN_EMPHASIS_MARKER)

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._wrap_marks(node.content, MARKDOWN_STRONG_MARKER)

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node."""
        self._wrap_marks(node.content, MARKDOWN_STRIKETHROUGH_MARKER)

    def visit_code(self, node: Code) -> None:
        """Render a Code node with a delimiter that cannot clash with its content."""
        code, delimiter = escape_inline_code(node.content, MARKDOWN_CODE_FENCE_CHAR)
        self._output.append(f"{delimiter}{code}{delimiter}")

    def visit_link(self, node: Link) -> None:
        """Render a Link node inline."""
        content = self._render_inline_content(node.content)
        self._output.append(f"[{content}]({_format_destination(node.url)}{_format_title(node.title)})")

    def visit_image(self, node: Image) -> None:
        """Render an Image node inline."""
        alt = node.alt_text.replace("[", "\\[").replace("]", "\\]")
        self._output.append(f"![{alt}]({_format_destination(node.url)}{_format_title(node.title)})")

    def visit_link_reference(self, node: LinkReference) -> None:
        """Render a LinkReference in full reference form."""
        content = self._render_inline_content(node.content)
        if get_text_content(node) == node.label:
            self._output.append(f"[{content}]")
        else:
            self._output.append(f"[{content}][{node.label}]")

    def visit_image_reference(self, node: ImageReference) -> None:
        """Render an ImageReference in full reference form."""
        if node.alt_text == node.label:
            self._output.append(f"![{node.alt_text}]")
        else:
            self._output.append(f"![{node.alt_text}][{node.label}]")

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node."""
        self._output.append("\n" if node.soft else MARKDOWN_HARD_BREAK)

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Render an HTMLInline node verbatim."""
        self._output.append(node.content)

    def visit_component_inline(self, node: ComponentInline) -> None:
        """Render a ComponentInline through its shortcode definition."""
        written = self._serialize_component(node.name, node.values, node.syntax)
        if written is not None:
            self._output.append(written)

