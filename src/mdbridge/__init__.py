#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/__init__.py
"""mdbridge - bidirectional Markdown bridge for rich-text editors.

mdbridge converts between three representations of a document:

- Markdown text, the storage format
- a Markdown syntax tree, where normalization happens
- a rich document: blocks, inlines and leaves with flat mark sets, the
  model a structured rich-text editor works with

HTML is supported in both directions around the syntax tree: Markdown can
be rendered to HTML and pasted HTML can be imported as a rich document.
Components (``::: name`` blocks and literal patterns such as images) are
handled through pluggable shortcode definitions.

Requirements
------------
- Python 3.10+
- mistune 3 for Markdown parsing, BeautifulSoup for HTML import
- PyYAML and Jinja2 for YAML-bodied template shortcodes

Examples
--------
Markdown to rich document and back:

    >>> from mdbridge import markdown_to_richdoc, richdoc_to_markdown
    >>> doc = markdown_to_richdoc("**a ~~b~~~~c~~**")
    >>> richdoc_to_markdown(doc)
    '**a** ~~**bc**~~'

Pasted HTML:

    >>> from mdbridge import html_to_richdoc
    >>> richdoc_to_markdown(html_to_richdoc('<p>see<a href="x"> here </a>now</p>'))
    'see [here](x) now'

"""

from __future__ import annotations

from mdbridge.api import (
    ast_to_markdown,
    html_to_richdoc,
    markdown_to_ast,
    markdown_to_html,
    markdown_to_richdoc,
    richdoc_to_markdown,
)
from mdbridge.exceptions import (
    DependencyError,
    InvalidOptionsError,
    MdBridgeError,
    ShortcodeError,
    TransformError,
    ValidationError,
)
from mdbridge.options import (
    HtmlParserOptions,
    HtmlRendererOptions,
    MarkdownParserOptions,
    MarkdownRendererOptions,
)
from mdbridge.richdoc import RichDocument
from mdbridge.shortcodes import (
    ImageShortcode,
    ShortcodeDefinition,
    ShortcodeLookup,
    ShortcodeRegistry,
    YamlShortcode,
    default_shortcodes,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Entry points
    "ast_to_markdown",
    "html_to_richdoc",
    "markdown_to_ast",
    "markdown_to_html",
    "markdown_to_richdoc",
    "richdoc_to_markdown",
    # Models
    "RichDocument",
    # Options
    "HtmlParserOptions",
    "HtmlRendererOptions",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    # Shortcodes
    "ImageShortcode",
    "ShortcodeDefinition",
    "ShortcodeLookup",
    "ShortcodeRegistry",
    "YamlShortcode",
    "default_shortcodes",
    # Exceptions
    "DependencyError",
    "InvalidOptionsError",
    "MdBridgeError",
    "ShortcodeError",
    "TransformError",
    "ValidationError",
]
