#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/constants.py
"""Constants shared across the mdbridge pipeline.

The Markdown output style is deliberately fixed here rather than exposed
as options: documents written by the editor must always serialize the
same way so that saving an unchanged document produces no diff.

"""

from __future__ import annotations

import re
from typing import Final, Literal

# Optional dependency groups, as (install_name, import_name, version_spec)
DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]
DEPS_HTML = [("beautifulsoup4", "bs4", ">=4.12.0")]
DEPS_YAML = [("pyyaml", "yaml", ">=6.0")]
DEPS_JINJA = [("jinja2", "jinja2", ">=3.1.0")]

# Markdown output style
MARKDOWN_STRONG_MARKER: Final = "**"
MARKDOWN_EMPHASIS_MARKER: Final = "_"
MARKDOWN_STRIKETHROUGH_MARKER: Final = "~~"
MARKDOWN_BULLET: Final = "*"
MARKDOWN_ORDERED_DELIMITER: Final = "."
MARKDOWN_LIST_ITEM_INDENT: Final = 1
MARKDOWN_THEMATIC_BREAK: Final = "---"
MARKDOWN_CODE_FENCE_CHAR: Final = "`"
MARKDOWN_MIN_CODE_FENCE_LENGTH: Final = 3
MARKDOWN_HARD_BREAK: Final = "\\\n"

# Markdown parsing
DEFAULT_DISABLED_INLINE_RULES: Final = ("url_link",)
DEFAULT_PARSE_STRIKETHROUGH: Final = True
DEFAULT_PARSE_TABLES: Final = True

# Component blocks: "::: name\n<body>:::\n" and the single-line "::: name <base64>" form
COMPONENT_BLOCK_PATTERN: Final = re.compile(r"^::: (\S+)\n([\s\S]+?\n)?:::(\n|$)", re.MULTILINE)
ENCODED_COMPONENT_LINE_PATTERN: Final = re.compile(r"^::: (\S+) (\S*)$", re.MULTILINE)
ENCODED_COMPONENT_INLINE_PATTERN: Final = re.compile(r"(?<!\S)::: (\S+) ([A-Za-z0-9+/]+={0,2}|-)(?!\S)")
# Payload standing for a component block written without a body
EMPTY_COMPONENT_PAYLOAD: Final = "-"

# Rich document marks
MarkType = Literal["bold", "italic", "strikethrough", "code"]
MARK_TYPES: Final = frozenset({"bold", "italic", "strikethrough", "code"})

# Wrapper order for marks sharing a leaf, outermost first. ``code`` is always innermost.
MARK_NESTING_ORDER: Final = ("strikethrough", "italic", "bold")

# Shortcodes
ShortcodeLevel = Literal["block", "inline"]
ShortcodeSyntax = Literal["fenced", "pattern"]
IMAGE_SHORTCODE_PATTERN: Final = re.compile(r'^!\[(.*)\]\((.*?)(\s"(.*)")?\)$')

# HTML import
DEFAULT_HTML_PARSER: Final = "html.parser"
PAPER_EMOJI_ATTRIBUTE: Final = "data-emoji-ch"
