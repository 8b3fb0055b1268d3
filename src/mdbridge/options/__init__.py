#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for the mdbridge parsers and renderers.

Each parser and renderer has its own frozen Options dataclass. Use
``create_updated`` to derive a modified copy.
"""

from __future__ import annotations

from mdbridge.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from mdbridge.options.html import HtmlParserOptions, HtmlRendererOptions
from mdbridge.options.markdown import MarkdownParserOptions, MarkdownRendererOptions

__all__ = [
    "CloneFrozenMixin",
    "BaseParserOptions",
    "BaseRendererOptions",
    "MarkdownParserOptions",
    "MarkdownRendererOptions",
    "HtmlParserOptions",
    "HtmlRendererOptions",
]
