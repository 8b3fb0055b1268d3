#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/renderers/__init__.py
"""Renderers from the syntax tree to Markdown and HTML."""

from mdbridge.renderers.base import BaseRenderer, InlineContentMixin
from mdbridge.renderers.html import HtmlRenderer, ast_to_html
from mdbridge.renderers.markdown import MarkdownRenderer

__all__ = [
    "BaseRenderer",
    "InlineContentMixin",
    "HtmlRenderer",
    "MarkdownRenderer",
    "ast_to_html",
]
