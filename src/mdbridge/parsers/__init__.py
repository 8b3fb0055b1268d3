#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/parsers/__init__.py
"""Parsers producing the syntax tree from Markdown and from pasted HTML."""

from mdbridge.parsers.base import BaseParser
from mdbridge.parsers.html import HtmlToAstConverter
from mdbridge.parsers.markdown import MarkdownToAstConverter, markdown_to_ast

__all__ = [
    "BaseParser",
    "HtmlToAstConverter",
    "MarkdownToAstConverter",
    "markdown_to_ast",
]
