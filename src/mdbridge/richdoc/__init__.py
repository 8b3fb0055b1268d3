#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/richdoc/__init__.py
"""Rich document model and its conversion to and from the syntax tree.

The module consists of:

- nodes: the document, block, inline, text and leaf classes plus JSON I/O
- from_ast: syntax tree to rich document, flattening nested formatting
- to_ast: rich document to syntax tree, rebuilding nested formatting

"""

from __future__ import annotations

from mdbridge.richdoc.from_ast import AstToRichDocConverter, ast_to_richdoc, normalize_document
from mdbridge.richdoc.nodes import (
    VOID_TYPES,
    Leaf,
    RichBlock,
    RichDocument,
    RichInline,
    RichNode,
    RichText,
    document_from_json,
    document_to_json,
    node_from_dict,
    void_node,
)
from mdbridge.richdoc.to_ast import RichDocToAstConverter, richdoc_to_ast, wrap_in_marks

__all__ = [
    "VOID_TYPES",
    "AstToRichDocConverter",
    "Leaf",
    "RichBlock",
    "RichDocToAstConverter",
    "RichDocument",
    "RichInline",
    "RichNode",
    "RichText",
    "ast_to_richdoc",
    "document_from_json",
    "document_to_json",
    "node_from_dict",
    "normalize_document",
    "richdoc_to_ast",
    "void_node",
    "wrap_in_marks",
]
