#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/ast/__init__.py
"""Markdown syntax tree.

The syntax tree sits between Markdown text, HTML and the rich document
model. The module consists of:

- nodes: node dataclasses and child access helpers
- visitors: the exhaustive ``NodeVisitor`` base and a structure validator
- transforms: the ``NodeTransformer`` base, collectors and the inline
  formatting consolidator

Examples
--------
    >>> from mdbridge.ast import Document, Paragraph, Strong, Text
    >>> from mdbridge.renderers.markdown import ast_to_markdown
    >>>
    >>> doc = Document(children=[Paragraph(content=[Strong(content=[Text("hi")])])])
    >>> ast_to_markdown(doc)
    '**hi**'

"""

from __future__ import annotations

from mdbridge.ast.nodes import (
    Alignment,
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
    get_node_children,
    get_text_content,
    replace_node_children,
)
from mdbridge.ast.transforms import (
    InlineFormattingConsolidator,
    NodeCollector,
    NodeTransformer,
    clone_node,
    extract_nodes,
)
from mdbridge.ast.visitors import NodeVisitor, ValidationVisitor

__all__ = [
    # Nodes
    "Node",
    "Alignment",
    "Document",
    "Heading",
    "Paragraph",
    "CodeBlock",
    "BlockQuote",
    "List",
    "ListItem",
    "Table",
    "TableRow",
    "TableCell",
    "ThematicBreak",
    "HTMLBlock",
    "Definition",
    "ComponentBlock",
    "Text",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "Code",
    "Link",
    "Image",
    "LinkReference",
    "ImageReference",
    "LineBreak",
    "HTMLInline",
    "ComponentInline",
    # Helpers
    "get_node_children",
    "replace_node_children",
    "get_text_content",
    # Visitors
    "NodeVisitor",
    "ValidationVisitor",
    # Transforms
    "NodeTransformer",
    "NodeCollector",
    "InlineFormattingConsolidator",
    "clone_node",
    "extract_nodes",
]
