#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/ast/transforms.py
"""AST transformation and manipulation utilities.

This module provides the ``NodeTransformer`` base class used by every
normalizing pass, a collector for querying trees, and the inline formatting
consolidator used when mark wrappers are rebuilt from flat mark sets.

Examples
--------
Extract all links from a document:

    >>> links = extract_nodes(doc, Link)

Rewrite text nodes:

    >>> class Upper(NodeTransformer):
    ...     def visit_text(self, node):
    ...         return Text(content=node.content.upper())
    >>> new_doc = Upper().transform(doc)

"""

from __future__ import annotations

import copy
from dataclasses import replace
from typing import Callable, Type, Union

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
    get_node_children,
    replace_node_children,
)
from mdbridge.ast.visitors import NodeVisitor

TransformResult = Union[Node, list[Node], None]

MarkWrapper = Union[Strong, Emphasis, Strikethrough]
MARK_WRAPPER_TYPES: tuple[type[Node], ...] = (Strong, Emphasis, Strikethrough)


class NodeTransformer(NodeVisitor):
    """Base class for transforming AST nodes.

    Subclasses override ``visit_*`` methods. A visit method may return a
    replacement node, a list of nodes to splice into the parent in place of
    the visited node, or None to remove it. Unoverridden node types are
    rebuilt with transformed children.

    Examples
    --------
    >>> class DropImages(NodeTransformer):
    ...     def visit_image(self, node):
    ...         return None
    >>>
    >>> new_doc = DropImages().transform(doc)

    """

    def transform(self, node: Node) -> TransformResult:
        """Transform an AST node.

        Parameters
        ----------
        node : Node
            Node to transform

        Returns
        -------
        Node, list of Node or None
            Transformed node, nodes to splice, or None to remove

        """
        return node.accept(self)

    def _transform_children(self, children: list[Node]) -> list[Node]:
        """Transform a list of child nodes, splicing lists and dropping None."""
        result: list[Node] = []
        for child in children:
            transformed = self.transform(child)
            if transformed is None:
                continue
            if isinstance(transformed, list):
                result.extend(transformed)
            else:
                result.append(transformed)
        return result

    def _generic_transform(self, node: Node) -> Node:
        """Rebuild a node with transformed children.

        Parameters
        ----------
        node : Node
            Node to transform

        Returns
        -------
        Node
            Copy of the node with children replaced

        """
        children = get_node_children(node)
        if not children:
            return copy.copy(node)
        return replace_node_children(node, self._transform_children(children))

    def visit_document(self, node: Document) -> TransformResult:
        """Transform a Document node."""
        return Document(children=self._transform_children(node.children), metadata=node.metadata.copy())

    def visit_heading(self, node: Heading) -> TransformResult:
        """Transform a Heading node."""
        return self._generic_transform(node)

    def visit_paragraph(self, node: Paragraph) -> TransformResult:
        """Transform a Paragraph node."""
        return self._generic_transform(node)

    def visit_code_block(self, node: CodeBlock) -> TransformResult:
        """Transform a CodeBlock node."""
        return self._generic_transform(node)

    def visit_block_quote(self, node: BlockQuote) -> TransformResult:
        """Transform a BlockQuote node."""
        return self._generic_transform(node)

    def visit_list(self, node: List) -> TransformResult:
        """Transform a List node."""
        return self._generic_transform(node)

    def visit_list_item(self, node: ListItem) -> TransformResult:
        """Transform a ListItem node."""
        return self._generic_transform(node)

    def visit_table(self, node: Table) -> TransformResult:
        """Transform a Table node."""
        return self._generic_transform(node)

    def visit_table_row(self, node: TableRow) -> TransformResult:
        """Transform a TableRow node."""
        return self._generic_transform(node)

    def visit_table_cell(self, node: TableCell) -> TransformResult:
        """Transform a TableCell node."""
        return self._generic_transform(node)

    def visit_thematic_break(self, node: ThematicBreak) -> TransformResult:
        """Transform a ThematicBreak node."""
        return self._generic_transform(node)

    def visit_html_block(self, node: HTMLBlock) -> TransformResult:
        """Transform an HTMLBlock node."""
        return self._generic_transform(node)

    def visit_definition(self, node: Definition) -> TransformResult:
        """Transform a Definition node."""
        return self._generic_transform(node)

    def visit_component_block(self, node: ComponentBlock) -> TransformResult:
        """Transform a ComponentBlock node."""
        return replace(node, values=copy.deepcopy(node.values))

    def visit_text(self, node: Text) -> TransformResult:
        """Transform a Text node."""
        return self._generic_transform(node)

    def visit_emphasis(self, node: Emphasis) -> TransformResult:
        """Transform an Emphasis node."""
        return self._generic_transform(node)

    def visit_strong(self, node: Strong) -> TransformResult:
        """Transform a Strong node."""
        return self._generic_transform(node)

    def visit_strikethrough(self, node: Strikethrough) -> TransformResult:
        """Transform a Strikethrough node."""
        return self._generic_transform(node)

    def visit_code(self, node: Code) -> TransformResult:
        """Transform a Code node."""
        return self._generic_transform(node)

    def visit_link(self, node: Link) -> TransformResult:
        """Transform a Link node."""
        return self._generic_transform(node)

    def visit_image(self, node: Image) -> TransformResult:
        """Transform an Image node."""
        return self._generic_transform(node)

    def visit_link_reference(self, node: LinkReference) -> TransformResult:
        """Transform a LinkReference node."""
        return self._generic_transform(node)

    def visit_image_reference(self, node: ImageReference) -> TransformResult:
        """Transform an ImageReference node."""
        return self._generic_transform(node)

    def visit_line_break(self, node: LineBreak) -> TransformResult:
        """Transform a LineBreak node."""
        return self._generic_transform(node)

    def visit_html_inline(self, node: HTMLInline) -> TransformResult:
        """Transform an HTMLInline node."""
        return self._generic_transform(node)

    def visit_component_inline(self, node: ComponentInline) -> TransformResult:
        """Transform a ComponentInline node."""
        return replace(node, values=copy.deepcopy(node.values))


class NodeCollector(NodeVisitor):
    """Visitor that collects nodes matching a condition.

    Parameters
    ----------
    predicate : callable or None, default = None
        Function that takes a node and returns True to collect it

    """

    def __init__(self, predicate: Callable[[Node], bool] | None = None):
        """Initialize the collector with an optional predicate function."""
        self.predicate = predicate or (lambda n: True)
        self.collected: list[Node] = []

    def _generic_visit(self, node: Node) -> None:
        if self.predicate(node):
            self.collected.append(node)
        for child in get_node_children(node):
            child.accept(self)

    def visit_document(self, node: Document) -> None:
        """Visit a Document node."""
        self._generic_visit(node)

    def visit_heading(self, node: Heading) -> None:
        """Visit a Heading node."""
        self._generic_visit(node)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Visit a Paragraph node."""
        self._generic_visit(node)

    def visit_code_block(self, node: CodeBlock) -> None:
        """Visit a CodeBlock node."""
        self._generic_visit(node)

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Visit a BlockQuote node."""
        self._generic_visit(node)

    def visit_list(self, node: List) -> None:
        """Visit a List node."""
        self._generic_visit(node)

    def visit_list_item(self, node: ListItem) -> None:
        """Visit a ListItem node."""
        self._generic_visit(node)

    def visit_table(self, node: Table) -> None:
        """Visit a Table node."""
        self._generic_visit(node)

    def visit_table_row(self, node: TableRow) -> None:
        """Visit a TableRow node."""
        self._generic_visit(node)

    def visit_table_cell(self, node: TableCell) -> None:
        """Visit a TableCell node."""
        self._generic_visit(node)

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Visit a ThematicBreak node."""
        self._generic_visit(node)

    def visit_html_block(self, node: HTMLBlock) -> None:
        """Visit an HTMLBlock node."""
        self._generic_visit(node)

    def visit_definition(self, node: Definition) -> None:
        """Visit a Definition node."""
        self._generic_visit(node)

    def visit_component_block(self, node: ComponentBlock) -> None:
        """Visit a ComponentBlock node."""
        self._generic_visit(node)

    def visit_text(self, node: Text) -> None:
        """Visit a Text node."""
        self._generic_visit(node)

    def visit_emphasis(self, node: Emphasis) -> None:
        """Visit an Emphasis node."""
        self._generic_visit(node)

    def visit_strong(self, node: Strong) -> None:
        """Visit a Strong node."""
        self._generic_visit(node)

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Visit a Strikethrough node."""
        self._generic_visit(node)

    def visit_code(self, node: Code) -> None:
        """Visit a Code node."""
        self._generic_visit(node)

    def visit_link(self, node: Link) -> None:
        """Visit a Link node."""
        self._generic_visit(node)

    def visit_image(self, node: Image) -> None:
        """Visit an Image node."""
        self._generic_visit(node)

    def visit_link_reference(self, node: LinkReference) -> None:
        """Visit a LinkReference node."""
        self._generic_visit(node)

    def visit_image_reference(self, node: ImageReference) -> None:
        """Visit an ImageReference node."""
        self._generic_visit(node)

    def visit_line_break(self, node: LineBreak) -> None:
        """Visit a LineBreak node."""
        self._generic_visit(node)

    def visit_html_inline(self, node: HTMLInline) -> None:
        """Visit an HTMLInline node."""
        self._generic_visit(node)

    def visit_component_inline(self, node: ComponentInline) -> None:
        """Visit a ComponentInline node."""
        self._generic_visit(node)


def clone_node(node: Node) -> Node:
    """Create a deep copy of an AST node."""
    return copy.deepcopy(node)


def extract_nodes(doc: Node, node_type: Type[Node] | None = None) -> list[Node]:
    """Extract all nodes of a specific type from a tree.

    Parameters
    ----------
    doc : Node
        Root to extract from
    node_type : type or None, default = None
        Node type to extract (None for all nodes)

    Returns
    -------
    list of Node
        All matching nodes in document order

    Examples
    --------
    >>> links = extract_nodes(doc, Link)

    """
    predicate = (lambda n: isinstance(n, node_type)) if node_type else (lambda n: True)
    collector = NodeCollector(predicate=predicate)
    doc.accept(collector)
    return collector.collected


class InlineFormattingConsolidator:
    """Consolidates sequences of inline nodes built from flat mark sets.

    Applied to inline sequences where every styled segment was wrapped
    independently, it performs, recursively:

    1. Merges adjacent wrappers of the same type (``**a****b**`` -> ``**ab**``)
    2. Moves leading/trailing whitespace outside wrappers (``**a **`` -> ``**a** ``)
    3. Removes wrappers left without content
    4. Merges adjacent Text nodes

    Nested structure is preserved: ``_**a**_`` followed by ``_b_`` becomes
    ``_**a**b_``.

    Examples
    --------
    >>> nodes = [Strong(content=[Text("foo ")]), Text("bar")]
    >>> strong, text = InlineFormattingConsolidator().consolidate(nodes)
    >>> strong.content[0].content, text.content
    ('foo', ' bar')

    """

    def consolidate(self, nodes: list[Node]) -> list[Node]:
        """Consolidate an inline node sequence.

        Parameters
        ----------
        nodes : list of Node
            Inline nodes to consolidate

        Returns
        -------
        list of Node
            Consolidated inline nodes

        """
        merged = self._merge_adjacent_same_formatting(nodes)
        normalized: list[Node] = []
        for node in merged:
            if isinstance(node, MARK_WRAPPER_TYPES):
                normalized.extend(self._normalize_formatting_whitespace(node))  # type: ignore[arg-type]
            elif isinstance(node, Link):
                normalized.append(replace(node, content=self.consolidate(node.content)))
            else:
                normalized.append(node)
        return self._merge_adjacent_text_nodes(normalized)

    def _merge_adjacent_same_formatting(self, nodes: list[Node]) -> list[Node]:
        result: list[Node] = []
        for node in nodes:
            previous = result[-1] if result else None
            if isinstance(node, MARK_WRAPPER_TYPES) and type(previous) is type(node):
                combined = previous.content + node.content  # type: ignore[union-attr]
                result[-1] = replace(previous, content=combined)  # type: ignore[type-var]
            else:
                result.append(node)

        return [
            replace(node, content=self._merge_adjacent_same_formatting(node.content))  # type: ignore[type-var]
            if isinstance(node, MARK_WRAPPER_TYPES)
            else node
            for node in result
        ]

    def _normalize_formatting_whitespace(self, node: MarkWrapper) -> list[Node]:
        """Return ``[leading?, wrapper?, trailing?]`` for one wrapper node."""
        children = self.consolidate(node.content)

        leading = ""
        if children and isinstance(children[0], Text):
            first = children[0]
            leading = first.content[: len(first.content) - len(first.content.lstrip())]
            if leading:
                stripped = first.content[len(leading) :]
                children = ([replace(first, content=stripped)] if stripped else []) + children[1:]

        trailing = ""
        if children and isinstance(children[-1], Text):
            last = children[-1]
            trailing = last.content[len(last.content.rstrip()) :]
            if trailing:
                stripped = last.content[: len(last.content) - len(trailing)]
                children = children[:-1] + ([replace(last, content=stripped)] if stripped else [])

        result: list[Node] = []
        if leading:
            result.append(Text(content=leading))
        if children:
            result.append(replace(node, content=children))
        if trailing:
            result.append(Text(content=trailing))
        return result

    def _merge_adjacent_text_nodes(self, nodes: list[Node]) -> list[Node]:
        result: list[Node] = []
        for node in nodes:
            if isinstance(node, Text):
                if not node.content:
                    continue
                if result and isinstance(result[-1], Text):
                    result[-1] = replace(result[-1], content=result[-1].content + node.content)
                    continue
            result.append(node)
        return result
