#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

``NodeVisitor`` declares one abstract ``visit_*`` method per node class, so a
concrete visitor that forgets a node kind cannot be instantiated. Renderers,
transformers and the rich document converter all build on it.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

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
)


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement a ``visit_*`` method for every node type. Each
    method receives the node and returns whatever the algorithm needs
    (``None`` for side-effect visitors, new nodes for transformers).

    Examples
    --------
        >>> class TextCollector(NodeVisitor):
        ...     def visit_text(self, node):
        ...         self.parts.append(node.content)
        ...     # ... one method per node type

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""
        pass

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""
        pass

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""
        pass

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""
        pass

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        pass

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        pass

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a ThematicBreak node."""
        pass

    @abstractmethod
    def visit_html_block(self, node: HTMLBlock) -> Any:
        """Visit an HTMLBlock node."""
        pass

    @abstractmethod
    def visit_definition(self, node: Definition) -> Any:
        """Visit a Definition node."""
        pass

    @abstractmethod
    def visit_component_block(self, node: ComponentBlock) -> Any:
        """Visit a ComponentBlock node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""
        pass

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""
        pass

    @abstractmethod
    def visit_strikethrough(self, node: Strikethrough) -> Any:
        """Visit a Strikethrough node."""
        pass

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""
        pass

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""
        pass

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""
        pass

    @abstractmethod
    def visit_link_reference(self, node: LinkReference) -> Any:
        """Visit a LinkReference node."""
        pass

    @abstractmethod
    def visit_image_reference(self, node: ImageReference) -> Any:
        """Visit an ImageReference node."""
        pass

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""
        pass

    @abstractmethod
    def visit_html_inline(self, node: HTMLInline) -> Any:
        """Visit an HTMLInline node."""
        pass

    @abstractmethod
    def visit_component_inline(self, node: ComponentInline) -> Any:
        """Visit a ComponentInline node."""
        pass

    def generic_visit(self, node: Node) -> Any:
        """Fallback visitor for unhandled node types.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        return None


class ValidationVisitor(NodeVisitor):
    """Visitor that checks block/inline placement in a syntax tree.

    Trees built from pasted HTML are checked after the repair passes; a
    remaining problem is logged rather than raised by the HTML import path.
    Problems are collected in ``errors``; in strict mode the first one
    raises ``ValueError``.

    Parameters
    ----------
    strict : bool, default = True
        Whether to raise on the first problem

    Examples
    --------
        >>> validator = ValidationVisitor(strict=False)
        >>> Document(children=[Text("loose")]).accept(validator)
        >>> validator.errors
        ['Document holds Text at position 0; expected block content']

    """

    INLINE_TYPES: tuple[type[Node], ...] = (
        Text,
        Emphasis,
        Strong,
        Strikethrough,
        Code,
        Link,
        Image,
        LinkReference,
        ImageReference,
        LineBreak,
        HTMLInline,
        ComponentInline,
    )

    BLOCK_TYPES: tuple[type[Node], ...] = (
        Heading,
        Paragraph,
        CodeBlock,
        BlockQuote,
        List,
        Table,
        ThematicBreak,
        HTMLBlock,
        Definition,
        ComponentBlock,
    )

    def __init__(self, strict: bool = True):
        """Initialize the validator."""
        self.strict = strict
        self.errors: list[str] = []

    def _report(self, message: str) -> None:
        self.errors.append(message)
        if self.strict:
            raise ValueError(message)

    def _check(self, children: list[Node], allowed: tuple[type[Node], ...], context: str) -> None:
        if allowed is self.INLINE_TYPES:
            kind = "inline content"
        elif allowed is self.BLOCK_TYPES:
            kind = "block content"
        else:
            kind = " or ".join(node_type.__name__ for node_type in allowed)
        for position, child in enumerate(children):
            if not isinstance(child, allowed):
                self._report(f"{context} holds {type(child).__name__} at position {position}; expected {kind}")
            child.accept(self)

    def _check_component(self, node: ComponentBlock | ComponentInline) -> None:
        if not node.name:
            self._report(f"{type(node).__name__} without a name")

    def visit_document(self, node: Document) -> None:
        self._check(node.children, self.BLOCK_TYPES, "Document")

    def visit_heading(self, node: Heading) -> None:
        self._check(node.content, self.INLINE_TYPES, "Heading")

    def visit_paragraph(self, node: Paragraph) -> None:
        self._check(node.content, self.INLINE_TYPES, "Paragraph")

    def visit_code_block(self, node: CodeBlock) -> None:
        return None

    def visit_block_quote(self, node: BlockQuote) -> None:
        self._check(node.children, self.BLOCK_TYPES, "BlockQuote")

    def visit_list(self, node: List) -> None:
        if node.ordered and node.start < 0:
            self._report(f"Ordered list starts at {node.start}")
        self._check(node.items, (ListItem,), "List")

    def visit_list_item(self, node: ListItem) -> None:
        self._check(node.children, self.BLOCK_TYPES, "ListItem")

    def visit_table(self, node: Table) -> None:
        rows = [node.header] if node.header else []
        self._check(rows + list(node.rows), (TableRow,), "Table")

    def visit_table_row(self, node: TableRow) -> None:
        self._check(node.cells, (TableCell,), "TableRow")

    def visit_table_cell(self, node: TableCell) -> None:
        self._check(node.content, self.INLINE_TYPES, "TableCell")

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        return None

    def visit_html_block(self, node: HTMLBlock) -> None:
        return None

    def visit_definition(self, node: Definition) -> None:
        if not node.identifier:
            self._report("Definition without an identifier")

    def visit_component_block(self, node: ComponentBlock) -> None:
        self._check_component(node)

    def visit_text(self, node: Text) -> None:
        return None

    def visit_emphasis(self, node: Emphasis) -> None:
        self._check(node.content, self.INLINE_TYPES, "Emphasis")

    def visit_strong(self, node: Strong) -> None:
        self._check(node.content, self.INLINE_TYPES, "Strong")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        self._check(node.content, self.INLINE_TYPES, "Strikethrough")

    def visit_code(self, node: Code) -> None:
        return None

    def visit_link(self, node: Link) -> None:
        self._check(node.content, self.INLINE_TYPES, "Link")

    def visit_image(self, node: Image) -> None:
        return None

    def visit_link_reference(self, node: LinkReference) -> None:
        self._check(node.content, self.INLINE_TYPES, "LinkReference")

    def visit_image_reference(self, node: ImageReference) -> None:
        return None

    def visit_line_break(self, node: LineBreak) -> None:
        return None

    def visit_html_inline(self, node: HTMLInline) -> None:
        return None

    def visit_component_inline(self, node: ComponentInline) -> None:
        self._check_component(node)
