#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/renderers/base.py
"""Base classes for syntax tree renderers.

Renderers turn a ``Document`` into text. Each is a ``NodeVisitor`` that
appends fragments to ``_output``; the ``InlineContentMixin`` captures the
rendering of a node list into a string so containers can post-process it.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from mdbridge.ast.nodes import Document, Node, TableRow
from mdbridge.exceptions import InvalidOptionsError
from mdbridge.options.base import BaseRendererOptions


class BaseRenderer(ABC):
    """Abstract base class for syntax tree renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, doc: Document) -> str:
        """Render the document to a string.

        Parameters
        ----------
        doc : Document
            Document to render

        Returns
        -------
        str
            Rendered text

        """
        pass

    def render(self, doc: Document, output: Union[str, Path, IO[str]]) -> None:
        """Render the document and write it to a path or text stream.

        Parameters
        ----------
        doc : Document
            Document to render
        output : str, Path or IO[str]
            Destination file path or writable text stream

        """
        self.write_text_output(self.render_to_string(doc), output)

    @staticmethod
    def _compute_table_columns(rows: list[TableRow]) -> int:
        """Return the widest row's cell count."""
        return max((len(row.cells) for row in rows), default=0)

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the expected type.

        Raises
        ------
        InvalidOptionsError
            If options is not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[str]]) -> None:
        """Write rendered text to a file path or text stream."""
        if isinstance(output, (str, Path)):
            Path(output).write_text(text, encoding="utf-8")
        else:
            output.write(text)


class InlineContentMixin:
    """Mixin for renderers that collect output fragments in ``_output``."""

    _output: list[str]

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render a list of nodes to a string without touching ``_output``.

        Parameters
        ----------
        content : list of Node
            Nodes to render

        Returns
        -------
        str
            Rendered content

        """
        saved_output = self._output
        self._output = []

        for node in content:
            node.accept(self)

        result = "".join(self._output)
        self._output = saved_output
        return result
