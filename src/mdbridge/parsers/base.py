#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/parsers/base.py
"""Base classes for source text parsers.

This module defines the abstract base class shared by the Markdown and HTML
parsers. Both turn a string into an mdbridge syntax tree.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from mdbridge.ast import Document
from mdbridge.exceptions import InvalidOptionsError, ValidationError
from mdbridge.options.base import BaseParserOptions

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for all source parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Examples
    --------
    Creating a custom parser:

        >>> from mdbridge.parsers.base import BaseParser
        >>> from mdbridge.ast import Document
        >>>
        >>> class NullParser(BaseParser):
        ...     def parse(self, input_data):
        ...         return Document(children=[])

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        parser_name : str
            Name of the parser (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def _validate_text_input(input_data: Any, parser_name: str) -> str:
        """Ensure the input is a string.

        Raises
        ------
        ValidationError
            If ``input_data`` is not a ``str``

        """
        if not isinstance(input_data, str):
            raise ValidationError(
                f"{parser_name} parser expects a string, got {type(input_data).__name__}",
                parameter_name="input_data",
                parameter_value=input_data,
            )
        return input_data

    @abstractmethod
    def parse(self, input_data: str) -> Document:
        """Parse the input text into a syntax tree.

        Parameters
        ----------
        input_data : str
            Source text

        Returns
        -------
        Document
            Syntax tree root

        Raises
        ------
        ValidationError
            If the input is not a string
        DependencyError
            If the required parsing library is not installed

        """
        raise NotImplementedError
