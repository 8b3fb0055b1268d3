#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/shortcodes/base.py
"""Shortcode definition contract.

A shortcode is a plugin-defined component embedded in Markdown, written
either as a fenced block::

    ::: youtube
    id: dQw4w9WgXcQ
    :::

or, for definitions that declare a ``pattern``, through a literal syntax of
their own (the built-in image shortcode claims ``![alt](src)`` paragraphs).
Every stage of the pipeline that meets a component asks the lookup for the
definition by exact, case-sensitive name.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Iterator, Optional, Protocol, runtime_checkable

from mdbridge.constants import ShortcodeLevel


class ShortcodeDefinition(ABC):
    """Base class for shortcode component definitions.

    Attributes
    ----------
    name : str
        Tag name the component is looked up by
    level : {'block', 'inline'}
        Whether the component stands alone as a block or sits inside text
    pattern : re.Pattern or None
        Literal syntax claimed by the component, matched against the full
        text of a paragraph; None for fenced-only components

    """

    name: str = ""
    level: ShortcodeLevel = "block"
    pattern: Optional[re.Pattern[str]] = None

    @abstractmethod
    def parse(self, raw: str) -> dict[str, Any]:
        """Map the raw component text to structured values.

        Parameters
        ----------
        raw : str
            Fenced block body, or the full matched text for pattern syntax

        Returns
        -------
        dict
            Argument values

        Raises
        ------
        ShortcodeError
            If the text cannot be interpreted; the component is then left as
            literal text

        """
        raise NotImplementedError

    @abstractmethod
    def serialize(self, values: dict[str, Any]) -> str:
        """Map argument values back to raw component text (inverse of ``parse``)."""
        raise NotImplementedError

    @abstractmethod
    def render(self, values: dict[str, Any]) -> str:
        """Render argument values to an HTML fragment for previews."""
        raise NotImplementedError

    def __repr__(self) -> str:
        """Return a compact representation naming the component."""
        return f"{type(self).__name__}(name={self.name!r}, level={self.level!r})"


@runtime_checkable
class ShortcodeLookup(Protocol):
    """Read-only mapping from tag name to shortcode definition."""

    def get(self, name: str) -> Optional[ShortcodeDefinition]:
        """Return the definition registered under ``name``, or None."""
        ...

    def __iter__(self) -> Iterator[ShortcodeDefinition]:
        """Iterate over the registered definitions."""
        ...
