#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/shortcodes/registry.py
"""Write-once shortcode registry."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterable, Iterator, Optional

from mdbridge.exceptions import ValidationError
from mdbridge.shortcodes.base import ShortcodeDefinition, ShortcodeLookup

logger = logging.getLogger(__name__)


class ShortcodeRegistry:
    """Registry of shortcode definitions keyed by exact tag name.

    Definitions are registered at startup; once ``freeze`` is called the
    registry is read-only and safe to share between threads.

    Parameters
    ----------
    definitions : iterable of ShortcodeDefinition, optional
        Definitions to register immediately

    Examples
    --------
        >>> registry = ShortcodeRegistry([ImageShortcode()])
        >>> registry.get("image")
        ImageShortcode(name='image', level='block')
        >>> registry.get("Image") is None
        True

    """

    def __init__(self, definitions: Iterable[ShortcodeDefinition] | None = None):
        """Initialize the registry, optionally with definitions."""
        self._definitions: dict[str, ShortcodeDefinition] = {}
        self._frozen = False
        for definition in definitions or ():
            self.register(definition)

    def register(self, definition: ShortcodeDefinition) -> None:
        """Register a definition under its name.

        Raises
        ------
        ValidationError
            If the registry is frozen, the name is empty or already taken

        """
        if self._frozen:
            raise ValidationError(
                "Cannot register shortcodes on a frozen registry",
                parameter_name="definition",
                parameter_value=definition,
            )
        if not definition.name:
            raise ValidationError("Shortcode definitions must have a name", parameter_name="definition")
        if definition.name in self._definitions:
            raise ValidationError(
                f"Shortcode '{definition.name}' is already registered",
                parameter_name="definition",
                parameter_value=definition,
            )
        self._definitions[definition.name] = definition
        logger.debug("Registered shortcode '%s' (%s)", definition.name, definition.level)

    def freeze(self) -> "ShortcodeRegistry":
        """Make the registry read-only and return it."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        """Whether the registry is read-only."""
        return self._frozen

    def get(self, name: str) -> Optional[ShortcodeDefinition]:
        """Return the definition for ``name`` (case-sensitive), or None."""
        return self._definitions.get(name)

    def __iter__(self) -> Iterator[ShortcodeDefinition]:
        return iter(list(self._definitions.values()))

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions


@lru_cache(maxsize=1)
def default_shortcodes() -> ShortcodeLookup:
    """Return the process-wide default lookup (the built-in image shortcode).

    Returns
    -------
    ShortcodeLookup
        Frozen registry shared by every call

    """
    from mdbridge.shortcodes.builtin import ImageShortcode

    return ShortcodeRegistry([ImageShortcode()]).freeze()


def resolve_shortcodes(shortcodes: ShortcodeLookup | None) -> ShortcodeLookup:
    """Return ``shortcodes``, or the default lookup when it is None."""
    return default_shortcodes() if shortcodes is None else shortcodes
