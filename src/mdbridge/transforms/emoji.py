#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdbridge/transforms/emoji.py
"""HTML tree filter for emoji pasted from Dropbox Paper.

Paper renders emoji as ``<img data-emoji-ch="🎉" src="...">``. Left alone
they would become images; the filter swaps each for its character.
"""

from __future__ import annotations

import logging
from typing import Any

from mdbridge.constants import PAPER_EMOJI_ATTRIBUTE

logger = logging.getLogger(__name__)


class PaperEmojiFilter:
    """Replace emoji images with their character in a BeautifulSoup tree.

    Parameters
    ----------
    attribute : str, default = "data-emoji-ch"
        Attribute holding the emoji character

    Examples
    --------
        >>> from bs4 import BeautifulSoup
        >>> soup = BeautifulSoup('<p>hi <img data-emoji-ch="👋"></p>', "html.parser")
        >>> str(PaperEmojiFilter().apply(soup))
        '<p>hi 👋</p>'

    """

    def __init__(self, attribute: str = PAPER_EMOJI_ATTRIBUTE):
        """Initialize the filter with the attribute carrying the character."""
        self.attribute = attribute

    def apply(self, soup: Any) -> Any:
        """Replace matching ``<img>`` elements in place.

        Parameters
        ----------
        soup : bs4.BeautifulSoup or bs4.element.Tag
            Tree to filter

        Returns
        -------
        bs4.BeautifulSoup or bs4.element.Tag
            The same tree, for chaining

        """
        from bs4.element import NavigableString

        replaced = 0
        for img in soup.find_all("img", attrs={self.attribute: True}):
            img.replace_with(NavigableString(img[self.attribute]))
            replaced += 1

        if replaced:
            logger.debug("Replaced %d emoji image(s) with text", replaced)
        return soup
