#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_pipeline_fuzzing.py
"""Property-based tests for the conversion pipelines.

Every conversion is total over valid input: arbitrary Markdown or HTML
must come back as a document rather than an exception. Markdown written by
a round trip is a fixed point of the next one and keeps every mark.
"""

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from mdbridge import html_to_richdoc, markdown_to_html, markdown_to_richdoc, richdoc_to_markdown
from mdbridge.richdoc import RichText

MARKDOWN_ALPHABET = st.sampled_from(list("ab \n*_~`#>-+1.[]()!<>:/|\\"))

# Emphasis delimiters around and inside words
INLINE_ALPHABET = st.sampled_from(list("ab *_"))


def round_trip(markdown: str) -> str:
    return richdoc_to_markdown(markdown_to_richdoc(markdown))


def marks_used(nodes) -> set:
    marks = set()
    for node in nodes:
        if isinstance(node, RichText):
            for leaf in node.leaves:
                marks |= leaf.marks
        else:
            marks |= marks_used(node.nodes)
    return marks


@pytest.mark.unit
@pytest.mark.fuzzing
class TestPipelineTotality:
    """Property-based tests for crash-free conversion."""

    @given(st.text(alphabet=MARKDOWN_ALPHABET, max_size=60))
    @settings(max_examples=75, deadline=None, suppress_health_check=[HealthCheck.too_slow])
    def test_markdown_round_trip_returns_text(self, text):
        """Property: Markdown always converts to a rich document and back."""
        assert isinstance(richdoc_to_markdown(markdown_to_richdoc(text)), str)

    @given(st.text(alphabet=MARKDOWN_ALPHABET, max_size=60))
    @settings(max_examples=50, deadline=None)
    def test_markdown_to_html_returns_text(self, text):
        """Property: Markdown always renders to an HTML string."""
        assert isinstance(markdown_to_html(text), str)

    @given(
        st.lists(
            st.sampled_from(["<p>", "</p>", "<b>", "</b>", "<a href='x'>", "</a>", "<li>", "<div>", "</div>", " t "]),
            max_size=12,
        )
    )
    @settings(max_examples=50, deadline=None)
    def test_pasted_html_converts(self, parts):
        """Property: Arbitrary tag soup imports without raising."""
        assert isinstance(richdoc_to_markdown(html_to_richdoc("".join(parts))), str)


@pytest.mark.unit
@pytest.mark.fuzzing
class TestRoundTripProperties:
    """Property-based tests for the Markdown round trip."""

    @given(st.text(alphabet=INLINE_ALPHABET, max_size=16))
    @settings(max_examples=100, deadline=None)
    def test_round_trip_is_idempotent(self, text):
        """Property: A second round trip leaves the Markdown unchanged."""
        once = round_trip(text)
        assert round_trip(once) == once

    @given(st.text(alphabet=INLINE_ALPHABET, max_size=16))
    @settings(max_examples=100, deadline=None)
    def test_round_trip_keeps_marks(self, text):
        """Property: Every mark in the parsed document is still there after a round trip."""
        before = marks_used(markdown_to_richdoc(text).nodes)
        assert marks_used(markdown_to_richdoc(round_trip(text)).nodes) == before
