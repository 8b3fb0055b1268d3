#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Pytest configuration and shared fixtures for the mdbridge test suite.

This module provides shared fixtures and test configuration used across
the entire test suite.
"""

import pytest

from mdbridge.shortcodes import ImageShortcode, ShortcodeRegistry, YamlShortcode


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests with Hypothesis")


@pytest.fixture
def shortcodes() -> ShortcodeRegistry:
    """Provide a frozen registry with block, inline and pattern shortcodes.

    Returns
    -------
    ShortcodeRegistry
        ``image`` (pattern), ``callout`` (fenced block) and ``mention``
        (fenced inline) definitions.

    """
    return ShortcodeRegistry(
        [
            ImageShortcode(),
            YamlShortcode("callout", '<aside class="{{ kind }}">{{ text }}</aside>'),
            YamlShortcode("mention", '<span class="mention">@{{ user }}</span>', level="inline"),
        ]
    ).freeze()


@pytest.fixture
def sample_markdown() -> str:
    """Provide a small document exercising most block types.

    Returns
    -------
    str
        Markdown source already in the canonical output style.

    """
    return """# Title

Some **bold** and _italic_ text with `code` and a [link](https://example.com).

* one
* two

1. first
2. second

> quoted

```python
print("hi")
```

---

| a | b |
|---|---:|
| 1 | 2 |"""
