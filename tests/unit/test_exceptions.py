#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_exceptions.py
"""Unit tests for the exception hierarchy."""

import pytest

from mdbridge.exceptions import (
    DependencyError,
    InvalidOptionsError,
    MdBridgeError,
    ShortcodeError,
    TransformError,
    ValidationError,
)
from mdbridge.options import HtmlRendererOptions, MarkdownRendererOptions


@pytest.mark.unit
class TestHierarchy:
    """Test that every error derives from the package base class."""

    @pytest.mark.parametrize("error_class", [ValidationError, TransformError, ShortcodeError])
    def test_subclasses(self, error_class):
        assert issubclass(error_class, MdBridgeError)

    def test_invalid_options_is_validation_error(self):
        assert issubclass(InvalidOptionsError, ValidationError)

    def test_original_error_kept(self):
        cause = KeyError("x")
        error = MdBridgeError("failed", original_error=cause)
        assert error.original_error is cause
        assert str(error) == "failed"


@pytest.mark.unit
class TestMessages:
    """Test generated error messages and attributes."""

    def test_validation_error(self):
        error = ValidationError("bad", parameter_name="doc", parameter_value=3)
        assert (error.parameter_name, error.parameter_value) == ("doc", 3)

    def test_invalid_options_message(self):
        error = InvalidOptionsError("MarkdownRenderer", MarkdownRendererOptions, HtmlRendererOptions)
        assert error.message == (
            "MarkdownRenderer expected options of type 'MarkdownRendererOptions' but received 'HtmlRendererOptions'."
        )
        assert error.parameter_name == "options"

    def test_dependency_missing_message(self):
        error = DependencyError("markdown", [("mistune", ">=3.0.0")])
        assert error.message == (
            "markdown requires the following packages: 'mistune>=3.0.0'\n"
            'Install with: pip install --upgrade "mistune>=3.0.0"'
        )

    def test_dependency_version_mismatch_message(self):
        error = DependencyError("html", [], version_mismatches=[("beautifulsoup4", ">=4.12.0", "4.9.0")])
        assert "requires >=4.12.0, but 4.9.0 is installed" in error.message
        assert error.message.endswith('pip install --upgrade "beautifulsoup4>=4.12.0"')

    def test_dependency_custom_message(self):
        assert DependencyError("x", [("a", "")], message="custom").message == "custom"

    def test_shortcode_and_transform_names(self):
        assert ShortcodeError("bad", shortcode_name="youtube").shortcode_name == "youtube"
        assert TransformError("bad", transform_name="Escape").transform_name == "Escape"
