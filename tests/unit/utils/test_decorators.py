"""Unit tests for utils/decorators.py."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

import mdbridge.utils.decorators
from mdbridge.exceptions import DependencyError
from mdbridge.utils.decorators import debug_timer, requires_dependencies
from mdbridge.utils.packages import check_version_requirement, get_package_version


@pytest.mark.unit
class TestRequiresDependencies:
    """Test the requires_dependencies decorator."""

    def test_missing_package_raises_error(self) -> None:
        """Test that a missing package raises DependencyError."""

        @requires_dependencies("test", [("nonexistent-package", "nonexistent_mdbridge_pkg", "")])
        def sample_function() -> str:
            return "success"

        with pytest.raises(DependencyError) as exc_info:
            sample_function()

        assert exc_info.value.converter_name == "test"
        assert ("nonexistent-package", "") in exc_info.value.missing_packages
        assert exc_info.value.original_import_error is not None

    def test_version_mismatch_raises_error(self) -> None:
        """Test that an installed package with the wrong version raises DependencyError."""
        with patch("mdbridge.utils.decorators.importlib.import_module"):
            with patch.object(mdbridge.utils.decorators, "check_version_requirement", return_value=(False, "1.0.0")):

                @requires_dependencies("test", [("test-package", "test_package", ">=2.0.0")])
                def sample_function() -> str:
                    return "success"

                with pytest.raises(DependencyError) as exc_info:
                    sample_function()

        assert exc_info.value.missing_packages == []
        assert ("test-package", ">=2.0.0", "1.0.0") in exc_info.value.version_mismatches

    def test_satisfied_dependencies_call_through(self) -> None:
        """Test that the wrapped function runs when everything is installed."""

        @requires_dependencies("test", [("packaging", "packaging", "")])
        def sample_function(value: int) -> int:
            return value * 2

        assert sample_function(21) == 42

    def test_wrapper_keeps_metadata(self) -> None:
        """Test that functools.wraps preserves the wrapped name."""

        @requires_dependencies("test", [])
        def named_function() -> None:
            """Docstring."""

        assert named_function.__name__ == "named_function"
        assert named_function.__doc__ == "Docstring."


@pytest.mark.unit
class TestDebugTimer:
    """Test the debug_timer context manager."""

    def test_logs_duration_at_debug(self, caplog) -> None:
        logger = logging.getLogger("mdbridge.tests.timer")
        with caplog.at_level(logging.DEBUG, logger="mdbridge.tests.timer"):
            with debug_timer(logger, "sample_op"):
                pass
        assert "sample_op completed in" in caplog.text

    def test_silent_above_debug(self, caplog) -> None:
        logger = logging.getLogger("mdbridge.tests.timer")
        with caplog.at_level(logging.INFO, logger="mdbridge.tests.timer"):
            with debug_timer(logger, "sample_op"):
                pass
        assert "sample_op" not in caplog.text


@pytest.mark.unit
class TestPackageVersions:
    """Test the installed-version helpers."""

    def test_missing_distribution(self) -> None:
        assert get_package_version("nonexistent-mdbridge-distribution") is None
        assert check_version_requirement("nonexistent-mdbridge-distribution", ">=1.0") == (False, None)

    def test_installed_distribution(self) -> None:
        installed = get_package_version("packaging")
        assert installed is not None
        assert check_version_requirement("packaging", ">=0.1") == (True, installed)
        assert check_version_requirement("packaging", "<0.1") == (False, installed)
