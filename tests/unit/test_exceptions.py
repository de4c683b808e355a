"""Unit tests for exceptions.

These tests verify that exception constructors correctly store context
attributes. We don't test Python built-in behaviors (inheritance, str()).
"""

from pathlib import Path

from sourcewatch.exceptions import (
    ConfigLoadError,
    ConfigValidationError,
    NoSubscribersError,
)


class TestConfigLoadError:
    def test_stores_location_context(self) -> None:
        error = ConfigLoadError(
            "Parse error",
            path=Path("/config/sourcewatch.toml"),
            line=15,
            column=8,
        )

        assert error.path == Path("/config/sourcewatch.toml")
        assert error.line == 15
        assert error.column == 8

    def test_context_fields_default_to_none(self) -> None:
        error = ConfigLoadError("Simple error")

        assert error.path is None
        assert error.line is None
        assert error.column is None


class TestConfigValidationError:
    def test_stores_validation_context(self) -> None:
        error = ConfigValidationError(
            "Invalid enum value",
            key="logging.level",
            value="verbose",
            expected="debug | info | warning | error",
        )

        assert error.key == "logging.level"
        assert error.value == "verbose"
        assert error.expected == "debug | info | warning | error"


class TestNoSubscribersError:
    def test_stores_item(self) -> None:
        error = NoSubscribersError("No active subscribers", item=b"frame")

        assert error.item == b"frame"
