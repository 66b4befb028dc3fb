"""Unit tests for error hints system."""

import pytest

from serfig.error_hints import (
    DEFAULT_HINT,
    ERROR_HINTS,
    FIELD_HINTS,
    format_decode_error,
    get_error_hint,
)


class TestGetErrorHint:
    """Tests for get_error_hint function."""

    @pytest.mark.unit
    def test_returns_hint_for_known_error_type(self) -> None:
        """Test that known error types return their hints."""
        hint = get_error_hint("missing")
        assert hint == ERROR_HINTS["missing"]
        assert "required" in hint.lower()

    @pytest.mark.unit
    def test_returns_default_for_unknown_error_type(self) -> None:
        """Test that unknown error types return default hint."""
        assert get_error_hint("some_unknown_error_type") == DEFAULT_HINT

    @pytest.mark.unit
    @pytest.mark.parametrize("error_class", ["IO", "PARSE", "ENCODE", "ENV_ACCESS"])
    def test_every_source_error_class_has_hint(self, error_class: str) -> None:
        """Test that source error classes have dedicated hints."""
        assert get_error_hint(error_class) != DEFAULT_HINT

    @pytest.mark.unit
    def test_bool_hint_mentions_environment_spellings(self) -> None:
        """Test the bool parsing hint lists accepted strings."""
        assert "yes/no" in get_error_hint("bool_parsing")

    @pytest.mark.unit
    def test_field_hint_takes_precedence(self) -> None:
        """Test that a known field name overrides the error type hint."""
        assert get_error_hint("int_parsing", "server.port") == FIELD_HINTS["port"]
        assert get_error_hint("missing", "log_level") == FIELD_HINTS["log_level"]

    @pytest.mark.unit
    def test_unknown_field_falls_back_to_error_type(self) -> None:
        """Test that other fields get the error type hint."""
        hint = get_error_hint("int_parsing", "server.workers")
        assert hint == ERROR_HINTS["int_parsing"]
        assert get_error_hint("missing", None) == ERROR_HINTS["missing"]


class TestFormatDecodeError:
    """Tests for format_decode_error function."""

    @pytest.mark.unit
    def test_includes_hint_by_default(self) -> None:
        """Test formatted error includes hint."""
        result = format_decode_error("server.workers", "Field required", "missing")
        assert result.startswith("server.workers: Field required")
        assert f"Hint: {ERROR_HINTS['missing']}" in result

    @pytest.mark.unit
    def test_without_hint(self) -> None:
        """Test formatted error without hint."""
        result = format_decode_error(
            "debug", "Input should be a valid boolean", "bool_parsing", include_hint=False
        )
        assert result == "debug: Input should be a valid boolean"

    @pytest.mark.unit
    def test_uses_field_hint_for_location(self) -> None:
        """Test the location selects a field-specific hint."""
        result = format_decode_error(
            "server.port", "Input should be a valid integer", "int_parsing"
        )
        assert result.endswith(f"Hint: {FIELD_HINTS['port']}")
