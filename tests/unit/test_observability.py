"""Unit tests for logging configuration and library settings."""

import io
import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from serfig.builder import Builder
from serfig.observability import (
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)
from serfig.settings import SerfigSettings, get_settings
from serfig.sources import EnvironmentSource


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Restore structlog defaults after each test."""
    yield
    structlog.reset_defaults()


class TestSettings:
    """Tests for SerfigSettings."""

    @pytest.mark.unit
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default logging knobs."""
        monkeypatch.delenv("SERFIG_LOG_LEVEL", raising=False)
        monkeypatch.delenv("SERFIG_LOG_JSON", raising=False)
        settings = get_settings()
        assert settings.log_level == "INFO"
        assert settings.log_json is True
        assert settings.log_level_number == logging.INFO

    @pytest.mark.unit
    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test SERFIG_* variables are applied case-insensitively."""
        monkeypatch.setenv("SERFIG_LOG_LEVEL", "debug")
        monkeypatch.setenv("serfig_log_json", "false")
        settings = SerfigSettings()
        assert settings.log_level == "DEBUG"
        assert settings.log_level_number == logging.DEBUG
        assert settings.log_json is False


class TestConfigureLogging:
    """Tests for structlog configuration."""

    @pytest.mark.unit
    def test_json_output(self) -> None:
        """Test builder events are rendered as JSON lines."""
        output = io.StringIO()
        configure_logging(
            level=logging.INFO, output=output, json_format=True, cache_logger=False
        )

        Builder().collect(EnvironmentSource(environ={"A": "1"})).build_value()

        events = [json.loads(line) for line in output.getvalue().splitlines()]
        names = [event["event"] for event in events]
        assert "build_started" in names
        assert "source_produced" in names
        assert "sources_merged" in names
        produced = next(e for e in events if e["event"] == "source_produced")
        assert produced["component"] == "builder"
        assert produced["origin"] == "environment"
        assert produced["level"] == "info"
        assert "timestamp" in produced

    @pytest.mark.unit
    def test_level_filters_debug(self) -> None:
        """Test debug events are dropped at INFO."""
        output = io.StringIO()
        configure_logging(level=logging.INFO, output=output, cache_logger=False)
        get_logger().debug("hidden_event")
        assert "hidden_event" not in output.getvalue()

    @pytest.mark.unit
    def test_environment_values_not_logged(self) -> None:
        """Test variable values never reach the log."""
        output = io.StringIO()
        configure_logging(level=logging.DEBUG, output=output, cache_logger=False)
        EnvironmentSource(environ={"TOKEN": "s3cr3t-value"}).produce()
        assert "environment_collected" in output.getvalue()
        assert "s3cr3t-value" not in output.getvalue()

    @pytest.mark.unit
    def test_from_settings(self) -> None:
        """Test settings drive level and renderer."""
        output = io.StringIO()
        configure_logging_from_settings(
            SerfigSettings(log_level="WARNING", log_json=True), output=output
        )
        log = get_logger()
        log.info("info_event")
        log.warning("warning_event")
        lines = output.getvalue().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "warning_event"
