"""
Tests for logging configuration.
"""

import json
import logging

import pytest

from oauth2_client.logging_config import JsonFormatter, setup_global_logging


@pytest.fixture
def restore_root_logger():
    """Put the root logger's handlers and level back after the test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)
    for h in handlers:
        root_logger.addHandler(h)
    root_logger.setLevel(level)


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name="oauth2_client.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Access token received for %s",
            args=("github",),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_format_basic_fields(self):
        """Test the core fields are present."""
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["severity"] == "INFO"
        assert data["name"] == "oauth2_client.test"
        assert data["message"] == "Access token received for github"
        assert "timestamp" in data

    def test_format_extra_fields(self):
        """Test extra_fields are merged at the top level."""
        record = self._record(extra_fields={"provider": "github", "expires_in": 3600})

        data = json.loads(JsonFormatter().format(record))

        assert data["provider"] == "github"
        assert data["expires_in"] == 3600


class TestSetupGlobalLogging:
    """Tests for setup_global_logging."""

    def test_installs_json_handler(self, restore_root_logger):
        """Test a single JSON handler is installed on the root logger."""
        setup_global_logging()

        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)
        assert restore_root_logger.level == logging.INFO

    def test_level_from_env(self, restore_root_logger, monkeypatch):
        """Test the level is read from OAUTH2_CLIENT_LOG_LEVEL."""
        monkeypatch.setenv("OAUTH2_CLIENT_LOG_LEVEL", "debug")

        setup_global_logging()

        assert restore_root_logger.level == logging.DEBUG

    def test_explicit_level_wins(self, restore_root_logger, monkeypatch):
        """Test an explicit level overrides the environment."""
        monkeypatch.setenv("OAUTH2_CLIENT_LOG_LEVEL", "debug")

        setup_global_logging("warning")

        assert restore_root_logger.level == logging.WARNING
