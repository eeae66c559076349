"""
Tests for the logging module.

Tests verify:
- JSON output carries event, level, logger and service fields
- DEBUG logs are suppressed at INFO level
- Environment variables select level and format
- configure_logging is idempotent unless forced
"""

import json
import logging

import pytest
import structlog

from provcode.core import logging as provcode_logging
from provcode.core.logging import configure_logging, get_logger, is_configured


def _reset():
    structlog.reset_defaults()
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    provcode_logging._configured = False


@pytest.fixture(autouse=True)
def _reset_logging():
    _reset()
    yield
    _reset()


def _json_lines(text):
    return [json.loads(line) for line in text.splitlines() if line.startswith("{")]


class TestConfigureLogging:
    """Test configure_logging output and filtering."""

    def test_json_output_fields(self, capsys):
        """JSON lines carry event, level and service."""
        configure_logging(level="INFO", format="json", force=True)
        get_logger("provcode.test").info("record_created", record_id="001-a")

        lines = _json_lines(capsys.readouterr().err)

        assert len(lines) == 1
        entry = lines[0]
        assert entry["event"] == "record_created"
        assert entry["record_id"] == "001-a"
        assert entry["level"] == "info"
        assert entry["logger"] == "provcode.test"
        assert entry["service"] == "provcode"
        assert "timestamp" in entry

    def test_debug_suppressed_at_info(self, capsys):
        """Level filtering applies to structlog events."""
        configure_logging(level="INFO", format="json", force=True)
        log = get_logger("provcode.test")
        log.debug("hidden")
        log.info("shown")

        events = [e["event"] for e in _json_lines(capsys.readouterr().err)]
        assert events == ["shown"]

    def test_nothing_on_stdout(self, capsys):
        """Logs go to stderr only."""
        configure_logging(level="DEBUG", format="json", force=True)
        get_logger("provcode.test").warning("schema_missing")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "schema_missing" in captured.err

    def test_env_selects_level_and_format(self, capsys, monkeypatch):
        monkeypatch.setenv("PROVCODE_LOG_LEVEL", "debug")
        monkeypatch.setenv("PROVCODE_LOG_FORMAT", "json")
        configure_logging(force=True)
        get_logger("provcode.test").debug("visible")

        events = [e["event"] for e in _json_lines(capsys.readouterr().err)]
        assert events == ["visible"]

    def test_console_format(self, capsys):
        configure_logging(level="INFO", format="console", force=True)
        get_logger("provcode.test").info("record_created", record_id="001-a")

        err = capsys.readouterr().err
        assert "record_created" in err
        assert "001-a" in err
        assert not err.lstrip().startswith("{")


class TestIdempotence:
    """Repeated configure_logging calls."""

    def test_is_configured(self):
        assert not is_configured()
        configure_logging(level="WARNING")
        assert is_configured()

    def test_second_call_is_noop_without_force(self, capsys):
        """Without force the first configuration sticks."""
        configure_logging(level="INFO", format="json")
        configure_logging(level="ERROR", format="json")
        get_logger("provcode.test").info("still_info")

        events = [e["event"] for e in _json_lines(capsys.readouterr().err)]
        assert events == ["still_info"]
