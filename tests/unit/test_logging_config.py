"""Tests for gitmail.utils.logging_config."""

import io
import json

import pytest
import structlog

from gitmail.utils.logging_config import REDACTED, configure_logging, redact_sensitive_data


class TestRedactSensitiveData:
    def test_redacts_credentials(self):
        event = {"event": "request", "api_key": "AIza-secret", "Authorization": "Bearer x"}

        result = redact_sensitive_data(None, "info", event)

        assert result["api_key"] == REDACTED
        assert result["Authorization"] == REDACTED
        assert result["event"] == "request"

    def test_keeps_token_counts(self):
        result = redact_sensitive_data(None, "info", {"event": "done", "tokens": 42})

        assert result["tokens"] == 42


class TestConfigureLogging:
    def test_json_lines_to_stream(self):
        stream = io.StringIO()
        configure_logging("INFO", stream=stream)

        structlog.get_logger("test").info("issues_extracted", count=2, api_key="secret")

        record = json.loads(stream.getvalue().strip())
        assert record["event"] == "issues_extracted"
        assert record["count"] == 2
        assert record["level"] == "info"
        assert record["api_key"] == REDACTED
        assert "timestamp" in record

    def test_level_filtering(self):
        stream = io.StringIO()
        configure_logging("WARNING", stream=stream)

        log = structlog.get_logger("test")
        log.info("hidden")
        log.warning("shown")

        lines = stream.getvalue().strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "shown"

    def test_level_is_case_insensitive(self):
        stream = io.StringIO()
        configure_logging("debug", stream=stream)

        structlog.get_logger("test").debug("shown")

        assert json.loads(stream.getvalue().strip())["event"] == "shown"

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError, match="verbose"):
            configure_logging("verbose")
