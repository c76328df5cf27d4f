"""Tests for gitmail.exceptions module."""

import pytest

from gitmail.exceptions import (
    AgentError,
    ClipboardError,
    ConfigurationError,
    ExternalServiceError,
    GitMailError,
    ProviderConnectionError,
    ResponseFormatError,
    SessionBusyError,
)


class TestGitMailError:
    """Test base GitMailError class."""

    def test_init_with_message(self):
        error = GitMailError("Test error message")

        assert error.message == "Test error message"
        assert str(error) == "Test error message"

    def test_exception_can_be_raised(self):
        with pytest.raises(GitMailError) as exc_info:
            raise GitMailError("Test error")

        assert exc_info.value.message == "Test error"

    @pytest.mark.parametrize(
        "error_class",
        [ConfigurationError, ExternalServiceError, ClipboardError, SessionBusyError, AgentError],
    )
    def test_subclasses_are_catchable_as_base(self, error_class):
        with pytest.raises(GitMailError):
            raise error_class("boom")


class TestExternalServiceError:
    def test_with_status_code(self):
        error = ExternalServiceError("API failed", status_code=429, response_text="quota")

        assert str(error) == "API failed (HTTP 429)"
        assert error.message == "API failed"
        assert error.status_code == 429
        assert error.response_text == "quota"

    def test_without_status_code(self):
        error = ExternalServiceError("API failed")

        assert str(error) == "API failed"
        assert error.status_code is None


class TestAgentErrors:
    def test_agent_error_includes_agent_type(self):
        error = AgentError("Failed", agent_type="gemini")

        assert str(error) == "Failed (agent: gemini)"
        assert error.message == "Failed"

    def test_provider_connection_error(self):
        error = ProviderConnectionError(
            "Ollama is not running",
            provider_url="http://localhost:11434",
            suggestion="Start it with: ollama serve",
            agent_type="ollama",
        )

        assert "url: http://localhost:11434" in str(error)
        assert "Suggestion: Start it with: ollama serve" in str(error)
        assert error.message == "Ollama is not running"
        assert error.agent_type == "ollama"
        assert isinstance(error, AgentError)

    def test_response_format_error_keeps_raw_output(self):
        error = ResponseFormatError("Bad JSON", raw_output="{nope", agent_type="gemini")

        assert error.raw_output == "{nope"
        assert error.agent_type == "gemini"
        assert str(error) == "Bad JSON (agent: gemini)"
