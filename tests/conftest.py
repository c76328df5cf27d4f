"""Pytest configuration and shared fixtures."""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from gitmail.config.settings import GitMailSettings
from gitmail.models.domain import EmailContent, ParsedIssue
from gitmail.providers.base import IssueExtractor


@pytest.fixture(autouse=True)
def clean_api_key_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep API keys from the developer's shell out of the tests."""
    for var_name in ("GEMINI_API_KEY", "API_KEY"):
        monkeypatch.delenv(var_name, raising=False)


@pytest.fixture
def sample_email() -> EmailContent:
    """Feedback email with one bug and one feature request."""
    return EmailContent(
        subject="Feedback on the new dashboard",
        body=(
            "From: Alice Smith <alice@example.com>\n\n"
            "Hi team,\n\n"
            "After logging in I just see a white screen.\n"
            "Also, it would be great if the logo was larger.\n\n"
            "Thanks,\nAlice"
        ),
    )


@pytest.fixture
def bug_issue() -> ParsedIssue:
    """Issue as extracted by the model, before processing."""
    return ParsedIssue(
        id="issue-1",
        title="Fix blank screen after login",
        body="Users see a blank page after logging in.",
        labels=["bug"],
        original_context="After logging in I just see a white screen.",
        sender="Alice",
    )


@pytest.fixture
def feature_issue() -> ParsedIssue:
    """Feature request without a known sender."""
    return ParsedIssue(
        id="issue-2",
        title="Increase logo size",
        body="Make the header logo larger.",
        labels=["enhancement"],
        original_context="it would be great if the logo was larger",
        sender="Unknown",
    )


@pytest.fixture
def mock_extractor(bug_issue: ParsedIssue, feature_issue: ParsedIssue) -> AsyncMock:
    """Extractor returning the two sample issues."""
    extractor = AsyncMock(spec=IssueExtractor)
    extractor.name = "mock"
    extractor.extract_issues.return_value = [bug_issue, feature_issue]
    return extractor


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Minimal valid configuration file."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
provider:
  provider_type: gemini
  model: gemini-2.5-flash
  api_key: test-api-key-12345

commands:
  executable: gh
"""
    )
    return config_path


@pytest.fixture
def settings(config_file: Path) -> GitMailSettings:
    """Settings loaded from the minimal configuration file."""
    return GitMailSettings.from_yaml(str(config_file))
