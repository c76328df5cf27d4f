"""
Abstract base class for issue extraction providers.

This module defines the interface that model backends (Gemini, Ollama)
implement to turn an email into a list of issues, plus the shared parsing of
their structured JSON output.
"""

import json
from abc import ABC, abstractmethod
from types import TracebackType

import structlog
from pydantic import ValidationError

from gitmail.exceptions import ResponseFormatError
from gitmail.models.domain import ParsedIssue
from gitmail.models.extraction import ExtractedIssue

log = structlog.get_logger(__name__)


class IssueExtractor(ABC):
    """Abstract base class for model-backed issue extraction.

    Implementations send the system instruction, the email prompt and the
    response schema to their backend and return the issues exactly as the
    model produced them (no title prefixing or context merging).

    All network methods are async to support non-blocking I/O with httpx.
    """

    name: str = "extractor"

    @abstractmethod
    async def connect(self) -> None:
        """Verify the backend is reachable and the model is available.

        Raises:
            ProviderConnectionError: If the backend cannot be reached.
            ExternalServiceError: If the backend rejects the request.
        """
        pass

    @abstractmethod
    async def extract_issues(self, subject: str, body: str) -> list[ParsedIssue]:
        """Extract actionable issues from an email.

        Args:
            subject: Email subject line
            body: Full email body, headers and signature included

        Returns:
            Issues in the order the model returned them. Empty when the
            email holds no actionable request.

        Raises:
            ConfigurationError: If required credentials are missing.
            ProviderConnectionError: If the backend cannot be reached.
            ExternalServiceError: If the backend returns an error status.
            ResponseFormatError: If the output doesn't match the schema.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying HTTP client."""
        pass

    async def __aenter__(self) -> "IssueExtractor":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()


def parse_issue_payload(
    text: str | None,
    agent_type: str | None = None,
    envelope_key: str | None = None,
) -> list[ParsedIssue]:
    """Parse the model's JSON array into issues with fresh local ids.

    Args:
        text: Raw JSON text returned by the model
        agent_type: Provider name, used in error messages
        envelope_key: Key holding the array when the model was asked for an
            object wrapping it (e.g. ``{"issues": [...]}``)

    Returns:
        Parsed issues; empty when ``text`` is empty

    Raises:
        ResponseFormatError: If the text is not a JSON array of issue objects
    """
    if not text or not text.strip():
        return []

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ResponseFormatError(
            f"Model returned invalid JSON: {e.msg}",
            raw_output=text,
            agent_type=agent_type,
        ) from e

    if envelope_key is not None and isinstance(payload, dict):
        payload = payload.get(envelope_key, [])

    if not isinstance(payload, list):
        raise ResponseFormatError(
            f"Expected a JSON array of issues, got {type(payload).__name__}",
            raw_output=text,
            agent_type=agent_type,
        )

    issues: list[ParsedIssue] = []
    for index, item in enumerate(payload):
        try:
            extracted = ExtractedIssue.model_validate(item)
        except ValidationError as e:
            raise ResponseFormatError(
                f"Issue {index} does not match the response schema: {e.error_count()} error(s)",
                raw_output=text,
                agent_type=agent_type,
            ) from e
        issues.append(extracted.to_parsed_issue())

    log.debug("issue_payload_parsed", agent_type=agent_type, count=len(issues))
    return issues
