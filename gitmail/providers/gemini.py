"""Gemini provider using the generative language REST API."""

from typing import Any

import httpx
import structlog

from gitmail.engine.prompts import ISSUE_RESPONSE_SCHEMA, SYSTEM_INSTRUCTION, build_user_prompt
from gitmail.exceptions import (
    ConfigurationError,
    ExternalServiceError,
    ProviderConnectionError,
    ResponseFormatError,
)
from gitmail.models.domain import ParsedIssue
from gitmail.providers.base import IssueExtractor, parse_issue_payload

log = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiExtractor(IssueExtractor):
    """Issue extractor backed by Gemini structured output.

    The response schema is passed as ``generationConfig.responseSchema`` with
    a JSON MIME type, so the reply text is a JSON array of issues.
    """

    name = "gemini"

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        temperature: float = 0.2,
        timeout: float = 60.0,
        system_instruction: str = SYSTEM_INSTRUCTION,
    ):
        """Initialize Gemini extractor.

        Args:
            api_key: API key; checked on first use, not here
            model: Model identifier (default: gemini-2.5-flash)
            base_url: API base URL including the version segment
            temperature: Sampling temperature; low values keep extraction stable
            timeout: Request timeout in seconds
            system_instruction: Triage instruction sent with every request
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.timeout = timeout
        self.system_instruction = system_instruction

        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["x-goog-api-key"] = api_key

        self.client = httpx.AsyncClient(timeout=timeout, headers=headers)

    def _require_api_key(self) -> None:
        if not self.api_key:
            raise ConfigurationError("API Key is missing.")

    def build_payload(self, subject: str, body: str) -> dict[str, Any]:
        """Build the generateContent request body."""
        return {
            "systemInstruction": {"parts": [{"text": self.system_instruction}]},
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": build_user_prompt(subject, body)}],
                }
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": ISSUE_RESPONSE_SCHEMA,
                "temperature": self.temperature,
            },
        }

    async def connect(self) -> None:
        """Verify the API key works and the model exists."""
        self._require_api_key()
        url = f"{self.base_url}/models/{self.model}"

        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.ConnectError as e:
            log.error("gemini_unreachable", url=self.base_url)
            raise ProviderConnectionError(
                "Cannot reach the generative language API",
                provider_url=self.base_url,
                suggestion="Check your network connection or proxy settings",
                agent_type=self.name,
            ) from e
        except httpx.HTTPStatusError as e:
            log.error("gemini_connection_failed", status_code=e.response.status_code)
            raise ExternalServiceError(
                f"Model {self.model} is not available: {_error_detail(e.response)}",
                status_code=e.response.status_code,
                response_text=e.response.text,
            ) from e
        except httpx.TransportError as e:
            log.error("gemini_unreachable", url=self.base_url, error=str(e))
            raise ProviderConnectionError(
                f"Cannot reach the generative language API: {type(e).__name__}",
                provider_url=self.base_url,
                suggestion="Check your network connection or proxy settings",
                agent_type=self.name,
            ) from e

        log.info("gemini_ready", model=self.model)

    async def extract_issues(self, subject: str, body: str) -> list[ParsedIssue]:
        self._require_api_key()
        url = f"{self.base_url}/models/{self.model}:generateContent"
        log.info("extracting_issues", agent_type=self.name, model=self.model)

        try:
            response = await self.client.post(url, json=self.build_payload(subject, body))
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = _error_detail(e.response)
            log.error(
                "gemini_request_failed",
                status_code=e.response.status_code,
                error=detail,
            )
            raise ExternalServiceError(
                f"Gemini API error: {detail}",
                status_code=e.response.status_code,
                response_text=e.response.text,
            ) from e
        except httpx.TimeoutException as e:
            log.error("gemini_request_timeout", timeout=self.timeout)
            raise ProviderConnectionError(
                f"Gemini request timed out after {self.timeout}s",
                provider_url=self.base_url,
                agent_type=self.name,
            ) from e
        except httpx.TransportError as e:
            log.error("gemini_unreachable", url=self.base_url, error=str(e))
            raise ProviderConnectionError(
                "Cannot reach the generative language API",
                provider_url=self.base_url,
                suggestion="Check your network connection or proxy settings",
                agent_type=self.name,
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            raise ResponseFormatError(
                "Gemini returned a non-JSON response",
                raw_output=response.text,
                agent_type=self.name,
            ) from e

        text = extract_response_text(data)
        issues = parse_issue_payload(text, agent_type=self.name)
        log.info("issues_extracted", agent_type=self.name, count=len(issues))
        return issues

    async def close(self) -> None:
        await self.client.aclose()


def extract_response_text(data: Any) -> str:
    """Concatenate the text parts of the first candidate.

    Returns an empty string when the response carries no candidate or the
    candidate has no text (e.g. it was blocked by a safety filter).

    Raises:
        ResponseFormatError: If the response does not have the
            generateContent structure
    """
    try:
        candidates = data.get("candidates") or []
        if not candidates:
            log.warning("gemini_no_candidates", prompt_feedback=data.get("promptFeedback"))
            return ""

        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts if not part.get("thought"))
    except (AttributeError, KeyError, IndexError, TypeError) as e:
        log.error("gemini_malformed_response", error=str(e))
        raise ResponseFormatError(
            "Unexpected generateContent response structure",
            raw_output=str(data),
            agent_type=GeminiExtractor.name,
        ) from e


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        return data["error"].get("message") or response.text
    return response.text
