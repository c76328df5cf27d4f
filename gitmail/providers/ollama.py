"""Ollama provider for local issue extraction."""

from typing import Any

import httpx
import structlog

from gitmail.engine.prompts import SYSTEM_INSTRUCTION, build_user_prompt, to_json_schema
from gitmail.exceptions import ExternalServiceError, ProviderConnectionError, ResponseFormatError
from gitmail.models.domain import ParsedIssue
from gitmail.providers.base import IssueExtractor, parse_issue_payload

log = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_MODEL = "llama3.1:8b"
ENVELOPE_KEY = "issues"


class OllamaExtractor(IssueExtractor):
    """Issue extractor that uses a local Ollama server.

    Ollama's structured output takes a JSON Schema in the ``format`` field.
    Local models follow an object root more reliably than a bare array, so
    the issue array is wrapped in ``{"issues": [...]}``.
    """

    name = "ollama"

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.2,
        timeout: float = 300.0,
        system_instruction: str = SYSTEM_INSTRUCTION,
    ):
        """Initialize Ollama extractor.

        Args:
            base_url: Ollama API base URL
            model: Model to use (e.g., llama3.1:8b, qwen3, mistral)
            temperature: Sampling temperature
            timeout: Request timeout in seconds (default: 5 minutes)
            system_instruction: Triage instruction sent with every request
        """
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self.system_instruction = system_instruction
        self.client = httpx.AsyncClient(timeout=timeout)

    @staticmethod
    def response_format() -> dict[str, Any]:
        """JSON Schema passed as ``format``."""
        return {
            "type": "object",
            "properties": {ENVELOPE_KEY: to_json_schema()},
            "required": [ENVELOPE_KEY],
        }

    def build_payload(self, subject: str, body: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.system_instruction},
                {"role": "user", "content": build_user_prompt(subject, body)},
            ],
            "format": self.response_format(),
            "stream": False,
            "options": {"temperature": self.temperature},
        }

    async def connect(self) -> None:
        """Check if Ollama is available and the model is downloaded."""
        try:
            response = await self.client.get(f"{self.base_url}/api/tags")
            response.raise_for_status()
        except httpx.ConnectError as e:
            log.error("ollama_not_running", url=self.base_url)
            raise ProviderConnectionError(
                "Ollama is not running",
                provider_url=self.base_url,
                suggestion="Start it with: ollama serve",
                agent_type=self.name,
            ) from e
        except httpx.HTTPStatusError as e:
            log.error("ollama_connection_failed", status_code=e.response.status_code)
            raise ExternalServiceError(
                "Ollama rejected the model listing request",
                status_code=e.response.status_code,
                response_text=e.response.text,
            ) from e
        except httpx.TransportError as e:
            log.error("ollama_not_reachable", url=self.base_url, error=str(e))
            raise ProviderConnectionError(
                f"Ollama is not reachable: {type(e).__name__}",
                provider_url=self.base_url,
                suggestion="Check that ollama serve is running and the base_url is correct",
                agent_type=self.name,
            ) from e

        try:
            models = response.json().get("models") or []
            model_names = [m.get("name", "") for m in models]
        except (ValueError, AttributeError, TypeError) as e:
            raise ResponseFormatError(
                "Ollama returned an unexpected model listing",
                raw_output=response.text,
                agent_type=self.name,
            ) from e

        log.info("ollama_connected", available_models=model_names)

        if not any(self.model in name for name in model_names):
            log.warning(
                "model_not_found",
                model=self.model,
                available=model_names,
                message=f"Model {self.model} not found. Run: ollama pull {self.model}",
            )
        else:
            log.info("ollama_model_ready", model=self.model)

    async def extract_issues(self, subject: str, body: str) -> list[ParsedIssue]:
        log.info("extracting_issues", agent_type=self.name, model=self.model)

        try:
            response = await self.client.post(
                f"{self.base_url}/api/chat",
                json=self.build_payload(subject, body),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = e.response.text
            try:
                error_body = e.response.json()
            except ValueError:
                error_body = None
            if isinstance(error_body, dict) and error_body.get("error"):
                detail = str(error_body["error"])
            log.error("ollama_request_failed", status_code=e.response.status_code, error=detail)
            raise ExternalServiceError(
                f"Ollama error: {detail}",
                status_code=e.response.status_code,
                response_text=e.response.text,
            ) from e
        except httpx.TransportError as e:
            log.error("ollama_not_running", url=self.base_url, error=str(e))
            raise ProviderConnectionError(
                "Ollama is not reachable",
                provider_url=self.base_url,
                suggestion="Start it with: ollama serve",
                agent_type=self.name,
            ) from e

        try:
            result = response.json()
        except ValueError as e:
            raise ResponseFormatError(
                "Ollama returned a non-JSON response",
                raw_output=response.text,
                agent_type=self.name,
            ) from e

        text = (result.get("message") or {}).get("content", "")
        issues = parse_issue_payload(text, agent_type=self.name, envelope_key=ENVELOPE_KEY)
        log.info(
            "issues_extracted",
            agent_type=self.name,
            count=len(issues),
            tokens=result.get("eval_count", 0),
        )
        return issues

    async def close(self) -> None:
        await self.client.aclose()
