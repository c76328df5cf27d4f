"""Factory for creating issue extractors based on configuration."""

import structlog

from gitmail.config.settings import GitMailSettings
from gitmail.engine.prompts import build_system_instruction
from gitmail.enums import ProviderType
from gitmail.providers import gemini, ollama
from gitmail.providers.base import IssueExtractor

log = structlog.get_logger(__name__)


def create_extractor(settings: GitMailSettings) -> IssueExtractor:
    """Create the issue extractor selected in the configuration.

    Args:
        settings: gitmail settings containing the provider configuration

    Returns:
        IssueExtractor instance (Gemini or Ollama)

    Raises:
        ValueError: If provider type is not supported

    Example:
        >>> settings = GitMailSettings.load(".gitmail/config.yaml")
        >>> async with create_extractor(settings) as extractor:
        ...     issues = await extractor.extract_issues(subject, body)
    """
    config = settings.provider
    provider_type = config.provider_type
    system_instruction = build_system_instruction(config.available_labels)

    if provider_type == ProviderType.GEMINI:
        model = config.model or gemini.DEFAULT_MODEL
        log.info("creating_gemini_extractor", model=model)
        return gemini.GeminiExtractor(
            api_key=config.resolve_api_key(),
            model=model,
            base_url=config.base_url or gemini.DEFAULT_BASE_URL,
            temperature=config.temperature,
            timeout=config.timeout,
            system_instruction=system_instruction,
        )

    elif provider_type == ProviderType.OLLAMA:
        model = config.model or ollama.DEFAULT_MODEL
        log.info("creating_ollama_extractor", model=model, base_url=config.base_url)
        return ollama.OllamaExtractor(
            base_url=config.base_url or ollama.DEFAULT_BASE_URL,
            model=model,
            temperature=config.temperature,
            timeout=config.timeout,
            system_instruction=system_instruction,
        )

    else:
        raise ValueError(f"Unsupported provider type: {provider_type}. Supported types: gemini, ollama")
