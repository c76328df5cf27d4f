"""Enumerations for gitmail provider types."""

from enum import Enum


class ProviderType(str, Enum):
    """Model backends that can extract issues from an email.

    - gemini: Google generative language API (cloud, needs an API key)
    - ollama: Local Ollama server with structured output support
    """

    GEMINI = "gemini"
    OLLAMA = "ollama"

    def __str__(self) -> str:
        return self.value

    @property
    def is_local(self) -> bool:
        """Check if this provider runs locally (vs cloud API)."""
        return self == ProviderType.OLLAMA

    @property
    def requires_api_key(self) -> bool:
        return self == ProviderType.GEMINI