"""Custom exception hierarchy for gitmail.

Exception Hierarchy:
    GitMailError (base)
    ├── ConfigurationError
    ├── ExternalServiceError
    ├── ClipboardError
    ├── SessionBusyError
    └── AgentError
        ├── ProviderConnectionError
        └── ResponseFormatError

Example Usage:
    >>> from gitmail.exceptions import ConfigurationError
    >>> try:
    ...     load_config(path)
    ... except FileNotFoundError as e:
    ...     raise ConfigurationError(f"Config file not found: {path}") from e
"""


class GitMailError(Exception):
    """Base exception for all gitmail errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(GitMailError):
    """Configuration-related errors.

    Examples:
        - Configuration file not found or unreadable
        - Invalid YAML syntax
        - Missing API key for a cloud provider
    """

    pass


class ExternalServiceError(GitMailError):
    """The model API answered with an error.

    Attributes:
        status_code: HTTP status code (if applicable)
        response_text: Error detail returned by the service (if any)
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.response_text = response_text

        full_message = message
        if status_code:
            full_message = f"{message} (HTTP {status_code})"

        Exception.__init__(self, full_message)


class ClipboardError(GitMailError):
    """Writing to the system clipboard failed."""

    pass


class SessionBusyError(GitMailError):
    """An extraction request is already in flight for the session."""

    pass


class AgentError(GitMailError):
    """Base exception for model provider errors.

    Attributes:
        message: Human-readable error description
        agent_type: Provider that failed (e.g., "gemini", "ollama")
    """

    def __init__(self, message: str, agent_type: str | None = None) -> None:
        self.agent_type = agent_type

        full_message = message
        if agent_type:
            full_message = f"{message} (agent: {agent_type})"
        super().__init__(full_message)
        # Preserve original message
        self.message = message


class ProviderConnectionError(AgentError):
    """Cannot connect to the model provider.

    Attributes:
        provider_url: URL of the provider that couldn't be reached
        suggestion: Helpful suggestion for resolving the issue
    """

    def __init__(
        self,
        message: str,
        provider_url: str | None = None,
        suggestion: str | None = None,
        agent_type: str | None = None,
    ) -> None:
        self.provider_url = provider_url
        self.suggestion = suggestion

        full_message = message
        if provider_url:
            full_message = f"{message} (url: {provider_url})"
        if suggestion:
            full_message = f"{full_message}\nSuggestion: {suggestion}"

        # Call grandparent __init__ to avoid double-formatting
        GitMailError.__init__(self, full_message)
        self.agent_type = agent_type
        self.message = message


class ResponseFormatError(AgentError):
    """The model returned output that does not match the issue schema.

    Attributes:
        raw_output: The offending text, kept for debugging
    """

    def __init__(
        self,
        message: str,
        raw_output: str | None = None,
        agent_type: str | None = None,
    ) -> None:
        self.raw_output = raw_output
        super().__init__(message, agent_type=agent_type)
