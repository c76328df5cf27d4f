"""
Configuration system using Pydantic for type-safe settings management.

Settings come from an optional YAML file (with ``${VAR}`` interpolation) and
from ``GITMAIL_``-prefixed environment variables.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gitmail.engine.prompts import AVAILABLE_LABELS
from gitmail.enums import ProviderType
from gitmail.exceptions import ConfigurationError
from gitmail.utils.logging_config import LOG_LEVELS

# Checked in order when no api_key is configured.
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")

DEFAULT_CONFIG_PATH = ".gitmail/config.yaml"


class ProviderConfig(BaseModel):
    """Model backend configuration.

    Supports environment references for api_key:
    - api_key: "${GEMINI_API_KEY}"
    """

    provider_type: ProviderType = Field(default=ProviderType.GEMINI, description="Model backend")
    model: str | None = Field(default=None, description="Model identifier (backend default when unset)")
    api_key: SecretStr | None = Field(default=None, description="API key for cloud providers")
    base_url: str | None = Field(default=None, description="Override the backend's API base URL")
    temperature: float = Field(default=0.2, ge=0.0, le=2.0, description="Sampling temperature")
    timeout: float = Field(default=60.0, gt=0.0, description="Request timeout in seconds")
    available_labels: list[str] = Field(
        default_factory=lambda: list(AVAILABLE_LABELS),
        description="Labels the model may assign",
    )

    @model_validator(mode="after")
    def validate_base_url(self) -> ProviderConfig:
        """Reject base URLs without a scheme."""
        if self.base_url is not None and not (
            self.base_url.startswith("http://") or self.base_url.startswith("https://")
        ):
            raise ValueError(f"base_url must start with http:// or https://, got: {self.base_url}")
        return self

    def resolve_api_key(self) -> str | None:
        """Return the configured API key, falling back to the environment."""
        if self.api_key is not None and self.api_key.get_secret_value():
            return self.api_key.get_secret_value()
        for var_name in API_KEY_ENV_VARS:
            value = os.getenv(var_name)
            if value:
                return value
        return None


class CommandConfig(BaseModel):
    """Generated command configuration."""

    executable: str = Field(default="gh", description="Issue tracker CLI executable")


class GitMailSettings(BaseSettings):
    """Main gitmail settings.

    Combines all configuration sections and provides loading from YAML
    files with environment variable interpolation.
    """

    model_config = SettingsConfigDict(
        env_prefix="GITMAIL_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    commands: CommandConfig = Field(default_factory=CommandConfig)
    log_level: str = Field(default="WARNING", description="Minimum log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got: {value}")
        return level

    @classmethod
    def load(cls, config_path: str | None = None) -> GitMailSettings:
        """Load settings from ``config_path`` if it exists, else from the environment."""
        if config_path and Path(config_path).exists():
            return cls.from_yaml(config_path)
        try:
            return cls()
        except ValueError as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e

    @classmethod
    def from_yaml(cls, config_path: str) -> GitMailSettings:
        """Load settings from YAML file with environment variable interpolation.

        Supports ${VAR_NAME} syntax for environment variable substitution.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            GitMailSettings instance

        Raises:
            ConfigurationError: If config file is invalid or missing required fields
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file) as f:
                yaml_content = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            yaml_content = cls._interpolate_env_vars(yaml_content)
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment variable reference in config: {e}") from e

        try:
            config_dict = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        try:
            return cls(**config_dict)
        except Exception as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e

    @staticmethod
    def _interpolate_env_vars(content: str) -> str:
        """Interpolate ${VAR_NAME} placeholders with environment variables.

        Supports two syntaxes:
        - ${VAR_NAME} - Required environment variable (raises if not set)
        - ${VAR_NAME:-default} - Optional with default value

        YAML comment lines are left unchanged.

        Raises:
            ValueError: If a required environment variable is not set
        """
        pattern = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)
            value = os.getenv(var_name)

            if value is not None:
                return value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Environment variable {var_name} is not set")

        def process_line(line: str) -> str:
            if line.lstrip().startswith("#"):
                return line
            return pattern.sub(replace_var, line)

        return "\n".join(process_line(line) for line in content.split("\n"))
