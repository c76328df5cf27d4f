"""Configuration system for gitmail.

Key Components:
    - GitMailSettings: Main configuration container with YAML loading support
    - ProviderConfig: Model backend settings (type, model, API key)
    - CommandConfig: Generated command settings

Example:
    >>> from gitmail.config import GitMailSettings
    >>> settings = GitMailSettings.load(".gitmail/config.yaml")
    >>> settings.provider.model
"""

from gitmail.config.settings import CommandConfig, GitMailSettings, ProviderConfig

__all__ = ["CommandConfig", "GitMailSettings", "ProviderConfig"]
