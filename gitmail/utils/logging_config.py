"""
Logging configuration using structlog for structured, JSON-based logging.

Logs go to stderr so that stdout carries only generated commands and cards.
"""

import sys
from typing import Any, TextIO

import structlog

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

SENSITIVE_KEYS = ("api_key", "apikey", "api_token", "access_token", "secret", "password", "authorization")
REDACTED = "***REDACTED***"


def redact_sensitive_data(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Redact values whose key names suggest credentials."""
    for key in event_dict:
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            event_dict[key] = REDACTED
    return event_dict


def configure_logging(log_level: str = "WARNING", stream: TextIO | None = None) -> None:
    """Configure structured logging with JSON output.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Destination for log lines (default: stderr)

    Raises:
        ValueError: If log_level is not one of LOG_LEVELS
    """
    if log_level.upper() not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {log_level}. Expected one of: {', '.join(LOG_LEVELS)}")

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_sensitive_data,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level.lower()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=True,
    )