"""Core domain models for gitmail.

Key Models:
    - EmailContent: Subject and body pasted by the user
    - ParsedIssue: Action item extracted from the email
    - ExtractedIssue: Pydantic model validating the model's JSON output

Enums:
    - ProcessingStatus: Session state (idle, analyzing, complete, error)

Example:
    >>> from gitmail.models import ParsedIssue
    >>> issue = ParsedIssue(title="Fix login", body="...", labels=["bug"])
"""

from gitmail.models.domain import EmailContent, ParsedIssue, ProcessingStatus
from gitmail.models.extraction import ExtractedIssue

__all__ = ["EmailContent", "ExtractedIssue", "ParsedIssue", "ProcessingStatus"]
