"""
Domain models for gitmail.

This module contains the data classes and enums representing what flows
through a triage run: the pasted email, the issues extracted from it and
the state of the session handling the request.

Example:
    Creating an issue from extracted data::

        issue = ParsedIssue(
            id=str(uuid4()),
            title="Fix login redirect",
            body="Users land on a blank page after SSO login.",
            labels=["bug"],
            original_context="After logging in I just see a white screen",
            sender="Alice",
        )
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any
from uuid import uuid4


class ProcessingStatus(str, Enum):
    """State of a triage session.

    The happy path is IDLE -> ANALYZING -> COMPLETE. A failed request moves
    to ERROR; an empty result goes back to IDLE.
    """

    IDLE = "IDLE"
    """Waiting for input."""

    ANALYZING = "ANALYZING"
    """A request to the model is outstanding."""

    COMPLETE = "COMPLETE"
    """Issues were extracted and are ready to copy."""

    ERROR = "ERROR"
    """The last request failed."""

    def __str__(self) -> str:
        return self.value


@dataclass
class EmailContent:
    """The email pasted by the user."""

    subject: str = ""
    body: str = ""

    @property
    def is_empty(self) -> bool:
        """True when neither subject nor body carries any text."""
        return not self.subject.strip() and not self.body.strip()


@dataclass
class ParsedIssue:
    """An action item extracted from an email.

    Instances start out as the model returned them and are then reshaped
    for display (title prefix, quoted context merged into the body).
    """

    title: str
    """Concise, imperative issue title."""

    body: str
    """Markdown description of the issue."""

    labels: list[str] = field(default_factory=list)
    """Label names to attach when the issue is created."""

    original_context: str | None = None
    """Exact quote from the email that triggered the issue.

    Cleared once the quote has been merged into the body.
    """

    sender: str | None = None
    """Name of the requester, or "Unknown" when the model couldn't tell."""

    id: str = field(default_factory=lambda: str(uuid4()))
    """Local identifier used to update or remove the issue."""

    def with_changes(self, **changes: Any) -> "ParsedIssue":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "labels": list(self.labels),
            "originalContext": self.original_context,
            "sender": self.sender,
        }
