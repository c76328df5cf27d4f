"""Validation models for the model's structured output.

The model is asked to return a JSON array of issue objects. Each element is
validated with ``ExtractedIssue`` before it becomes a ``ParsedIssue``.

Example:
    Validating one element of the model's reply::

        extracted = ExtractedIssue.model_validate(
            {
                "title": "Fix login redirect",
                "body": "Users land on a blank page after SSO login.",
                "labels": ["bug"],
                "originalContext": "After logging in I just see a white screen",
                "sender": "Alice",
            }
        )
        issue = extracted.to_parsed_issue()
"""

from pydantic import BaseModel, ConfigDict, Field

from gitmail.models.domain import ParsedIssue


class ExtractedIssue(BaseModel):
    """One issue as returned by the model.

    Wire names follow the response schema (``originalContext``); snake_case
    names are accepted too so that hand-written fixtures stay readable.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., description="Concise, imperative issue title")
    body: str = Field(..., description="Standalone Markdown description")
    labels: list[str] = Field(..., description="Label names")
    original_context: str | None = Field(
        default=None,
        alias="originalContext",
        description="Exact quote from the email that justifies the issue",
    )
    sender: str | None = Field(default=None, description="Name of the requester")

    def to_parsed_issue(self) -> ParsedIssue:
        """Convert to a domain issue with a fresh local id."""
        return ParsedIssue(
            title=self.title,
            body=self.body,
            labels=list(self.labels),
            original_context=self.original_context,
            sender=self.sender,
        )
