"""Reshape extracted issues for display and command generation.

The model returns issues with a bare title, a standalone body and the quote
that triggered them. Before they are shown, titles get a type prefix derived
from the labels and the quote (plus the sender, when known) is folded into
the body.

Example:
    >>> issue = ParsedIssue(title="Fix login", body="SSO fails.", labels=["bug"])
    >>> process_parsed_issues([issue])[0].title
    '[Bug] Fix login'
"""

from collections.abc import Iterable

import structlog

from gitmail.models.domain import ParsedIssue

log = structlog.get_logger(__name__)

BUG_PREFIX = "[Bug] "
FEATURE_PREFIX = "[Feature] "
UNKNOWN_SENDER = "Unknown"
CONTEXT_SEPARATOR = "\n\n---\n\n**Original Context:**\n\n> "


def title_prefix(labels: Iterable[str]) -> str:
    """Pick the title prefix for a set of labels.

    Matching is case-insensitive and by substring, so "Bug", "bugfix" and
    "type:bug" all count as bugs. Bug wins over feature when both match.
    """
    lowered = [label.lower() for label in labels]
    if any("bug" in label for label in lowered):
        return BUG_PREFIX
    if any("feature" in label or "enhancement" in label for label in lowered):
        return FEATURE_PREFIX
    return ""


def merge_context(body: str, original_context: str | None, sender: str | None) -> str:
    """Fold the email quote and sender into an issue body.

    Returns the body unchanged when there is no quote.
    """
    if not original_context:
        return body

    sender_prefix = f"From {sender}:\n" if sender and sender != UNKNOWN_SENDER else ""
    return f"{sender_prefix}{body}{CONTEXT_SEPARATOR}{original_context}"


def process_issue(issue: ParsedIssue) -> ParsedIssue:
    title = f"{title_prefix(issue.labels)}{issue.title}".strip()
    body = merge_context(issue.body, issue.original_context, issue.sender)

    # Cleared so the quote is never merged twice.
    return issue.with_changes(title=title, body=body, original_context=None)


def process_parsed_issues(raw_issues: Iterable[ParsedIssue]) -> list[ParsedIssue]:
    """Apply title prefixes and context merging to every extracted issue.

    Args:
        raw_issues: Issues as returned by an extractor

    Returns:
        New issue objects; the inputs are not modified.
    """
    processed = [process_issue(issue) for issue in raw_issues]
    log.debug("issues_processed", count=len(processed))
    return processed


def parse_labels(text: str) -> list[str]:
    """Parse a comma-separated label list as typed by a user.

    Example:
        >>> parse_labels(" bug, ,ui ")
        ['bug', 'ui']
    """
    return [label.strip() for label in text.split(",") if label.strip()]
