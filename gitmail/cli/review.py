"""Interactive review of extracted issues before their commands are emitted."""

import asyncio

import click
import structlog

from gitmail.engine.processor import parse_labels
from gitmail.engine.session import TriageSession
from gitmail.exceptions import ClipboardError
from gitmail.models.domain import ParsedIssue
from gitmail.rendering.cards import render_card
from gitmail.rendering.commands import generate_command
from gitmail.utils.clipboard import copy_to_clipboard

log = structlog.get_logger(__name__)

ACTIONS = {"k": "keep", "e": "edit", "r": "remove", "c": "copy"}


def edit_issue(issue: ParsedIssue) -> ParsedIssue:
    """Prompt for a new title, body and label list.

    The body is edited in the user's $EDITOR; closing the editor without
    saving keeps the current body.
    """
    title = click.prompt("Title", default=issue.title)

    body = click.edit(issue.body, extension=".md")
    if body is None:
        body = issue.body
    else:
        body = body.rstrip("\n")

    labels_text = click.prompt(
        "Labels (comma separated)",
        default=", ".join(issue.labels),
        show_default=True,
    )

    return issue.with_changes(title=title, body=body, labels=parse_labels(labels_text))


def copy_issue(issue: ParsedIssue, executable: str) -> bool:
    """Copy one issue's command to the clipboard. Returns False on failure."""
    try:
        asyncio.run(copy_to_clipboard(generate_command(issue, executable)))
    except ClipboardError as e:
        click.echo(f"Error: {e.message}", err=True)
        return False
    click.echo(click.style("Command copied to clipboard!", fg="green"), err=True)
    return True


def review_issues(session: TriageSession) -> None:
    """Walk every issue and let the user keep, edit, remove or copy it.

    Copying keeps the issue.
    """
    total = len(session.issues)
    for position, issue in enumerate(list(session.issues), start=1):
        click.echo()
        click.echo(render_card(issue, index=position, executable=session.executable))
        click.echo()

        choice = click.prompt(
            f"[{position}/{total}] (k)eep, (e)dit, (r)emove, (c)opy",
            type=click.Choice(list(ACTIONS)),
            default="k",
            show_choices=False,
        )

        if choice == "r":
            session.delete_issue(issue.id)
        elif choice == "e":
            session.update_issue(edit_issue(issue))
        elif choice == "c":
            copy_issue(issue, session.executable)

        log.debug("issue_reviewed", issue_id=issue.id, action=ACTIONS[choice])
