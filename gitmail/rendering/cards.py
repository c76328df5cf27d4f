"""Terminal rendering of extracted issues."""

import click

from gitmail.models.domain import ParsedIssue
from gitmail.rendering.commands import DEFAULT_EXECUTABLE, generate_command

NEXT_STEPS = (
    "Open your terminal, navigate to your repository, and paste the commands.\n"
    "Ensure you are authenticated via `gh auth login`."
)


def label_style(label: str) -> str:
    """Return the colour used for a label chip."""
    lower = label.lower()
    if "bug" in lower:
        return "red"
    if "enhancement" in lower or "feature" in lower:
        return "blue"
    return "bright_black"


def render_labels(labels: list[str]) -> str:
    if not labels:
        return click.style("(No labels)", fg="bright_black", italic=True)
    return " ".join(click.style(f"[{label}]", fg=label_style(label)) for label in labels)


def render_card(issue: ParsedIssue, index: int | None = None, executable: str = DEFAULT_EXECUTABLE) -> str:
    """Render one issue as a text card.

    Args:
        issue: Issue to render
        index: 1-based position shown in the header, if given
        executable: CLI executable used in the command block

    Returns:
        Multi-line string ready for ``click.echo``
    """
    header = render_labels(issue.labels)
    if index is not None:
        header = f"{click.style(f'#{index}', bold=True)} {header}"

    lines = [
        header,
        click.style(issue.title, bold=True),
        "",
        issue.body,
        "",
        click.style("$ ", fg="green") + generate_command(issue, executable),
    ]

    if issue.original_context:
        lines.extend(
            [
                "",
                click.style("Original Email Context", fg="yellow", bold=True),
                click.style(f'"{issue.original_context}"', fg="yellow", italic=True),
            ]
        )

    return "\n".join(lines)


def render_summary(count: int) -> str:
    return click.style(f"{count} Issues Found", fg="green", bold=True)


def render_next_steps() -> str:
    return f"{click.style('Next Steps', bold=True)}\n{NEXT_STEPS}"
