"""
Shell command generation for extracted issues.

Each issue becomes one ``gh issue create`` invocation. Every value is placed
inside double quotes, so the characters the shell still interprets there
(backslash, double quote, backtick and dollar sign) are escaped.
"""

from collections.abc import Iterable

from gitmail.models.domain import ParsedIssue

DEFAULT_EXECUTABLE = "gh"

# Backslash must come first so the escapes added below aren't doubled.
_SHELL_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("`", "\\`"),
    ("$", "\\$"),
)


def escape_for_shell(value: str | None) -> str:
    """
    Escape a string for embedding inside a double-quoted shell argument.

    Args:
        value: Raw text (None is treated as empty)

    Returns:
        Escaped text
    """
    if not value:
        return ""

    for char, replacement in _SHELL_ESCAPES:
        value = value.replace(char, replacement)
    return value


def generate_command(issue: ParsedIssue, executable: str = DEFAULT_EXECUTABLE) -> str:
    """
    Build the command that creates ``issue`` with the GitHub CLI.

    Args:
        issue: Issue to render
        executable: CLI executable name

    Returns:
        A single-line command (the body may still contain newlines inside
        its quotes)
    """
    parts = [
        f"{executable} issue create",
        f'--title "{escape_for_shell(issue.title)}"',
        f'--body "{escape_for_shell(issue.body)}"',
    ]
    parts.extend(f'--label "{escape_for_shell(label)}"' for label in issue.labels)
    return " ".join(parts)


def generate_all_commands(issues: Iterable[ParsedIssue], executable: str = DEFAULT_EXECUTABLE) -> str:
    """Render every issue as a command, one per line."""
    return "\n".join(generate_command(issue, executable) for issue in issues)
