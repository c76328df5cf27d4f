"""Tests for gitmail/rendering/commands.py."""

import pytest

from gitmail.models.domain import ParsedIssue
from gitmail.rendering.commands import escape_for_shell, generate_all_commands, generate_command


class TestEscapeForShell:
    """Tests for escape_for_shell."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ('say "hi"', 'say \\"hi\\"'),
            ("cost $5", "cost \\$5"),
            ("run `ls`", "run \\`ls\\`"),
            ("C:\\path", "C:\\\\path"),
        ],
    )
    def test_escapes_special_characters(self, raw, expected):
        assert escape_for_shell(raw) == expected

    def test_backslash_escaped_before_quote(self):
        """An existing backslash before a quote must not cancel the quote escape."""
        assert escape_for_shell('\\"') == '\\\\\\"'

    def test_empty_and_none(self):
        assert escape_for_shell("") == ""
        assert escape_for_shell(None) == ""

    def test_plain_text_unchanged(self):
        assert escape_for_shell("Fix login: it's broken!") == "Fix login: it's broken!"

    def test_newlines_preserved(self):
        assert escape_for_shell("line one\nline two") == "line one\nline two"


class TestGenerateCommand:
    """Tests for generate_command."""

    def test_full_command(self):
        issue = ParsedIssue(title="Fix login", body="It fails.", labels=["bug", "ui"])

        command = generate_command(issue)

        assert command == 'gh issue create --title "Fix login" --body "It fails." --label "bug" --label "ui"'

    def test_no_labels_no_trailing_space(self):
        issue = ParsedIssue(title="Docs", body="Update README", labels=[])

        command = generate_command(issue)

        assert command == 'gh issue create --title "Docs" --body "Update README"'

    def test_values_are_escaped(self):
        issue = ParsedIssue(title='Handle "$HOME"', body="Use `pwd`", labels=['type:"bug"'])

        command = generate_command(issue)

        assert '--title "Handle \\"\\$HOME\\""' in command
        assert '--body "Use \\`pwd\\`"' in command
        assert '--label "type:\\"bug\\""' in command

    def test_custom_executable(self):
        issue = ParsedIssue(title="T", body="B")

        assert generate_command(issue, executable="/usr/local/bin/gh").startswith("/usr/local/bin/gh issue create")


class TestGenerateAllCommands:
    """Tests for generate_all_commands."""

    def test_one_command_per_issue(self):
        issues = [
            ParsedIssue(title="First", body="One"),
            ParsedIssue(title="Second", body="Two", labels=["bug"]),
        ]

        output = generate_all_commands(issues)

        assert output.split("\n") == [generate_command(issues[0]), generate_command(issues[1])]

    def test_empty_list(self):
        assert generate_all_commands([]) == ""
