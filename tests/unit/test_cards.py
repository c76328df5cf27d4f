"""Tests for gitmail/rendering/cards.py."""

import click
import pytest

from gitmail.models.domain import ParsedIssue
from gitmail.rendering.cards import (
    NEXT_STEPS,
    label_style,
    render_card,
    render_labels,
    render_next_steps,
    render_summary,
)
from gitmail.rendering.commands import generate_command


class TestLabelStyle:
    @pytest.mark.parametrize(
        "label,colour",
        [
            ("bug", "red"),
            ("Critical-Bug", "red"),
            ("enhancement", "blue"),
            ("Feature", "blue"),
            ("documentation", "bright_black"),
        ],
    )
    def test_colours(self, label, colour):
        assert label_style(label) == colour


class TestRenderCard:
    def test_contains_title_body_and_command(self):
        issue = ParsedIssue(title="[Bug] Fix login", body="SSO fails.", labels=["bug"])

        card = click.unstyle(render_card(issue))

        assert "[Bug] Fix login" in card
        assert "SSO fails." in card
        assert generate_command(issue) in card
        assert "[bug]" in card

    def test_index_in_header(self):
        card = click.unstyle(render_card(ParsedIssue(title="T", body="B"), index=3))

        assert card.startswith("#3 ")

    def test_no_labels_placeholder(self):
        assert click.unstyle(render_labels([])) == "(No labels)"

    def test_original_context_block(self, bug_issue):
        card = click.unstyle(render_card(bug_issue))

        assert "Original Email Context" in card
        assert '"After logging in I just see a white screen."' in card

    def test_no_context_block_after_processing(self):
        issue = ParsedIssue(title="T", body="B", original_context=None)

        assert "Original Email Context" not in click.unstyle(render_card(issue))

    def test_custom_executable(self):
        card = click.unstyle(render_card(ParsedIssue(title="T", body="B"), executable="ghe"))

        assert "$ ghe issue create" in card


class TestSummary:
    def test_summary(self):
        assert click.unstyle(render_summary(2)) == "2 Issues Found"

    def test_next_steps(self):
        text = click.unstyle(render_next_steps())

        assert text.startswith("Next Steps")
        assert NEXT_STEPS in text
        assert "gh auth login" in text
