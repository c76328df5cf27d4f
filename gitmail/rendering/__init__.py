"""Rendering of extracted issues as shell commands and terminal cards.

Key Exports:
    escape_for_shell: Escape text for a double-quoted shell argument
    generate_command: Build a ``gh issue create`` command for one issue
    generate_all_commands: Newline-joined commands for many issues
    render_card: Colourised text card for one issue
"""

from gitmail.rendering.cards import label_style, render_card
from gitmail.rendering.commands import escape_for_shell, generate_all_commands, generate_command

__all__ = [
    "escape_for_shell",
    "generate_all_commands",
    "generate_command",
    "label_style",
    "render_card",
]
