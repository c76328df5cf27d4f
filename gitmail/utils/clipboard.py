"""System clipboard access through the platform's copy utility.

Key Exports:
    detect_clipboard_command: Find a usable copy tool on this machine.
    copy_to_clipboard: Write text to the clipboard.
"""

import asyncio
import shutil
import subprocess
import sys

import structlog

from gitmail.exceptions import ClipboardError
from gitmail.utils.async_subprocess import run_command

log = structlog.get_logger(__name__)

# Tried in order; the first executable found on PATH wins.
CLIPBOARD_COMMANDS: dict[str, list[tuple[str, ...]]] = {
    "darwin": [("pbcopy",)],
    "win32": [("clip",)],
    "linux": [
        ("wl-copy",),
        ("xclip", "-selection", "clipboard"),
        ("xsel", "--clipboard", "--input"),
    ],
}

CLIPBOARD_TIMEOUT = 10.0


def detect_clipboard_command(platform: str | None = None) -> tuple[str, ...] | None:
    """Return the copy command for ``platform`` (default: this one), if installed."""
    platform = platform or sys.platform
    key = "linux" if platform.startswith(("linux", "freebsd", "openbsd")) else platform

    for command in CLIPBOARD_COMMANDS.get(key, []):
        if shutil.which(command[0]):
            return command
    return None


async def copy_to_clipboard(text: str, command: tuple[str, ...] | None = None) -> None:
    """Write ``text`` to the system clipboard.

    Args:
        text: Text to copy
        command: Copy command to use; detected when omitted

    Raises:
        ClipboardError: If no copy tool is available or it fails
    """
    command = command or detect_clipboard_command()
    if command is None:
        raise ClipboardError(
            "No clipboard utility found (install wl-clipboard, xclip or xsel, or use --output)"
        )

    try:
        await run_command(*command, input_text=text, timeout=CLIPBOARD_TIMEOUT)
    except FileNotFoundError as e:
        raise ClipboardError(f"Clipboard utility not found: {command[0]}") from e
    except subprocess.CalledProcessError as e:
        log.error("clipboard_write_failed", command=command[0], stderr=e.stderr)
        raise ClipboardError(f"{command[0]} exited with status {e.returncode}") from e
    except asyncio.TimeoutError as e:
        raise ClipboardError(f"{command[0]} did not finish within {CLIPBOARD_TIMEOUT}s") from e

    log.info("clipboard_written", command=command[0], length=len(text))
