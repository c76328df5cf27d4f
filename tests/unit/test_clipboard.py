"""Tests for gitmail.utils.clipboard and gitmail.utils.async_subprocess."""

import asyncio
import subprocess
from unittest.mock import AsyncMock, patch

import pytest

from gitmail.exceptions import ClipboardError
from gitmail.utils.async_subprocess import run_command
from gitmail.utils.clipboard import copy_to_clipboard, detect_clipboard_command


class TestDetectClipboardCommand:
    def test_macos(self):
        with patch("gitmail.utils.clipboard.shutil.which", return_value="/usr/bin/pbcopy"):
            assert detect_clipboard_command("darwin") == ("pbcopy",)

    def test_linux_prefers_first_available(self):
        def which(name):
            return "/usr/bin/xsel" if name == "xsel" else None

        with patch("gitmail.utils.clipboard.shutil.which", side_effect=which):
            assert detect_clipboard_command("linux") == ("xsel", "--clipboard", "--input")

    def test_wayland_first(self):
        with patch("gitmail.utils.clipboard.shutil.which", return_value="/usr/bin/tool"):
            assert detect_clipboard_command("linux") == ("wl-copy",)

    def test_nothing_installed(self):
        with patch("gitmail.utils.clipboard.shutil.which", return_value=None):
            assert detect_clipboard_command("linux") is None

    def test_unknown_platform(self):
        assert detect_clipboard_command("plan9") is None


class TestCopyToClipboard:
    @pytest.mark.asyncio
    async def test_writes_text_to_stdin(self):
        with patch("gitmail.utils.clipboard.run_command", AsyncMock(return_value=("", "", 0))) as mock_run:
            await copy_to_clipboard("gh issue create ...", command=("pbcopy",))

        mock_run.assert_awaited_once()
        assert mock_run.call_args.args == ("pbcopy",)
        assert mock_run.call_args.kwargs["input_text"] == "gh issue create ..."

    @pytest.mark.asyncio
    async def test_no_tool_available(self):
        with patch("gitmail.utils.clipboard.detect_clipboard_command", return_value=None):
            with pytest.raises(ClipboardError, match="No clipboard utility"):
                await copy_to_clipboard("text")

    @pytest.mark.asyncio
    async def test_tool_fails(self):
        error = subprocess.CalledProcessError(1, ("xclip",), "", "Can't open display")

        with patch("gitmail.utils.clipboard.run_command", AsyncMock(side_effect=error)):
            with pytest.raises(ClipboardError, match="exited with status 1"):
                await copy_to_clipboard("text", command=("xclip", "-selection", "clipboard"))

    @pytest.mark.asyncio
    async def test_tool_missing(self):
        with patch("gitmail.utils.clipboard.run_command", AsyncMock(side_effect=FileNotFoundError())):
            with pytest.raises(ClipboardError, match="not found"):
                await copy_to_clipboard("text", command=("wl-copy",))

    @pytest.mark.asyncio
    async def test_tool_hangs(self):
        with patch("gitmail.utils.clipboard.run_command", AsyncMock(side_effect=asyncio.TimeoutError())):
            with pytest.raises(ClipboardError, match="did not finish"):
                await copy_to_clipboard("text", command=("xsel",))


class TestRunCommand:
    @pytest.mark.asyncio
    async def test_input_text_reaches_stdin(self):
        stdout, stderr, returncode = await run_command("cat", input_text="hello clipboard")

        assert stdout == "hello clipboard"
        assert returncode == 0

    @pytest.mark.asyncio
    async def test_non_zero_exit_raises(self):
        with pytest.raises(subprocess.CalledProcessError):
            await run_command("false")

    @pytest.mark.asyncio
    async def test_non_zero_exit_check_false(self):
        _, _, returncode = await run_command("false", check=False)

        assert returncode != 0

    @pytest.mark.asyncio
    async def test_missing_executable(self):
        with pytest.raises(FileNotFoundError):
            await run_command("definitely-not-a-real-command-xyz")

    @pytest.mark.asyncio
    async def test_timeout(self):
        with pytest.raises(asyncio.TimeoutError):
            await run_command("sleep", "5", timeout=0.1)
