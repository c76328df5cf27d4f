"""Async subprocess utilities.

Provides non-blocking subprocess execution for use in async contexts.

Example:
    >>> from gitmail.utils.async_subprocess import run_command
    >>> stdout, stderr, code = await run_command("pbcopy", input_text="hello")
"""

import asyncio
import subprocess
from pathlib import Path


async def run_command(
    *args: str,
    input_text: str | None = None,
    cwd: Path | str | None = None,
    check: bool = True,
    timeout: float | None = None,
) -> tuple[str, str, int]:
    """Run a command asynchronously without shell interpolation.

    Args:
        *args: Command and arguments as separate strings.
        input_text: Text written to the process's stdin (UTF-8 encoded).
        cwd: Working directory for command execution.
        check: If True (default), raise CalledProcessError when the command
            returns a non-zero exit code.
        timeout: Maximum seconds to wait for command completion. If exceeded,
            the process is killed and TimeoutError is raised.

    Returns:
        Tuple of (stdout, stderr, return_code).

    Raises:
        subprocess.CalledProcessError: If check=True and command returns non-zero.
        asyncio.TimeoutError: If timeout is exceeded.
        FileNotFoundError: If the command executable is not found.
    """
    process = await asyncio.create_subprocess_exec(
        *args,
        cwd=cwd,
        stdin=asyncio.subprocess.PIPE if input_text is not None else None,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )

    stdin_bytes = input_text.encode("utf-8") if input_text is not None else None

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(stdin_bytes),
            timeout=timeout,
        )
    except TimeoutError:
        process.kill()
        await process.wait()
        raise

    stdout = (stdout_bytes or b"").decode("utf-8", errors="replace")
    stderr = (stderr_bytes or b"").decode("utf-8", errors="replace")

    if check and process.returncode != 0:
        raise subprocess.CalledProcessError(
            process.returncode,
            args,
            stdout,
            stderr,
        )

    return stdout, stderr, process.returncode or 0
