"""Shell and git utilities.

Provides an async wrapper around git subprocess calls, plus the output
formatting helper used to report progress.
"""

from __future__ import annotations

import asyncio

from .errors import GitCommandError


async def git(*args: str) -> str:
    """Run a git command and return stdout.

    Each call spawns its own subprocess in the current working directory, so
    independent calls can be awaited concurrently.

    Args:
        *args: Arguments to pass to git (e.g., "tag", "--sort=-refname").

    Returns:
        Stripped stdout from the git command.

    Raises:
        GitCommandError: If git exits non-zero. Callers that treat a
            particular exit status as an answer inspect ``returncode``.
    """
    proc = await asyncio.create_subprocess_exec(
        "git",
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await proc.communicate()
    out = stdout.decode().strip()
    if proc.returncode != 0:
        raise GitCommandError(
            proc.returncode, ["git", *args], output=out, stderr=stderr.decode().strip()
        )
    return out


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate the phases of a version plan in terminal output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")
