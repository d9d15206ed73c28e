"""Async runner for external commands."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from ..exceptions import SubprocessFailedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured output of a finished command."""

    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def raise_for_status(self) -> None:
        """Raise SubprocessFailedError if the command exited non-zero."""
        if not self.ok:
            raise SubprocessFailedError(self.argv, self.returncode, self.stderr)


async def run_command(argv: list[str]) -> CommandResult:
    """Run a command to completion and capture its output.

    There is no timeout: the caller waits until the process exits.

    Args:
        argv: Program and arguments

    Returns:
        CommandResult with decoded stdout and stderr

    Raises:
        SubprocessFailedError: If the program cannot be launched
    """
    logger.debug(f"Running {' '.join(argv)}")
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise SubprocessFailedError(argv, cause=e) from e

    stdout, stderr = await proc.communicate()
    return CommandResult(
        argv=argv,
        returncode=proc.returncode,
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace").strip(),
    )
