"""
Abstract collaborators for validating exports and reloading the daemon.

Allows the block store to run against different NFS servers:
- macOS nfsd (checkexports / update)
- Linux exportfs
- Test doubles that never spawn a process
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of checking a candidate exports file.

    Attributes:
        valid: Whether the checker accepted the candidate
        diagnostics: Text the checker wrote to its error stream
        returncode: Checker exit status, if a process was run
    """

    valid: bool
    diagnostics: str = ""
    returncode: int | None = None


class ExportsValidator(ABC):
    """Checks whether a candidate exports file is acceptable to the daemon."""

    @abstractmethod
    async def validate(self, candidate: bytes) -> ValidationResult:
        """
        Check a complete candidate exports file.

        Args:
            candidate: Full file content that would be written

        Returns:
            ValidationResult describing acceptance and diagnostics

        Raises:
            SubprocessFailedError: If the checker cannot be launched
        """
        pass


class DaemonReloader(ABC):
    """Asks the NFS daemon to re-read its exports."""

    @abstractmethod
    async def reload(self) -> None:
        """
        Reload the daemon once.

        Raises:
            SubprocessFailedError: If the reload command fails
        """
        pass
