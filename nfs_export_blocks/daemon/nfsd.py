"""
NFS daemon collaborators backed by external commands.

The macOS ``nfsd`` binary both checks exports files
(``nfsd -F <file> checkexports``) and reloads them (``nfsd update``).
Linux servers reload through ``exportfs -ra`` and ship no standalone
checker, so they pair ``ExportfsReloader`` with ``AcceptAllValidator``.
"""

from __future__ import annotations

import logging

from ..local.file_ops import candidate_file
from .base import DaemonReloader, ExportsValidator, ValidationResult
from .commands import run_command

logger = logging.getLogger(__name__)

DEFAULT_NFSD_PATH = "/sbin/nfsd"
DEFAULT_EXPORTFS_PATH = "/usr/sbin/exportfs"
DEFAULT_SUDO_PATH = "sudo"


def _privileged(argv: list[str], sudo_path: str | None) -> list[str]:
    return [sudo_path, *argv] if sudo_path else argv


class NfsdValidator(ExportsValidator):
    """Validates candidates with ``nfsd -F <file> checkexports``."""

    def __init__(self, nfsd_path: str = DEFAULT_NFSD_PATH):
        self.nfsd_path = nfsd_path

    async def validate(self, candidate: bytes) -> ValidationResult:
        async with candidate_file(candidate) as path:
            result = await run_command([self.nfsd_path, "-F", str(path), "checkexports"])

        if not result.ok:
            logger.debug(f"checkexports exited {result.returncode}: {result.stderr}")
        return ValidationResult(
            valid=result.ok,
            diagnostics=result.stderr,
            returncode=result.returncode,
        )


class AcceptAllValidator(ExportsValidator):
    """Accepts every candidate without running a checker."""

    async def validate(self, candidate: bytes) -> ValidationResult:
        return ValidationResult(valid=True)


class NfsdReloader(DaemonReloader):
    """Reloads exports with ``sudo nfsd update``.

    Args:
        nfsd_path: Path to the nfsd binary
        sudo_path: Privilege wrapper; None runs nfsd directly
    """

    def __init__(
        self,
        nfsd_path: str = DEFAULT_NFSD_PATH,
        sudo_path: str | None = DEFAULT_SUDO_PATH,
    ):
        self.nfsd_path = nfsd_path
        self.sudo_path = sudo_path

    @property
    def argv(self) -> list[str]:
        return _privileged([self.nfsd_path, "update"], self.sudo_path)

    async def reload(self) -> None:
        result = await run_command(self.argv)
        result.raise_for_status()
        logger.debug("nfsd update finished")


class ExportfsReloader(DaemonReloader):
    """Reloads exports with ``sudo exportfs -ra``."""

    def __init__(
        self,
        exportfs_path: str = DEFAULT_EXPORTFS_PATH,
        sudo_path: str | None = DEFAULT_SUDO_PATH,
    ):
        self.exportfs_path = exportfs_path
        self.sudo_path = sudo_path

    @property
    def argv(self) -> list[str]:
        return _privileged([self.exportfs_path, "-ra"], self.sudo_path)

    async def reload(self) -> None:
        result = await run_command(self.argv)
        result.raise_for_status()
        logger.debug("exportfs -ra finished")
