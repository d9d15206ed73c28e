"""
Export block store.

Adds, removes and lists managed blocks in an NFS exports file. Each
operation reads the whole file, transforms it in memory and, for
mutations, writes the whole file back. The file on disk is the only
state; nothing is cached between calls.

Only ``add`` validates its candidate before writing. ``remove`` writes
unconditionally.
"""

from __future__ import annotations

import builtins
from pathlib import Path

from ..blocks import (
    ManagedBlock,
    append_block,
    has_begin_line,
    has_block,
    read_export_lines,
    read_managed,
    remove_block,
)
from ..daemon import (
    AcceptAllValidator,
    DaemonReloader,
    ExportfsReloader,
    ExportsValidator,
    NfsdReloader,
    NfsdValidator,
)
from ..exceptions import IdentifierNotFoundError, SubprocessFailedError, ValidationFailedError
from ..local.file_ops import read_exports, write_exports
from ..logging_utils import ExportsLoggerAdapter, get_exports_logger
from .base import ReloaderKind, StoreConfig, ValidatorKind

logger = get_exports_logger("store")


class ExportBlockStore:
    """Manages identifier-keyed blocks in an NFS exports file.

    Every operation accepts the target path first; an empty string uses
    ``config.exports_path``. Missing-file handling is controlled per call
    with ``treat_missing_as_empty``: ``add`` defaults to treating a
    missing file as empty, every other operation defaults to raising.

    Usage:
        store = ExportBlockStore.from_config(StoreConfig())
        await store.add("", "vm-1", "/Users 192.168.64.2 -alldirs -maproot=root")
        await store.reload_daemon()
    """

    def __init__(
        self,
        validator: ExportsValidator,
        reloader: DaemonReloader,
        config: StoreConfig | None = None,
    ) -> None:
        self.validator = validator
        self.reloader = reloader
        self.config = config or StoreConfig()

    @classmethod
    def from_config(cls, config: StoreConfig) -> ExportBlockStore:
        """Build a store with the collaborators selected in the config."""
        validator: ExportsValidator
        if config.validator is ValidatorKind.NONE:
            validator = AcceptAllValidator()
        else:
            validator = NfsdValidator(config.nfsd_path)

        sudo_path = config.sudo_path if config.use_sudo else None
        reloader: DaemonReloader
        if config.reloader is ReloaderKind.EXPORTFS:
            reloader = ExportfsReloader(config.exportfs_path, sudo_path)
        else:
            reloader = NfsdReloader(config.nfsd_path, sudo_path)

        return cls(validator, reloader, config)

    def _log(self, path: Path, identifier: str | None = None) -> ExportsLoggerAdapter:
        extra = {"exports_file": str(path)}
        if identifier is not None:
            extra["identifier"] = identifier
        return ExportsLoggerAdapter(logger, extra)

    async def add(
        self,
        exports_file: str | Path,
        identifier: str,
        payload: str,
        *,
        treat_missing_as_empty: bool = True,
    ) -> bytes:
        """Ensure a managed block for the identifier exists.

        Adding an identifier whose begin marker is already present is a
        no-op that returns the current content. Otherwise the block is
        appended, the candidate is validated and then written.

        Args:
            exports_file: Target file, or "" for the configured default
            identifier: Block identifier, embedded verbatim
            payload: Export line(s) to place inside the block
            treat_missing_as_empty: Start from empty content if the file
                does not exist

        Returns:
            The file content after the call

        Raises:
            ValidationFailedError: If the validator rejects the candidate
            SubprocessFailedError: If the validator cannot be run
            ExportsFileNotFoundError: If the file is missing and
                treat_missing_as_empty is False
            ExportsIOError: On read or write failure
        """
        path = self.config.resolve_path(exports_file)
        log = self._log(path, identifier)
        encoding = self.config.encoding

        exports = await read_exports(path, missing_ok=treat_missing_as_empty)
        if has_begin_line(exports, identifier, encoding):
            log.debug(
                f"Export {identifier} already present, nothing to do",
                extra={"operation": "add"},
            )
            return exports

        candidate = append_block(exports, ManagedBlock(identifier, payload), encoding)

        result = await self.validator.validate(candidate)
        if not result.valid:
            log.warning(
                f"Rejected export {identifier}",
                extra={
                    "operation": "add",
                    "returncode": result.returncode,
                    "diagnostics": result.diagnostics,
                },
            )
            raise ValidationFailedError(result.diagnostics, result.returncode)

        await write_exports(path, candidate, self.config.file_mode)
        log.info(f"Added export {identifier}", extra={"operation": "add"})
        return candidate

    async def remove(
        self,
        exports_file: str | Path,
        identifier: str,
        *,
        treat_missing_as_empty: bool = False,
    ) -> bytes:
        """Remove the managed block for an identifier.

        The first begin marker and first end marker for the identifier
        delimit the removed span. The remaining content is trimmed and
        ends with a single newline. No validation is performed.

        Returns:
            The written content

        Raises:
            IdentifierNotFoundError: If either marker is missing
            ExportsFileNotFoundError: If the file does not exist
            ExportsIOError: On read or write failure
        """
        path = self.config.resolve_path(exports_file)
        log = self._log(path, identifier)

        exports = await read_exports(path, missing_ok=treat_missing_as_empty)
        updated = remove_block(exports, identifier, self.config.encoding)
        if updated is None:
            raise IdentifierNotFoundError(identifier, str(path))

        await write_exports(path, updated, self.config.file_mode)
        log.info(f"Removed export {identifier}", extra={"operation": "remove"})
        return updated

    async def exists(
        self,
        exports_file: str | Path,
        identifier: str,
        *,
        treat_missing_as_empty: bool = False,
    ) -> bool:
        """Check whether both markers for an identifier are present.

        Only blocks created by ``add`` are recognised, and no structural
        check is made between the two markers.
        """
        path = self.config.resolve_path(exports_file)
        exports = await read_exports(path, missing_ok=treat_missing_as_empty)
        return has_block(exports, identifier, self.config.encoding)

    async def list(
        self,
        exports_file: str | Path,
        *,
        treat_missing_as_empty: bool = False,
    ) -> dict[str, str]:
        """List exports created by this store.

        Each identifier maps to the single line following its begin
        marker. Other exports in the file are not returned; see
        ``list_all``.
        """
        path = self.config.resolve_path(exports_file)
        exports = await read_exports(path, missing_ok=treat_missing_as_empty)
        return read_managed(exports, self.config.encoding)

    async def list_all(
        self,
        exports_file: str | Path,
        *,
        treat_missing_as_empty: bool = False,
    ) -> builtins.list[str]:  # the list method shadows the builtin here
        """List every export line in the file.

        Lines are not validated: any non-empty line without a comment
        character is returned, managed or not.
        """
        path = self.config.resolve_path(exports_file)
        exports = await read_exports(path, missing_ok=treat_missing_as_empty)
        return read_export_lines(exports, self.config.encoding)

    async def reload_daemon(self) -> None:
        """Ask the NFS daemon to reload its exports.

        Single attempt; blocks until the reload command exits.

        Raises:
            SubprocessFailedError: If the reload command fails
        """
        try:
            await self.reloader.reload()
        except SubprocessFailedError as e:
            logger.error(
                "Reloading NFS daemon failed",
                exc_info=True,
                extra={"operation": "reload_daemon", "returncode": e.returncode},
            )
            raise
        logger.info("Reloaded NFS daemon", extra={"operation": "reload_daemon"})
