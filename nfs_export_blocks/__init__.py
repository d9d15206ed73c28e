"""
NFS Export Blocks

Manages identifier-keyed blocks in an NFS exports file.

Provides:
- Idempotent insertion of marker-delimited export blocks
- Removal, existence checks and listing of managed blocks
- Validation of candidate files before they reach disk (nfsd checkexports)
- Daemon reload (nfsd update, exportfs -ra)

Usage:

    >>> from nfs_export_blocks import ExportBlockStore, StoreConfig
    >>> store = ExportBlockStore.from_config(StoreConfig())
    >>> await store.add("", "vm-1", "/Users 192.168.64.2 -alldirs -maproot=root")
    >>> await store.list("")
    {'vm-1': '/Users 192.168.64.2 -alldirs -maproot=root'}
    >>> await store.reload_daemon()

Blocks are written as:

    # BEGIN: vm-1
    /Users 192.168.64.2 -alldirs -maproot=root
    # END: vm-1
"""

# Block model
from .blocks import ManagedBlock

# Collaborators
from .daemon import (
    AcceptAllValidator,
    DaemonReloader,
    ExportfsReloader,
    ExportsValidator,
    NfsdReloader,
    NfsdValidator,
    ValidationResult,
)

# Exceptions
from .exceptions import (
    ExportsFileNotFoundError,
    ExportsIOError,
    ExportStoreError,
    IdentifierNotFoundError,
    InvalidConfigError,
    SubprocessFailedError,
    ValidationFailedError,
)

# Logging
from .logging_utils import ExportsJsonFormatter, configure_exports_logging

# Store
from .store import ExportBlockStore, ReloaderKind, StoreConfig, ValidatorKind

__all__ = [
    # Store
    "ExportBlockStore",
    "StoreConfig",
    "ValidatorKind",
    "ReloaderKind",
    # Logging
    "ExportsJsonFormatter",
    "configure_exports_logging",
    # Block model
    "ManagedBlock",
    # Collaborators
    "ExportsValidator",
    "DaemonReloader",
    "ValidationResult",
    "NfsdValidator",
    "AcceptAllValidator",
    "NfsdReloader",
    "ExportfsReloader",
    # Exceptions
    "ExportStoreError",
    "ExportsFileNotFoundError",
    "IdentifierNotFoundError",
    "InvalidConfigError",
    "ValidationFailedError",
    "SubprocessFailedError",
    "ExportsIOError",
]

__version__ = "0.1.0"
