"""
Export block store.

Example:
    >>> from nfs_export_blocks.store import ExportBlockStore, StoreConfig
    >>> store = ExportBlockStore.from_config(StoreConfig.from_environment())
    >>> await store.add("", "vm-1", "/Users 192.168.64.2 -alldirs -maproot=root")
"""

from .base import DEFAULT_EXPORTS_PATH, ReloaderKind, StoreConfig, ValidatorKind
from .exports import ExportBlockStore

__all__ = [
    # Configuration
    "StoreConfig",
    "ValidatorKind",
    "ReloaderKind",
    "DEFAULT_EXPORTS_PATH",
    # Store
    "ExportBlockStore",
]
