"""
Validator and reloader collaborators.

Provides:
- Abstract ExportsValidator and DaemonReloader interfaces
- nfsd-backed validation and reload (macOS)
- exportfs-backed reload (Linux)
- An accept-all validator for hosts without a checker
"""

from .base import DaemonReloader, ExportsValidator, ValidationResult
from .commands import CommandResult, run_command
from .nfsd import AcceptAllValidator, ExportfsReloader, NfsdReloader, NfsdValidator

__all__ = [
    "ExportsValidator",
    "DaemonReloader",
    "ValidationResult",
    "CommandResult",
    "run_command",
    "NfsdValidator",
    "AcceptAllValidator",
    "NfsdReloader",
    "ExportfsReloader",
]
