"""
Configuration for the export block store.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

import yaml

from ..daemon.nfsd import DEFAULT_EXPORTFS_PATH, DEFAULT_NFSD_PATH, DEFAULT_SUDO_PATH
from ..exceptions import ExportsIOError, InvalidConfigError
from ..local.file_ops import DEFAULT_FILE_MODE

logger = logging.getLogger(__name__)

DEFAULT_EXPORTS_PATH = "/etc/exports"

# Owner/group/other read and write; no execute, setuid, setgid or sticky bits
ALLOWED_MODE_BITS = 0o666


class ValidatorKind(Enum):
    """Which checker validates candidate exports files.

    NFSD: Run ``nfsd -F <file> checkexports``
    NONE: Accept every candidate
    """

    NFSD = "nfsd"
    NONE = "none"


class ReloaderKind(Enum):
    """Which command reloads the NFS daemon.

    NFSD: ``nfsd update`` (macOS)
    EXPORTFS: ``exportfs -ra`` (Linux)
    """

    NFSD = "nfsd"
    EXPORTFS = "exportfs"


_Kind = TypeVar("_Kind", ValidatorKind, ReloaderKind)


class _ConfigLoader(yaml.SafeLoader):
    """SafeLoader that keeps integers as written.

    YAML 1.1 reads ``644`` as decimal and ``0644`` as octal; file modes
    are parsed from the original text instead.
    """


_ConfigLoader.add_constructor("tag:yaml.org,2002:int", yaml.SafeLoader.construct_scalar)


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes", "on")
    return bool(value)


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return _flag(value)


def _parse_kind(kind: type[_Kind], value: Any) -> _Kind:
    """Look up a validator or reloader kind, falling back to nfsd."""
    try:
        return kind(str(value).lower())
    except ValueError:
        logger.warning(f"Unknown {kind.__name__} {value!r}, using nfsd")
        return kind("nfsd")


def parse_file_mode(value: Any) -> int:
    """Parse a permission mode written in octal.

    ``644``, ``0644`` and ``0o644`` all mean ``0o644``.

    Raises:
        InvalidConfigError: If the value is not an octal number
    """
    if not isinstance(value, str):
        raise InvalidConfigError("file_mode", "expected an octal mode", str(value))
    text = value.strip().lower()
    if text.startswith("0o"):
        text = text[2:]
    try:
        return int(text, 8)
    except ValueError as e:
        raise InvalidConfigError("file_mode", "expected an octal mode", value) from e


@dataclass
class StoreConfig:
    """Configuration for the export block store.

    Configuration can be provided directly, via environment variables or
    via the ``exports:`` section of a YAML file.

    Environment Variables:
        NFS_EXPORTS_FILE: Default exports file (default: /etc/exports)
        NFS_EXPORTS_NFSD_PATH: nfsd binary (default: /sbin/nfsd)
        NFS_EXPORTS_EXPORTFS_PATH: exportfs binary (default: /usr/sbin/exportfs)
        NFS_EXPORTS_SUDO_PATH: Privilege wrapper (default: sudo)
        NFS_EXPORTS_USE_SUDO: Wrap reload commands in sudo (default: true)
        NFS_EXPORTS_VALIDATOR: nfsd or none (default: nfsd)
        NFS_EXPORTS_RELOADER: nfsd or exportfs (default: nfsd)
        NFS_EXPORTS_ENCODING: Encoding for identifiers and payloads (default: utf-8)

    Attributes:
        exports_path: File used when an operation gets an empty path
        nfsd_path: Path to the nfsd binary
        exportfs_path: Path to the exportfs binary
        sudo_path: Privilege wrapper for reload commands
        use_sudo: Whether reload commands run through sudo_path
        validator: Which validator checks candidates
        reloader: Which command reloads the daemon
        file_mode: Permission bits for newly created exports files
        encoding: Encoding for identifiers and payloads
    """

    exports_path: str = DEFAULT_EXPORTS_PATH
    nfsd_path: str = DEFAULT_NFSD_PATH
    exportfs_path: str = DEFAULT_EXPORTFS_PATH
    sudo_path: str = DEFAULT_SUDO_PATH
    use_sudo: bool = True
    validator: ValidatorKind = ValidatorKind.NFSD
    reloader: ReloaderKind = ReloaderKind.NFSD
    file_mode: int = DEFAULT_FILE_MODE
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Reject modes with execute or special bits."""
        if self.file_mode & ~ALLOWED_MODE_BITS:
            raise InvalidConfigError(
                "file_mode", "execute and special bits are not allowed", oct(self.file_mode)
            )

    def resolve_path(self, exports_file: str | Path | None) -> Path:
        """Return the target path, substituting the default for an empty one."""
        if not exports_file:
            return Path(self.exports_path)
        return Path(exports_file)

    @classmethod
    def from_environment(cls) -> StoreConfig:
        """Create configuration from environment variables.

        Unknown validator or reloader names fall back to nfsd.
        """
        return cls(
            exports_path=os.environ.get("NFS_EXPORTS_FILE", DEFAULT_EXPORTS_PATH),
            nfsd_path=os.environ.get("NFS_EXPORTS_NFSD_PATH", DEFAULT_NFSD_PATH),
            exportfs_path=os.environ.get("NFS_EXPORTS_EXPORTFS_PATH", DEFAULT_EXPORTFS_PATH),
            sudo_path=os.environ.get("NFS_EXPORTS_SUDO_PATH", DEFAULT_SUDO_PATH),
            use_sudo=_env_flag("NFS_EXPORTS_USE_SUDO", True),
            validator=_parse_kind(ValidatorKind, os.environ.get("NFS_EXPORTS_VALIDATOR", "nfsd")),
            reloader=_parse_kind(ReloaderKind, os.environ.get("NFS_EXPORTS_RELOADER", "nfsd")),
            encoding=os.environ.get("NFS_EXPORTS_ENCODING", "utf-8"),
        )

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> StoreConfig:
        """Create configuration from the ``exports:`` section of a YAML file.

        ```yaml
        exports:
          path: /etc/exports
          nfsd_path: /sbin/nfsd
          use_sudo: true
          validator: nfsd
          reloader: nfsd
          file_mode: 644
        ```

        A missing file or section yields the defaults. ``file_mode`` is
        always read as octal, and unknown validator or reloader names fall
        back to nfsd as in ``from_environment``.

        Raises:
            ExportsIOError: If the file cannot be read or parsed
            InvalidConfigError: If ``file_mode`` is not a usable octal mode
        """
        config_path = Path(config_path)
        if not config_path.exists():
            logger.debug(f"Config file {config_path} not found, using defaults")
            return cls()

        try:
            with open(config_path) as f:
                data = yaml.load(f, Loader=_ConfigLoader) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ExportsIOError("read_config", str(config_path), e) from e

        section: dict[str, Any] = data.get("exports") or {}
        defaults = cls()
        file_mode = defaults.file_mode
        if "file_mode" in section:
            file_mode = parse_file_mode(section["file_mode"])

        return cls(
            exports_path=section.get("path", defaults.exports_path),
            nfsd_path=section.get("nfsd_path", defaults.nfsd_path),
            exportfs_path=section.get("exportfs_path", defaults.exportfs_path),
            sudo_path=section.get("sudo_path", defaults.sudo_path),
            use_sudo=_flag(section.get("use_sudo", defaults.use_sudo)),
            validator=_parse_kind(ValidatorKind, section.get("validator", "nfsd")),
            reloader=_parse_kind(ReloaderKind, section.get("reloader", "nfsd")),
            file_mode=file_mode,
            encoding=section.get("encoding", defaults.encoding),
        )
