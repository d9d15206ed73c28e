"""
Whole-file operations for exports files.

Provides:
- Whole-file reads with optional tolerance for a missing file
- In-place overwrites with a fixed mode for newly created files
- Scoped temporary copies of candidate content for external checkers
"""

import functools
import os
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiofiles
import aiofiles.os

from ..exceptions import ExportsFileNotFoundError, ExportsIOError

DEFAULT_FILE_MODE = 0o644


async def read_exports(path: Path, missing_ok: bool = False) -> bytes:
    """Read the full content of an exports file.

    Args:
        path: Path to the exports file
        missing_ok: Return empty content instead of raising when the file
            does not exist

    Returns:
        Raw file content

    Raises:
        ExportsFileNotFoundError: If the file is missing and missing_ok is False
        ExportsIOError: On any other read failure
    """
    try:
        async with aiofiles.open(path, "rb") as f:
            return await f.read()
    except FileNotFoundError as e:
        if missing_ok:
            return b""
        raise ExportsFileNotFoundError(str(path)) from e
    except OSError as e:
        raise ExportsIOError("read_exports", str(path), e) from e


def _mode_opener(mode: int, path: str, flags: int) -> int:
    return os.open(path, flags, mode)


async def write_exports(path: Path, content: bytes, mode: int = DEFAULT_FILE_MODE) -> None:
    """Overwrite an exports file with new content.

    The file is truncated and rewritten in place, keeping its inode and
    ownership. ``mode`` applies only when the file is created.

    Args:
        path: Target path
        content: Full new content
        mode: Permission bits for a newly created file
    """
    try:
        async with aiofiles.open(
            path, "wb", opener=functools.partial(_mode_opener, mode)
        ) as f:
            await f.write(content)
            await f.flush()
    except OSError as e:
        raise ExportsIOError("write_exports", str(path), e) from e


@asynccontextmanager
async def candidate_file(content: bytes, prefix: str = "exports") -> AsyncIterator[Path]:
    """Write candidate content to a private temporary file.

    The file is removed when the context exits, including when the body
    raises.

    Args:
        content: Candidate exports content
        prefix: Temporary file name prefix

    Yields:
        Path of the temporary file
    """
    try:
        fd, temp_path = tempfile.mkstemp(prefix=prefix)
        os.close(fd)
    except OSError as e:
        raise ExportsIOError("create_candidate", None, e) from e

    try:
        try:
            async with aiofiles.open(temp_path, "wb") as f:
                await f.write(content)
                await f.flush()
        except OSError as e:
            raise ExportsIOError("write_candidate", temp_path, e) from e
        yield Path(temp_path)
    finally:
        try:
            await aiofiles.os.remove(temp_path)
        except FileNotFoundError:
            pass
