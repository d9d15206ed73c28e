"""
Marker-block text model for exports files.

Blocks are recognised purely by their marker lines; everything else in
the file is unmanaged text that is carried through untouched.
"""

from .reader import (
    find_block,
    has_begin_line,
    has_block,
    iter_lines,
    read_export_lines,
    read_managed,
)
from .types import (
    BEGIN_PREFIX,
    COMMENT_CHAR,
    END_PREFIX,
    ManagedBlock,
    begin_marker,
    end_marker,
)
from .writer import append_block, remove_block

__all__ = [
    # Block types
    "ManagedBlock",
    "BEGIN_PREFIX",
    "END_PREFIX",
    "COMMENT_CHAR",
    "begin_marker",
    "end_marker",
    # Scans
    "find_block",
    "has_block",
    "has_begin_line",
    "iter_lines",
    "read_managed",
    "read_export_lines",
    # Mutations
    "append_block",
    "remove_block",
]
