"""
Local file access for exports files.

Every store operation reads the whole file and, for mutations, writes
the whole file back. Nothing is cached between calls.
"""

from .file_ops import DEFAULT_FILE_MODE, candidate_file, read_exports, write_exports

__all__ = [
    "DEFAULT_FILE_MODE",
    "read_exports",
    "write_exports",
    "candidate_file",
]
