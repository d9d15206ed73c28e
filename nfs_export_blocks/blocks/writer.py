"""
Pure mutations of raw exports content.

These functions compute the candidate content only; validation and
writing to disk belong to the store.
"""

from __future__ import annotations

from .reader import find_block
from .types import DEFAULT_ENCODING, ManagedBlock


def append_block(content: bytes, block: ManagedBlock, encoding: str = DEFAULT_ENCODING) -> bytes:
    """Append a rendered block to the content.

    Non-empty content that lacks a final newline gets one first, so the
    begin marker always starts its own line. Empty content gets no
    leading blank line.
    """
    if content and not content.endswith(b"\n"):
        content += b"\n"
    return content + block.render(encoding)


def remove_block(
    content: bytes, identifier: str, encoding: str = DEFAULT_ENCODING
) -> bytes | None:
    """Splice a managed block out of the content.

    Everything from the begin marker through the end marker's newline is
    removed. The remainder is stripped of surrounding whitespace and ends
    with exactly one newline, so an emptied file becomes ``b"\\n"``.

    An end marker that precedes the begin marker does not delimit a block;
    the content is then treated as having no block for the identifier.

    Returns:
        The new content, or None if the identifier's markers are missing
        or out of order
    """
    span = find_block(content, identifier, encoding)
    if span is None:
        return None
    start, stop = span
    if stop <= start:
        return None
    remaining = content[:start] + content[stop:]
    return remaining.strip() + b"\n"
