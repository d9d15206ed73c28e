"""
Read-only scans over raw exports content.

All functions take the raw file bytes and never mutate them. Marker
lookups are byte searches on first occurrence; the listing functions
work line by line on decoded text.
"""

from __future__ import annotations

from collections.abc import Iterator

from .types import BEGIN_PREFIX, COMMENT_CHAR, DEFAULT_ENCODING, begin_marker, end_marker


def find_block(
    content: bytes, identifier: str, encoding: str = DEFAULT_ENCODING
) -> tuple[int, int] | None:
    """Locate the span of a managed block.

    The begin and end markers are each searched independently by first
    occurrence, so no structural check is made between them.

    Args:
        content: Raw exports content
        identifier: Block identifier
        encoding: Encoding used for the marker bytes

    Returns:
        (start, stop) offsets covering the begin marker through the end
        marker's newline, or None if either marker is missing
    """
    begin = content.find(begin_marker(identifier, encoding))
    end_mark = end_marker(identifier, encoding)
    end = content.find(end_mark)
    if begin == -1 or end == -1:
        return None
    return begin, end + len(end_mark)


def has_block(content: bytes, identifier: str, encoding: str = DEFAULT_ENCODING) -> bool:
    """True if both markers for the identifier are present."""
    return find_block(content, identifier, encoding) is not None


def has_begin_line(content: bytes, identifier: str, encoding: str = DEFAULT_ENCODING) -> bool:
    """True if a complete begin marker line for the identifier is present.

    This is the duplicate check used before adding a block.
    """
    return begin_marker(identifier, encoding) + b"\n" in content


def iter_lines(content: bytes, encoding: str = DEFAULT_ENCODING) -> Iterator[str]:
    """Yield decoded lines without terminators.

    A trailing carriage return is dropped from each line and a final
    newline does not produce an extra empty line.
    """
    if not content:
        return
    raw_lines = content.split(b"\n")
    if content.endswith(b"\n"):
        raw_lines.pop()
    for raw in raw_lines:
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        yield raw.decode(encoding, errors="surrogateescape")


def _identifier_from_line(line: str) -> str:
    rest = line.partition(BEGIN_PREFIX)[2]
    if rest.startswith(" "):
        rest = rest[1:]
    return rest


def read_managed(content: bytes, encoding: str = DEFAULT_ENCODING) -> dict[str, str]:
    """Map each managed block identifier to its payload line.

    The line right after a begin marker is taken as the payload whatever
    it contains; multi-line payloads only report their first line. A
    begin marker on the last line is skipped.

    Args:
        content: Raw exports content
        encoding: Encoding used to decode lines

    Returns:
        Identifier to payload mapping in document order
    """
    exports: dict[str, str] = {}
    lines = iter_lines(content, encoding)
    for line in lines:
        if BEGIN_PREFIX not in line:
            continue
        payload = next(lines, None)
        if payload is None:
            break
        exports[_identifier_from_line(line)] = payload
    return exports


def read_export_lines(content: bytes, encoding: str = DEFAULT_ENCODING) -> list[str]:
    """Return every non-empty line that contains no comment character."""
    return [line for line in iter_lines(content, encoding) if line and COMMENT_CHAR not in line]
