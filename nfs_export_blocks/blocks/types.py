"""
Managed block types and marker format.

A managed block is a region of the exports file owned by this library:

    # BEGIN: <identifier>
    <payload>
    # END: <identifier>

Identifiers are embedded verbatim. No quoting or escaping is applied, so an
identifier that contains marker syntax or a newline produces a file the
reader cannot interpret reliably.
"""

from __future__ import annotations

from dataclasses import dataclass

BEGIN_PREFIX = "# BEGIN:"
END_PREFIX = "# END:"
COMMENT_CHAR = "#"
DEFAULT_ENCODING = "utf-8"


def begin_marker(identifier: str, encoding: str = DEFAULT_ENCODING) -> bytes:
    """Begin marker for an identifier, without the line terminator."""
    return f"{BEGIN_PREFIX} {identifier}".encode(encoding)


def end_marker(identifier: str, encoding: str = DEFAULT_ENCODING) -> bytes:
    """End marker for an identifier, including the line terminator."""
    return f"{END_PREFIX} {identifier}\n".encode(encoding)


@dataclass(frozen=True)
class ManagedBlock:
    """A block as created by ``ExportBlockStore.add``.

    Attributes:
        identifier: Caller-supplied name of the block
        payload: Export line(s) placed between the markers, inserted as-is
    """

    identifier: str
    payload: str

    def begin_marker(self, encoding: str = DEFAULT_ENCODING) -> bytes:
        return begin_marker(self.identifier, encoding)

    def end_marker(self, encoding: str = DEFAULT_ENCODING) -> bytes:
        return end_marker(self.identifier, encoding)

    def render(self, encoding: str = DEFAULT_ENCODING) -> bytes:
        """Render the block as three newline-terminated lines."""
        return (
            f"{BEGIN_PREFIX} {self.identifier}\n"
            f"{self.payload}\n"
            f"{END_PREFIX} {self.identifier}\n"
        ).encode(encoding)
