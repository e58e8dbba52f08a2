"""
Offset to line/column conversion for reporting.

Lines are delimited by `\\n`, so CRLF sources work; CR-only sources do not.
"""

from __future__ import annotations


def line_and_column(source: str, offset: int) -> tuple[int, int]:
    """
    Return the 1-based (line, column) of `offset` in `source`.

    Offsets past the end are clamped to the end of the source.
    """
    if offset < 0:
        raise ValueError(f"Offset must be >= 0, got {offset}")
    offset = min(offset, len(source))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def line_text(source: str, offset: int) -> str:
    """The full line containing `offset`, without its line ending."""
    if offset < 0:
        raise ValueError(f"Offset must be >= 0, got {offset}")
    offset = min(offset, len(source))
    start = source.rfind("\n", 0, offset) + 1
    end = source.find("\n", offset)
    if end == -1:
        end = len(source)
    return source[start:end].rstrip("\r")
