"""
Literal substring search.
"""

from __future__ import annotations

from collections.abc import Iterator

from ..types import InvalidArgumentError


def iter_substring_indices(haystack: str, needle: str) -> Iterator[int]:
    """
    Yield every start offset of `needle` in `haystack`, ascending.

    The search resumes one character after each match start, so overlapping
    occurrences are reported too ("aa" in "aaa" yields 0 and 1).
    """
    if not needle:
        raise InvalidArgumentError("Cannot search for an empty substring")
    return _iter_indices(haystack, needle)


def _iter_indices(haystack: str, needle: str) -> Iterator[int]:
    index = haystack.find(needle)
    while index != -1:
        yield index
        index = haystack.find(needle, index + 1)


def find_all_substring_indices(haystack: str, needle: str) -> list[int]:
    return list(iter_substring_indices(haystack, needle))
