# SPDX-License-Identifier: MIT
"""Locating where a string stops matching a grammar."""

from __future__ import annotations

from typing import Callable


def index_of_match_failure(text: str, viable: Callable[[str], bool]) -> int:
    """Find the offset at which ``text`` diverges from a grammar.

    ``viable`` must answer whether a prefix either matches the grammar or could
    still be extended into a match. Viability is prefix-closed (every prefix of
    a viable string is viable), so the boundary between viable and non-viable
    prefix lengths can be found by binary search.

    Args:
        text: The rejected input
        viable: Predicate over prefixes of ``text``

    Returns:
        Length of the longest viable prefix, i.e. the index of the first
        offending character (``len(text)`` if the whole input is viable but
        incomplete)

    Examples:
        >>> index_of_match_failure("abcx", lambda p: "abcd".startswith(p))
        3
    """
    ret = 0
    low, high = 0, len(text)
    while low <= high:
        mid = (low + high) // 2
        if viable(text[:mid]):
            ret = mid
            low = mid + 1
        else:
            high = mid - 1
    return ret
