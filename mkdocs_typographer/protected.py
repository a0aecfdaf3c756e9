r"""Locate substrings that typography rules must never rewrite.

URLs, email addresses, IPv4 addresses, semantic versions and hexadecimal
literals all contain characters (dots, dashes, digits, colons) that rules
would otherwise happily "fix". Ranges are half-open ``(start, end)`` offsets
into one specific snapshot of a string and must be recomputed after any
mutation.

Typical usage:
    >>> from mkdocs_typographer.protected import find_protected_ranges, is_protected
    >>> ranges = find_protected_ranges("Install v1.2.3 from 0x1F")
    >>> ranges
    [(8, 14), (20, 24)]
    >>> is_protected(10, ranges)
    True
    >>> is_protected(14, ranges)
    False
"""

from __future__ import annotations

import re
from typing import List, Sequence, Tuple


ProtectedRange = Tuple[int, int]

RE_URL = re.compile(r"https?://[^\s<>\"'«»„“”]+")
RE_EMAIL = re.compile(r"[\w.+-]+@[\w.-]+\.\w{2,}")
RE_IPV4 = re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b")
RE_VERSION = re.compile(r"\bv?\d+\.\d+\.\d+(?:\.\d+)?\b")
RE_HEX = re.compile(r"\b0x[0-9a-fA-F]+\b")

PROTECTED_PATTERNS: Tuple[re.Pattern[str], ...] = (
    RE_URL,
    RE_EMAIL,
    RE_IPV4,
    RE_VERSION,
    RE_HEX,
)


def find_protected_ranges(text: str) -> List[ProtectedRange]:
    """Return every protected span of ``text`` sorted by start offset.

    Matches from different patterns may overlap; consumers only test point
    containment, so no merging is performed.
    """
    ranges: List[ProtectedRange] = []
    for pattern in PROTECTED_PATTERNS:
        for match in pattern.finditer(text):
            ranges.append((match.start(), match.end()))
    ranges.sort(key=lambda rng: rng[0])
    return ranges


def is_protected(offset: int, ranges: Sequence[ProtectedRange]) -> bool:
    """Return whether ``offset`` falls inside any half-open range."""
    return any(start <= offset < end for start, end in ranges)


def overlaps_protected(
    start: int, end: int, ranges: Sequence[ProtectedRange]
) -> bool:
    """Return whether the span ``[start, end)`` touches a protected range.

    A zero-width span (an insertion point) is protected only when it sits
    strictly inside a range; inserting at a range boundary leaves the
    protected text intact.

    Examples:
        >>> overlaps_protected(3, 3, [(0, 3)])
        False
        >>> overlaps_protected(2, 2, [(0, 3)])
        True
    """
    if start == end:
        return any(rng_start < start < rng_end for rng_start, rng_end in ranges)
    return any(start < rng_end and end > rng_start for rng_start, rng_end in ranges)
