"""Case-aware alphabetical ordering of strings."""

from __future__ import annotations


def lexicographic_less(a: str, b: str) -> bool:
    """Return True if ``a`` sorts before ``b``.

    Characters are compared case-insensitively first. Where they differ only
    in case, the upper-case one comes first. If one string is a prefix of the
    other, the shorter one comes first.
    """
    for left, right in zip(a, b):
        lower_left, lower_right = left.lower(), right.lower()
        if lower_left != lower_right:
            return lower_left < lower_right
        if left != right:
            return left < right
    return a < b