"""String similarity and "did you mean" suggestions for flags and commands."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from typing import Any

HELP_NAME = "help"
HELP_ALIAS = "h"
DEFAULT_HELP_NAMES: tuple[str, ...] = (HELP_NAME, HELP_ALIAS)

SUGGEST_DID_YOU_MEAN_TEMPLATE = "Did you mean {}?"


def jaro_distance(a: str, b: str) -> float:
    """Jaro similarity: 1.0 for identical strings, 0.0 for entirely different ones."""
    left = a.encode("utf-8")
    right = b.encode("utf-8")
    if not left and not right:
        return 1.0
    if not left or not right:
        return 0.0

    len_a, len_b = len(left), len(right)
    matched_a = [False] * len_a
    matched_b = [False] * len_b
    max_distance = max(0, max(len_a, len_b) // 2 - 1)

    matches = 0
    for i, char in enumerate(left):
        start = max(0, i - max_distance)
        end = min(len_b - 1, i + max_distance)
        for j in range(start, end + 1):
            if matched_b[j]:
                continue
            if char == right[j]:
                matched_a[i] = True
                matched_b[j] = True
                matches += 1
                break

    if matches == 0:
        return 0.0

    transpositions = 0
    j = 0
    for i, char in enumerate(left):
        if not matched_a[i]:
            continue
        while not matched_b[j]:
            j += 1
        if char != right[j]:
            transpositions += 1
        j += 1

    half_transpositions = transpositions / 2
    return (
        matches / len_a + matches / len_b + (matches - half_transpositions) / matches
    ) / 3.0


def jaro_winkler(a: str, b: str) -> float:
    """Jaro similarity boosted for strings sharing a common prefix of up to four bytes."""
    boost_threshold = 0.7
    prefix_size = 4

    distance = jaro_distance(a, b)
    if distance <= boost_threshold:
        return distance

    left = a.encode("utf-8")
    right = b.encode("utf-8")
    prefix = min(len(left), prefix_size, len(right))

    prefix_match = 0
    for x, y in zip(left[:prefix], right[:prefix]):
        if x != y:
            break
        prefix_match += 1
    return distance + 0.1 * prefix_match * (1.0 - distance)


def _names_of(item: Any) -> list[str]:
    names = getattr(item, "names", None)
    if callable(names):
        return list(names())
    if names is not None:
        return list(names)
    if isinstance(item, str):
        return [item]
    return list(item)


def suggest_flag(
    flags: Iterable[Any],
    provided: str,
    hide_help: bool = False,
    help_names: Sequence[str] | None = DEFAULT_HELP_NAMES,
) -> str:
    """Return the flag spelling (with dashes) closest to ``provided``, or ``""``.

    Each flag is an object with a ``names()`` method (or ``names`` attribute),
    or a plain sequence of names. Unless ``hide_help`` is set, the help flag
    names in ``help_names`` are also considered.
    """
    best = 0.0
    suggestion = ""
    extra = [] if hide_help or help_names is None else list(help_names)

    for flag in flags:
        for name in _names_of(flag) + extra:
            score = jaro_winkler(name, provided)
            if score > best:
                best = score
                suggestion = name

    if len(suggestion) == 1:
        return "-" + suggestion
    if len(suggestion) > 1:
        return "--" + suggestion
    return suggestion


def suggest_command(commands: Iterable[Any], provided: str) -> str:
    """Return the command name or alias closest to ``provided``, or ``""``."""
    best = 0.0
    suggestion = ""
    for command in commands:
        for name in _names_of(command) + [HELP_NAME, HELP_ALIAS]:
            score = jaro_winkler(name, provided)
            if score > best:
                best = score
                suggestion = name
    return suggestion


def did_you_mean(suggestion: str) -> str:
    """Format a suggestion as a quoted "Did you mean" hint."""
    return SUGGEST_DID_YOU_MEAN_TEMPLATE.format(json.dumps(suggestion, ensure_ascii=False))