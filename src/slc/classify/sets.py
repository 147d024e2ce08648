# SPDX-License-Identifier: MIT
"""
Ordered-set helpers over property strings.

Every helper normalizes its inputs (trimmed, non-empty, deduplicated in
first-seen order) and returns a new list; inputs are never mutated.
"""
from __future__ import annotations

from typing import Iterable, List, Tuple


def normalize(value: str) -> str:
    """Trim surrounding whitespace from a property token."""
    return str(value).strip()


def unique(values: Iterable[str]) -> List[str]:
    """Normalize, drop empty tokens and deduplicate, preserving first-seen order."""
    seen = set()
    out = []
    for value in values or ():
        value = normalize(value)
        if not value or value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out


def union(a: Iterable[str], b: Iterable[str]) -> List[str]:
    """Elements of *a* followed by the new elements of *b*."""
    return unique([*(a or ()), *(b or ())])


def difference(a: Iterable[str], b: Iterable[str]) -> List[str]:
    """Elements of *a* not present in *b*."""
    exclude = set(unique(b))
    return [v for v in unique(a) if v not in exclude]


def intersection(a: Iterable[str], b: Iterable[str]) -> List[str]:
    """
    Elements of *b* that are also in *a*.

    Ordering follows *b*, not *a*; callers that display the result sort it.
    """
    members = set(unique(a))
    return [v for v in unique(b) if v in members]


def extract_intersection(
    a: Iterable[str], b: Iterable[str]
) -> Tuple[List[str], List[str], List[str]]:
    """
    Split the shared part out of two collections.

    Returns:
        Tuple of (a without shared, b without shared, shared)
    """
    inter = intersection(a, b)
    if not inter:
        return unique(a), unique(b), []
    return difference(a, inter), difference(b, inter), inter


def sort_strings(values: Iterable[str]) -> List[str]:
    """Lexicographically sorted copy."""
    return sorted(values or ())
