# SPDX-License-Identifier: MIT
"""
Property-overlap classification.

Provides the ordered-set algebra used to keep the two classes disjoint and
the scoring rules that produce a guess:
- decisive: one class owns more query properties
- tie: both classes own the same non-zero number
- no match: neither class owns any
"""

from .engine import choose, explain, recommend, score
from .sets import (
    difference,
    extract_intersection,
    intersection,
    normalize,
    sort_strings,
    union,
    unique,
)

__all__ = [
    "choose",
    "explain",
    "recommend",
    "score",
    "difference",
    "extract_intersection",
    "intersection",
    "normalize",
    "sort_strings",
    "union",
    "unique",
]
