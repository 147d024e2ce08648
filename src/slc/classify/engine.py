# SPDX-License-Identifier: MIT
"""
Overlap-based classification between two classes.

A query is scored against each class by counting how many of its properties
the class owns. The class with more hits wins; equal non-zero scores are a
tie and zero on both sides is no evidence at all.
"""
from __future__ import annotations

from typing import Iterable, List, Tuple

from slc.core.models import Class

from .sets import union, unique

REASON_NO_MATCH = "no matching properties; user confirmation required"
REASON_TIE = "equal number of matches for both classes; user confirmation required"
REASON_DECISIVE = "more properties matched {guess}"

RECOMMEND_CONFIRM = "Please confirm or adjust the suggestion."
RECOMMEND_DISAMBIGUATE = (
    'Please specify whether it is "{class1}" or "{class2}". '
    "Otherwise, unknown properties will be added to 'none'."
)


def score(cls: Class, props: Iterable[str]) -> Tuple[List[str], int]:
    """
    Count the query properties owned by *cls*.

    Returns:
        Tuple of (hits in query order, number of hits)
    """
    owned = set(unique(cls.properties))
    hits = [p for p in unique(props) if p in owned]
    return hits, len(hits)


def choose(class1: Class, class2: Class, props: Iterable[str]) -> Tuple[str, List[str]]:
    """
    Pick the class with more hits.

    Returns:
        Tuple of (guessed class name, hits). The name is empty when there is
        no evidence (no hits) or when both classes score the same; a tie
        reports the hits of both classes.
    """
    props = unique(props)
    hits1, score1 = score(class1, props)
    hits2, score2 = score(class2, props)

    if score1 == 0 and score2 == 0:
        return "", []
    if score1 > score2:
        return class1.name, hits1
    if score2 > score1:
        return class2.name, hits2
    return "", union(hits1, hits2)


def explain(guess: str, hits: List[str]) -> str:
    """Human-readable rationale for a :func:`choose` outcome."""
    if not guess and not hits:
        return REASON_NO_MATCH
    if not guess:
        return REASON_TIE
    return REASON_DECISIVE.format(guess=guess)


def recommend(guess: str, class1_name: str, class2_name: str) -> str:
    """Next step to suggest to the user after classification."""
    if not guess:
        return RECOMMEND_DISAMBIGUATE.format(class1=class1_name, class2=class2_name)
    return RECOMMEND_CONFIRM
