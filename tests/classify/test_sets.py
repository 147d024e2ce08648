# SPDX-License-Identifier: MIT
"""
Tests for the ordered-set helpers.
"""
from slc.classify.sets import (
    difference,
    extract_intersection,
    intersection,
    sort_strings,
    union,
    unique,
)


class TestUnique:
    """Test normalization and deduplication."""

    def test_trims_drops_empty_and_dedupes(self):
        """Whitespace-only tokens vanish and first-seen order is kept."""
        assert unique(["a", "b", "a", " ", "c", "", "b"]) == ["a", "b", "c"]

    def test_trimmed_duplicates_collapse(self):
        assert unique([" fur", "fur ", "fur"]) == ["fur"]

    def test_case_sensitive(self):
        assert unique(["Fur", "fur"]) == ["Fur", "fur"]

    def test_none_is_empty(self):
        assert unique(None) == []


class TestUnion:
    """Test union."""

    def test_union_keeps_order(self):
        assert union(["a", "b"], ["b", "c"]) == ["a", "b", "c"]

    def test_inputs_not_mutated(self):
        a = ["a", "b"]
        b = ["b", "c"]
        union(a, b)
        assert a == ["a", "b"]
        assert b == ["b", "c"]

    def test_superset_of_both(self):
        a = ["x", " y", "x"]
        b = ["z", "y "]
        result = union(a, b)
        assert set(unique(a)) <= set(result)
        assert set(unique(b)) <= set(result)


class TestDifference:
    """Test difference."""

    def test_difference(self):
        assert difference(["a", "b", "c", "b"], ["b"]) == ["a", "c"]

    def test_difference_normalizes_both_sides(self):
        assert difference([" a ", "b"], ["a  "]) == ["b"]

    def test_elements_in_a_not_in_b(self):
        a = ["p", "q", "r", "q"]
        b = ["q", "s"]
        for v in difference(a, b):
            assert v in unique(a)
            assert v not in unique(b)


class TestIntersection:
    """Test intersection ordering and membership."""

    def test_order_follows_second_argument(self):
        assert intersection(["a", "b", "c"], ["c", "b", "d", "b"]) == ["c", "b"]

    def test_members_of_both(self):
        a = ["one", "two", " three"]
        b = ["three", "four", "one"]
        for v in intersection(a, b):
            assert v in unique(a)
            assert v in unique(b)

    def test_disjoint(self):
        assert intersection(["a"], ["b"]) == []


class TestExtractIntersection:
    """Test splitting shared elements out of two collections."""

    def test_removes_shared(self):
        na, nb, inter = extract_intersection(["a", "b", "c"], ["b", "c", "d"])
        assert na == ["a"]
        assert nb == ["d"]
        assert inter == ["b", "c"]

    def test_no_overlap_returns_normalized_inputs(self):
        na, nb, inter = extract_intersection(["a", " a"], ["b", ""])
        assert na == ["a"]
        assert nb == ["b"]
        assert inter == []


def test_sort_strings_returns_sorted_copy():
    values = ["b", "a", "c"]
    assert sort_strings(values) == ["a", "b", "c"]
    assert values == ["b", "a", "c"]
