# SPDX-License-Identifier: MIT
"""
End-to-end classification scenarios over a persisted user.
"""
import pytest

from slc.classify.engine import choose
from slc.core.models import Class
from slc.state.user_service import UserService
from slc.store.base import MemoryStore


@pytest.fixture
def cat_dog():
    us = UserService(MemoryStore(), "scenario")
    us.init(
        Class("Cat", ["whiskers", "purr", "whiskers"]),
        Class("Dog", ["bark", "tail", "whiskers"]),
    )
    return us


def test_shared_property_promoted_on_init(cat_dog):
    snap = cat_dog.snapshot()
    assert snap.class1.properties == ["purr"]
    assert snap.class2.properties == ["bark", "tail"]
    assert snap.general_class == ["whiskers"]


def test_classify_after_init(cat_dog):
    result = cat_dog.classify(["purr"])
    assert result.guess == "Cat"
    assert result.known_hits == ["purr"]


def test_none_feedback_ignores_known(cat_dog):
    cat_dog.feedback("none", ["purr", "new_unknown"])
    assert cat_dog.snapshot().none_class == ["new_unknown"]


def test_class2_feedback_adds_new_only(cat_dog):
    cat_dog.feedback("class2", ["tail", "fur"])
    snap = cat_dog.snapshot()
    assert snap.class2.properties == ["bark", "tail", "fur"]
    assert snap.general_class == ["whiskers"]


def test_tie_surfaces_all_hits():
    guess, hits = choose(
        Class("Cat", ["whiskers", "purr"]),
        Class("Dog", ["bark", "tail"]),
        ["whiskers", "tail"],
    )
    assert guess == ""
    assert sorted(hits) == ["tail", "whiskers"]


def test_exclusivity_holds_after_every_mutation(cat_dog):
    steps = [
        ("class1", ["bark", "fur"]),
        ("class2", ["fur", "scales"]),
        ("none", ["fur", "ghost"]),
        ("class1", ["scales", "claws"]),
    ]
    for variant, props in steps:
        cat_dog.feedback(variant, props)
        snap = cat_dog.snapshot()
        assert not set(snap.class1.properties) & set(snap.class2.properties)
    assert {"whiskers", "bark", "fur", "scales"} <= set(cat_dog.snapshot().general_class)
