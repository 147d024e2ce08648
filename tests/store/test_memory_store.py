# SPDX-License-Identifier: MIT
"""
Tests for the in-process state store.
"""
from slc.core.models import UserRecord
from slc.store.base import MemoryStore


class TestMemoryStore:
    """Test load/save/delete semantics."""

    def test_empty_load(self):
        assert MemoryStore().load("nobody") is None

    def test_save_and_load_copy(self):
        store = MemoryStore()
        record = UserRecord("u1", "Cat", "Dog", ["purr"], ["bark"], [], [])
        store.save("u1", record)
        record.class1_props.append("mutated")

        loaded = store.load("u1")
        assert loaded.class1_props == ["purr"]
        loaded.class2_props.append("mutated")
        assert store.load("u1").class2_props == ["bark"]

    def test_delete_missing_is_not_an_error(self):
        store = MemoryStore()
        store.delete("nobody")
        assert len(store) == 0

    def test_save_replaces(self):
        store = MemoryStore()
        store.save("u1", UserRecord("u1", "A", "B"))
        store.save("u1", UserRecord("u1", "C", "D"))
        assert len(store) == 1
        assert store.load("u1").class1_name == "C"
