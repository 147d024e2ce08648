# SPDX-License-Identifier: MIT
"""
Classifier state and the services that own it.

- ClassState: the two-class model and its mutation rules
- MemoryService: one shared state guarded by a reader/writer lock
- UserService: per-user load/mutate/save cycle against a StateStore
"""

from .base import ClassifierService
from .class_state import ClassState, restore_exclusivity
from .locks import KeyedLock, ReadWriteLock
from .memory import MemoryService
from .user_service import UserService

__all__ = [
    "ClassifierService",
    "ClassState",
    "restore_exclusivity",
    "KeyedLock",
    "ReadWriteLock",
    "MemoryService",
    "UserService",
]
