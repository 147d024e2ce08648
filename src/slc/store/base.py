# SPDX-License-Identifier: MIT
"""
State store contract and an in-process implementation.
"""
from __future__ import annotations

import copy
import threading
from typing import Dict, Optional, Protocol

from slc.core.models import UserRecord


class StateStore(Protocol):
    """Durable per-user storage of classifier state."""

    def load(self, user_id: str) -> Optional[UserRecord]:
        """Return the user's record, or None when nothing was saved yet."""
        ...

    def save(self, user_id: str, record: UserRecord) -> None:
        """Insert or replace the user's record."""
        ...

    def delete(self, user_id: str) -> None:
        """Remove the user's record; deleting a missing record is not an error."""
        ...


class MemoryStore:
    """Dict-backed StateStore. Records are copied in and out."""

    name = "memory"

    def __init__(self):
        self._records: Dict[str, UserRecord] = {}
        self._lock = threading.Lock()

    def load(self, user_id: str) -> Optional[UserRecord]:
        with self._lock:
            record = self._records.get(user_id)
            return copy.deepcopy(record) if record else None

    def save(self, user_id: str, record: UserRecord) -> None:
        with self._lock:
            self._records[user_id] = copy.deepcopy(record)

    def delete(self, user_id: str) -> None:
        with self._lock:
            self._records.pop(user_id, None)

    def ping(self) -> bool:
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
