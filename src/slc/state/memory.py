# SPDX-License-Identifier: MIT
"""
Single shared ClassState for the in-memory server mode.

The instance is created and owned by whoever composes the application; all
requests share it. Reads take the shared side of a reader/writer lock and
every mutation takes the exclusive side.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from slc.core.models import Area, Class, ClassifyResult, FeedbackVariant, Snapshot

from .class_state import ClassState
from .locks import ReadWriteLock

logger = logging.getLogger(__name__)


class MemoryService:
    """ClassifierService backed by one process-local ClassState."""

    def __init__(self, state: Optional[ClassState] = None):
        self.state = state or ClassState()
        self._lock = ReadWriteLock()

    def init(self, class1: Class, class2: Class) -> None:
        with self._lock.write():
            self.state.init(class1, class2)

    def classify(self, props: Iterable[str]) -> ClassifyResult:
        with self._lock.read():
            return self.state.classify(props)

    def feedback(self, variant: Union[FeedbackVariant, str], props: Iterable[str]) -> None:
        with self._lock.write():
            self.state.feedback(variant, props)

    def snapshot(self) -> Snapshot:
        with self._lock.read():
            return self.state.snapshot()

    def reset(self) -> None:
        with self._lock.write():
            self.state = ClassState()
        logger.info("in-memory state reset")

    def add_property(self, area: Union[Area, str], prop: str) -> None:
        with self._lock.write():
            self.state.add_property(area, prop)

    def remove_property(self, area: Union[Area, str], prop: str) -> None:
        with self._lock.write():
            self.state.remove_property(area, prop)

    def move_property(
        self, source: Union[Area, str], target: Union[Area, str], prop: str
    ) -> None:
        with self._lock.write():
            self.state.move_property(source, target, prop)

    def rename_class(self, slot: Union[Area, str], name: str) -> None:
        with self._lock.write():
            self.state.rename_class(slot, name)

    def rename_property(self, area: Union[Area, str], old: str, new: str) -> None:
        with self._lock.write():
            self.state.rename_property(area, old, new)
