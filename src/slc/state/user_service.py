# SPDX-License-Identifier: MIT
"""
Per-user state orchestration.

Every operation runs one load -> rebuild -> mutate -> save cycle against a
StateStore, keyed by an opaque user id. Nothing is cached between calls.

Requests for the same user are serialized through a KeyedLock shared by all
UserService instances of one process. Without a shared lock, or across
several processes, two concurrent mutations may both read the old record and
the later save silently overwrites the earlier one.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, TypeVar, Union

from slc.core.exceptions import StoreError
from slc.core.models import Area, Class, ClassifyResult, FeedbackVariant, Snapshot
from slc.store.base import StateStore

from .class_state import ClassState
from .locks import KeyedLock

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UserService:
    """ClassifierService bound to one user's persisted state."""

    def __init__(self, store: StateStore, user_id: str, locks: Optional[KeyedLock] = None):
        self.store = store
        self.user_id = user_id
        self.locks = locks or KeyedLock()

    def _load(self) -> ClassState:
        try:
            record = self.store.load(self.user_id)
        except StoreError as e:
            logger.error("[user=%s] load state error: %s", self.user_id, e)
            raise
        return ClassState.from_record(record)

    def _save(self, state: ClassState) -> None:
        try:
            self.store.save(self.user_id, state.to_record(self.user_id))
        except StoreError as e:
            logger.error("[user=%s] save state error: %s", self.user_id, e)
            raise

    def with_state(self, fn: Callable[[ClassState], T], persist: bool = True) -> T:
        """
        Run *fn* against freshly loaded state and persist the result.

        Args:
            fn: Mutation (or query) applied to the rebuilt ClassState
            persist: Whether to write the state back afterwards

        Returns:
            Whatever *fn* returns

        Raises:
            StoreError: If loading or saving fails; nothing counts as
                committed unless the save succeeded
            ValidationError: Raised by *fn*; the state is not saved
        """
        with self.locks.hold(self.user_id):
            state = self._load()
            result = fn(state)
            if persist:
                self._save(state)
            return result

    # -- engine operations --------------------------------------------
    def init(self, class1: Class, class2: Class) -> None:
        self.with_state(lambda st: st.init(class1, class2))

    def classify(self, props: Iterable[str]) -> ClassifyResult:
        return self.with_state(lambda st: st.classify(props), persist=False)

    def feedback(self, variant: Union[FeedbackVariant, str], props: Iterable[str]) -> None:
        self.with_state(lambda st: st.feedback(variant, props))

    def snapshot(self) -> Snapshot:
        return self.with_state(lambda st: st.snapshot(), persist=False)

    def reset(self) -> None:
        """Delete the user's persisted record; the next load starts uninitialized."""
        with self.locks.hold(self.user_id):
            try:
                self.store.delete(self.user_id)
            except StoreError as e:
                logger.error("[user=%s] reset state error: %s", self.user_id, e)
                raise
        logger.info("[user=%s] state reset", self.user_id)

    # -- fine-grained edits -------------------------------------------
    def add_property(self, area: Union[Area, str], prop: str) -> None:
        self.with_state(lambda st: st.add_property(area, prop))

    def remove_property(self, area: Union[Area, str], prop: str) -> None:
        self.with_state(lambda st: st.remove_property(area, prop))

    def move_property(
        self, source: Union[Area, str], target: Union[Area, str], prop: str
    ) -> None:
        self.with_state(lambda st: st.move_property(source, target, prop))

    def rename_class(self, slot: Union[Area, str], name: str) -> None:
        self.with_state(lambda st: st.rename_class(slot, name))

    def rename_property(self, area: Union[Area, str], old: str, new: str) -> None:
        self.with_state(lambda st: st.rename_property(area, old, new))
