# SPDX-License-Identifier: MIT
"""Operations the transport layer can invoke on a classifier."""
from __future__ import annotations

from typing import Iterable, Protocol, Union

from slc.core.models import Area, Class, ClassifyResult, FeedbackVariant, Snapshot


class ClassifierService(Protocol):
    """Protocol shared by the in-memory and the per-user services."""

    def init(self, class1: Class, class2: Class) -> None:
        ...

    def classify(self, props: Iterable[str]) -> ClassifyResult:
        ...

    def feedback(self, variant: Union[FeedbackVariant, str], props: Iterable[str]) -> None:
        ...

    def snapshot(self) -> Snapshot:
        ...

    def reset(self) -> None:
        ...

    def add_property(self, area: Union[Area, str], prop: str) -> None:
        ...

    def remove_property(self, area: Union[Area, str], prop: str) -> None:
        ...

    def move_property(
        self, source: Union[Area, str], target: Union[Area, str], prop: str
    ) -> None:
        ...

    def rename_class(self, slot: Union[Area, str], name: str) -> None:
        ...

    def rename_property(self, area: Union[Area, str], old: str, new: str) -> None:
        ...
