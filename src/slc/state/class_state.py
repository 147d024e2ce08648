# SPDX-License-Identifier: MIT
"""
Mutable two-class model.

A ClassState holds two named classes with mutually exclusive property sets,
a ``general`` set for properties seen in both classes and a ``none`` set for
properties the user marked as belonging to neither. Properties shared by the
two classes are moved into ``general`` after Init, Feedback and every edit
that writes a class, so class1 and class2 stay disjoint at every observable
point.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Union

from slc.classify import (
    choose,
    difference,
    explain,
    extract_intersection,
    normalize,
    recommend,
    sort_strings,
    union,
    unique,
)
from slc.core.exceptions import ValidationError
from slc.core.models import (
    Area,
    Class,
    ClassifyResult,
    FeedbackVariant,
    Snapshot,
    UserRecord,
)

_AREA_ATTRS = {
    Area.GENERAL: "general_class",
    Area.NONE: "none_class",
}


def restore_exclusivity(state: "ClassState") -> List[str]:
    """
    Move every property shared by class1 and class2 into ``general``.

    Returns:
        The properties that were moved (empty when the classes were disjoint)
    """
    props1, props2, shared = extract_intersection(
        state.class1.properties, state.class2.properties
    )
    state.class1.properties = props1
    state.class2.properties = props2
    state.general_class = union(state.general_class, shared)
    return shared


class ClassState:
    """Two classes plus the general and none property sets."""

    def __init__(
        self,
        class1: Optional[Class] = None,
        class2: Optional[Class] = None,
        general_class: Optional[Iterable[str]] = None,
        none_class: Optional[Iterable[str]] = None,
    ):
        self.class1 = class1 or Class()
        self.class2 = class2 or Class()
        self.general_class: List[str] = list(general_class or [])
        self.none_class: List[str] = list(none_class or [])

    @property
    def is_initialized(self) -> bool:
        return bool(self.class1.name or self.class2.name)

    def known(self) -> List[str]:
        """Every property recognized by class1, class2 or general."""
        return union(
            union(self.class1.properties, self.class2.properties), self.general_class
        )

    # -- engine operations --------------------------------------------
    def init(self, class1: Class, class2: Class) -> None:
        """Replace both classes, moving their shared properties into general."""
        self.class1 = Class(name=class1.name, properties=unique(class1.properties))
        self.class2 = Class(name=class2.name, properties=unique(class2.properties))
        restore_exclusivity(self)

    def classify(self, props: Iterable[str]) -> ClassifyResult:
        """Guess the class of *props* without touching state."""
        props = unique(props)
        unknown = difference(props, self.known())
        guess, hits = choose(self.class1, self.class2, props)

        return ClassifyResult(
            guess=guess,
            reason=explain(guess, hits),
            known_hits=sort_strings(hits),
            unknown=sort_strings(unknown),
            recommendation=recommend(guess, self.class1.name, self.class2.name),
        )

    def feedback(self, variant: Union[FeedbackVariant, str], props: Iterable[str]) -> None:
        """
        Apply user feedback for *props*.

        ``class1``/``class2`` add the properties to that class; ``none`` parks
        the properties nobody recognizes in the none set. Anything else is a
        no-op: callers validate the variant before getting here.
        """
        props = unique(props)
        try:
            variant = FeedbackVariant.parse(variant)
        except ValidationError:
            variant = None

        restore_exclusivity(self)

        if variant is FeedbackVariant.CLASS1:
            self.class1.properties = union(self.class1.properties, props)
        elif variant is FeedbackVariant.CLASS2:
            self.class2.properties = union(self.class2.properties, props)
        elif variant is FeedbackVariant.NONE:
            unknown = difference(props, self.known())
            if unknown:
                self.none_class = union(self.none_class, unknown)

        restore_exclusivity(self)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            class1=Class(self.class1.name, list(self.class1.properties)),
            class2=Class(self.class2.name, list(self.class2.properties)),
            general_class=sort_strings(self.general_class),
            none_class=sort_strings(self.none_class),
        )

    # -- fine-grained edits -------------------------------------------
    def _get(self, area: Area) -> List[str]:
        if area is Area.CLASS1:
            return self.class1.properties
        if area is Area.CLASS2:
            return self.class2.properties
        return getattr(self, _AREA_ATTRS[area])

    def _set(self, area: Area, values: List[str]) -> None:
        if area is Area.CLASS1:
            self.class1.properties = values
        elif area is Area.CLASS2:
            self.class2.properties = values
        else:
            setattr(self, _AREA_ATTRS[area], values)

    def _restore_if_class_area(self, area: Area) -> None:
        """Edits that write a class must not leave class1 and class2 overlapping."""
        if area in (Area.CLASS1, Area.CLASS2, Area.ALL):
            restore_exclusivity(self)

    def add_property(self, area: Union[Area, str], prop: str) -> None:
        """Add *prop* to one area; adding an existing property changes nothing."""
        area = Area.parse(area)
        prop = normalize(prop)
        if not prop:
            return
        values = self._get(area)
        if prop not in values:
            self._set(area, values + [prop])
        self._restore_if_class_area(area)

    def remove_property(self, area: Union[Area, str], prop: str) -> None:
        area = Area.parse(area)
        prop = normalize(prop)
        self._set(area, [v for v in self._get(area) if v != prop])

    def move_property(
        self, source: Union[Area, str], target: Union[Area, str], prop: str
    ) -> None:
        """Remove *prop* from *source* and add it to *target*."""
        source = Area.parse(source)
        target = Area.parse(target)
        if source is target:
            return
        self.remove_property(source, prop)
        self.add_property(target, prop)

    def rename_class(self, slot: Union[Area, str], name: str) -> None:
        """
        Rename class1 or class2.

        Raises:
            ValidationError: If *name* is blank or *slot* is not a class slot
        """
        name = normalize(name or "")
        if not name:
            raise ValidationError("empty name", field="name")
        slot = Area.parse(slot)
        if slot is Area.CLASS1:
            self.class1.name = name
        elif slot is Area.CLASS2:
            self.class2.name = name
        else:
            raise ValidationError(
                f"bad class {slot.value!r} (use class1|class2)", field="class"
            )

    def rename_property(self, area: Union[Area, str], old: str, new: str) -> None:
        """
        Rename *old* to *new* within one area, or every area for ``all``.

        When *new* already exists in a collection the old entry is simply
        dropped there, so no duplicate is created.
        """
        area = Area.parse(area, allow_all=True)
        old = normalize(old or "")
        new = normalize(new or "")
        if not old or not new or old == new:
            return

        if area is Area.ALL:
            targets = [Area.CLASS1, Area.CLASS2, Area.GENERAL, Area.NONE]
        else:
            targets = [area]

        for target in targets:
            values = self._get(target)
            if new in values:
                renamed = [v for v in values if v != old]
            else:
                renamed = [new if v == old else v for v in values]
            self._set(target, renamed)
        self._restore_if_class_area(area)

    # -- persistence projection ---------------------------------------
    def to_record(self, user_id: str) -> UserRecord:
        return UserRecord(
            user_id=user_id,
            class1_name=self.class1.name,
            class2_name=self.class2.name,
            class1_props=list(self.class1.properties),
            class2_props=list(self.class2.properties),
            general_props=list(self.general_class),
            none_props=list(self.none_class),
        )

    @classmethod
    def from_record(cls, record: Optional[UserRecord]) -> "ClassState":
        """
        Rebuild state from a persisted record.

        A missing record, or one with neither class named, yields an
        uninitialized state. Collections are re-normalized on the way in.
        """
        if record is None or not record.is_initialized:
            return cls()
        return cls(
            class1=Class(record.class1_name, unique(record.class1_props)),
            class2=Class(record.class2_name, unique(record.class2_props)),
            general_class=unique(record.general_props),
            none_class=unique(record.none_props),
        )
