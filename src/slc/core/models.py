# SPDX-License-Identifier: MIT
"""Entity shapes shared by the engine, the orchestrator and the transport."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from .exceptions import ValidationError


class Area(Enum):
    """Property collections addressable by the fine-grained edit operations."""

    CLASS1 = "class1"
    CLASS2 = "class2"
    GENERAL = "general"
    NONE = "none"
    ALL = "all"

    @classmethod
    def parse(cls, value: Any, allow_all: bool = False) -> "Area":
        """
        Resolve an area token, case-insensitively.

        Args:
            value: Area token or an existing Area
            allow_all: Whether the ``all`` pseudo-area is acceptable here

        Raises:
            ValidationError: If the token is unknown or ``all`` is not allowed
        """
        if isinstance(value, cls):
            area = value
        else:
            try:
                area = cls(str(value or "").strip().lower())
            except ValueError:
                raise ValidationError(
                    f"bad area {value!r} (use class1|class2|general|none"
                    + ("|all)" if allow_all else ")"),
                    field="area",
                )
        if area is cls.ALL and not allow_all:
            raise ValidationError("area 'all' is not allowed here", field="area")
        return area


class FeedbackVariant(Enum):
    """Which bucket user feedback confirms for a set of properties."""

    CLASS1 = "class1"
    CLASS2 = "class2"
    NONE = "none"

    @classmethod
    def parse(cls, value: Any) -> "FeedbackVariant":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(
                "variant must be one of: class1|class2|none", field="variant"
            )


@dataclass
class Class:
    """A named class and its exclusive properties."""

    name: str = ""
    properties: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "properties": list(self.properties)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Class":
        data = data or {}
        return cls(
            name=str(data.get("name") or ""),
            properties=[str(p) for p in data.get("properties") or []],
        )


@dataclass
class Snapshot:
    """Read-only projection of a ClassState; general and none lists are sorted."""

    class1: Class
    class2: Class
    general_class: List[str]
    none_class: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "class1": self.class1.to_dict(),
            "class2": self.class2.to_dict(),
            "generalClass": list(self.general_class),
            "noneClass": list(self.none_class),
        }


@dataclass(frozen=True)
class ClassifyResult:
    """Outcome of classifying one set of query properties."""

    guess: str
    reason: str
    known_hits: List[str]
    unknown: List[str]
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "guess": self.guess,
            "reason": self.reason,
            "knownHits": list(self.known_hits),
            "unknown": list(self.unknown),
            "recommendation": self.recommendation,
        }


@dataclass
class UserRecord:
    """Durable projection of one user's ClassState."""

    user_id: str
    class1_name: str = ""
    class2_name: str = ""
    class1_props: List[str] = field(default_factory=list)
    class2_props: List[str] = field(default_factory=list)
    general_props: List[str] = field(default_factory=list)
    none_props: List[str] = field(default_factory=list)

    @property
    def is_initialized(self) -> bool:
        return bool(self.class1_name or self.class2_name)
