# SPDX-License-Identifier: MIT
"""Request and response bodies for the HTTP API."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from slc.core.models import Class


class PropertiesIn(BaseModel):
    """Request body carrying a property list; JSON null means no properties."""

    properties: List[str] = Field(default_factory=list)

    @field_validator("properties", mode="before")
    @classmethod
    def null_is_empty(cls, value):
        return [] if value is None else value


class ClassIn(PropertiesIn):
    name: str = ""

    def to_class(self) -> Class:
        return Class(name=self.name.strip(), properties=list(self.properties))


class InitRequest(BaseModel):
    class1: ClassIn
    class2: ClassIn


class ClassifyRequest(PropertiesIn):
    pass


class ClassifyResponse(BaseModel):
    guess: str
    reason: str
    knownHits: List[str]
    unknown: List[str]
    recommendation: str


class FeedbackRequest(PropertiesIn):
    variant: str


class PropertyRequest(BaseModel):
    area: str
    property: str


class MovePropertyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str = Field(alias="from")
    target: str = Field(alias="to")
    property: str


class RenamePropertyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    area: str
    old: str = Field(alias="from")
    new: str = Field(alias="to")


class RenameClassRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    slot: str = Field(alias="class")
    name: str


class OkResponse(BaseModel):
    ok: bool = True


class SnapshotResponse(BaseModel):
    class1: ClassIn
    class2: ClassIn
    generalClass: List[str]
    noneClass: List[str]
