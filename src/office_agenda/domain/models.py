"""
Доменные модели (Pydantic).

Поля в Python в snake_case, в JSON (диск и HTTP) в camelCase.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import VisitorStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Meeting(CamelModel):
    id: str
    title: str = ""
    start_time: str = ""
    end_time: str = ""


class Room(CamelModel):
    id: str
    name: str
    meetings: list[Meeting] = Field(default_factory=list)


class Visitor(CamelModel):
    id: str
    name: str
    company: str
    time: str
    purpose: str = ""
    arrival_time: str = ""
    departure_time: str | None = None
    status: VisitorStatus = VisitorStatus.scheduled


class Participant(CamelModel):
    id: str
    name: str
