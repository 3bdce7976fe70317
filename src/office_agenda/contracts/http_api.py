"""
HTTP API контракты (Pydantic-модели).

Назначение:
- валидация входа на границе FastAPI (ошибка -> 422 {"error": ...})
- стабильные структуры ответов для клиентов
- JSON ключи camelCase, как их шлёт фронтенд
"""

from __future__ import annotations

from pydantic import Field, field_validator

from office_agenda.common.time import parse_iso
from office_agenda.domain.enums import VisitorStatus
from office_agenda.domain.models import CamelModel, Participant


def _require_iso(value: str) -> str:
    try:
        parse_iso(value)
    except ValueError as e:
        raise ValueError(f"invalid ISO datetime: {value!r}") from e
    return value


# =============================================================================
# ЗАПРОСЫ
# =============================================================================
class MeetingCreateRequest(CamelModel):
    room_id: str
    title: str = ""
    start_time: str
    end_time: str

    @field_validator("start_time", "end_time")
    @classmethod
    def check_times(cls, value: str) -> str:
        return _require_iso(value)


class VisitorCreateRequest(CamelModel):
    """Визит без id: id назначает сервер, присланный клиентом игнорируется."""

    name: str
    company: str
    time: str
    purpose: str = ""
    arrival_time: str = ""
    departure_time: str | None = None
    status: VisitorStatus = VisitorStatus.scheduled

    @field_validator("time")
    @classmethod
    def check_time(cls, value: str) -> str:
        return _require_iso(value)


class ParticipantsReplaceRequest(CamelModel):
    participants: list[Participant] = Field(default_factory=list)


# =============================================================================
# ОТВЕТЫ
# =============================================================================
class MessageResponse(CamelModel):
    message: str


class SuccessResponse(CamelModel):
    success: bool = True


class ParticipantsSaveResponse(CamelModel):
    success: bool = True
    participants: list[Participant]


class ErrorResponse(CamelModel):
    error: str
