"""
Доменные перечисления (enum).

Используются во всей системе:
- статус визита
- виды нарушений расписания
- JSON документы хранилища
"""

from __future__ import annotations

import enum


class VisitorStatus(str, enum.Enum):
    """
    Статус визита: запланирован / уже прошёл.
    """

    scheduled = "scheduled"
    finished = "finished"


class ScheduleViolation(str, enum.Enum):
    """
    Причина, по которой встречу нельзя поставить в комнату.
    """

    times_not_ordered = "times_not_ordered"
    outside_business_hours = "outside_business_hours"
    overlap = "overlap"


class Document(str, enum.Enum):
    """
    JSON документы на диске.
    """

    rooms = "meeting-rooms.json"
    visitors = "visitors.json"
    participants = "participants.json"

    @property
    def filename(self) -> str:
        return self.value

    def empty(self) -> list | dict:
        """Пустое значение документа (используется при ошибке чтения)."""
        return {} if self is Document.participants else []
