"""
Контроллер журнала посетителей (клиентская сторона).
"""

from __future__ import annotations

from datetime import datetime, timedelta

from office_agenda.common.logging import get_client_logger
from office_agenda.common.time import local_now, to_local
from office_agenda.domain.enums import VisitorStatus
from office_agenda.domain.models import Visitor

from .api import AgendaApiClient

log = get_client_logger()

UPCOMING_WINDOW_DAYS = 2
UPCOMING_LIMIT = 4


def visitor_status(visit_time: str | datetime, now: datetime) -> VisitorStatus:
    """Визит в прошлом -> finished, иначе scheduled."""
    return VisitorStatus.finished if to_local(visit_time) < now else VisitorStatus.scheduled


def format_visitor_time(visit_time: str | datetime, now: datetime | None = None) -> str:
    """
    "Today, 09:30" / "Tomorrow, 14:00" / "Friday, 11:15"
    """
    now = now or local_now()
    visit = to_local(visit_time)
    clock = visit.strftime("%H:%M")
    today = now.date()
    if visit.date() == today:
        return f"Today, {clock}"
    if visit.date() == today + timedelta(days=1):
        return f"Tomorrow, {clock}"
    return f"{visit.strftime('%A')}, {clock}"


class VisitorAgendaController:
    def __init__(self, api: AgendaApiClient) -> None:
        self.api = api
        self.visitors: list[Visitor] = []

    def refresh(self) -> list[Visitor]:
        self.visitors = self.api.list_visitors()
        return self.visitors

    def add_visitor(
        self,
        *,
        name: str,
        company: str,
        time: str,
        purpose: str = "",
        now: datetime | None = None,
    ) -> Visitor:
        if not name or not company or not time:
            raise ValueError("name, company and time are required")
        now = now or local_now()
        fields = {
            "name": name,
            "company": company,
            "time": time,
            "purpose": purpose,
            "arrivalTime": now.strftime("%H:%M:%S"),
            "status": visitor_status(time, now).value,
        }
        saved = self.api.add_visitor(fields)
        self.visitors = [saved, *self.visitors]
        log.info("visitor_added", extra={"payload": {"visitor_id": saved.id}})
        return saved

    def remove_visitor(self, visitor_id: str) -> None:
        self.api.delete_visitor(visitor_id)
        self.visitors = [v for v in self.visitors if v.id != visitor_id]

    def upcoming(self, now: datetime | None = None) -> list[Visitor]:
        """
        Визиты с начала сегодняшнего дня до +2 суток (включительно), по времени,
        последние 4.
        """
        now = now or local_now()
        start = datetime.combine(now.date(), datetime.min.time())
        end = start + timedelta(days=UPCOMING_WINDOW_DAYS)

        in_window: list[tuple[datetime, Visitor]] = []
        for v in self.visitors:
            try:
                visit = to_local(v.time)
            except ValueError:
                continue
            if start <= visit <= end:
                in_window.append((visit, v))
        in_window.sort(key=lambda item: item[0])
        return [v for _, v in in_window][-UPCOMING_LIMIT:]
