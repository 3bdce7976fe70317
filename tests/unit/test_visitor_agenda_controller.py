from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest

from office_agenda.client.visitors import VisitorAgendaController, format_visitor_time, visitor_status
from office_agenda.domain.enums import VisitorStatus
from office_agenda.domain.models import Visitor

NOW = datetime(2025, 9, 3, 10, 2, 11)  # среда


class FakeVisitorsApi:
    def __init__(self, visitors: list[Visitor] | None = None) -> None:
        self.visitors = list(visitors or [])
        self.sent: list[dict[str, Any]] = []
        self.deleted: list[str] = []

    def list_visitors(self) -> list[Visitor]:
        return list(self.visitors)

    def add_visitor(self, fields: dict[str, Any]) -> Visitor:
        self.sent.append(fields)
        v = Visitor.model_validate({**fields, "id": f"v{len(self.sent)}"})
        self.visitors.append(v)
        return v

    def delete_visitor(self, visitor_id: str) -> str:
        self.deleted.append(visitor_id)
        self.visitors = [v for v in self.visitors if v.id != visitor_id]
        return "Visitor deleted"


def _visitor(vid: str, time: str) -> Visitor:
    return Visitor(id=vid, name=f"Guest {vid}", company="Acme", time=time)


def test_visitor_status() -> None:
    assert visitor_status("2025-09-03T09:00", NOW) is VisitorStatus.finished
    assert visitor_status("2025-09-03T11:00", NOW) is VisitorStatus.scheduled


@pytest.mark.parametrize(
    ("visit", "expected"),
    [
        ("2025-09-03T09:30", "Today, 09:30"),
        ("2025-09-04T14:00", "Tomorrow, 14:00"),
        ("2025-09-05T11:15", "Friday, 11:15"),
    ],
)
def test_format_visitor_time(visit: str, expected: str) -> None:
    assert format_visitor_time(visit, NOW) == expected


def test_add_visitor_sends_arrival_and_status_and_prepends() -> None:
    api = FakeVisitorsApi([_visitor("old", "2025-09-03T08:00")])
    ctl = VisitorAgendaController(api)
    ctl.refresh()

    saved = ctl.add_visitor(name="Jane", company="Acme", time="2025-09-03T11:30", purpose="Demo", now=NOW)

    assert api.sent == [
        {
            "name": "Jane",
            "company": "Acme",
            "time": "2025-09-03T11:30",
            "purpose": "Demo",
            "arrivalTime": "10:02:11",
            "status": "scheduled",
        }
    ]
    assert [v.id for v in ctl.visitors] == [saved.id, "old"]


def test_add_visitor_requires_fields() -> None:
    ctl = VisitorAgendaController(FakeVisitorsApi())
    with pytest.raises(ValueError):
        ctl.add_visitor(name="", company="Acme", time="2025-09-03T11:30", now=NOW)
    with pytest.raises(ValueError):
        ctl.add_visitor(name="Jane", company="Acme", time="", now=NOW)


def test_remove_visitor() -> None:
    api = FakeVisitorsApi([_visitor("a", "2025-09-03T11:00"), _visitor("b", "2025-09-03T12:00")])
    ctl = VisitorAgendaController(api)
    ctl.refresh()

    ctl.remove_visitor("a")
    assert api.deleted == ["a"]
    assert [v.id for v in ctl.visitors] == ["b"]


def test_upcoming_window_sort_and_limit() -> None:
    api = FakeVisitorsApi(
        [
            _visitor("yesterday", "2025-09-02T16:00"),
            _visitor("d", "2025-09-04T09:00"),
            _visitor("a", "2025-09-03T08:00"),
            _visitor("c", "2025-09-03T17:00"),
            _visitor("b", "2025-09-03T12:00"),
            _visitor("e", "2025-09-05T00:00"),
            _visitor("late", "2025-09-05T09:00"),
            _visitor("broken", "not a date"),
        ]
    )
    ctl = VisitorAgendaController(api)
    ctl.refresh()

    assert [v.id for v in ctl.upcoming(NOW)] == ["b", "c", "d", "e"]
