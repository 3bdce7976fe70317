"""
Сидинг тестовых данных агенды в DATA_DIR.
Используется для ручных проверок и dev-отладки.
"""

from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from office_agenda.common.config import get_settings  # noqa: E402
from office_agenda.contracts.http_api import MeetingCreateRequest, VisitorCreateRequest  # noqa: E402
from office_agenda.domain.models import Participant  # noqa: E402
from office_agenda.services.agenda_service import AgendaService  # noqa: E402
from office_agenda.storage.json_store import JsonStore  # noqa: E402


def _at(day: datetime, hour: int, minute: int = 0) -> str:
    return day.replace(hour=hour, minute=minute, second=0, microsecond=0).strftime("%Y-%m-%dT%H:%M")


def main() -> int:
    store = JsonStore(get_settings().data_dir)
    store.init()
    svc = AgendaService(store)

    today = datetime.now()
    room = svc.add_meeting(
        MeetingCreateRequest(room_id="1", title="Weekly sync", start_time=_at(today, 9), end_time=_at(today, 10))
    )
    meeting = room.meetings[-1]
    svc.save_participants(
        meeting.id,
        [Participant(id="1", name="Ana Pop"), Participant(id="2", name="Mihai Ionescu")],
    )
    svc.add_visitor(
        VisitorCreateRequest(
            name="Jane Doe",
            company="Acme",
            time=_at(today + timedelta(days=1), 11, 30),
            purpose="Interview",
        )
    )
    print("Seeded meeting:", meeting.id, "in", store.data_dir)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
