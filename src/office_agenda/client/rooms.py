"""
Контроллер расписания переговорных (клиентская сторона).

Назначение:
- локальное зеркало комнат и выбранной даты
- те же проверки расписания, что и на сервере, до отправки формы
- после каждой мутации список комнат перечитывается с сервера
- участники выбранной встречи: загрузка, черновик, сохранение
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta

from office_agenda.common.ids import new_participant_id
from office_agenda.common.logging import get_client_logger
from office_agenda.common.time import local_now
from office_agenda.domain.enums import ScheduleViolation
from office_agenda.domain.models import Meeting, Participant, Room
from office_agenda.domain.scheduling import check_meeting, meetings_on_date, time_slots

from .api import AgendaApiClient, AgendaApiError

log = get_client_logger()

LOAD_ROOMS_ERROR = "Failed to load meeting rooms. Please try again later."


@dataclass
class MeetingDraft:
    title: str = ""
    start_time: str = ""
    end_time: str = ""

    @property
    def complete(self) -> bool:
        return bool(self.start_time and self.end_time)


class MeetingRejected(Exception):
    def __init__(self, violations: list[ScheduleViolation]) -> None:
        super().__init__(", ".join(v.value for v in violations))
        self.violations = violations


@dataclass
class ParticipantsDraft:
    meeting_id: str
    saved: list[Participant] = field(default_factory=list)
    editing: list[Participant] = field(default_factory=list)


class RoomScheduleController:
    def __init__(self, api: AgendaApiClient, *, selected_date: date | None = None) -> None:
        self.api = api
        self.rooms: list[Room] = []
        self.selected_date: date = selected_date or local_now().date()
        self.error: str | None = None
        self.participants: ParticipantsDraft | None = None

    # -------------------------------------------------------------------------
    # Rooms
    # -------------------------------------------------------------------------
    def refresh(self) -> list[Room]:
        try:
            self.rooms = self.api.list_rooms()
            self.error = None
        except AgendaApiError as e:
            log.error("rooms_load_failed", extra={"payload": {"error": e.message}})
            self.error = LOAD_ROOMS_ERROR
        return self.rooms

    def room(self, room_id: str) -> Room | None:
        return next((r for r in self.rooms if r.id == room_id), None)

    def navigate_date(self, days: int) -> date:
        self.selected_date = self.selected_date + timedelta(days=days)
        self.refresh()
        return self.selected_date

    def meetings_for_selected_date(self, room: Room) -> list[Meeting]:
        return meetings_on_date(room.meetings, self.selected_date)

    def meetings_count_for_selected_date(self, room: Room) -> int:
        return len(self.meetings_for_selected_date(room))

    @staticmethod
    def time_slots() -> list[str]:
        return time_slots()

    # -------------------------------------------------------------------------
    # Meetings
    # -------------------------------------------------------------------------
    def validate_draft(self, room_id: str, draft: MeetingDraft) -> list[ScheduleViolation]:
        """
        Незаполненный черновик нарушений порядка/пересечения не имеет,
        но и рабочие часы для него не выполнены.
        """
        if not draft.complete:
            return [ScheduleViolation.outside_business_hours]
        room = self.room(room_id)
        meetings = room.meetings if room else []
        try:
            return check_meeting(meetings, draft.start_time, draft.end_time)
        except ValueError:
            return [ScheduleViolation.times_not_ordered]

    def can_submit(self, room_id: str, draft: MeetingDraft) -> bool:
        return not self.validate_draft(room_id, draft)

    def add_meeting(self, room_id: str, draft: MeetingDraft) -> Room | None:
        """
        Проверяет черновик локально, отправляет, затем перечитывает все комнаты.
        Возвращает актуальную комнату из обновлённого списка.
        """
        violations = self.validate_draft(room_id, draft)
        if violations:
            raise MeetingRejected(violations)

        self.api.add_meeting(
            room_id=room_id,
            title=draft.title,
            start_time=draft.start_time,
            end_time=draft.end_time,
        )
        self.refresh()
        return self.room(room_id)

    def delete_meeting(self, meeting_id: str) -> None:
        self.api.delete_meeting(meeting_id)
        self.refresh()
        if self.participants is not None and self.participants.meeting_id == meeting_id:
            self.participants = None

    # -------------------------------------------------------------------------
    # Participants
    # -------------------------------------------------------------------------
    def load_participants(self, meeting_id: str) -> list[Participant]:
        saved = self.api.get_participants(meeting_id)
        self.participants = ParticipantsDraft(
            meeting_id=meeting_id,
            saved=list(saved),
            editing=list(saved),
        )
        return saved

    def _draft(self) -> ParticipantsDraft:
        if self.participants is None:
            raise RuntimeError("participants are not loaded for any meeting")
        return self.participants

    def add_participant(self, name: str) -> Participant | None:
        """Пустое (после strip) имя игнорируется."""
        draft = self._draft()
        clean = (name or "").strip()
        if not clean:
            return None
        p = Participant(id=new_participant_id(x.id for x in draft.editing), name=clean)
        draft.editing.append(p)
        return p

    def remove_participant(self, participant_id: str) -> None:
        draft = self._draft()
        draft.editing = [p for p in draft.editing if p.id != participant_id]

    def save_participants(self) -> bool:
        draft = self._draft()
        try:
            draft.saved = self.api.save_participants(draft.meeting_id, draft.editing)
        except AgendaApiError as e:
            log.error(
                "participants_save_failed",
                extra={"payload": {"meeting_id": draft.meeting_id, "error": e.message}},
            )
            return False
        draft.editing = list(draft.saved)
        return True
