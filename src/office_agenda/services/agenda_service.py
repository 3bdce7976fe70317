"""
Сервисный слой: комнаты, встречи, посетители, участники.

Назначение:
- единая точка бизнес-логики поверх репозиториев
- каскадная очистка участников при удалении встречи
- (опционально) серверная проверка расписания

Замечания:
- по умолчанию пересечения/порядок времени проверяет только клиент;
  SCHEDULE_VALIDATION_ENABLED=true включает ту же проверку на сервере (409)
- удаление встречи и очистка участников: две независимые записи, не транзакция
"""

from __future__ import annotations

from office_agenda.common.config import Settings, get_settings
from office_agenda.common.errors import AppError, ConflictError, NotFoundError
from office_agenda.common.logging import get_project_logger
from office_agenda.contracts.http_api import MeetingCreateRequest, VisitorCreateRequest
from office_agenda.domain.enums import Document, ScheduleViolation
from office_agenda.domain.models import Participant, Room, Visitor
from office_agenda.domain.scheduling import check_meeting
from office_agenda.storage.json_store import JsonStore
from office_agenda.storage.repositories import (
    ParticipantRepository,
    RoomRepository,
    VisitorRepository,
)

log = get_project_logger()

VIOLATION_MESSAGES = {
    ScheduleViolation.times_not_ordered: "End time must be after start time",
    ScheduleViolation.outside_business_hours: "Meetings must be between {start:02d}:00 and {end:02d}:00",
    ScheduleViolation.overlap: "This meeting overlaps with an existing meeting in this room",
}


class AgendaService:
    def __init__(self, store: JsonStore, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.store = store
        self.rooms = RoomRepository(store)
        self.visitors = VisitorRepository(store)
        self.participants = ParticipantRepository(store)

    # -------------------------------------------------------------------------
    # Rooms / meetings
    # -------------------------------------------------------------------------
    def list_rooms(self) -> list[Room]:
        return self.rooms.list()

    def _enforce_schedule(self, room: Room, req: MeetingCreateRequest) -> None:
        violations = check_meeting(
            room.meetings,
            req.start_time,
            req.end_time,
            first_hour=self.settings.business_hours_start,
            last_hour=self.settings.business_hours_end,
        )
        if not violations:
            return
        log.info(
            "meeting_rejected",
            extra={"payload": {"room_id": room.id, "violations": [v.value for v in violations]}},
        )
        raise ConflictError(
            VIOLATION_MESSAGES[violations[0]].format(
                start=self.settings.business_hours_start,
                end=self.settings.business_hours_end,
            ),
            details={"violations": [v.value for v in violations]},
        )

    def add_meeting(self, req: MeetingCreateRequest) -> Room:
        # Проверка и запись под одним локом документа комнат
        with self.store.locked(Document.rooms):
            if self.settings.schedule_validation_enabled:
                room = self.rooms.get(req.room_id)
                if room is None:
                    raise NotFoundError("Room not found")
                self._enforce_schedule(room, req)

            updated = self.rooms.add_meeting(
                req.room_id,
                title=req.title,
                start_time=req.start_time,
                end_time=req.end_time,
            )
        if updated is None:
            raise NotFoundError("Room not found")

        log.info(
            "meeting_added",
            extra={
                "payload": {
                    "room_id": updated.id,
                    "meeting_id": updated.meetings[-1].id,
                    "start_time": req.start_time,
                    "end_time": req.end_time,
                }
            },
        )
        return updated

    def delete_meeting(self, meeting_id: str) -> Room:
        room = self.rooms.remove_meeting(meeting_id)
        if room is None:
            raise NotFoundError("Meeting not found")

        # Сбой очистки участников не отменяет удаление встречи
        try:
            self.participants.delete_all(meeting_id)
        except AppError as e:
            log.error(
                "participants_cleanup_failed",
                extra={"payload": {"meeting_id": meeting_id, "error": e.message}},
            )

        log.info("meeting_removed", extra={"payload": {"room_id": room.id, "meeting_id": meeting_id}})
        return room

    # -------------------------------------------------------------------------
    # Visitors
    # -------------------------------------------------------------------------
    def list_visitors(self) -> list[Visitor]:
        return self.visitors.list()

    def add_visitor(self, req: VisitorCreateRequest) -> Visitor:
        visitor = self.visitors.add(req.to_json_dict())
        log.info("visitor_added", extra={"payload": {"visitor_id": visitor.id, "time": visitor.time}})
        return visitor

    def delete_visitor(self, visitor_id: str) -> None:
        removed = self.visitors.delete(visitor_id)
        log.info("visitor_deleted", extra={"payload": {"visitor_id": visitor_id, "removed": removed}})

    # -------------------------------------------------------------------------
    # Participants
    # -------------------------------------------------------------------------
    def get_participants(self, meeting_id: str) -> list[Participant]:
        return self.participants.list_for_meeting(meeting_id)

    def save_participants(self, meeting_id: str, participants: list[Participant]) -> list[Participant]:
        saved = self.participants.replace(meeting_id, participants)
        log.info(
            "participants_saved",
            extra={"payload": {"meeting_id": meeting_id, "count": len(saved)}},
        )
        return saved

    def delete_participant(self, meeting_id: str, participant_id: str) -> None:
        self.participants.delete_one(meeting_id, participant_id)
        log.info(
            "participant_deleted",
            extra={"payload": {"meeting_id": meeting_id, "participant_id": participant_id}},
        )

    def clear_participants(self, meeting_id: str) -> None:
        self.participants.delete_all(meeting_id)
        log.info("participants_cleared", extra={"payload": {"meeting_id": meeting_id}})
