"""
Репозитории (DAO слой) поверх JsonStore.

Правила:
- Никакой бизнес-логики (каскады и проверки живут в services/)
- Только чтение/запись документов и преобразование dict <-> модели
"""

from __future__ import annotations

from typing import Any

from office_agenda.common.ids import legacy_meeting_id, new_meeting_id, new_visitor_id
from office_agenda.common.logging import get_project_logger
from office_agenda.domain.enums import Document
from office_agenda.domain.models import Meeting, Participant, Room, Visitor

from .json_store import JsonStore

log = get_project_logger()


def migrate_legacy_room(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Старый формат комнаты {id, name, meetingTitle, startTime, endTime}
    -> {id, name, meetings: [...]}.

    Непустой meetingTitle даёт ровно одну встречу, пустой ни одной.
    Если у такой комнаты уже есть список meetings, он сохраняется после синтезированной.
    """
    if "meetingTitle" not in raw:
        if raw.get("meetings") is None:
            return {**raw, "meetings": []}
        return raw

    title = raw.get("meetingTitle")
    meetings: list[dict[str, Any]] = []
    if title:
        meetings.append(
            {
                "id": legacy_meeting_id(str(raw.get("id"))),
                "title": title,
                "startTime": raw.get("startTime") or "",
                "endTime": raw.get("endTime") or "",
            }
        )
    meetings.extend(raw.get("meetings") or [])
    return {"id": raw.get("id"), "name": raw.get("name"), "meetings": meetings}


def _migrated_rooms(raw_rooms: list[Any]) -> list[dict[str, Any]]:
    return [migrate_legacy_room(r) for r in raw_rooms if isinstance(r, dict)]


def _room_model(raw: dict[str, Any]) -> Room | None:
    """
    dict -> Room. Битые встречи пропускаются по одной, битая комната целиком (None).
    """
    meetings: list[Meeting] = []
    for m in raw.get("meetings") or []:
        try:
            meetings.append(Meeting.model_validate(m))
        except ValueError as e:
            log.warning(
                "meeting_record_skipped",
                extra={"payload": {"room_id": raw.get("id"), "error": str(e)[:200]}},
            )
    try:
        room = Room.model_validate({**raw, "meetings": []})
    except ValueError as e:
        log.warning(
            "room_record_skipped",
            extra={"payload": {"room_id": raw.get("id"), "error": str(e)[:200]}},
        )
        return None
    room.meetings = meetings
    return room


# =============================================================================
# ROOM REPOSITORY
# =============================================================================
class RoomRepository:
    def __init__(self, store: JsonStore) -> None:
        self.store = store

    def list(self) -> list[Room]:
        # Миграция только в памяти: чтение документ не переписывает
        rooms = (_room_model(r) for r in _migrated_rooms(self.store.read(Document.rooms)))
        return [r for r in rooms if r is not None]

    def get(self, room_id: str) -> Room | None:
        for room in self.list():
            if room.id == room_id:
                return room
        return None

    def add_meeting(self, room_id: str, *, title: str, start_time: str, end_time: str) -> Room | None:
        """
        Добавляет встречу в комнату. None, если комнаты нет (документ не пишется).
        При записи комнаты старого формата сохраняются уже в новом.
        """
        with self.store.locked(Document.rooms):
            raw_rooms = _migrated_rooms(self.store.read(Document.rooms))
            target = next((r for r in raw_rooms if r.get("id") == room_id), None)
            room = _room_model(target) if target is not None else None
            if room is None:
                return None

            taken = {
                str(m.get("id"))
                for r in raw_rooms
                for m in r["meetings"]
                if isinstance(m, dict)
            }
            meeting = Meeting(
                id=new_meeting_id(taken),
                title=title,
                start_time=start_time,
                end_time=end_time,
            )
            target["meetings"].append(meeting.to_json_dict())
            self.store.write(Document.rooms, raw_rooms)
            room.meetings.append(meeting)
            return room

    def remove_meeting(self, meeting_id: str) -> Room | None:
        """
        Убирает первую встречу с таким id. Возвращает комнату, из которой её убрали,
        или None (документ не пишется).
        """
        with self.store.locked(Document.rooms):
            raw_rooms = _migrated_rooms(self.store.read(Document.rooms))
            for r in raw_rooms:
                meetings = r["meetings"]
                for idx, m in enumerate(meetings):
                    if isinstance(m, dict) and m.get("id") == meeting_id:
                        del meetings[idx]
                        room = _room_model(r)
                        if room is None:
                            # Встречи битой комнаты наружу не видны
                            meetings.insert(idx, m)
                            break
                        self.store.write(Document.rooms, raw_rooms)
                        return room
            return None


# =============================================================================
# VISITOR REPOSITORY
# =============================================================================
class VisitorRepository:
    def __init__(self, store: JsonStore) -> None:
        self.store = store

    def list(self) -> list[Visitor]:
        out: list[Visitor] = []
        for raw in self.store.read(Document.visitors):
            if not isinstance(raw, dict):
                continue
            try:
                out.append(Visitor.model_validate(raw))
            except ValueError as e:
                log.warning(
                    "visitor_record_skipped",
                    extra={"payload": {"id": raw.get("id"), "error": str(e)[:200]}},
                )
        return out

    def add(self, fields: dict[str, Any]) -> Visitor:
        """fields: визит без id (camelCase ключи)."""
        with self.store.mutate(Document.visitors) as visitors:
            taken = {str(v.get("id")) for v in visitors if isinstance(v, dict)}
            visitor = Visitor.model_validate({**fields, "id": new_visitor_id(taken)})
            visitors.append(visitor.to_json_dict())
        return visitor

    def delete(self, visitor_id: str) -> int:
        """Удаляет визиты с таким id. Возвращает количество удалённых (0 -> без записи)."""
        with self.store.locked(Document.visitors):
            visitors = self.store.read(Document.visitors)
            kept = [v for v in visitors if not (isinstance(v, dict) and v.get("id") == visitor_id)]
            removed = len(visitors) - len(kept)
            if removed:
                self.store.write(Document.visitors, kept)
            return removed


# =============================================================================
# PARTICIPANT REPOSITORY
# =============================================================================
class ParticipantRepository:
    def __init__(self, store: JsonStore) -> None:
        self.store = store

    def list_for_meeting(self, meeting_id: str) -> list[Participant]:
        data = self.store.read(Document.participants)
        out: list[Participant] = []
        for raw in data.get(meeting_id) or []:
            try:
                out.append(Participant.model_validate(raw))
            except ValueError as e:
                log.warning(
                    "participant_record_skipped",
                    extra={"payload": {"meeting_id": meeting_id, "error": str(e)[:200]}},
                )
        return out

    def replace(self, meeting_id: str, participants: list[Participant]) -> list[Participant]:
        with self.store.mutate(Document.participants) as data:
            data[meeting_id] = [p.to_json_dict() for p in participants]
        return list(participants)

    def delete_one(self, meeting_id: str, participant_id: str) -> bool:
        """Пишет документ только если у встречи есть запись."""
        with self.store.locked(Document.participants):
            data = self.store.read(Document.participants)
            if meeting_id not in data:
                return False
            data[meeting_id] = [
                p for p in (data[meeting_id] or []) if not (isinstance(p, dict) and p.get("id") == participant_id)
            ]
            self.store.write(Document.participants, data)
            return True

    def delete_all(self, meeting_id: str) -> bool:
        """Удаляет запись встречи целиком. Пишет документ только если она была."""
        with self.store.locked(Document.participants):
            data = self.store.read(Document.participants)
            if meeting_id not in data:
                return False
            del data[meeting_id]
            self.store.write(Document.participants, data)
            return True
