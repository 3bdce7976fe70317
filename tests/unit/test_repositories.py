from __future__ import annotations

from office_agenda.domain.enums import Document
from office_agenda.domain.models import Participant
from office_agenda.storage.json_store import JsonStore
from office_agenda.storage.repositories import (
    ParticipantRepository,
    RoomRepository,
    VisitorRepository,
    migrate_legacy_room,
)


def _store(tmp_path) -> JsonStore:
    store = JsonStore(tmp_path)
    store.init()
    return store


def test_migrate_legacy_room_with_title() -> None:
    room = migrate_legacy_room(
        {
            "id": "2",
            "name": "7Days Session Room",
            "meetingTitle": "Standup",
            "startTime": "2025-09-03T09:00",
            "endTime": "2025-09-03T09:15",
        }
    )
    assert room == {
        "id": "2",
        "name": "7Days Session Room",
        "meetings": [
            {
                "id": "m-2-legacy",
                "title": "Standup",
                "startTime": "2025-09-03T09:00",
                "endTime": "2025-09-03T09:15",
            }
        ],
    }


def test_migrate_legacy_room_with_empty_title() -> None:
    room = migrate_legacy_room(
        {"id": "3", "name": "Middle Session Room", "meetingTitle": "", "startTime": "", "endTime": ""}
    )
    assert room == {"id": "3", "name": "Middle Session Room", "meetings": []}


def test_migrate_leaves_current_shape_alone() -> None:
    raw = {"id": "1", "name": "A", "meetings": [{"id": "m-1"}]}
    assert migrate_legacy_room(raw) is raw
    assert migrate_legacy_room({"id": "1", "name": "A"})["meetings"] == []


def test_list_rooms_migrates_without_writing(tmp_path) -> None:
    store = _store(tmp_path)
    legacy = [{"id": "1", "name": "A", "meetingTitle": "Old", "startTime": "s", "endTime": "e"}]
    store.write(Document.rooms, legacy)

    rooms = RoomRepository(store).list()
    assert rooms[0].meetings[0].id == "m-1-legacy"
    assert store.read(Document.rooms) == legacy


def test_add_meeting_assigns_unique_ids(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr("office_agenda.common.ids.utc_ms", lambda: 1_700_000_000_000)
    repo = RoomRepository(_store(tmp_path))

    first = repo.add_meeting("1", title="a", start_time="2025-09-03T09:00", end_time="2025-09-03T10:00")
    second = repo.add_meeting("2", title="b", start_time="2025-09-03T09:00", end_time="2025-09-03T10:00")

    assert first is not None and second is not None
    assert first.meetings[-1].id == "m-1700000000000"
    assert second.meetings[-1].id == "m-1700000000001"


def test_add_meeting_unknown_room_does_not_write(tmp_path, monkeypatch) -> None:
    store = _store(tmp_path)
    writes: list[Document] = []
    original_write = store.write
    monkeypatch.setattr(store, "write", lambda doc, value: (writes.append(doc), original_write(doc, value)))

    assert RoomRepository(store).add_meeting("nope", title="", start_time="x", end_time="y") is None
    assert writes == []


def test_remove_meeting_only_touches_owning_room(tmp_path) -> None:
    repo = RoomRepository(_store(tmp_path))
    a = repo.add_meeting("1", title="a", start_time="2025-09-03T09:00", end_time="2025-09-03T10:00")
    repo.add_meeting("2", title="b", start_time="2025-09-03T09:00", end_time="2025-09-03T10:00")
    assert a is not None
    meeting_id = a.meetings[-1].id

    removed_from = repo.remove_meeting(meeting_id)
    assert removed_from is not None and removed_from.id == "1"

    rooms = {r.id: r for r in repo.list()}
    assert rooms["1"].meetings == []
    assert len(rooms["2"].meetings) == 1
    assert repo.remove_meeting(meeting_id) is None


def test_remove_legacy_meeting(tmp_path) -> None:
    store = _store(tmp_path)
    store.write(
        Document.rooms,
        [{"id": "1", "name": "A", "meetingTitle": "Old", "startTime": "s", "endTime": "e"}],
    )
    repo = RoomRepository(store)

    assert repo.remove_meeting("m-1-legacy") is not None
    assert store.read(Document.rooms) == [{"id": "1", "name": "A", "meetings": []}]


def test_visitor_add_ignores_client_id_and_delete(tmp_path) -> None:
    repo = VisitorRepository(_store(tmp_path))
    v = repo.add({"id": "client", "name": "Jane", "company": "Acme", "time": "2025-09-03T09:00"})
    assert v.id != "client"
    assert [x.id for x in repo.list()] == [v.id]

    assert repo.delete("missing") == 0
    assert repo.delete(v.id) == 1
    assert repo.list() == []


def test_participants_replace_delete_one_and_all(tmp_path) -> None:
    store = _store(tmp_path)
    repo = ParticipantRepository(store)
    people = [Participant(id="1", name="Ana"), Participant(id="2", name="Dan")]

    repo.replace("m-1", people)
    repo.replace("m-1", people)
    assert repo.list_for_meeting("m-1") == people
    assert repo.list_for_meeting("m-unknown") == []

    assert repo.delete_one("m-1", "1") is True
    assert [p.id for p in repo.list_for_meeting("m-1")] == ["2"]
    assert repo.delete_one("m-unknown", "1") is False

    assert repo.delete_all("m-1") is True
    assert store.read(Document.participants) == {}
    assert repo.delete_all("m-1") is False
