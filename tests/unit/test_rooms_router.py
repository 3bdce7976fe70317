from __future__ import annotations

from fastapi.testclient import TestClient

from apps.api_gateway.main import create_app
from office_agenda.common.config import Settings
from office_agenda.common.errors import StorageError
from office_agenda.domain.enums import Document
from office_agenda.storage.json_store import JsonStore


def _client(tmp_path, **settings) -> tuple[TestClient, JsonStore]:
    store = JsonStore(tmp_path)
    app = create_app(store=store, settings=Settings(**settings))
    return TestClient(app), store


def _book(client: TestClient, room_id: str, start: str, end: str, title: str = "Sync"):
    return client.post(
        "/api/meeting-rooms",
        json={"roomId": room_id, "title": title, "startTime": start, "endTime": end},
    )


def test_list_seeded_rooms(tmp_path) -> None:
    client, _ = _client(tmp_path)
    resp = client.get("/api/meeting-rooms")
    assert resp.status_code == 200
    body = resp.json()
    assert [r["id"] for r in body] == ["1", "2", "3"]
    assert body[0] == {"id": "1", "name": "Chipicao Session Room", "meetings": []}


def test_list_rooms_migrates_legacy_shape(tmp_path) -> None:
    client, store = _client(tmp_path)
    store.write(
        Document.rooms,
        [
            {"id": "1", "name": "A", "meetingTitle": "Old", "startTime": "2025-09-03T09:00", "endTime": "2025-09-03T10:00"},
            {"id": "2", "name": "B", "meetingTitle": "", "startTime": "", "endTime": ""},
        ],
    )

    body = client.get("/api/meeting-rooms").json()
    assert body[0]["meetings"] == [
        {"id": "m-1-legacy", "title": "Old", "startTime": "2025-09-03T09:00", "endTime": "2025-09-03T10:00"}
    ]
    assert body[1] == {"id": "2", "name": "B", "meetings": []}


def test_add_meeting_returns_room_with_camel_case(tmp_path) -> None:
    client, _ = _client(tmp_path)
    resp = _book(client, "1", "2025-09-03T09:00", "2025-09-03T10:00")
    assert resp.status_code == 200
    room = resp.json()
    assert room["id"] == "1"
    meeting = room["meetings"][0]
    assert meeting["startTime"] == "2025-09-03T09:00"
    assert meeting["endTime"] == "2025-09-03T10:00"
    assert meeting["id"].startswith("m-")


def test_add_meeting_unknown_room_is_404(tmp_path) -> None:
    client, _ = _client(tmp_path)
    resp = _book(client, "99", "2025-09-03T09:00", "2025-09-03T10:00")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Room not found"}


def test_add_meeting_bad_body_is_422(tmp_path) -> None:
    client, _ = _client(tmp_path)
    resp = client.post("/api/meeting-rooms", json={"roomId": "1", "startTime": "soon", "endTime": "later"})
    assert resp.status_code == 422
    assert "startTime" in resp.json()["error"]


def test_add_meeting_overlap_rejected_when_server_validation_enabled(tmp_path) -> None:
    client, _ = _client(tmp_path, SCHEDULE_VALIDATION_ENABLED=True)
    assert _book(client, "1", "2025-09-03T09:00", "2025-09-03T10:00").status_code == 200

    overlap = _book(client, "1", "2025-09-03T09:30", "2025-09-03T09:45")
    assert overlap.status_code == 409
    assert "overlaps" in overlap.json()["error"]

    assert _book(client, "1", "2025-09-03T10:00", "2025-09-03T10:30").status_code == 200


def test_delete_meeting_and_participants(tmp_path) -> None:
    client, _ = _client(tmp_path)
    meeting_id = _book(client, "3", "2025-09-03T09:00", "2025-09-03T10:00").json()["meetings"][0]["id"]
    client.post(f"/api/meetings/{meeting_id}/participants", json={"participants": [{"id": "1", "name": "Ana"}]})

    resp = client.delete(f"/api/meeting-rooms/{meeting_id}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Meeting removed successfully"}
    assert client.get(f"/api/meetings/{meeting_id}/participants").json() == []
    assert client.get("/api/meeting-rooms").json()[2]["meetings"] == []


def test_delete_unknown_meeting_is_404(tmp_path) -> None:
    client, _ = _client(tmp_path)
    resp = client.delete("/api/meeting-rooms/m-missing")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Meeting not found"}


def test_write_failure_is_500_with_route_message(tmp_path, monkeypatch) -> None:
    client, store = _client(tmp_path)

    def _fail(doc, value):
        raise StorageError(f"Failed to write {doc.filename}")

    monkeypatch.setattr(store, "write", _fail)
    resp = _book(client, "1", "2025-09-03T09:00", "2025-09-03T10:00")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to add meeting"}


def test_health_and_metrics(tmp_path) -> None:
    client, _ = _client(tmp_path)
    assert client.get("/health").json() == {"ok": True}
    client.get("/api/meeting-rooms")
    metrics = client.get("/metrics")
    assert metrics.status_code == 200
    assert "agenda_requests_total" in metrics.text


def test_list_rooms_skips_malformed_records(tmp_path) -> None:
    client, store = _client(tmp_path, SCHEDULE_VALIDATION_ENABLED=True)
    store.write(
        Document.rooms,
        [
            {
                "id": "1",
                "name": "A",
                "meetings": [
                    {"title": "no id", "startTime": "2025-09-03T09:00", "endTime": "2025-09-03T10:00"},
                    {"id": "m-ok", "title": "Ok", "startTime": "2025-09-03T11:00", "endTime": "2025-09-03T12:00"},
                ],
            },
            {"id": "2", "meetings": []},
            {"id": "3", "name": "C", "meetings": []},
        ],
    )

    resp = client.get("/api/meeting-rooms")
    assert resp.status_code == 200
    body = resp.json()
    assert [r["id"] for r in body] == ["1", "3"]
    assert [m["id"] for m in body[0]["meetings"]] == ["m-ok"]

    booked = _book(client, "1", "2025-09-03T13:00", "2025-09-03T14:00")
    assert booked.status_code == 200
    assert [m["title"] for m in booked.json()["meetings"]] == ["Ok", "Sync"]

    # Комната без name не видна, значит и бронировать в неё нельзя
    assert _book(client, "2", "2025-09-03T13:00", "2025-09-03T14:00").status_code == 404
