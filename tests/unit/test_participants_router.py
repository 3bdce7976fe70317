from __future__ import annotations

from fastapi.testclient import TestClient

from apps.api_gateway.main import create_app
from office_agenda.domain.enums import Document
from office_agenda.storage.json_store import JsonStore


def _client(tmp_path) -> tuple[TestClient, JsonStore]:
    store = JsonStore(tmp_path)
    return TestClient(create_app(store=store)), store


PEOPLE = [{"id": "1", "name": "Ana"}, {"id": "2", "name": "Dan"}]


def test_get_participants_empty_by_default(tmp_path) -> None:
    client, _ = _client(tmp_path)
    resp = client.get("/api/meetings/m-1/participants")
    assert resp.status_code == 200
    assert resp.json() == []


def test_save_replaces_list(tmp_path) -> None:
    client, _ = _client(tmp_path)
    client.post("/api/meetings/m-1/participants", json={"participants": PEOPLE})

    resp = client.post("/api/meetings/m-1/participants", json={"participants": PEOPLE[:1]})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "participants": PEOPLE[:1]}
    assert client.get("/api/meetings/m-1/participants").json() == PEOPLE[:1]


def test_save_is_idempotent(tmp_path) -> None:
    client, store = _client(tmp_path)
    client.post("/api/meetings/m-1/participants", json={"participants": PEOPLE})
    first = store.read(Document.participants)
    client.post("/api/meetings/m-1/participants", json={"participants": PEOPLE})
    assert store.read(Document.participants) == first == {"m-1": PEOPLE}


def test_delete_one_participant(tmp_path) -> None:
    client, _ = _client(tmp_path)
    client.post("/api/meetings/m-1/participants", json={"participants": PEOPLE})

    resp = client.delete("/api/meetings/m-1/participants/1")
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert client.get("/api/meetings/m-1/participants").json() == PEOPLE[1:]

    assert client.delete("/api/meetings/m-unknown/participants/1").json() == {"success": True}


def test_clear_participants(tmp_path) -> None:
    client, store = _client(tmp_path)
    client.post("/api/meetings/m-1/participants", json={"participants": PEOPLE})
    client.post("/api/meetings/m-2/participants", json={"participants": PEOPLE})

    resp = client.delete("/api/meetings/m-1/participants")
    assert resp.json() == {"success": True}
    assert store.read(Document.participants) == {"m-2": PEOPLE}


def test_save_rejects_malformed_participants(tmp_path) -> None:
    client, _ = _client(tmp_path)
    resp = client.post("/api/meetings/m-1/participants", json={"participants": [{"name": "no id"}]})
    assert resp.status_code == 422
    assert "error" in resp.json()


def test_get_participants_skips_malformed_records(tmp_path) -> None:
    client, store = _client(tmp_path)
    store.write(Document.participants, {"m-1": [{"name": "no id"}, "junk", {"id": "2", "name": "Dan"}]})

    resp = client.get("/api/meetings/m-1/participants")
    assert resp.status_code == 200
    assert resp.json() == [{"id": "2", "name": "Dan"}]
