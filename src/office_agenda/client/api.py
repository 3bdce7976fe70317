"""
HTTP клиент REST API агенды.

Правила:
- без ретраев: один запрос = одна попытка
- не-2xx -> AgendaApiError с текстом из {"error": ...}
- session подменяема (requests.Session или совместимый клиент, например TestClient)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import requests

from office_agenda.common.config import get_settings
from office_agenda.common.logging import get_client_logger
from office_agenda.domain.models import Participant, Room, Visitor

log = get_client_logger()


@dataclass
class AgendaApiError(Exception):
    status_code: int
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return f"HTTP {self.status_code}: {self.message}"


def normalize_base_url(base_url: str) -> str:
    value = (base_url or "").strip().rstrip("/")
    if not value.startswith(("http://", "https://")):
        value = f"http://{value}"
    return value


class AgendaApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        session: Any | None = None,
        timeout_sec: float | None = None,
    ) -> None:
        s = get_settings()
        self.base_url = normalize_base_url(base_url or s.agenda_api_base_url)
        self.session = session if session is not None else requests.Session()
        self.timeout_sec = timeout_sec if timeout_sec is not None else s.agenda_api_timeout_sec

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api{path}"

    def _request(self, method: str, path: str, *, json: Any = None) -> Any:
        url = self._url(path)
        kwargs: dict[str, Any] = {"timeout": self.timeout_sec}
        if json is not None:
            kwargs["json"] = json
        try:
            resp = getattr(self.session, method)(url, **kwargs)
        except requests.RequestException as e:
            log.error("agenda_api_unreachable", extra={"payload": {"url": url, "error": str(e)[:200]}})
            raise AgendaApiError(0, f"Request to {url} failed") from e

        if resp.status_code >= 400:
            try:
                message = str(resp.json().get("error") or "")
            except (ValueError, AttributeError):
                message = ""
            message = message or f"HTTP error! status: {resp.status_code}"
            log.warning(
                "agenda_api_error",
                extra={"payload": {"url": url, "status": resp.status_code, "error": message}},
            )
            raise AgendaApiError(resp.status_code, message)
        return resp.json()

    # -------------------------------------------------------------------------
    # Rooms / meetings
    # -------------------------------------------------------------------------
    def list_rooms(self) -> list[Room]:
        return [Room.model_validate(r) for r in self._request("get", "/meeting-rooms")]

    def add_meeting(self, *, room_id: str, title: str, start_time: str, end_time: str) -> Room:
        payload = {"roomId": room_id, "title": title, "startTime": start_time, "endTime": end_time}
        return Room.model_validate(self._request("post", "/meeting-rooms", json=payload))

    def delete_meeting(self, meeting_id: str) -> str:
        return self._request("delete", f"/meeting-rooms/{meeting_id}").get("message", "")

    # -------------------------------------------------------------------------
    # Visitors
    # -------------------------------------------------------------------------
    def list_visitors(self) -> list[Visitor]:
        return [Visitor.model_validate(v) for v in self._request("get", "/visitors")]

    def add_visitor(self, fields: dict[str, Any]) -> Visitor:
        return Visitor.model_validate(self._request("post", "/visitors", json=fields))

    def delete_visitor(self, visitor_id: str) -> str:
        return self._request("delete", f"/visitors/{visitor_id}").get("message", "")

    # -------------------------------------------------------------------------
    # Participants
    # -------------------------------------------------------------------------
    def get_participants(self, meeting_id: str) -> list[Participant]:
        data = self._request("get", f"/meetings/{meeting_id}/participants")
        return [Participant.model_validate(p) for p in data]

    def save_participants(self, meeting_id: str, participants: list[Participant]) -> list[Participant]:
        payload = {"participants": [p.to_json_dict() for p in participants]}
        data = self._request("post", f"/meetings/{meeting_id}/participants", json=payload)
        return [Participant.model_validate(p) for p in data.get("participants") or []]

    def delete_participant(self, meeting_id: str, participant_id: str) -> None:
        self._request("delete", f"/meetings/{meeting_id}/participants/{participant_id}")

    def clear_participants(self, meeting_id: str) -> None:
        self._request("delete", f"/meetings/{meeting_id}/participants")
