"""
HTTP роуты переговорных и встреч.

- GET    /api/meeting-rooms
- POST   /api/meeting-rooms
- DELETE /api/meeting-rooms/{meeting_id}
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from apps.api_gateway.deps import agenda_service_dep, failure_message
from office_agenda.contracts.http_api import ErrorResponse, MeetingCreateRequest, MessageResponse
from office_agenda.domain.models import Room
from office_agenda.services.agenda_service import AgendaService

router = APIRouter(tags=["meeting-rooms"])
SERVICE_DEP = Depends(agenda_service_dep)


@router.get("/meeting-rooms", response_model=list[Room])
def list_meeting_rooms(svc: AgendaService = SERVICE_DEP) -> list[Room]:
    with failure_message("Failed to read meeting rooms"):
        return svc.list_rooms()


@router.post(
    "/meeting-rooms",
    response_model=Room,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def add_meeting(req: MeetingCreateRequest, svc: AgendaService = SERVICE_DEP) -> Room:
    with failure_message("Failed to add meeting"):
        return svc.add_meeting(req)


@router.delete(
    "/meeting-rooms/{meeting_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}},
)
def delete_meeting(meeting_id: str, svc: AgendaService = SERVICE_DEP) -> MessageResponse:
    with failure_message("Failed to remove meeting"):
        svc.delete_meeting(meeting_id)
    return MessageResponse(message="Meeting removed successfully")
