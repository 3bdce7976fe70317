"""
HTTP роуты участников встречи.

POST заменяет список целиком (не merge).
DELETE без participant_id чистит запись встречи полностью.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from apps.api_gateway.deps import agenda_service_dep, failure_message
from office_agenda.common.logging import get_project_logger
from office_agenda.contracts.http_api import (
    ParticipantsReplaceRequest,
    ParticipantsSaveResponse,
    SuccessResponse,
)
from office_agenda.domain.models import Participant
from office_agenda.services.agenda_service import AgendaService

log = get_project_logger()

router = APIRouter(tags=["participants"])
SERVICE_DEP = Depends(agenda_service_dep)


@router.get("/meetings/{meeting_id}/participants", response_model=list[Participant])
def get_participants(meeting_id: str, svc: AgendaService = SERVICE_DEP) -> list[Participant]:
    with failure_message("Failed to read participants"):
        return svc.get_participants(meeting_id)


@router.post("/meetings/{meeting_id}/participants", response_model=ParticipantsSaveResponse)
def save_participants(
    meeting_id: str,
    req: ParticipantsReplaceRequest,
    svc: AgendaService = SERVICE_DEP,
) -> ParticipantsSaveResponse:
    log.debug(
        "participants_save_requested",
        extra={"payload": {"meeting_id": meeting_id, "count": len(req.participants)}},
    )
    with failure_message("Failed to save participants"):
        saved = svc.save_participants(meeting_id, req.participants)
    return ParticipantsSaveResponse(success=True, participants=saved)


@router.delete(
    "/meetings/{meeting_id}/participants/{participant_id}",
    response_model=SuccessResponse,
)
def delete_participant(
    meeting_id: str,
    participant_id: str,
    svc: AgendaService = SERVICE_DEP,
) -> SuccessResponse:
    with failure_message("Failed to delete participant"):
        svc.delete_participant(meeting_id, participant_id)
    return SuccessResponse(success=True)


@router.delete("/meetings/{meeting_id}/participants", response_model=SuccessResponse)
def clear_participants(meeting_id: str, svc: AgendaService = SERVICE_DEP) -> SuccessResponse:
    with failure_message("Failed to clean up participants"):
        svc.clear_participants(meeting_id)
    return SuccessResponse(success=True)
