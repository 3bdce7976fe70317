from __future__ import annotations

from fastapi import APIRouter, Depends

from apps.api_gateway.deps import agenda_service_dep, failure_message
from office_agenda.contracts.http_api import MessageResponse, VisitorCreateRequest
from office_agenda.domain.models import Visitor
from office_agenda.services.agenda_service import AgendaService

router = APIRouter(tags=["visitors"])
SERVICE_DEP = Depends(agenda_service_dep)


@router.get("/visitors", response_model=list[Visitor], response_model_exclude_none=True)
def list_visitors(svc: AgendaService = SERVICE_DEP) -> list[Visitor]:
    with failure_message("Failed to read visitors"):
        return svc.list_visitors()


@router.post("/visitors", response_model=Visitor, response_model_exclude_none=True)
def add_visitor(req: VisitorCreateRequest, svc: AgendaService = SERVICE_DEP) -> Visitor:
    with failure_message("Failed to add visitor"):
        return svc.add_visitor(req)


@router.delete("/visitors/{visitor_id}", response_model=MessageResponse)
def delete_visitor(visitor_id: str, svc: AgendaService = SERVICE_DEP) -> MessageResponse:
    with failure_message("Failed to delete visitor"):
        svc.delete_visitor(visitor_id)
    return MessageResponse(message="Visitor deleted")
