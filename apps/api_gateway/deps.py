"""
FastAPI Depends.

Сюда выносим:
- доступ к JsonStore, созданному при старте процесса (app.state.store)
- сборку AgendaService на запрос
- единое сообщение об ошибке для 500 по каждому роуту
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import Depends, Request

from office_agenda.common.config import Settings, get_settings
from office_agenda.common.errors import AppError, ErrCode, StorageError
from office_agenda.common.logging import get_project_logger
from office_agenda.services.agenda_service import AgendaService
from office_agenda.storage.json_store import JsonStore

log = get_project_logger()


def get_store(request: Request) -> JsonStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def agenda_service_dep(
    store: JsonStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> AgendaService:
    return AgendaService(store, settings=settings)


@contextmanager
def failure_message(message: str) -> Iterator[None]:
    """
    Ошибки хранилища и непредвиденные исключения -> 500 {"error": message}.
    Остальные AppError (404/409/422) пробрасываются как есть.
    """
    try:
        yield
    except StorageError as e:
        raise StorageError(message, details={"cause": e.message}) from e
    except AppError:
        raise
    except Exception as e:
        log.exception("request_failed", extra={"payload": {"error": message}})
        raise AppError(ErrCode.UNKNOWN, message) from e
