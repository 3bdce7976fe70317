"""
Единые ошибки и коды ошибок.

Назначение:
- предсказуемые коды для HTTP и клиента
- единый стиль исключений по проекту
"""

from __future__ import annotations

from dataclasses import dataclass


class ErrCode:
    # Общие
    UNKNOWN = "unknown"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"

    # Инфра/хранилища
    STORAGE_ERROR = "storage_error"


HTTP_STATUS_BY_CODE = {
    ErrCode.NOT_FOUND: 404,
    ErrCode.CONFLICT: 409,
    ErrCode.STORAGE_ERROR: 500,
    ErrCode.UNKNOWN: 500,
}


@dataclass
class AppError(Exception):
    """
    Базовая ошибка приложения.
    - code: стабильный код ошибки
    - message: безопасное сообщение (уходит клиенту как {"error": message})
    - details: доп. данные
    """

    code: str
    message: str
    details: dict | None = None

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.message}"

    @property
    def http_status(self) -> int:
        return HTTP_STATUS_BY_CODE.get(self.code, 500)


class NotFoundError(AppError):
    def __init__(self, message: str = "Not found", details: dict | None = None) -> None:
        super().__init__(ErrCode.NOT_FOUND, message, details)


class ConflictError(AppError):
    def __init__(self, message: str = "Conflict", details: dict | None = None) -> None:
        super().__init__(ErrCode.CONFLICT, message, details)


class StorageError(AppError):
    def __init__(self, message: str = "Storage failure", details: dict | None = None) -> None:
        super().__init__(ErrCode.STORAGE_ERROR, message, details)
