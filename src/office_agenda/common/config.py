"""
Централизованная конфигурация проекта (ENV / .env).

Важно:
- настройки читаются из .env и переменных окружения
- типизированные значения через pydantic-settings
- любое поле можно переопределить файлом: <ALIAS>_FILE=/path/to/value
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        validate_assignment=True,
    )

    # -------------------------------------------------------------------------
    # Runtime
    # -------------------------------------------------------------------------
    app_env: str = Field(default="dev", alias="APP_ENV")
    service_name: str = Field(default="office-agenda-api", alias="SERVICE_NAME")
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=5000, alias="API_PORT")
    cors_allowed_origins: str = Field(default="*", alias="CORS_ALLOWED_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")

    # -------------------------------------------------------------------------
    # Storage (JSON документы на локальном диске)
    # -------------------------------------------------------------------------
    data_dir: str = Field(default="./public/data", alias="DATA_DIR")

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------
    # По умолчанию сервер доверяет клиенту (проверки пересечений только на клиенте)
    schedule_validation_enabled: bool = Field(default=False, alias="SCHEDULE_VALIDATION_ENABLED")
    business_hours_start: int = Field(default=8, alias="BUSINESS_HOURS_START")
    business_hours_end: int = Field(default=18, alias="BUSINESS_HOURS_END")

    # -------------------------------------------------------------------------
    # Client
    # -------------------------------------------------------------------------
    agenda_api_base_url: str = Field(default="http://localhost:5000", alias="AGENDA_API_BASE_URL")
    agenda_api_timeout_sec: float = Field(default=10.0, alias="AGENDA_API_TIMEOUT_SEC")

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")  # json|text

    def model_post_init(self, __context) -> None:
        _apply_file_overrides(self)


def _apply_file_overrides(settings: Settings) -> None:
    alias_to_field = {}
    for name, field in type(settings).model_fields.items():
        alias = field.alias or name
        alias_to_field[str(alias)] = name
        alias_to_field[str(name)] = name

    for key, path in os.environ.items():
        if not key.endswith("_FILE"):
            continue
        base = key[: -len("_FILE")]
        target = alias_to_field.get(base)
        if not target:
            continue
        file_path = (path or "").strip()
        if not file_path:
            continue
        try:
            raw = Path(file_path).read_text(encoding="utf-8")
        except Exception as e:
            logging.getLogger("office-agenda").error(
                "config_file_read_failed",
                extra={"payload": {"env_key": key, "path": file_path, "error": str(e)[:200]}},
            )
            raise RuntimeError(f"Failed to read {key} from {file_path}") from e
        setattr(settings, target, raw.strip())


_SETTINGS = Settings()


def get_settings() -> Settings:
    return _SETTINGS
