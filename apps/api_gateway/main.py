"""
API Gateway (FastAPI).

Функции:
- /health
- /metrics
- /api/meeting-rooms, /api/visitors, /api/meetings/{id}/participants

Архитектурно:
- JsonStore создаётся один раз при старте процесса и лежит в app.state.store
- роуты получают AgendaService через Depends (apps/api_gateway/deps.py)
- любая ошибка отдаётся как {"error": "..."} (404 / 409 / 422 / 500)

Запуск: uvicorn --factory apps.api_gateway.main:create_app
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from apps.api_gateway.routers.participants import router as participants_router
from apps.api_gateway.routers.rooms import router as rooms_router
from apps.api_gateway.routers.visitors import router as visitors_router
from office_agenda.common.config import Settings, get_settings
from office_agenda.common.errors import AppError
from office_agenda.common.logging import get_project_logger, setup_logging
from office_agenda.common.metrics import setup_metrics_endpoint
from office_agenda.storage.json_store import JsonStore

log = get_project_logger()


def _parse_origins(raw: str) -> list[str]:
    origins = [o.strip() for o in (raw or "").split(",") if o.strip()]
    return origins or ["*"]


def _is_prod_env(app_env: str | None) -> bool:
    env = (app_env or "").strip().lower()
    return env in {"prod", "production"}


def _cors_params(settings: Settings) -> tuple[list[str], bool]:
    allow_origins = _parse_origins(settings.cors_allowed_origins)
    allow_credentials = bool(settings.cors_allow_credentials)

    if _is_prod_env(settings.app_env) and "*" in allow_origins:
        raise RuntimeError("CORS wildcard '*' is not allowed in APP_ENV=prod")

    # '*' нельзя использовать вместе с credentials=true
    if "*" in allow_origins:
        allow_credentials = False

    return allow_origins, allow_credentials


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.http_status >= 500:
            log.error(
                "request_error",
                extra={
                    "payload": {
                        "path": request.url.path,
                        "method": request.method,
                        "code": exc.code,
                        "error": exc.message,
                        "details": exc.details or {},
                    }
                },
            )
        return JSONResponse(status_code=exc.http_status, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _validation_message(exc)
        log.info(
            "request_validation_failed",
            extra={"payload": {"path": request.url.path, "error": message}},
        )
        return JSONResponse(status_code=422, content={"error": message})


def create_app(store: JsonStore | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging()

    if store is None:
        store = JsonStore(settings.data_dir)
    store.init()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        log.info("api_started", extra={"payload": {"data_dir": str(store.data_dir)}})
        yield
        log.info("api_stopped")

    app = FastAPI(title="Office Agenda", version="0.1.0", lifespan=lifespan)
    app.state.store = store
    app.state.settings = settings

    allow_origins, allow_credentials = _cors_params(settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=allow_credentials,
    )

    setup_metrics_endpoint(app, service=settings.service_name)
    _install_error_handlers(app)

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {"ok": True}

    app.include_router(rooms_router, prefix="/api")
    app.include_router(visitors_router, prefix="/api")
    app.include_router(participants_router, prefix="/api")

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "apps.api_gateway.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
    )


if __name__ == "__main__":
    run()
