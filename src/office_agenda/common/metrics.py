"""
Метрики Prometheus для сервиса.

Назначение:
- Экспорт /metrics
- Счётчики HTTP запросов и операций с JSON документами
"""

from __future__ import annotations

import time

from fastapi import FastAPI, Request
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# =============================================================================
# СЧЁТЧИКИ И МЕТРИКИ
# =============================================================================

REQUESTS_TOTAL = Counter(
    "agenda_requests_total",
    "Общее количество HTTP запросов",
    ["service", "route", "method", "status"],
)

HTTP_REQUEST_LATENCY_MS = Histogram(
    "agenda_http_request_latency_ms",
    "Задержка HTTP запроса (мс)",
    ["service", "route", "method"],
    buckets=(5, 10, 25, 50, 100, 250, 500, 1000, 2500, 5000, 10000),
)

STORE_OPERATIONS_TOTAL = Counter(
    "agenda_store_operations_total",
    "Чтения/записи JSON документов",
    ["document", "op", "result"],  # op=read|write, result=ok|fallback|failed
)


def record_store_operation(*, document: str, op: str, result: str) -> None:
    STORE_OPERATIONS_TOTAL.labels(document=document, op=op, result=result).inc()


def _route_template(request: Request) -> str:
    # /api/visitors/{visitor_id} вместо сырого пути, чтобы не раздувать кардинальность
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    return path or request.url.path


# =============================================================================
# ENDPOINT /metrics
# =============================================================================
def setup_metrics_endpoint(app: FastAPI, *, service: str = "office-agenda-api") -> None:
    """
    Регистрирует middleware и endpoint /metrics для Prometheus.
    """

    @app.middleware("http")
    async def http_metrics(request: Request, call_next):
        method = request.method
        started = time.perf_counter()

        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        route = _route_template(request)

        REQUESTS_TOTAL.labels(
            service=service,
            route=route,
            method=method,
            status=str(response.status_code),
        ).inc()
        HTTP_REQUEST_LATENCY_MS.labels(service=service, route=route, method=method).observe(
            elapsed_ms
        )
        return response

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
