"""
Métricas Prometheus do portal: tráfego HTTP por vertical, transições de
status dos fluxos de parceiro e volume de logs.
"""
import re
from time import perf_counter
from typing import Callable

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

__all__ = [
    "PrometheusMiddleware",
    "CONTENT_TYPE_LATEST",
    "get_metrics",
    "record_log",
    "record_transition",
    "vertical_of",
]

REQUESTS = Counter(
    "partnerhub_http_requests_total",
    "Requisições HTTP atendidas",
    ["vertical", "method", "route", "status_code"],
)

LATENCY = Histogram(
    "partnerhub_http_request_duration_seconds",
    "Duração das requisições HTTP",
    ["vertical", "method"],
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

IN_FLIGHT = Gauge(
    "partnerhub_http_requests_in_flight",
    "Requisições em andamento",
)

TRANSITIONS = Counter(
    "partnerhub_status_transitions_total",
    "Transições de status solicitadas (aceitas ou rejeitadas)",
    ["domain", "from_status", "to_status", "outcome"],
)

LOG_MESSAGES = Counter(
    "partnerhub_log_messages_total",
    "Mensagens de log emitidas",
    ["level"],
)

_VERTICALS = (
    ("/api/partner/restaurant", "dining"),
    ("/api/partner/flight", "flight"),
    ("/api/partner/activities", "activities"),
    ("/api/partner/stats", "activities"),
    ("/api/shop", "shop"),
    ("/api/auth", "accounts"),
    ("/api/admin/users", "accounts"),
)

_ID_SEGMENT = re.compile(r"/(\d+|[0-9a-f]{8}-[0-9a-f-]{27})(?=/|$)")


def vertical_of(path: str) -> str:
    """
    /api/partner/flight/flights/3 -> 'flight'
    /api/shop/partners/products    -> 'shop'
    """
    for prefix, vertical in _VERTICALS:
        if path.startswith(prefix):
            return vertical
    return "other"


def route_of(path: str) -> str:
    return _ID_SEGMENT.sub("/{id}", path)


class PrometheusMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        path = request.url.path
        if path.startswith("/api/monitoring"):
            return await call_next(request)

        vertical = vertical_of(path)
        method = request.method
        status_code = 500
        started = perf_counter()
        IN_FLIGHT.inc()
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            IN_FLIGHT.dec()
            REQUESTS.labels(vertical, method, route_of(path), str(status_code)).inc()
            LATENCY.labels(vertical, method).observe(perf_counter() - started)


def record_transition(domain: str, current: str, target: str, accepted: bool) -> None:
    TRANSITIONS.labels(domain, current, target, "accepted" if accepted else "rejected").inc()


def record_log(level: str) -> None:
    LOG_MESSAGES.labels(level=level).inc()


def get_metrics() -> bytes:
    return generate_latest()
