"""Per-request telemetry: correlation id, access log and Prometheus samples.

Only metadata is recorded. Prompts, completions, query strings and headers never
reach logs or metric labels; paths are reduced to their route template
(e.g. `/ai/{task}`) and the task name is kept only when it is a known task.
"""

from __future__ import annotations

import logging
import re
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from prompt_relay.core.metrics import http_request_duration_seconds, http_requests_total
from prompt_relay.relay.prompts import SUPPORTED_TASKS

logger = logging.getLogger("prompt_relay.http")

REQUEST_ID_HEADER = "X-Request-ID"
_SAFE_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,127}$")


def route_label(request: Request) -> str:
    """Route template of the matched route, or "unmatched" (404, OPTIONS)."""

    path = getattr(request.scope.get("route"), "path", None)
    if isinstance(path, str) and path:
        return path
    return "unmatched"


def ensure_request_id(request: Request) -> str:
    """Return the id bound to this request, binding one first if needed.

    A caller-supplied X-Request-ID is reused only when it matches a narrow
    pattern, otherwise a UUID4 hex is generated.
    """

    existing = getattr(request.state, "request_id", None)
    if existing:
        return existing

    candidate = request.headers.get(REQUEST_ID_HEADER)
    if candidate and _SAFE_REQUEST_ID_PATTERN.fullmatch(candidate):
        request_id = candidate
    else:
        request_id = uuid.uuid4().hex
    request.state.request_id = request_id
    return request_id


def _known_task(request: Request) -> str | None:
    task = request.path_params.get("task")
    return task if task in SUPPORTED_TASKS else None


def _observe(request: Request, *, status_code: int, started: float) -> dict[str, object]:
    duration = time.perf_counter() - started
    route = route_label(request)
    labels = {"method": request.method, "route": route, "status_code": str(status_code)}
    http_requests_total.labels(**labels).inc()
    http_request_duration_seconds.labels(**labels).observe(duration)
    return {
        "request_id": request.state.request_id,
        "http_method": request.method,
        "request_path": route,
        "status_code": status_code,
        "duration_ms": round(duration * 1000.0, 2),
        "task": _known_task(request),
    }


class RequestTelemetryMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = ensure_request_id(request)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:  # noqa: BLE001 - logged with stack trace, then re-raised
            logger.exception(
                "Unhandled exception while processing request",
                extra=_observe(request, status_code=500, started=started),
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "Request completed",
            extra=_observe(request, status_code=response.status_code, started=started),
        )
        return response
