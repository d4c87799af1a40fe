from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from prompt_relay.core.middleware.cors import CORS_HEADERS
from prompt_relay.core.middleware.request_telemetry import (
    REQUEST_ID_HEADER,
    ensure_request_id,
    route_label,
)
from prompt_relay.domain.exceptions import RelayError

logger = logging.getLogger("prompt_relay.errors")

_HTTP_ERROR_MESSAGES = {
    404: "Endpoint not found",
    405: "Method not allowed",
}


def _log_extra(request: Request, status_code: int) -> dict[str, object]:
    # Route template only; never the body, query string or headers.
    return {
        "request_id": ensure_request_id(request),
        "http_method": request.method,
        "request_path": route_label(request),
        "status_code": status_code,
    }


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as a JSON body with an `error` field."""

    @app.exception_handler(RelayError)
    async def handle_relay_error(request: Request, exc: RelayError) -> JSONResponse:
        logger.info(
            "Relay request failed",
            extra={**_log_extra(request, exc.status_code), "error": type(exc).__name__},
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        message = _HTTP_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        # Runs outside the middleware stack, so CORS and correlation headers are added here.
        logger.error(
            "Unhandled error",
            extra={**_log_extra(request, 500), "error": type(exc).__name__},
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Something went wrong!"},
            headers={**CORS_HEADERS, REQUEST_ID_HEADER: ensure_request_id(request)},
        )
