from __future__ import annotations

from fastapi import FastAPI

from prompt_relay.api.exception_handlers import register_exception_handlers
from prompt_relay.core.middleware.cors import CorsMiddleware
from prompt_relay.core.middleware.request_telemetry import RequestTelemetryMiddleware
from prompt_relay.core.settings import Settings


def configure_app(app: FastAPI, *, settings: Settings) -> FastAPI:
    """Attach settings, middleware and error handling shared by every transport binding."""

    app.state.settings = settings

    # Last added runs first: telemetry wraps CORS, so preflights are logged too.
    app.add_middleware(CorsMiddleware)
    app.add_middleware(RequestTelemetryMiddleware)

    register_exception_handlers(app)
    return app
