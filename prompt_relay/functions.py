"""Function-per-route bindings for serverless platforms.

Each app answers exactly one operation on whatever path the platform routes to
it (e.g. `/api/translate`), and shares middleware, error handling and the
relay with the long-running server in `prompt_relay.main`.
"""

from __future__ import annotations

from fastapi import FastAPI

from prompt_relay.api.health import health
from prompt_relay.api.schemas import HealthOut
from prompt_relay.api.setup import configure_app
from prompt_relay.core.logging import setup_logging
from prompt_relay.core.settings import Settings, get_settings
from prompt_relay.relay.router import translate

setup_logging()

_ANY_PATH = "/{path:path}"


def _function_app(*, title: str, settings: Settings | None) -> FastAPI:
    app = FastAPI(title=title, docs_url=None, redoc_url=None, openapi_url=None)
    return configure_app(app, settings=settings or get_settings())


def create_health_function(settings: Settings | None = None) -> FastAPI:
    app = _function_app(title="health", settings=settings)
    app.add_api_route(_ANY_PATH, health, methods=["GET"], response_model=HealthOut)
    return app


def create_translate_function(settings: Settings | None = None) -> FastAPI:
    app = _function_app(title="translate", settings=settings)
    app.add_api_route(_ANY_PATH, translate, methods=["POST"])
    return app


health_app = create_health_function()
translate_app = create_translate_function()
