from __future__ import annotations

from fastapi import FastAPI

from prompt_relay import __version__
from prompt_relay.api.health import router as health_router
from prompt_relay.api.setup import configure_app
from prompt_relay.core.logging import setup_logging
from prompt_relay.core.metrics import metrics_router
from prompt_relay.core.settings import Settings, get_settings
from prompt_relay.relay.prompts import SUPPORTED_TASKS
from prompt_relay.relay.router import router as relay_router

setup_logging()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the long-running server app.

    Settings are resolved once here and shared read-only by every request.
    """

    settings = settings or get_settings()

    app = FastAPI(
        title="Prompt Relay API",
        version=__version__,
        description=(
            "Relays text prompts to the Groq chat completions API.\n\n"
            "- `POST /translate` forwards a raw prompt.\n"
            f"- `POST /ai/{{task}}` renders a canned prompt; tasks: {', '.join(SUPPORTED_TASKS)}.\n"
            "- Upstream responses are returned verbatim once they carry a completion message."
        ),
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime check; does not call the upstream API.",
            },
            {
                "name": "relay",
                "description": "Prompt relay endpoints.",
            },
            {
                "name": "monitoring",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )
    configure_app(app, settings=settings)

    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(relay_router)
    return app


app = create_app()
