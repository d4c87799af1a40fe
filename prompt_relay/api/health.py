from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Depends

from prompt_relay.api.schemas import HealthOut
from prompt_relay.core.llm.deps import get_app_settings
from prompt_relay.core.settings import Settings

router = APIRouter(tags=["health"])


def _utc_timestamp() -> str:
    # Millisecond precision with a "Z" suffix, e.g. 2024-05-01T12:00:00.000Z
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def health(settings: Settings = Depends(get_app_settings)) -> HealthOut:
    """Report liveness without touching the upstream API."""
    return HealthOut(
        status="ok",
        timestamp=_utc_timestamp(),
        groq_configured=settings.groq_configured,
    )


router.add_api_route(
    "/health",
    health,
    methods=["GET"],
    response_model=HealthOut,
    summary="Health check",
)
