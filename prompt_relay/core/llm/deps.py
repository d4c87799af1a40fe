from __future__ import annotations

from fastapi import Depends, Request

from prompt_relay.core.llm.groq_client import GroqClient, GroqConfig
from prompt_relay.core.settings import Settings


def get_app_settings(request: Request) -> Settings:
    """Settings bound to the running app at construction time."""
    return request.app.state.settings


def build_groq_client(settings: Settings) -> GroqClient | None:
    if not settings.groq_api_key:
        return None

    config = GroqConfig(
        api_key=settings.groq_api_key,
        base_url=settings.groq_base_url,
        model=settings.groq_model,
        max_tokens=int(settings.max_tokens),
        temperature=float(settings.temperature),
        timeout_seconds=float(settings.groq_timeout_seconds),
    )
    return GroqClient(config=config)


def get_groq_client(settings: Settings = Depends(get_app_settings)) -> GroqClient | None:
    """
    Dependency provider for GroqClient.

    Returns None when no API key is configured so the relay can report a
    missing credential only after the request itself has been validated.
    """

    return build_groq_client(settings)
