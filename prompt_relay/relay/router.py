from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from prompt_relay.core.llm.deps import get_app_settings, get_groq_client
from prompt_relay.core.llm.groq_client import GroqClient
from prompt_relay.core.settings import Settings
from prompt_relay.domain.exceptions import InvalidInput, PayloadTooLarge
from prompt_relay.relay.service import handle, validate_prompt_request, validate_task_request

router = APIRouter(tags=["relay"])


async def read_json_body(request: Request, *, max_bytes: int) -> Any:
    """Parse the request body as JSON; an empty body reads as `{}`."""

    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > max_bytes:
        raise PayloadTooLarge("Request body too large")

    chunks: list[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > max_bytes:
            raise PayloadTooLarge("Request body too large")
        chunks.append(chunk)

    raw = b"".join(chunks)
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError, RecursionError) as exc:
        raise InvalidInput("Invalid request: body must be valid JSON") from exc


async def translate(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    client: GroqClient | None = Depends(get_groq_client),
) -> JSONResponse:
    """Relay a raw prompt upstream and return the completion body verbatim."""

    payload = await read_json_body(request, max_bytes=settings.max_body_bytes)
    relay_request = validate_prompt_request(payload)
    data = await handle(relay_request, client=client)
    return JSONResponse(content=data)


async def run_task(
    task: str,
    request: Request,
    settings: Settings = Depends(get_app_settings),
    client: GroqClient | None = Depends(get_groq_client),
) -> JSONResponse:
    """Render the canned prompt for `task` and relay it like `/translate`."""

    payload = await read_json_body(request, max_bytes=settings.max_body_bytes)
    relay_request = validate_task_request(task, payload)
    data = await handle(relay_request, client=client)
    return JSONResponse(content=data)


router.add_api_route(
    "/translate",
    translate,
    methods=["POST"],
    summary="Relay a raw prompt",
)
router.add_api_route(
    "/ai/{task}",
    run_task,
    methods=["POST"],
    summary="Run a canned text-processing task",
)
