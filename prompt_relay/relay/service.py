from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from prompt_relay.core.llm.groq_client import (
    GroqResponseError,
    GroqStatusError,
    GroqTransportError,
)
from prompt_relay.core.metrics import upstream_requests_total
from prompt_relay.domain.exceptions import (
    InvalidInput,
    MalformedUpstreamResponse,
    MissingCredential,
    UpstreamError,
    UpstreamUnavailable,
)
from prompt_relay.relay.prompts import Task, parse_task, resolve_prompt

logger = logging.getLogger("prompt_relay.relay")


class LLMClient(Protocol):
    async def create_chat_completion(self, *, prompt: str) -> dict[str, Any]: ...


@dataclass(frozen=True)
class PromptRequest:
    prompt: str


@dataclass(frozen=True)
class TaskRequest:
    task: Task
    content: str
    language: str | None = None


RelayRequest = PromptRequest | TaskRequest


def _non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def validate_prompt_request(payload: Any) -> PromptRequest:
    prompt = payload.get("prompt") if isinstance(payload, dict) else None
    if not _non_empty_str(prompt):
        raise InvalidInput("Invalid request: prompt is required and must be a string")
    return PromptRequest(prompt=prompt)


def validate_task_request(task: str, payload: Any) -> TaskRequest:
    """Validate an `/ai/{task}` body.

    Content is checked before the task name; `language` only matters for translate.
    """

    body = payload if isinstance(payload, dict) else {}
    content = body.get("content")
    if not _non_empty_str(content):
        raise InvalidInput("Content is required and must be a string")

    resolved = parse_task(task)
    language = body.get("language")
    if resolved is Task.TRANSLATE:
        if not _non_empty_str(language):
            raise InvalidInput("Language is required for translation")
    elif not isinstance(language, str):
        language = None

    return TaskRequest(task=resolved, content=content, language=language)


def _has_message(data: dict[str, Any]) -> bool:
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return False
    first = choices[0]
    return isinstance(first, dict) and bool(first.get("message"))


async def call_upstream(prompt: str, *, client: LLMClient | None) -> dict[str, Any]:
    """Send `prompt` upstream and return the validated response body unchanged."""

    if client is None:
        raise MissingCredential(
            "Server configuration error: GROQ_API_KEY not found in environment variables"
        )

    try:
        data = await client.create_chat_completion(prompt=prompt)
    except GroqTransportError as exc:
        upstream_requests_total.labels(outcome="unavailable").inc()
        logger.warning("Upstream request failed", extra={"error": str(exc)})
        raise UpstreamUnavailable("AI service unavailable") from exc
    except GroqStatusError as exc:
        upstream_requests_total.labels(outcome="error").inc()
        logger.warning(
            "Upstream returned an error",
            extra={"upstream_status": exc.status_code, "error": exc.message},
        )
        raise UpstreamError(
            status_code=exc.status_code, message=exc.message, details=exc.details
        ) from exc
    except GroqResponseError as exc:
        upstream_requests_total.labels(outcome="malformed").inc()
        logger.warning("Upstream response was unusable", extra={"error": str(exc)})
        raise MalformedUpstreamResponse("Invalid response from AI service") from exc

    if not _has_message(data):
        upstream_requests_total.labels(outcome="malformed").inc()
        # Log the keys only; the body may echo user content.
        logger.warning(
            "Unexpected upstream response structure",
            extra={"error": f"keys={sorted(data)}"},
        )
        raise MalformedUpstreamResponse("Invalid response from AI service")

    upstream_requests_total.labels(outcome="success").inc()
    return data


async def handle(request: RelayRequest, *, client: LLMClient | None) -> dict[str, Any]:
    """Resolve the request to a prompt and relay it upstream."""

    if isinstance(request, TaskRequest):
        prompt = resolve_prompt(request.task, request.content, request.language)
        task: str | None = request.task.value
    else:
        prompt = request.prompt
        task = None

    logger.info(
        "Processing relay request",
        extra={"task": task, "prompt_chars": len(prompt)},
    )
    data = await call_upstream(prompt, client=client)
    logger.info("Relay request processed", extra={"task": task})
    return data
