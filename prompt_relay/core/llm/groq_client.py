from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx


class GroqError(Exception):
    """Base error for Groq client failures."""


class GroqTransportError(GroqError):
    """Raised when the request never produced an HTTP response (connect error, timeout)."""


class GroqStatusError(GroqError):
    """Raised when Groq answers with a non-success HTTP status."""

    def __init__(self, *, status_code: int, message: str, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details


class GroqResponseError(GroqError):
    """Raised when a success response body is not a JSON object."""


@dataclass(frozen=True)
class GroqConfig:
    api_key: str
    base_url: str
    model: str
    max_tokens: int
    temperature: float
    timeout_seconds: float


def _error_message(body: Any) -> str:
    # Groq (like OpenAI) reports failures as {"error": {"message": ...}}.
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str) and error["message"]:
            return error["message"]
    return "API request failed"


class GroqClient:
    """
    Minimal client for Groq's OpenAI-compatible chat completions endpoint.

    - One request per call; no retries.
    - No logging in this module (prompts/outputs are user content).
    - Returns the parsed response body untouched; shape validation is up to the caller.
    """

    def __init__(
        self,
        *,
        config: GroqConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport

    @property
    def model(self) -> str:
        return self._config.model

    async def create_chat_completion(self, *, prompt: str) -> dict[str, Any]:
        url = f"{self._config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        payload: dict[str, Any] = {
            "model": self._config.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self._config.max_tokens,
            "temperature": self._config.temperature,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as exc:
            raise GroqTransportError("LLM request timed out") from exc
        except httpx.HTTPError as exc:
            raise GroqTransportError("LLM request failed") from exc

        if resp.is_client_error or resp.is_server_error:
            try:
                body: Any = resp.json()
            except ValueError:
                body = None
            raise GroqStatusError(
                status_code=resp.status_code,
                message=_error_message(body),
                details=body,
            )
        if not resp.is_success:
            # 1xx/3xx: a redirect cannot be relayed without its Location header.
            raise GroqResponseError(f"Unexpected upstream status {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise GroqResponseError("LLM response was not valid JSON") from exc

        if not isinstance(data, dict):
            raise GroqResponseError("LLM response JSON must be an object")

        return data
