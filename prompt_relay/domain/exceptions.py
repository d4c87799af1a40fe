from __future__ import annotations

from typing import Any


class RelayError(Exception):
    """Base class for failures reported to the client as `{"error": message}`."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message}


class InvalidInput(RelayError):
    """A required request field is missing, empty or not a string."""

    status_code = 400


class InvalidTask(RelayError):
    """The requested task has no prompt template."""

    status_code = 400


class PayloadTooLarge(RelayError):
    status_code = 413


class MissingCredential(RelayError):
    """No upstream API key is configured."""

    status_code = 500


class UpstreamError(RelayError):
    """The upstream API answered with a non-success status; the status is passed through."""

    def __init__(self, *, status_code: int, message: str, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details

    def to_body(self) -> dict[str, Any]:
        body = super().to_body()
        if self.details is not None:
            body["details"] = self.details
        return body


class UpstreamUnavailable(RelayError):
    status_code = 500


class MalformedUpstreamResponse(RelayError):
    status_code = 500
