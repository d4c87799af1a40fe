from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HealthOut(BaseModel):
    """Health check response."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(
        description="Service status indicator. `ok` means the API process is up and responding.",
        examples=["ok"],
    )
    timestamp: str = Field(
        description="Current server time (ISO-8601, UTC).",
        examples=["2024-05-01T12:00:00.000Z"],
    )
    groq_configured: bool = Field(
        alias="groqConfigured",
        description="Whether an upstream API key is configured.",
    )
