from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
    )

    app_name: str = "prompt-relay"

    # Upstream LLM (Groq, OpenAI-compatible chat completions API)
    # The key is a credential: never log it.
    groq_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GROQ_API_KEY", "groq_api_key"),
        description="Groq API key (required for /translate and /ai/{task}).",
    )
    groq_model: str = Field(
        default="llama-3.1-8b-instant",
        validation_alias=AliasChoices("GROQ_MODEL", "groq_model"),
        description="Model identifier sent with every completion request.",
    )
    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1",
        validation_alias=AliasChoices("GROQ_BASE_URL", "groq_base_url"),
        description="Base URL for the Groq API (override for proxies/emulators).",
    )
    groq_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        validation_alias=AliasChoices("GROQ_TIMEOUT_SECONDS", "groq_timeout_seconds"),
        description="Transport timeout for upstream requests (seconds).",
    )
    max_tokens: int = Field(
        default=1000,
        ge=1,
        validation_alias=AliasChoices("MAX_TOKENS", "max_tokens"),
        description="Upper bound on completion tokens.",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        validation_alias=AliasChoices("TEMPERATURE", "temperature"),
        description="Sampling temperature.",
    )

    # HTTP server
    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("HOST", "host"),
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "port"),
    )
    max_body_bytes: int = Field(
        default=10 * 1024 * 1024,
        ge=1,
        validation_alias=AliasChoices("MAX_BODY_BYTES", "max_body_bytes"),
        description="Maximum accepted request body size (bytes).",
    )

    @property
    def groq_configured(self) -> bool:
        return bool(self.groq_api_key)


@lru_cache
def get_settings() -> Settings:
    return Settings()
