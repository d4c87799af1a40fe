from __future__ import annotations

import logging

import uvicorn

from prompt_relay.core.settings import get_settings
from prompt_relay.main import create_app

logger = logging.getLogger("prompt_relay")


def main() -> None:
    settings = get_settings()
    app = create_app(settings)

    logger.info(
        "Starting server on http://%s:%s (groq configured: %s, model: %s, "
        "max tokens: %s, temperature: %s)",
        settings.host,
        settings.port,
        settings.groq_configured,
        settings.groq_model,
        settings.max_tokens,
        settings.temperature,
    )
    # log_config=None keeps the JSON logging configured by prompt_relay.core.logging.
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
