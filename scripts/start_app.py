#!/usr/bin/env python3
"""Serve the API with uvicorn.

Logfire is configured before the app module is imported, so failures while
building the app or its container are reported too.
"""

import sys

import logfire
import uvicorn

from topten.config import Settings
from topten.util.logging import setup_logging
from topten.util.observability import configure_logfire

APP_PATH = "topten.interface.api.app:app"


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    logfire.info(
        "Starting Top Ten API",
        environment=settings.environment,
        base_url=settings.api.base_url,
        port=settings.port,
    )
    try:
        uvicorn.run(
            APP_PATH,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            proxy_headers=settings.is_production_like,
        )
    except Exception as e:
        logfire.error(
            "Top Ten API failed to start",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
