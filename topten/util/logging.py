"""Standard library logging for route modules and scripts."""

import logging
import sys

from topten.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Chatty at INFO; the token exchange and SQL are traced by logfire instead
QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Send stdlib logs to stdout at DEBUG or INFO depending on settings.

    Domain services report through logfire spans; this only covers the
    ``logging.getLogger(__name__)`` calls in routes and error handlers.
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    quiet_level = logging.INFO if settings.debug else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)

    logging.getLogger("topten").setLevel(level)
    logging.getLogger(__name__).info(
        f"Logging ready for {settings.environment} at {logging.getLevelName(level)}"
    )
