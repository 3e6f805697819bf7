"""Logfire setup and instrumentation.

Services trace with spans named ``<service>.<operation>`` and attach ids
as string attributes:

    with logfire.span("vote_service.cast_vote", user_id=str(user_id)):
        logfire.info("Vote recorded", list_id=str(list_id))

Credentials never belong in attributes. The scrubbing patterns below are a
backstop for the names used in this codebase.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from topten.config import API_VERSION, Settings

SERVICE_NAME = "topten-api"

# Attribute names whose values are redacted before export
SCRUB_PATTERNS = [
    "password_hash",
    "reset_token",
    "id_token",
    "session_secret",
    "topten_session",
    "topten_oauth_state",
]

# Polled by load balancers; not worth a trace each
UNTRACED_URLS = "/health"


def should_send_to_logfire(settings: Settings) -> bool:
    """Explicit setting wins; otherwise send only when a token is configured."""
    observability = settings.observability
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure logfire once per process, before the app is created."""
    send_to_logfire = should_send_to_logfire(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=API_VERSION,
        environment=settings.environment,
        token=settings.observability.logfire_token,
        send_to_logfire=send_to_logfire,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        git_sha=settings.git_sha,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request except health checks.

    Headers are not captured because the Cookie header carries the session.
    """

    def _request_attributes(request, attributes):
        result = dict(attributes)
        if hasattr(request, "method"):
            result["method"] = request.method
        if hasattr(request, "url"):
            result["path"] = request.url.path
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        excluded_urls=UNTRACED_URLS,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries on the engine, with sqlcommenter tags."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace outbound calls to Google's token and JWKS endpoints."""
    logfire.instrument_httpx()
