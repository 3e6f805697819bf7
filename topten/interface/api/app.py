"""FastAPI application factory and the module-level app uvicorn serves."""

from typing import Optional

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from topten.config import API_VERSION, Settings
from topten.interface.api.routes import auth, categories, health, lists, votes
from topten.interface.error import register_exception_handlers
from topten.util.di.container import create_container, setup_di
from topten.util.observability import instrument_fastapi, instrument_httpx

ROUTERS = (health.router, auth.router, categories.router, lists.router, votes.router)

# Local frontend dev server, allowed alongside the configured frontend
DEV_FRONTEND_ORIGIN = "http://localhost:3000"


def create_app(container: Optional[AsyncContainer] = None) -> FastAPI:
    """Build the API.

    Logfire must already be configured (scripts/start_app.py does it, and
    tests/conftest.py in tests).

    Args:
        container: DI container; tests pass one with mocked components
    """
    settings = Settings()
    instrument_httpx()

    app_instance = FastAPI(
        title="Top Ten API",
        description="Ranked top ten lists, one vote per user per category",
        version=API_VERSION,
    )
    instrument_fastapi(app_instance)

    # Session cookies cross origins, so credentials must be allowed
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=sorted({settings.api.frontend_url, DEV_FRONTEND_ORIGIN}),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        max_age=600,
    )

    register_exception_handlers(app_instance)
    setup_di(app_instance, container or create_container())

    for router in ROUTERS:
        app_instance.include_router(router)

    return app_instance


app = create_app()
