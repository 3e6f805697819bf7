"""Production container and FastAPI hookup."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from topten.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Container with every component's production implementation.

    FastapiProvider exposes the current Request to request-scoped providers.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container so DishkaRoute handlers can resolve FromDishka."""
    setup_dishka(container, app)
