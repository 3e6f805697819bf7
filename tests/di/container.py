"""Test container with per-component mocking."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from topten.util.di import PROVIDERS, Component, get_provider


def mockable_components() -> set[str]:
    """Names of the components that have a mock implementation."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ and base.__subclasses__()
    }


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Container where every component is mocked unless named in ``unmock``.

    Settings still come from the environment, so integration tests reach
    Postgres through DATABASE__URL.

    Examples:
        build_test_container()                        # in-memory everything
        build_test_container(unmock={"persistence"})  # real Postgres

    Raises:
        ValueError: If ``unmock`` names an unknown component
    """
    unmock = unmock or set()
    unknown = set(unmock) - mockable_components()
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

    providers = []
    for base in PROVIDERS:
        component = base.__mock_component__
        use_mock = component is not None and component not in unmock
        providers.append(get_provider(base, use_mock=use_mock)())

    return make_async_container(*providers, FastapiProvider())
