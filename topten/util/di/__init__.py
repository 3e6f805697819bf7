"""Dependency injection wiring."""

from typing import Type

from topten.util.di.adapter import ProdAdapterProvider
from topten.util.di.application import ProdApplicationProvider
from topten.util.di.base import Component, ProviderBase
from topten.util.di.core import ProdConfigProvider
from topten.util.di.domain import ProdDomainProvider
from topten.util.di.infrastructure import (
    GoogleProvider,
    PersistenceProvider,
    ProdGoogleProvider,
    ProdPersistenceProvider,
)

# Component bases stand in for whichever implementation gets picked
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdAdapterProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    GoogleProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve an entry of PROVIDERS to the class to instantiate.

    Mock implementations only become subclasses once their module is
    imported, so the test container must import them first.

    Raises:
        ValueError: If a component has no implementation of the wanted kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for implementation in implementations:
        if implementation.__is_mock__ == use_mock:
            return implementation

    kind = "mock" if use_mock else "production"
    raise ValueError(
        f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
    )


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdAdapterProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "GoogleProvider",
    "PersistenceProvider",
    "ProdGoogleProvider",
    "ProdPersistenceProvider",
]
