"""Unit tests for provider selection and configuration checks."""

import pytest
from dishka import make_async_container

from topten.adapter.google.client import GoogleOAuthClient, MockGoogleOAuthClient
from topten.adapter.session import SessionManager
from topten.util.di import (
    GoogleProvider,
    PersistenceProvider,
    ProdAdapterProvider,
    ProdConfigProvider,
    ProdDomainProvider,
    ProdGoogleProvider,
    get_provider,
)
from topten.util.error import ConfigurationError
from tests.di import MockGoogleProvider, MockPersistenceProvider, build_test_container


class TestGetProvider:
    def test_concrete_provider_is_used_as_is(self):
        assert get_provider(ProdDomainProvider, use_mock=True) is ProdDomainProvider

    def test_component_implementation_selected(self):
        assert get_provider(GoogleProvider) is ProdGoogleProvider
        assert get_provider(GoogleProvider, use_mock=True) is MockGoogleProvider
        assert get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider


class TestTestContainer:
    def test_unknown_component_rejected(self):
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"twitter"})  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_google_is_mocked_by_default(self):
        container = build_test_container()
        try:
            client = await container.get(GoogleOAuthClient)
        finally:
            await container.close()

        assert isinstance(client, MockGoogleOAuthClient)


class TestPlaceholderSecrets:
    @pytest.mark.asyncio
    async def test_production_rejects_placeholder_session_secret(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        container = make_async_container(ProdConfigProvider(), ProdAdapterProvider())

        try:
            with pytest.raises(ConfigurationError) as error:
                await container.get(SessionManager)
        finally:
            await container.close()

        assert error.value.setting == "AUTH__SESSION_SECRET"

    @pytest.mark.asyncio
    async def test_production_with_secret(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("AUTH__SESSION_SECRET", "a-real-secret")
        container = make_async_container(ProdConfigProvider(), ProdAdapterProvider())

        try:
            session_manager = await container.get(SessionManager)
        finally:
            await container.close()

        assert session_manager.secure

    @pytest.mark.asyncio
    async def test_development_allows_placeholders(self):
        container = make_async_container(ProdConfigProvider(), ProdGoogleProvider())

        try:
            client = await container.get(GoogleOAuthClient)
        finally:
            await container.close()

        assert client is not None
