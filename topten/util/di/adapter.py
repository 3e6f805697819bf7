"""Adapter DI providers."""

from dishka import Scope, provide

from topten.adapter.session import SessionManager
from topten.config import PLACEHOLDER_SECRET, Settings
from topten.util.di.base import ProviderBase
from topten.util.error import ConfigurationError


class ProdAdapterProvider(ProviderBase):
    """Stateless adapters shared by every request."""

    scope = Scope.APP

    @provide
    def get_session_manager(self, settings: Settings) -> SessionManager:
        """Provide the cookie session manager.

        Raises:
            ConfigurationError: If staging or production still uses the
                placeholder session secret
        """
        if (
            settings.is_production_like
            and settings.auth.session_secret == PLACEHOLDER_SECRET
        ):
            raise ConfigurationError(
                "AUTH__SESSION_SECRET", "is still the placeholder value"
            )
        return SessionManager(settings)
