"""Configuration providers."""

from dishka import Scope, provide

from topten.config import AuthSettings, Settings
from topten.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings for the lifetime of the container.

    Read once from the environment (and ``.env``) on first use.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Auth section alone, for services that need nothing else."""
        return settings.auth
