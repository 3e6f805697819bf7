"""Google infrastructure providers."""

from dishka import Scope, provide

from topten.adapter.google.client import GoogleOAuthClient, RealGoogleOAuthClient
from topten.config import PLACEHOLDER_SECRET, Settings
from topten.util.di.base import ProviderBase
from topten.util.error import ConfigurationError


class GoogleProvider(ProviderBase):
    """Google component base."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Production Google provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_oauth_client(self, settings: Settings) -> GoogleOAuthClient:
        """Provide the Google OpenID Connect client.

        Placeholder credentials are tolerated in development so the rest of
        the API runs without a Google project; sign-in then fails at the
        token exchange.

        Raises:
            ConfigurationError: If credentials are empty, or still the
                placeholder outside development
        """
        google = settings.auth.google
        for setting, value in (
            ("AUTH__GOOGLE__CLIENT_ID", google.client_id),
            ("AUTH__GOOGLE__CLIENT_SECRET", google.client_secret),
        ):
            if not value:
                raise ConfigurationError(setting, "must be configured")
            if value == PLACEHOLDER_SECRET and settings.is_production_like:
                raise ConfigurationError(setting, "is still the placeholder value")

        return RealGoogleOAuthClient(
            client_id=google.client_id,
            client_secret=google.client_secret,
            redirect_uri=google.redirect_uri,
        )
