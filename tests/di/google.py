"""Mock Google providers for testing."""

from dishka import Scope, provide

from topten.adapter.google.client import GoogleOAuthClient, MockGoogleOAuthClient
from topten.util.di.infrastructure.google import GoogleProvider


class MockGoogleProvider(GoogleProvider):
    """Mock Google provider using mock OAuth client."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_google_oauth_client(self) -> GoogleOAuthClient:
        """Provide mock Google OAuth client.

        APP scope so a test can register identities on the same instance the
        request handlers see.
        """
        return MockGoogleOAuthClient()
