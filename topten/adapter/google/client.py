"""Google OAuth 2.0 / OpenID Connect client implementation.

Authorization code flow: the user is redirected to Google, the callback
code is exchanged for tokens, and the ID token is verified against Google's
published signing keys before any claim is trusted.
"""

import asyncio
from typing import Any, Optional
from urllib.parse import urlencode

import httpx
import jwt
import logfire

from topten.adapter.error import ProviderError
from topten.domain.service.auth_service import FederatedIdentityClient
from topten.domain.value import FederatedIdentity

GOOGLE_ISSUERS = ("https://accounts.google.com", "accounts.google.com")


class GoogleOAuthError(ProviderError):
    """Google OAuth error."""

    pass


class GoogleOAuthClient(FederatedIdentityClient):
    """Base class for Google OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealGoogleOAuthClient(GoogleOAuthClient):
    """Google OpenID Connect client."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
    ) -> None:
        """Initialize Google OAuth client.

        Args:
            client_id: Google OAuth client ID
            client_secret: Google OAuth client secret
            redirect_uri: Callback URL registered with Google
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

        # OAuth endpoints
        self.authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
        self.token_url = "https://oauth2.googleapis.com/token"
        self.jwks_url = "https://www.googleapis.com/oauth2/v3/certs"

        # Caches signing keys between calls
        self._jwks_client = jwt.PyJWKClient(self.jwks_url)

    async def initiate_authorization(self, state: str) -> str:
        """Build the Google consent URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": "openid email profile",
            "state": state,
            "access_type": "offline",
            "prompt": "consent",
        }

        logfire.info(
            "Google OAuth authorization initiated",
            redirect_uri=self.redirect_uri,
        )

        return f"{self.authorize_url}?{urlencode(params)}"

    async def complete_authorization(self, code: str) -> FederatedIdentity:
        """Exchange the callback code and verify the returned ID token.

        Args:
            code: Authorization code from Google callback

        Returns:
            Verified identity

        Raises:
            GoogleOAuthError: If the exchange or any ID token check fails
        """
        id_token = await self._exchange_code_for_id_token(code)
        claims = await self._verify_id_token(id_token)

        email = claims.get("email")
        if not email:
            raise GoogleOAuthError("ID token has no email claim")
        if claims.get("email_verified") is not True:
            raise GoogleOAuthError("Google email is not verified")

        logfire.info("Google OAuth completed", subject_id=claims["sub"])

        return FederatedIdentity(
            subject_id=claims["sub"],
            email=email,
            display_name=claims.get("name"),
            picture_url=claims.get("picture"),
        )

    async def _exchange_code_for_id_token(self, code: str) -> str:
        """Exchange authorization code for an ID token.

        Raises:
            GoogleOAuthError: If token exchange fails
        """
        data = {
            "code": code,
            "grant_type": "authorization_code",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.token_url,
                    data=data,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                    timeout=30.0,
                )
        except httpx.HTTPError as e:
            logfire.error("Google token exchange HTTP error", error=str(e))
            raise GoogleOAuthError(f"HTTP error during token exchange: {e}") from e

        if response.status_code != 200:
            logfire.error(
                "Google token exchange failed",
                status_code=response.status_code,
                error=response.text,
            )
            raise GoogleOAuthError(f"Token exchange failed: {response.status_code}")

        id_token = response.json().get("id_token")
        if not id_token:
            raise GoogleOAuthError("Token response has no id_token")
        return id_token

    async def _verify_id_token(self, id_token: str) -> dict[str, Any]:
        """Check signature, audience, expiry and issuer.

        Raises:
            GoogleOAuthError: If the token does not verify
        """
        try:
            # PyJWKClient fetches keys with blocking I/O
            signing_key = await asyncio.to_thread(
                self._jwks_client.get_signing_key_from_jwt, id_token
            )
            claims = jwt.decode(
                id_token,
                signing_key.key,
                algorithms=["RS256"],
                audience=self.client_id,
                options={"require": ["exp", "iat", "iss", "sub", "aud"]},
            )
        except jwt.PyJWTError as e:
            logfire.warn("Google ID token rejected", error=str(e))
            raise GoogleOAuthError(f"Invalid ID token: {e}") from e

        if claims.get("iss") not in GOOGLE_ISSUERS:
            raise GoogleOAuthError(f"Unexpected ID token issuer: {claims.get('iss')}")
        return claims


class MockGoogleOAuthClient(GoogleOAuthClient):
    """Mock Google OAuth client for testing.

    Any code yields the default identity unless another was registered for
    it; codes passed to ``fail`` raise like a rejected token would.
    """

    DEFAULT_IDENTITY = FederatedIdentity(
        subject_id="google-mock-123",
        email="mock.user@gmail.com",
        display_name="Mock Google User",
        picture_url="https://example.com/avatar.jpg",
    )

    def __init__(self) -> None:
        self._identities: dict[str, FederatedIdentity] = {}
        self._failing: set[str] = set()

    def register(self, code: str, identity: FederatedIdentity) -> None:
        self._identities[code] = identity

    def fail(self, code: str) -> None:
        self._failing.add(code)

    async def initiate_authorization(self, state: str) -> str:
        return f"https://accounts.google.com/o/oauth2/v2/auth?state={state}&mock=true"

    async def complete_authorization(self, code: str) -> FederatedIdentity:
        if code in self._failing:
            raise GoogleOAuthError("Mock ID token rejected")
        identity: Optional[FederatedIdentity] = self._identities.get(code)
        return identity or self.DEFAULT_IDENTITY
