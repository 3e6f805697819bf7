"""Unit tests for the Google OpenID Connect client."""

import time
from types import SimpleNamespace
from urllib.parse import parse_qs, urlparse

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from topten.adapter.google.client import (
    GoogleOAuthError,
    MockGoogleOAuthClient,
    RealGoogleOAuthClient,
)
from topten.domain.value import FederatedIdentity

CLIENT_ID = "client-123.apps.googleusercontent.com"


@pytest.fixture(scope="module")
def signing_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def client(signing_key, monkeypatch):
    """Client whose JWKS lookup returns the test key instead of fetching."""
    google = RealGoogleOAuthClient(
        client_id=CLIENT_ID,
        client_secret="secret",
        redirect_uri="http://localhost:8000/auth/google/callback",
    )
    stub = SimpleNamespace(
        get_signing_key_from_jwt=lambda token: SimpleNamespace(
            key=signing_key.public_key()
        )
    )
    monkeypatch.setattr(google, "_jwks_client", stub)
    return google


def make_id_token(signing_key, **overrides) -> str:
    now = int(time.time())
    claims = {
        "iss": "https://accounts.google.com",
        "aud": CLIENT_ID,
        "sub": "109876543210",
        "email": "ada@example.com",
        "email_verified": True,
        "name": "Ada Lovelace",
        "picture": "https://example.com/ada.png",
        "iat": now,
        "exp": now + 600,
    }
    claims.update(overrides)
    claims = {k: v for k, v in claims.items() if v is not None}
    return jwt.encode(claims, signing_key, algorithm="RS256")


def use_id_token(client, monkeypatch, id_token: str) -> None:
    async def _exchange(code: str) -> str:
        return id_token

    monkeypatch.setattr(client, "_exchange_code_for_id_token", _exchange)


class TestInitiateAuthorization:
    @pytest.mark.asyncio
    async def test_builds_consent_url(self, client):
        url = await client.initiate_authorization("state-abc")

        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        assert parsed.netloc == "accounts.google.com"
        assert params["client_id"] == [CLIENT_ID]
        assert params["state"] == ["state-abc"]
        assert params["scope"] == ["openid email profile"]
        assert params["response_type"] == ["code"]
        assert params["redirect_uri"] == ["http://localhost:8000/auth/google/callback"]


class TestCompleteAuthorization:
    @pytest.mark.asyncio
    async def test_verified_token_yields_identity(
        self, client, signing_key, monkeypatch
    ):
        use_id_token(client, monkeypatch, make_id_token(signing_key))

        identity = await client.complete_authorization("code")

        assert identity == FederatedIdentity(
            subject_id="109876543210",
            email="ada@example.com",
            display_name="Ada Lovelace",
            picture_url="https://example.com/ada.png",
        )

    @pytest.mark.asyncio
    async def test_wrong_audience_is_rejected(self, client, signing_key, monkeypatch):
        use_id_token(client, monkeypatch, make_id_token(signing_key, aud="someone-else"))

        with pytest.raises(GoogleOAuthError, match="Invalid ID token"):
            await client.complete_authorization("code")

    @pytest.mark.asyncio
    async def test_expired_token_is_rejected(self, client, signing_key, monkeypatch):
        past = int(time.time()) - 3600
        use_id_token(
            client, monkeypatch, make_id_token(signing_key, iat=past - 600, exp=past)
        )

        with pytest.raises(GoogleOAuthError):
            await client.complete_authorization("code")

    @pytest.mark.asyncio
    async def test_foreign_signature_is_rejected(self, client, monkeypatch):
        other_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
        use_id_token(client, monkeypatch, make_id_token(other_key))

        with pytest.raises(GoogleOAuthError):
            await client.complete_authorization("code")

    @pytest.mark.asyncio
    async def test_unknown_issuer_is_rejected(self, client, signing_key, monkeypatch):
        use_id_token(
            client, monkeypatch, make_id_token(signing_key, iss="https://evil.example")
        )

        with pytest.raises(GoogleOAuthError, match="issuer"):
            await client.complete_authorization("code")

    @pytest.mark.asyncio
    async def test_unverified_email_is_rejected(
        self, client, signing_key, monkeypatch
    ):
        use_id_token(
            client, monkeypatch, make_id_token(signing_key, email_verified=False)
        )

        with pytest.raises(GoogleOAuthError, match="not verified"):
            await client.complete_authorization("code")

    @pytest.mark.asyncio
    async def test_missing_email_is_rejected(self, client, signing_key, monkeypatch):
        use_id_token(client, monkeypatch, make_id_token(signing_key, email=None))

        with pytest.raises(GoogleOAuthError, match="no email"):
            await client.complete_authorization("code")


class TestMockGoogleOAuthClient:
    @pytest.mark.asyncio
    async def test_default_identity(self):
        mock = MockGoogleOAuthClient()
        identity = await mock.complete_authorization("anything")
        assert identity == MockGoogleOAuthClient.DEFAULT_IDENTITY

    @pytest.mark.asyncio
    async def test_registered_identity_and_failure(self):
        mock = MockGoogleOAuthClient()
        ada = FederatedIdentity(subject_id="ada-1", email="ada@example.com")
        mock.register("ada-code", ada)
        mock.fail("bad-code")

        assert await mock.complete_authorization("ada-code") == ada
        with pytest.raises(GoogleOAuthError):
            await mock.complete_authorization("bad-code")

    @pytest.mark.asyncio
    async def test_authorization_url_carries_state(self):
        url = await MockGoogleOAuthClient().initiate_authorization("s-1")
        assert parse_qs(urlparse(url).query)["state"] == ["s-1"]
