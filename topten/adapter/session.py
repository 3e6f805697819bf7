"""Encrypted cookie sessions.

The session cookie and the short-lived OAuth state cookie are both sealed
with Fernet (AES-CBC + HMAC-SHA256). Keys are derived from the configured
session secret with HKDF, one per cookie purpose, so a sealed OAuth state
can never be replayed as a session and vice versa.
"""

import secrets
from base64 import urlsafe_b64encode
from typing import Mapping, Optional, TypeVar

import logfire
from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from fastapi import Response
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from topten.config import Settings
from topten.domain.model import SessionData
from topten.util.error import ConfigurationError

DEFAULT_RETURN_URL = "/dashboard"

SESSION_KEY_INFO = b"topten-session"
OAUTH_STATE_KEY_INFO = b"topten-oauth-state"

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class SessionCodec:
    """Seals pydantic payloads into opaque, tamper-evident cookie values."""

    def __init__(self, secret: str, info: bytes, max_age_seconds: int) -> None:
        if not secret:
            raise ConfigurationError("AUTH__SESSION_SECRET", "must not be empty")
        key = HKDF(
            algorithm=hashes.SHA256(),
            length=32,
            salt=None,
            info=info,
        ).derive(secret.encode("utf-8"))
        self._fernet = Fernet(urlsafe_b64encode(key))
        self.max_age_seconds = max_age_seconds

    def seal(self, payload: BaseModel) -> str:
        return self._fernet.encrypt(payload.model_dump_json().encode("utf-8")).decode(
            "ascii"
        )

    def unseal(self, token: str, model: type[PayloadT]) -> Optional[PayloadT]:
        """Decrypt a cookie value.

        Returns:
            The payload, or None if the value is tampered, expired or malformed
        """
        try:
            raw = self._fernet.decrypt(token.encode("ascii"), ttl=self.max_age_seconds)
        except (InvalidToken, UnicodeEncodeError):
            return None
        try:
            return model.model_validate_json(raw)
        except PydanticValidationError:
            return None


class OAuthState(BaseModel):
    """Carried across the federated redirect in its own cookie."""

    state: str
    return_url: str = DEFAULT_RETURN_URL


def sanitize_return_url(return_url: Optional[str]) -> str:
    """Only same-site absolute paths are allowed as post-login targets."""
    if not return_url or not return_url.startswith("/") or return_url.startswith("//"):
        return DEFAULT_RETURN_URL
    if "\\" in return_url:
        return DEFAULT_RETURN_URL
    return return_url


class Session:
    """Session bound to one request.

    Mutate with ``log_in`` and persist with ``save``; nothing reaches the
    client until the cookie is written on the outgoing response.
    """

    def __init__(self, manager: "SessionManager", data: SessionData) -> None:
        self._manager = manager
        self.data = data

    @property
    def is_logged_in(self) -> bool:
        return self.data.is_logged_in and self.data.user_id is not None

    @property
    def user_id(self) -> Optional[str]:
        return self.data.user_id if self.is_logged_in else None

    def log_in(self, data: SessionData) -> None:
        self.data = data

    def save(self, response: Response) -> None:
        self._manager.write_session(response, self.data)

    def destroy(self, response: Response) -> None:
        self.data = SessionData()
        self._manager.clear_session(response)


class SessionManager:
    """Reads and writes the session and OAuth state cookies."""

    def __init__(self, settings: Settings) -> None:
        auth = settings.auth
        self.cookie_name = auth.session_cookie_name
        self.max_age_seconds = auth.session_max_age_seconds
        self.state_cookie_name = auth.oauth_state_cookie_name
        self.state_max_age_seconds = auth.oauth_state_max_age_seconds
        self.secure = settings.is_production_like
        self._session_codec = SessionCodec(
            auth.session_secret, SESSION_KEY_INFO, auth.session_max_age_seconds
        )
        self._state_codec = SessionCodec(
            auth.session_secret, OAUTH_STATE_KEY_INFO, auth.oauth_state_max_age_seconds
        )

    def get_session(self, cookies: Mapping[str, str]) -> Session:
        """Session for a request; an absent or unreadable cookie is anonymous."""
        data: Optional[SessionData] = None
        token = cookies.get(self.cookie_name)
        if token:
            data = self._session_codec.unseal(token, SessionData)
            if data is None:
                logfire.info("Discarding unreadable session cookie")
        return Session(self, data or SessionData())

    def write_session(self, response: Response, data: SessionData) -> None:
        self._set_cookie(
            response,
            self.cookie_name,
            self._session_codec.seal(data),
            self.max_age_seconds,
        )

    def clear_session(self, response: Response) -> None:
        response.delete_cookie(
            self.cookie_name,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )

    def issue_oauth_state(self, return_url: Optional[str]) -> OAuthState:
        return OAuthState(
            state=secrets.token_urlsafe(32),
            return_url=sanitize_return_url(return_url),
        )

    def write_oauth_state(self, response: Response, oauth_state: OAuthState) -> None:
        self._set_cookie(
            response,
            self.state_cookie_name,
            self._state_codec.seal(oauth_state),
            self.state_max_age_seconds,
        )

    def read_oauth_state(self, cookies: Mapping[str, str]) -> Optional[OAuthState]:
        token = cookies.get(self.state_cookie_name)
        if not token:
            return None
        return self._state_codec.unseal(token, OAuthState)

    def clear_oauth_state(self, response: Response) -> None:
        response.delete_cookie(
            self.state_cookie_name,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )

    def _set_cookie(
        self, response: Response, name: str, value: str, max_age: int
    ) -> None:
        response.set_cookie(
            key=name,
            value=value,
            max_age=max_age,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )
