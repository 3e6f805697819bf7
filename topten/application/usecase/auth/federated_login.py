"""Federated (Google) login use cases."""

import hmac

import logfire
from pydantic import BaseModel, Field

from topten.domain.error import FederatedLoginError
from topten.domain.model import SessionData
from topten.domain.service import AuthService

from .common import UserInfo


class InitiateFederatedLoginRequest(BaseModel):
    """Initiate federated login request."""

    state: str  # Random CSRF state, also sealed in the state cookie


class InitiateFederatedLoginResponse(BaseModel):
    """Initiate federated login response."""

    authorization_url: str


class InitiateFederatedLoginUseCase:
    """Use case for starting the federated login redirect."""

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    async def execute(
        self, request: InitiateFederatedLoginRequest
    ) -> InitiateFederatedLoginResponse:
        url = await self.auth_service.initiate_federated_login(request.state)
        return InitiateFederatedLoginResponse(authorization_url=url)


class CompleteFederatedLoginRequest(BaseModel):
    """Callback parameters plus the state recovered from the cookie."""

    code: str | None = None
    state: str | None = None
    error: str | None = None  # Set by the provider when the user cancels
    expected_state: str | None = None


class CompleteFederatedLoginResponse(BaseModel):
    """Complete federated login response."""

    user: UserInfo
    session: SessionData = Field(exclude=True)


class CompleteFederatedLoginUseCase:
    """Use case for the federated login callback."""

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    async def execute(
        self, request: CompleteFederatedLoginRequest
    ) -> CompleteFederatedLoginResponse:
        """Execute the callback flow.

        Steps:
        1. Reject provider errors and missing codes
        2. Check the callback state against the sealed cookie state
        3. Exchange the code and resolve (find, link or create) the user

        Raises:
            FederatedLoginError: If the callback is refused before exchange
            ProviderError: If the provider exchange or token checks fail
        """
        if request.error:
            raise FederatedLoginError("oauth_cancelled", "Sign-in was cancelled")
        if not request.code:
            raise FederatedLoginError("oauth_failed", "Missing authorization code")
        if (
            not request.state
            or not request.expected_state
            or not hmac.compare_digest(
                request.state.encode(), request.expected_state.encode()
            )
        ):
            logfire.warn("Federated login state mismatch")
            raise FederatedLoginError("oauth_state_mismatch", "Sign-in session expired")

        user = await self.auth_service.complete_federated_login(request.code)
        return CompleteFederatedLoginResponse(
            user=UserInfo.from_user(user),
            session=SessionData.for_user(user),
        )
