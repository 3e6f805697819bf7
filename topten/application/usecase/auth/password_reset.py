"""Password reset use cases."""

from urllib.parse import urlencode

import logfire
from pydantic import BaseModel

from topten.config import Settings
from topten.domain.service import AuthService

from .common import UserInfo

RESET_REQUESTED_MESSAGE = (
    "If an account with that email exists, a reset link has been generated"
)


class RequestPasswordResetRequest(BaseModel):
    """Request password reset request."""

    email: str = ""


class RequestPasswordResetResponse(BaseModel):
    """Identical whether or not the account exists.

    ``reset_token`` and ``reset_url`` are only filled in when the deployment
    exposes reset links (no email delivery).
    """

    message: str = RESET_REQUESTED_MESSAGE
    reset_token: str | None = None
    reset_url: str | None = None


class RequestPasswordResetUseCase:
    """Use case for issuing a password reset token."""

    def __init__(self, auth_service: AuthService, settings: Settings) -> None:
        self.auth_service = auth_service
        self.settings = settings

    async def execute(
        self, request: RequestPasswordResetRequest
    ) -> RequestPasswordResetResponse:
        """Issue a token if the email is registered.

        Raises:
            ValidationError: If the email is missing
        """
        token = await self.auth_service.request_password_reset(request.email)
        if token is None or not self.settings.auth.expose_reset_link:
            if token is not None:
                logfire.info("Password reset link generated (delivery not configured)")
            return RequestPasswordResetResponse()

        reset_url = (
            f"{self.settings.api.frontend_url}/auth/reset-password?"
            f"{urlencode({'token': token})}"
        )
        logfire.info("Password reset link exposed in response")
        return RequestPasswordResetResponse(reset_token=token, reset_url=reset_url)


class ConfirmPasswordResetRequest(BaseModel):
    """Confirm password reset request."""

    token: str = ""
    password: str = ""


class ConfirmPasswordResetResponse(BaseModel):
    """Confirm password reset response."""

    user: UserInfo
    message: str = "Password has been reset successfully"


class ConfirmPasswordResetUseCase:
    """Use case for setting a new password with a reset token."""

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    async def execute(
        self, request: ConfirmPasswordResetRequest
    ) -> ConfirmPasswordResetResponse:
        """Raises ValidationError for a weak password or a bad/expired token."""
        user = await self.auth_service.reset_password(request.token, request.password)
        return ConfirmPasswordResetResponse(user=UserInfo.from_user(user))
