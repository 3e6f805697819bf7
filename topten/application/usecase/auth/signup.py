"""Signup use case."""

from pydantic import BaseModel, Field

from topten.domain.model import SessionData
from topten.domain.service import AuthService

from .common import UserInfo


class SignupRequest(BaseModel):
    """Signup request.

    Fields default to empty so that missing ones reach the service and
    get its validation message.
    """

    email: str = ""
    username: str = ""
    password: str = ""


class SignupResponse(BaseModel):
    """Signup response."""

    user: UserInfo
    message: str = "Account created successfully"
    session: SessionData = Field(exclude=True)


class SignupUseCase:
    """Use case for creating a password account and signing it in."""

    def __init__(self, auth_service: AuthService) -> None:
        """Initialize signup use case.

        Args:
            auth_service: Authentication domain service
        """
        self.auth_service = auth_service

    async def execute(self, request: SignupRequest) -> SignupResponse:
        """Execute signup flow.

        Raises:
            ValidationError: If a field is missing or malformed
            DuplicateEmailError: If the email is registered
            DuplicateUsernameError: If the username is taken
        """
        user = await self.auth_service.signup(
            email=request.email,
            username=request.username,
            password=request.password,
        )
        return SignupResponse(
            user=UserInfo.from_user(user),
            session=SessionData.for_user(user),
        )
