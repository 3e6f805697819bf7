"""Login use case."""

from pydantic import BaseModel, Field

from topten.domain.model import SessionData
from topten.domain.service import AuthService

from .common import UserInfo


class LoginRequest(BaseModel):
    """Password login request."""

    email: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    """Login response."""

    user: UserInfo
    message: str = "Logged in successfully"
    session: SessionData = Field(exclude=True)


class LoginUseCase:
    """Use case for password login."""

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute login flow.

        Raises:
            ValidationError: If a field is missing
            InvalidCredentialsError: Unknown email or wrong password
            FederatedOnlyAccountError: Account has no password
        """
        user = await self.auth_service.login(request.email, request.password)
        return LoginResponse(
            user=UserInfo.from_user(user),
            session=SessionData.for_user(user),
        )
