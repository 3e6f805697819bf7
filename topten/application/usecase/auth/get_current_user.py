"""Get current user use case."""

from pydantic import BaseModel

from topten.application.usecase.base import parse_uuid
from topten.domain.service import UserService
from topten.domain.value import UserId

from .common import UserInfo


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    user_id: str  # From the session cookie


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user: UserInfo


class GetCurrentUserUseCase:
    """Use case for getting current authenticated user."""

    def __init__(self, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            user_service: User domain service
        """
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Load the session's user.

        Raises:
            NotFoundError: If the account no longer exists
        """
        user_id = UserId(parse_uuid(request.user_id, "User"))
        user = await self.user_service.get_by_id(user_id)
        return GetCurrentUserResponse(user=UserInfo.from_user(user))
