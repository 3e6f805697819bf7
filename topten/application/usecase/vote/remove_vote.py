"""Remove vote use case."""

from uuid import UUID

from pydantic import BaseModel

from topten.application.usecase.base import parse_uuid
from topten.domain.error import ValidationError
from topten.domain.service import VoteService
from topten.domain.value import ListId, UserId


class RemoveVoteRequest(BaseModel):
    """Remove vote request."""

    user_id: str
    list_id: str = ""


class RemoveVoteResponse(BaseModel):
    """Remove vote response."""

    message: str = "Vote removed successfully"


class RemoveVoteUseCase:
    """Use case for withdrawing a vote."""

    def __init__(self, vote_service: VoteService) -> None:
        self.vote_service = vote_service

    async def execute(self, request: RemoveVoteRequest) -> RemoveVoteResponse:
        """Raises NotFoundError when the user has no vote for the list."""
        if not request.list_id:
            raise ValidationError("List ID is required")

        await self.vote_service.remove_vote(
            UserId(UUID(request.user_id)),
            ListId(parse_uuid(request.list_id, "Vote")),
        )
        return RemoveVoteResponse()
