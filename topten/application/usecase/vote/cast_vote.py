"""Cast vote use case."""

from uuid import UUID

from pydantic import BaseModel

from topten.application.usecase.base import BaseUseCase, parse_uuid
from topten.domain.error import ValidationError
from topten.domain.service import VoteService
from topten.domain.value import ListId, UserId, VoteOutcome


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    user_id: str  # From the session
    list_id: str = ""


class CastVoteResponse(BaseModel):
    """Cast vote response."""

    message: str
    outcome: VoteOutcome
    voted_list_id: str


class CastVoteUseCase(BaseUseCase):
    """Use case for voting for a list."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Raises:
            ValidationError: If no list id was given
            NotFoundError: If the list does not exist
            ListNotPublicError: If the list is private
            AlreadyVotedError: If the vote already points at this list
        """
        if not request.list_id:
            raise ValidationError("List ID is required")

        result = await self.vote_service.cast_vote(
            UserId(UUID(request.user_id)),
            ListId(parse_uuid(request.list_id, "List")),
        )

        if result.outcome == VoteOutcome.SWITCHED:
            message = (
                f'Vote changed from "{result.previous_list_title}" '
                f'to "{result.list_title}"'
            )
        else:
            message = "Vote recorded successfully"

        return CastVoteResponse(
            message=message,
            outcome=result.outcome,
            voted_list_id=str(result.vote.list_id),
        )
