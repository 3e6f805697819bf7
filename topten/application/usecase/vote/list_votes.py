"""List votes use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from topten.application.usecase.category import CategoryInfo
from topten.domain.service import CategoryService, VoteService
from topten.domain.value import UserId


class VotedList(BaseModel):
    """The list a vote points at."""

    id: str
    slug: str
    title: str
    category: CategoryInfo | None


class VoteInfo(BaseModel):
    """Vote in responses."""

    id: str
    list_id: str
    created_at: datetime
    list: VotedList


class ListVotesRequest(BaseModel):
    """List votes request."""

    user_id: str | None = None  # None when not logged in


class ListVotesResponse(BaseModel):
    """List votes response."""

    votes: list[VoteInfo]


class ListVotesUseCase:
    """Use case for listing the current user's votes."""

    def __init__(
        self, vote_service: VoteService, category_service: CategoryService
    ) -> None:
        self.vote_service = vote_service
        self.category_service = category_service

    async def execute(self, request: ListVotesRequest) -> ListVotesResponse:
        """Anonymous callers get an empty list rather than an error."""
        if not request.user_id:
            return ListVotesResponse(votes=[])

        pairs = await self.vote_service.list_votes_for_user(
            UserId(UUID(request.user_id))
        )
        if not pairs:
            return ListVotesResponse(votes=[])

        categories = await self.category_service.categories_by_id()
        votes = []
        for vote, top_ten_list in pairs:
            category = categories.get(top_ten_list.category_id)
            votes.append(
                VoteInfo(
                    id=str(vote.id),
                    list_id=str(vote.list_id),
                    created_at=vote.created_at,
                    list=VotedList(
                        id=str(top_ten_list.id),
                        slug=top_ten_list.slug.root,
                        title=top_ten_list.title,
                        category=(
                            CategoryInfo.from_category(category) if category else None
                        ),
                    ),
                )
            )
        return ListVotesResponse(votes=votes)
