"""Vote domain service.

Each user holds at most one vote per category. Voting for another list in
the same category moves the vote; the move is a single atomic replace in
the repository. The (user, category) unique constraint arbitrates between
concurrent votes, and the (list, category) reference rejects a vote for a
list that changed category after it was read.
"""

from dataclasses import dataclass
from uuid import uuid4

import logfire

from topten.domain.error import (
    AlreadyVotedError,
    ConstraintViolationError,
    ListNotPublicError,
    NotFoundError,
    StorageFailureError,
)
from topten.domain.model import TopTenList, Vote
from topten.domain.repository import TopTenListRepository, VoteRepository
from topten.domain.value import ListId, UserId, VoteId, VoteOutcome

from .base import Service

# Re-reads after losing a constraint race to a concurrent request
MAX_VOTE_ATTEMPTS = 3


@dataclass(frozen=True)
class CastVoteResult:
    """Outcome of a successful cast_vote."""

    outcome: VoteOutcome
    vote: Vote
    list_title: str
    previous_list_title: str | None = None


class VoteService(Service):
    """Domain service for vote operations."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        list_repository: TopTenListRepository,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            list_repository: Top ten list repository
        """
        self.vote_repository = vote_repository
        self.list_repository = list_repository

    async def cast_vote(self, user_id: UserId, list_id: ListId) -> CastVoteResult:
        """Vote for a list, moving any existing vote in its category.

        Args:
            user_id: Voting user
            list_id: List to vote for

        Returns:
            CREATED for a first vote in the category, SWITCHED when an
            existing vote moved (with both list titles)

        Raises:
            NotFoundError: If the list does not exist
            ListNotPublicError: If the list is private
            AlreadyVotedError: If the user's vote already points at this list
            StorageFailureError: If concurrent writers keep winning
        """
        with logfire.span(
            "vote_service.cast_vote", user_id=str(user_id), list_id=str(list_id)
        ):
            for attempt in range(1, MAX_VOTE_ATTEMPTS + 1):
                # Re-read each attempt: the list may have moved category
                target = await self.list_repository.find_by_id(list_id)
                if not target:
                    logfire.warn("Vote on non-existent list", list_id=str(list_id))
                    raise NotFoundError("List", str(list_id))
                if not target.is_public:
                    logfire.info("Vote on private list refused", list_id=str(list_id))
                    raise ListNotPublicError()

                existing = await self.vote_repository.find_by_user_in_category(
                    user_id, target.category_id
                )

                if existing and existing.list_id == target.id:
                    logfire.info(
                        "Duplicate vote attempt",
                        user_id=str(user_id),
                        list_id=str(list_id),
                    )
                    raise AlreadyVotedError()

                new_vote = Vote(
                    id=VoteId(uuid4()),
                    user_id=user_id,
                    list_id=target.id,
                    category_id=target.category_id,
                )

                try:
                    if existing is None:
                        vote = await self.vote_repository.create(new_vote)
                        logfire.info(
                            "Vote recorded",
                            user_id=str(user_id),
                            list_id=str(list_id),
                        )
                        return CastVoteResult(
                            outcome=VoteOutcome.CREATED,
                            vote=vote,
                            list_title=target.title,
                        )

                    vote = await self.vote_repository.replace(existing.id, new_vote)
                except ConstraintViolationError as e:
                    logfire.warn(
                        "Concurrent vote detected, retrying",
                        user_id=str(user_id),
                        category_id=str(target.category_id),
                        constraint=e.constraint,
                        attempt=attempt,
                    )
                    continue

                previous = await self.list_repository.find_by_id(existing.list_id)
                logfire.info(
                    "Vote switched",
                    user_id=str(user_id),
                    from_list_id=str(existing.list_id),
                    to_list_id=str(list_id),
                )
                return CastVoteResult(
                    outcome=VoteOutcome.SWITCHED,
                    vote=vote,
                    list_title=target.title,
                    previous_list_title=previous.title if previous else None,
                )

            logfire.error(
                "Vote could not be settled",
                user_id=str(user_id),
                list_id=str(list_id),
            )
            raise StorageFailureError("cast_vote exhausted retries")

    async def remove_vote(self, user_id: UserId, list_id: ListId) -> None:
        """Withdraw the user's vote for a list.

        Raises:
            NotFoundError: If the user has not voted for this list
        """
        with logfire.span(
            "vote_service.remove_vote", user_id=str(user_id), list_id=str(list_id)
        ):
            vote = await self.vote_repository.find_by_user_and_list(user_id, list_id)
            if not vote:
                logfire.info(
                    "No vote to remove", user_id=str(user_id), list_id=str(list_id)
                )
                raise NotFoundError("Vote")

            deleted = await self.vote_repository.delete(vote.id)
            if not deleted:
                # Removed concurrently; the end state is the same
                logfire.info("Vote already removed", vote_id=str(vote.id))
            else:
                logfire.info(
                    "Vote removed", user_id=str(user_id), list_id=str(list_id)
                )

    async def list_votes_for_user(
        self, user_id: UserId
    ) -> list[tuple[Vote, TopTenList]]:
        """The user's votes, newest first, each with the list voted for."""
        with logfire.span("vote_service.list_votes_for_user", user_id=str(user_id)):
            votes = await self.vote_repository.find_by_user(user_id)
            if not votes:
                return []
            lists = await self.list_repository.find_by_ids([v.list_id for v in votes])
            by_id = {lst.id: lst for lst in lists}
            return [(v, by_id[v.list_id]) for v in votes if v.list_id in by_id]
