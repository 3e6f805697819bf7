"""In-memory vote repository for testing."""

from typing import Optional, Sequence

from topten.domain.error import ConstraintViolationError
from topten.domain.model.vote import Vote
from topten.domain.repository.vote import VoteRepository
from topten.domain.value import CategoryId, ListId, UserId, VoteId

from .database import InMemoryDatabase


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing.

    Enforces the (user_id, category_id) uniqueness and the (list_id,
    category_id) reference the real schema has.
    """

    def __init__(self, db: Optional[InMemoryDatabase] = None) -> None:
        self.db = db or InMemoryDatabase()

    def _in_category(self, user_id: UserId, category_id: CategoryId) -> Optional[Vote]:
        for vote in self.db.votes.values():
            if vote.user_id == user_id and vote.category_id == category_id:
                return vote
        return None

    def _list_category_mismatch(self, vote: Vote) -> bool:
        top_ten_list = self.db.lists.get(vote.list_id)
        return top_ten_list is None or top_ten_list.category_id != vote.category_id

    async def find_by_user_in_category(
        self, user_id: UserId, category_id: CategoryId
    ) -> Optional[Vote]:
        """Find the user's vote within a category."""
        await self.db.checkpoint()
        return self._in_category(user_id, category_id)

    async def find_by_user_and_list(
        self, user_id: UserId, list_id: ListId
    ) -> Optional[Vote]:
        """Find the user's vote for a list."""
        await self.db.checkpoint()
        for vote in self.db.votes.values():
            if vote.user_id == user_id and vote.list_id == list_id:
                return vote
        return None

    async def find_by_user(self, user_id: UserId) -> list[Vote]:
        """All votes by a user, newest first."""
        await self.db.checkpoint()
        votes = [v for v in self.db.votes.values() if v.user_id == user_id]
        return sorted(votes, key=lambda v: v.created_at, reverse=True)

    async def create(self, vote: Vote) -> Vote:
        """Insert a vote.

        Raises:
            ConstraintViolationError: If the user already voted in the category,
                or the list is gone or has moved to another category
        """
        await self.db.checkpoint()
        if self._list_category_mismatch(vote):
            raise ConstraintViolationError("fk_votes_list_category")
        if self._in_category(vote.user_id, vote.category_id):
            raise ConstraintViolationError("uq_votes_user_category")
        self.db.votes[vote.id] = vote
        return vote

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote."""
        await self.db.checkpoint()
        return self.db.votes.pop(vote_id, None) is not None

    async def replace(self, old_vote_id: VoteId, new_vote: Vote) -> Vote:
        """Swap votes without suspending between the delete and the insert."""
        await self.db.checkpoint()
        if old_vote_id not in self.db.votes:
            raise ConstraintViolationError("votes_pkey")
        if self._list_category_mismatch(new_vote):
            raise ConstraintViolationError("fk_votes_list_category")
        clash = self._in_category(new_vote.user_id, new_vote.category_id)
        if clash is not None and clash.id != old_vote_id:
            raise ConstraintViolationError("uq_votes_user_category")
        del self.db.votes[old_vote_id]
        self.db.votes[new_vote.id] = new_vote
        return new_vote

    async def count_by_lists(self, list_ids: Sequence[ListId]) -> dict[ListId, int]:
        """Vote counts for several lists."""
        await self.db.checkpoint()
        return {list_id: self.db.vote_count(list_id) for list_id in list_ids}
