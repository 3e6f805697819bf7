"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from topten.domain.model.vote import Vote
from topten.domain.value import CategoryId, ListId, UserId, VoteId


class VoteRepository(ABC):
    """Repository for Vote entity.

    Implementations must enforce uniqueness of (user_id, category_id) at the
    storage level; that constraint is what keeps concurrent voters honest.
    """

    @abstractmethod
    async def find_by_user_in_category(
        self, user_id: UserId, category_id: CategoryId
    ) -> Optional[Vote]:
        """Find the user's vote within a category.

        Args:
            user_id: The user's ID
            category_id: The category to look in

        Returns:
            The vote if the user has voted in this category, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_list(
        self, user_id: UserId, list_id: ListId
    ) -> Optional[Vote]:
        """Find the user's vote for a specific list."""
        pass

    @abstractmethod
    async def find_by_user(self, user_id: UserId) -> list[Vote]:
        """All votes cast by a user, newest first."""
        pass

    @abstractmethod
    async def create(self, vote: Vote) -> Vote:
        """Insert a vote.

        Raises:
            ConstraintViolationError: If the user already has a vote in the category
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote.

        Returns:
            True if a vote was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def replace(self, old_vote_id: VoteId, new_vote: Vote) -> Vote:
        """Atomically swap one vote for another.

        The delete and the insert either both happen or neither does.

        Args:
            old_vote_id: Vote to remove
            new_vote: Vote to insert in its place

        Returns:
            The inserted vote

        Raises:
            ConstraintViolationError: If the old vote is already gone or the
                insert collides (a concurrent request got there first)
        """
        pass

    @abstractmethod
    async def count_by_lists(self, list_ids: Sequence[ListId]) -> dict[ListId, int]:
        """Vote counts for several lists (lists without votes map to 0)."""
        pass
