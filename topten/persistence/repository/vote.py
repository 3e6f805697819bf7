"""PostgreSQL implementation of Vote repository."""

from typing import Optional, Sequence

from sqlalchemy import and_, delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from topten.domain.error import ConstraintViolationError
from topten.domain.model import Vote
from topten.domain.repository import VoteRepository
from topten.domain.value import CategoryId, ListId, UserId, VoteId
from topten.persistence.database import constraint_name
from topten.persistence.mappers import row_to_vote, vote_to_dict
from topten.persistence.tables import votes_table

# Reported when a replace finds its old vote already gone
STALE_VOTE_CONSTRAINT = "votes_pkey"


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository.

    Under READ COMMITTED, a concurrent insert for the same (user, category)
    blocks on the unique index until the first transaction finishes and
    then fails; a concurrent replace blocks on the old row's lock and then
    finds it deleted. Both surface as ConstraintViolationError.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_in_category(
        self, user_id: UserId, category_id: CategoryId
    ) -> Optional[Vote]:
        """Find the user's vote within a category."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.category_id == category_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_vote(dict(row)) if row else None

    async def find_by_user_and_list(
        self, user_id: UserId, list_id: ListId
    ) -> Optional[Vote]:
        """Find the user's vote for a list."""
        stmt = select(votes_table).where(
            and_(
                votes_table.c.user_id == user_id,
                votes_table.c.list_id == list_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_vote(dict(row)) if row else None

    async def find_by_user(self, user_id: UserId) -> list[Vote]:
        """All votes by a user, newest first."""
        stmt = (
            select(votes_table)
            .where(votes_table.c.user_id == user_id)
            .order_by(votes_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(dict(row)) for row in result.mappings().all()]

    async def create(self, vote: Vote) -> Vote:
        """Insert a vote inside a savepoint."""
        stmt = insert(votes_table).values(**vote_to_dict(vote))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise ConstraintViolationError(constraint_name(e)) from e
        return vote

    async def delete(self, vote_id: VoteId) -> bool:
        """Delete a vote."""
        stmt = delete(votes_table).where(votes_table.c.id == vote_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def replace(self, old_vote_id: VoteId, new_vote: Vote) -> Vote:
        """Delete the old vote and insert the new one in one savepoint."""
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(
                    delete(votes_table).where(votes_table.c.id == old_vote_id)
                )
                if result.rowcount == 0:  # type: ignore[attr-defined]
                    # Leaving the block by exception rolls the savepoint back
                    raise ConstraintViolationError(STALE_VOTE_CONSTRAINT)
                await self.session.execute(
                    insert(votes_table).values(**vote_to_dict(new_vote))
                )
        except IntegrityError as e:
            raise ConstraintViolationError(constraint_name(e)) from e
        return new_vote

    async def count_by_lists(self, list_ids: Sequence[ListId]) -> dict[ListId, int]:
        """Vote counts for several lists."""
        if not list_ids:
            return {}
        stmt = (
            select(votes_table.c.list_id, func.count().label("vote_count"))
            .where(votes_table.c.list_id.in_(list(list_ids)))
            .group_by(votes_table.c.list_id)
        )
        result = await self.session.execute(stmt)
        counts = {ListId(row.list_id): row.vote_count for row in result.all()}
        return {list_id: counts.get(list_id, 0) for list_id in list_ids}
