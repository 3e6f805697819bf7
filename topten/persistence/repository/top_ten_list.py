"""PostgreSQL implementation of TopTenList repository."""

from collections import defaultdict
from typing import Any, Optional, Sequence

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from topten.domain.error import ConstraintViolationError, NotFoundError
from topten.domain.model import TopTenList
from topten.domain.repository import ListQuery, TopTenListRepository
from topten.domain.value import ListId, Slug
from topten.persistence.database import constraint_name
from topten.persistence.mappers import list_items_to_dicts, list_to_dict, row_to_list
from topten.persistence.tables import (
    list_items_table,
    top_ten_lists_table,
    votes_table,
)


class PostgresTopTenListRepository(TopTenListRepository):
    """PostgreSQL implementation of TopTenListRepository.

    Items and votes are removed with their list by ON DELETE CASCADE.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _load(self, rows: Sequence[dict[str, Any]]) -> list[TopTenList]:
        """Attach items to list rows with a single extra query."""
        if not rows:
            return []
        list_ids = [row["id"] for row in rows]
        stmt = select(list_items_table).where(list_items_table.c.list_id.in_(list_ids))
        result = await self.session.execute(stmt)
        items_by_list: dict[Any, list[dict[str, Any]]] = defaultdict(list)
        for item_row in result.mappings().all():
            items_by_list[item_row["list_id"]].append(dict(item_row))
        return [row_to_list(row, items_by_list[row["id"]]) for row in rows]

    async def _find_one(self, *conditions: Any) -> Optional[TopTenList]:
        stmt = select(top_ten_lists_table).where(*conditions)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        loaded = await self._load([dict(row)])
        return loaded[0]

    async def find_by_id(self, list_id: ListId) -> Optional[TopTenList]:
        """Find a list by ID."""
        return await self._find_one(top_ten_lists_table.c.id == list_id)

    async def find_by_slug(self, slug: Slug) -> Optional[TopTenList]:
        """Find a list by slug."""
        return await self._find_one(top_ten_lists_table.c.slug == slug.root)

    async def find_by_ids(self, list_ids: Sequence[ListId]) -> list[TopTenList]:
        """Batch lookup of lists."""
        if not list_ids:
            return []
        stmt = select(top_ten_lists_table).where(
            top_ten_lists_table.c.id.in_(list(list_ids))
        )
        result = await self.session.execute(stmt)
        return await self._load([dict(row) for row in result.mappings().all()])

    async def find_page(self, query: ListQuery) -> tuple[list[TopTenList], int]:
        """Browse lists ordered by vote count, then newest first."""
        conditions = []
        if query.public_only:
            conditions.append(top_ten_lists_table.c.is_public.is_(True))
        if query.user_id is not None:
            conditions.append(top_ten_lists_table.c.user_id == query.user_id)
        if query.category_id is not None:
            conditions.append(top_ten_lists_table.c.category_id == query.category_id)

        vote_counts = (
            select(votes_table.c.list_id, func.count().label("vote_count"))
            .group_by(votes_table.c.list_id)
            .subquery()
        )
        stmt = (
            select(top_ten_lists_table)
            .outerjoin(vote_counts, vote_counts.c.list_id == top_ten_lists_table.c.id)
            .where(*conditions)
            .order_by(
                func.coalesce(vote_counts.c.vote_count, 0).desc(),
                top_ten_lists_table.c.created_at.desc(),
            )
            .offset(query.offset)
            .limit(query.limit)
        )
        count_stmt = (
            select(func.count()).select_from(top_ten_lists_table).where(*conditions)
        )

        result = await self.session.execute(stmt)
        rows = [dict(row) for row in result.mappings().all()]
        total = (await self.session.execute(count_stmt)).scalar_one()
        return await self._load(rows), total

    async def create(self, top_ten_list: TopTenList) -> TopTenList:
        """Insert a list and its items in one savepoint."""
        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    insert(top_ten_lists_table).values(**list_to_dict(top_ten_list))
                )
                item_rows = list_items_to_dicts(top_ten_list)
                if item_rows:
                    await self.session.execute(insert(list_items_table), item_rows)
        except IntegrityError as e:
            raise ConstraintViolationError(constraint_name(e)) from e
        return top_ten_list

    async def update(self, top_ten_list: TopTenList) -> TopTenList:
        """Replace a list's columns and items in one savepoint."""
        row = list_to_dict(top_ten_list)
        list_id = row.pop("id")
        row.pop("created_at")

        async with self.session.begin_nested():
            current = await self.session.execute(
                select(top_ten_lists_table.c.category_id)
                .where(top_ten_lists_table.c.id == list_id)
                .with_for_update()
            )
            current_category = current.scalar_one_or_none()
            if current_category is None:
                raise NotFoundError("List", str(list_id))

            if current_category != top_ten_list.category_id:
                # Votes were cast within the old category
                await self.session.execute(
                    delete(votes_table).where(votes_table.c.list_id == list_id)
                )

            await self.session.execute(
                update(top_ten_lists_table)
                .where(top_ten_lists_table.c.id == list_id)
                .values(**row)
            )
            await self.session.execute(
                delete(list_items_table).where(list_items_table.c.list_id == list_id)
            )
            item_rows = list_items_to_dicts(top_ten_list)
            if item_rows:
                await self.session.execute(insert(list_items_table), item_rows)

        return top_ten_list

    async def delete(self, list_id: ListId) -> bool:
        """Delete a list; items and votes go with it."""
        stmt = delete(top_ten_lists_table).where(top_ten_lists_table.c.id == list_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
