"""PostgreSQL implementation of Category repository."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from topten.domain.model import Category
from topten.domain.repository import CategoryRepository
from topten.domain.value import CategoryId
from topten.persistence.mappers import row_to_category
from topten.persistence.tables import categories_table, top_ten_lists_table


class PostgresCategoryRepository(CategoryRepository):
    """PostgreSQL implementation of CategoryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find a category by ID."""
        stmt = select(categories_table).where(categories_table.c.id == category_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_category(dict(row)) if row else None

    async def find_by_slug(self, slug: str) -> Optional[Category]:
        """Find a category by slug."""
        stmt = select(categories_table).where(categories_table.c.slug == slug)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_category(dict(row)) if row else None

    async def find_all_with_list_counts(self) -> list[tuple[Category, int]]:
        """All categories by name with their list counts."""
        list_count = func.count(top_ten_lists_table.c.id).label("list_count")
        stmt = (
            select(categories_table, list_count)
            .outerjoin(
                top_ten_lists_table,
                top_ten_lists_table.c.category_id == categories_table.c.id,
            )
            .group_by(categories_table.c.id)
            .order_by(categories_table.c.name)
        )
        result = await self.session.execute(stmt)
        pairs = []
        for row in result.mappings().all():
            data = dict(row)
            count = data.pop("list_count")
            pairs.append((row_to_category(data), count))
        return pairs
