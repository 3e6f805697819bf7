"""In-memory category repository for testing."""

from typing import Optional

from topten.domain.model import Category
from topten.domain.repository.category import CategoryRepository
from topten.domain.value import CategoryId

from .database import InMemoryDatabase


class InMemoryCategoryRepository(CategoryRepository):
    """In-memory implementation of CategoryRepository (seeded by default)."""

    def __init__(self, db: Optional[InMemoryDatabase] = None) -> None:
        self.db = db or InMemoryDatabase()

    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find a category by ID."""
        await self.db.checkpoint()
        return self.db.categories.get(category_id)

    async def find_by_slug(self, slug: str) -> Optional[Category]:
        """Find a category by slug."""
        await self.db.checkpoint()
        for category in self.db.categories.values():
            if category.slug == slug:
                return category
        return None

    async def find_all_with_list_counts(self) -> list[tuple[Category, int]]:
        """All categories by name with their list counts."""
        await self.db.checkpoint()
        counts: dict[CategoryId, int] = {}
        for top_ten_list in self.db.lists.values():
            counts[top_ten_list.category_id] = (
                counts.get(top_ten_list.category_id, 0) + 1
            )
        return [
            (category, counts.get(category.id, 0))
            for category in sorted(self.db.categories.values(), key=lambda c: c.name)
        ]
