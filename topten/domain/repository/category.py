"""Category repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from topten.domain.model.category import Category
from topten.domain.value import CategoryId


class CategoryRepository(ABC):
    """Read-only repository for seeded categories."""

    @abstractmethod
    async def find_by_id(self, category_id: CategoryId) -> Optional[Category]:
        """Find a category by ID."""
        pass

    @abstractmethod
    async def find_by_slug(self, slug: str) -> Optional[Category]:
        """Find a category by slug."""
        pass

    @abstractmethod
    async def find_all_with_list_counts(self) -> list[tuple[Category, int]]:
        """All categories ordered by name, each with its number of lists.

        Returns:
            (category, list_count) pairs
        """
        pass
