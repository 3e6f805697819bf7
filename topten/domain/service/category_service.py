"""Category domain service."""

import logfire

from topten.domain.model import Category
from topten.domain.repository import CategoryRepository
from topten.domain.value import CategoryId

from .base import Service


class CategoryService(Service):
    """Domain service for the seeded categories."""

    def __init__(self, category_repository: CategoryRepository) -> None:
        self.category_repository = category_repository

    async def list_categories(self) -> list[tuple[Category, int]]:
        """All categories by name, each with its list count."""
        with logfire.span("category_service.list_categories"):
            return await self.category_repository.find_all_with_list_counts()

    async def categories_by_id(self) -> dict[CategoryId, Category]:
        """Lookup table used when rendering lists and votes."""
        categories = await self.category_repository.find_all_with_list_counts()
        return {category.id: category for category, _ in categories}
