"""List categories use case."""

from pydantic import BaseModel

from topten.domain.model import Category
from topten.domain.service import CategoryService


class CategoryInfo(BaseModel):
    """Category in responses."""

    id: str
    name: str
    slug: str
    description: str | None
    icon: str | None

    @classmethod
    def from_category(cls, category: Category) -> "CategoryInfo":
        return cls(
            id=str(category.id),
            name=category.name,
            slug=category.slug,
            description=category.description,
            icon=category.icon,
        )


class CategoryListItem(CategoryInfo):
    """Category with the number of lists filed under it."""

    list_count: int


class ListCategoriesResponse(BaseModel):
    """List categories response."""

    categories: list[CategoryListItem]


class ListCategoriesUseCase:
    """Use case for listing all categories."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self) -> ListCategoriesResponse:
        """Return all categories ordered by name."""
        categories = await self.category_service.list_categories()
        return ListCategoriesResponse(
            categories=[
                CategoryListItem(
                    **CategoryInfo.from_category(category).model_dump(),
                    list_count=count,
                )
                for category, count in categories
            ]
        )
