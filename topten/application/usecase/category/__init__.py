"""Category use cases."""

from .list_categories import (
    CategoryInfo,
    CategoryListItem,
    ListCategoriesResponse,
    ListCategoriesUseCase,
)

__all__ = [
    "CategoryInfo",
    "CategoryListItem",
    "ListCategoriesResponse",
    "ListCategoriesUseCase",
]
