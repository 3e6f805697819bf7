"""Top ten list repository interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from topten.domain.model.top_ten_list import TopTenList
from topten.domain.value import CategoryId, ListId, Slug, UserId


@dataclass(frozen=True)
class ListQuery:
    """Filters and paging for browsing lists."""

    category_id: Optional[CategoryId] = None
    user_id: Optional[UserId] = None
    public_only: bool = True
    offset: int = 0
    limit: int = 12


class TopTenListRepository(ABC):
    """Repository for the TopTenList aggregate (list plus its items).

    Deleting a list removes its items and the votes cast for it.
    """

    @abstractmethod
    async def find_by_id(self, list_id: ListId) -> Optional[TopTenList]:
        """Find a list, with items, by ID."""
        pass

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[TopTenList]:
        """Find a list, with items, by slug."""
        pass

    @abstractmethod
    async def find_by_ids(self, list_ids: Sequence[ListId]) -> list[TopTenList]:
        """Batch lookup of lists (items included)."""
        pass

    @abstractmethod
    async def find_page(self, query: ListQuery) -> tuple[list[TopTenList], int]:
        """Browse lists.

        Ordered by vote count (descending), then newest first.

        Args:
            query: Filters and paging

        Returns:
            Page of lists and the total number matching the filters
        """
        pass

    @abstractmethod
    async def create(self, top_ten_list: TopTenList) -> TopTenList:
        """Insert a list and its items.

        Raises:
            ConstraintViolationError: If the slug is taken
        """
        pass

    @abstractmethod
    async def update(self, top_ten_list: TopTenList) -> TopTenList:
        """Replace a list's fields and items in one step.

        If the category changed, votes cast for the list are removed since
        they were cast within the old category.

        Raises:
            NotFoundError: If the list does not exist
        """
        pass

    @abstractmethod
    async def delete(self, list_id: ListId) -> bool:
        """Delete a list along with its items and votes.

        Returns:
            True if a list was deleted
        """
        pass
