"""In-memory top ten list repository for testing."""

from typing import Optional, Sequence

from topten.domain.error import ConstraintViolationError, NotFoundError
from topten.domain.model import TopTenList
from topten.domain.repository.top_ten_list import ListQuery, TopTenListRepository
from topten.domain.value import ListId, Slug

from .database import InMemoryDatabase


class InMemoryTopTenListRepository(TopTenListRepository):
    """In-memory implementation of TopTenListRepository for testing.

    Deleting a list drops its votes explicitly, mirroring ON DELETE CASCADE.
    """

    def __init__(self, db: Optional[InMemoryDatabase] = None) -> None:
        self.db = db or InMemoryDatabase()

    async def find_by_id(self, list_id: ListId) -> Optional[TopTenList]:
        """Find a list by ID."""
        await self.db.checkpoint()
        return self.db.lists.get(list_id)

    async def find_by_slug(self, slug: Slug) -> Optional[TopTenList]:
        """Find a list by slug."""
        await self.db.checkpoint()
        for top_ten_list in self.db.lists.values():
            if top_ten_list.slug == slug:
                return top_ten_list
        return None

    async def find_by_ids(self, list_ids: Sequence[ListId]) -> list[TopTenList]:
        """Batch lookup of lists."""
        await self.db.checkpoint()
        return [self.db.lists[lid] for lid in list_ids if lid in self.db.lists]

    async def find_page(self, query: ListQuery) -> tuple[list[TopTenList], int]:
        """Browse lists ordered by vote count, then newest first."""
        await self.db.checkpoint()
        matching = [
            lst
            for lst in self.db.lists.values()
            if (not query.public_only or lst.is_public)
            and (query.user_id is None or lst.user_id == query.user_id)
            and (query.category_id is None or lst.category_id == query.category_id)
        ]
        matching.sort(
            key=lambda lst: (self.db.vote_count(lst.id), lst.created_at),
            reverse=True,
        )
        page = matching[query.offset : query.offset + query.limit]
        return page, len(matching)

    async def create(self, top_ten_list: TopTenList) -> TopTenList:
        """Insert a list.

        Raises:
            ConstraintViolationError: If the id or slug is taken
        """
        await self.db.checkpoint()
        if top_ten_list.id in self.db.lists:
            raise ConstraintViolationError("top_ten_lists_pkey")
        if any(lst.slug == top_ten_list.slug for lst in self.db.lists.values()):
            raise ConstraintViolationError("uq_top_ten_lists_slug")
        self.db.lists[top_ten_list.id] = top_ten_list
        return top_ten_list

    async def update(self, top_ten_list: TopTenList) -> TopTenList:
        """Replace a list; a category change drops its votes."""
        await self.db.checkpoint()
        current = self.db.lists.get(top_ten_list.id)
        if current is None:
            raise NotFoundError("List", str(top_ten_list.id))
        if current.category_id != top_ten_list.category_id:
            self.db.delete_votes_for_list(top_ten_list.id)
        self.db.lists[top_ten_list.id] = top_ten_list
        return top_ten_list

    async def delete(self, list_id: ListId) -> bool:
        """Delete a list and the votes cast for it."""
        await self.db.checkpoint()
        if self.db.lists.pop(list_id, None) is None:
            return False
        self.db.delete_votes_for_list(list_id)
        return True
