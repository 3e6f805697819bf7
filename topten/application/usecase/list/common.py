"""Shared list response models and their assembly."""

from datetime import datetime
from typing import Sequence

from pydantic import BaseModel

from topten.application.usecase.category import CategoryInfo
from topten.domain.model import TopTenList
from topten.domain.repository import VoteRepository
from topten.domain.service import CategoryService, UserService


class ListItemInfo(BaseModel):
    """Ranked item in responses."""

    id: str
    rank: int
    title: str
    description: str | None
    image_url: str | None


class ListAuthor(BaseModel):
    """List owner in responses."""

    id: str
    username: str


class ListDetail(BaseModel):
    """List with its author, category, items and vote count."""

    id: str
    slug: str
    title: str
    description: str | None
    is_public: bool
    author: ListAuthor | None
    category: CategoryInfo | None
    items: list[ListItemInfo]
    vote_count: int
    created_at: datetime
    updated_at: datetime


class ListItemInput(BaseModel):
    """Item as submitted; its position sets its rank."""

    title: str = ""
    description: str | None = None
    image_url: str | None = None


class ListAssembler:
    """Builds ListDetail responses with batched lookups."""

    def __init__(
        self,
        user_service: UserService,
        category_service: CategoryService,
        vote_repository: VoteRepository,
    ) -> None:
        self.user_service = user_service
        self.category_service = category_service
        self.vote_repository = vote_repository

    async def assemble(
        self, lists: Sequence[TopTenList], item_limit: int | None = None
    ) -> list[ListDetail]:
        """Project lists for a response.

        Args:
            lists: Lists to project
            item_limit: Keep only the top N items (browse previews)
        """
        if not lists:
            return []

        authors = await self.user_service.find_many([lst.user_id for lst in lists])
        categories = await self.category_service.categories_by_id()
        vote_counts = await self.vote_repository.count_by_lists([lst.id for lst in lists])

        details = []
        for lst in lists:
            author = authors.get(lst.user_id)
            category = categories.get(lst.category_id)
            items = lst.items if item_limit is None else lst.items[:item_limit]
            details.append(
                ListDetail(
                    id=str(lst.id),
                    slug=lst.slug.root,
                    title=lst.title,
                    description=lst.description,
                    is_public=lst.is_public,
                    author=(
                        ListAuthor(id=str(author.id), username=author.username)
                        if author
                        else None
                    ),
                    category=CategoryInfo.from_category(category) if category else None,
                    items=[
                        ListItemInfo(
                            id=str(item.id),
                            rank=item.rank,
                            title=item.title,
                            description=item.description,
                            image_url=item.image_url,
                        )
                        for item in items
                    ],
                    vote_count=vote_counts.get(lst.id, 0),
                    created_at=lst.created_at,
                    updated_at=lst.updated_at,
                )
            )
        return details

    async def assemble_one(self, top_ten_list: TopTenList) -> ListDetail:
        return (await self.assemble([top_ten_list]))[0]
