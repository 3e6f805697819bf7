"""List lists use case."""

import math
from uuid import UUID

import logfire
from pydantic import BaseModel

from topten.domain.service import ListService
from topten.domain.service.list_service import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from topten.domain.value import UserId

from .common import ListAssembler, ListDetail

# Items shown per list when browsing
PREVIEW_ITEMS = 3


class ListListsRequest(BaseModel):
    """List lists request."""

    category: str | None = None  # Category slug
    user_id: str | None = None  # Owner filter (dashboard)
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE


class Pagination(BaseModel):
    """Pagination metadata."""

    page: int
    limit: int
    total: int
    total_pages: int


class ListListsResponse(BaseModel):
    """List lists response."""

    lists: list[ListDetail]
    pagination: Pagination


class ListListsUseCase:
    """Use case for browsing lists with filtering and pagination."""

    def __init__(self, list_service: ListService, assembler: ListAssembler) -> None:
        self.list_service = list_service
        self.assembler = assembler

    async def execute(self, request: ListListsRequest) -> ListListsResponse:
        """Page through lists, most voted first.

        An owner filter that is not a valid id matches nothing.
        """
        with logfire.span(
            "list_lists.execute",
            category=request.category,
            page=request.page,
            limit=request.limit,
        ):
            page = max(request.page, 1)
            limit = min(max(request.limit, 1), MAX_PAGE_SIZE)

            owner_id = None
            if request.user_id:
                try:
                    owner_id = UserId(UUID(request.user_id))
                except ValueError:
                    return ListListsResponse(
                        lists=[],
                        pagination=Pagination(
                            page=page, limit=limit, total=0, total_pages=0
                        ),
                    )

            lists, total = await self.list_service.browse(
                category_slug=request.category,
                user_id=owner_id,
                page=page,
                limit=limit,
            )

            return ListListsResponse(
                lists=await self.assembler.assemble(lists, item_limit=PREVIEW_ITEMS),
                pagination=Pagination(
                    page=page,
                    limit=limit,
                    total=total,
                    total_pages=math.ceil(total / limit),
                ),
            )
