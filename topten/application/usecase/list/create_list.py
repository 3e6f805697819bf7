"""Create list use case."""

from uuid import UUID

from pydantic import BaseModel

from topten.application.usecase.base import BaseUseCase
from topten.domain.error import ValidationError
from topten.domain.service import ListItemDraft, ListService
from topten.domain.value import CategoryId, UserId

from .common import ListAssembler, ListDetail, ListItemInput


class CreateListRequest(BaseModel):
    """Create list request."""

    user_id: str  # From the session
    title: str = ""
    description: str | None = None
    category_id: str | None = None
    is_public: bool = True
    items: list[ListItemInput] = []


class CreateListResponse(BaseModel):
    """Create list response."""

    list: ListDetail
    message: str = "List created successfully"


def parse_category_id(value: str | None) -> CategoryId | None:
    """Category ids come from forms; anything unparseable is invalid."""
    if not value:
        return None
    try:
        return CategoryId(UUID(value))
    except ValueError:
        raise ValidationError("Invalid category") from None


def to_drafts(items: list[ListItemInput]) -> list[ListItemDraft]:
    return [
        ListItemDraft(
            title=item.title,
            description=item.description,
            image_url=item.image_url,
        )
        for item in items
    ]


class CreateListUseCase(BaseUseCase):
    """Use case for creating a top ten list."""

    def __init__(self, list_service: ListService, assembler: ListAssembler) -> None:
        self.list_service = list_service
        self.assembler = assembler

    async def execute(self, request: CreateListRequest) -> CreateListResponse:
        """Execute create list flow.

        Raises:
            ValidationError: Missing title/category, bad items, unknown category
        """
        created = await self.list_service.create_list(
            owner_id=UserId(UUID(request.user_id)),
            title=request.title,
            category_id=parse_category_id(request.category_id),
            items=to_drafts(request.items),
            description=request.description,
            is_public=request.is_public,
        )
        return CreateListResponse(list=await self.assembler.assemble_one(created))
