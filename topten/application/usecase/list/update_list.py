"""Update list use case."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel

from topten.application.usecase.base import parse_uuid
from topten.domain.service import ListService
from topten.domain.value import ListId, UserId

from .common import ListAssembler, ListDetail, ListItemInput
from .create_list import parse_category_id, to_drafts


class UpdateListRequest(BaseModel):
    """Update list request.

    Only fields present in the request body are changed.
    """

    user_id: str
    list_id: str
    title: str | None = None
    description: str | None = None
    category_id: str | None = None
    is_public: bool | None = None
    items: list[ListItemInput] | None = None


class UpdateListResponse(BaseModel):
    """Update list response."""

    list: ListDetail
    message: str = "List updated successfully"


class UpdateListUseCase:
    """Use case for editing a list the caller owns."""

    def __init__(self, list_service: ListService, assembler: ListAssembler) -> None:
        self.list_service = list_service
        self.assembler = assembler

    async def execute(self, request: UpdateListRequest) -> UpdateListResponse:
        """Execute update list flow.

        Raises:
            NotFoundError: If the list does not exist
            ForbiddenError: If the caller does not own it
            ValidationError: If a changed field is invalid
        """
        provided = request.model_fields_set
        changes: dict[str, Any] = {}
        if "title" in provided and request.title:
            changes["title"] = request.title
        if "description" in provided:
            changes["description"] = request.description
        if "category_id" in provided and request.category_id:
            changes["category_id"] = parse_category_id(request.category_id)
        if "is_public" in provided and request.is_public is not None:
            changes["is_public"] = request.is_public
        if "items" in provided and request.items is not None:
            changes["items"] = to_drafts(request.items)

        updated = await self.list_service.update_list(
            owner_id=UserId(UUID(request.user_id)),
            list_id=ListId(parse_uuid(request.list_id, "List")),
            changes=changes,
        )
        return UpdateListResponse(list=await self.assembler.assemble_one(updated))
