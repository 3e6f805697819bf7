"""Delete list use case."""

from uuid import UUID

from pydantic import BaseModel

from topten.application.usecase.base import parse_uuid
from topten.domain.service import ListService
from topten.domain.value import ListId, UserId


class DeleteListRequest(BaseModel):
    """Delete list request."""

    user_id: str
    list_id: str


class DeleteListResponse(BaseModel):
    """Delete list response."""

    message: str = "List deleted successfully"


class DeleteListUseCase:
    """Use case for deleting a list with its items and votes."""

    def __init__(self, list_service: ListService) -> None:
        self.list_service = list_service

    async def execute(self, request: DeleteListRequest) -> DeleteListResponse:
        await self.list_service.delete_list(
            owner_id=UserId(UUID(request.user_id)),
            list_id=ListId(parse_uuid(request.list_id, "List")),
        )
        return DeleteListResponse()
