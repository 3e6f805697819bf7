"""Get list use case."""

from uuid import UUID

from pydantic import BaseModel

from topten.domain.service import ListService
from topten.domain.value import UserId

from .common import ListAssembler, ListDetail


class GetListRequest(BaseModel):
    """Get list request."""

    id_or_slug: str
    viewer_id: str | None = None  # Session user, if any


class GetListResponse(BaseModel):
    """Get list response."""

    list: ListDetail


class GetListUseCase:
    """Use case for viewing a single list by id or slug."""

    def __init__(self, list_service: ListService, assembler: ListAssembler) -> None:
        self.list_service = list_service
        self.assembler = assembler

    async def execute(self, request: GetListRequest) -> GetListResponse:
        """Raises NotFoundError if absent or private to someone else."""
        viewer_id = UserId(UUID(request.viewer_id)) if request.viewer_id else None
        top_ten_list = await self.list_service.get_list(request.id_or_slug, viewer_id)
        return GetListResponse(list=await self.assembler.assemble_one(top_ten_list))
