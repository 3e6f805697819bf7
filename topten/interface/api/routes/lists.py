"""List routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request, status
from pydantic import BaseModel

from topten.adapter.session import SessionManager
from topten.application.usecase.list import (
    CreateListRequest,
    CreateListResponse,
    CreateListUseCase,
    DeleteListRequest,
    DeleteListResponse,
    DeleteListUseCase,
    GetListRequest,
    GetListResponse,
    GetListUseCase,
    ListItemInput,
    ListListsRequest,
    ListListsResponse,
    ListListsUseCase,
    UpdateListRequest,
    UpdateListResponse,
    UpdateListUseCase,
)
from topten.domain.service.list_service import DEFAULT_PAGE_SIZE
from topten.interface.api.dependencies import load_session, require_user_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/lists", tags=["lists"], route_class=DishkaRoute)


class CreateListAPIRequest(BaseModel):
    """API request for creating a list."""

    title: str = ""
    description: str | None = None
    category_id: str | None = None
    is_public: bool = True
    items: list[ListItemInput] = []


class UpdateListAPIRequest(BaseModel):
    """API request for editing a list; omitted fields are left as they are."""

    title: str | None = None
    description: str | None = None
    category_id: str | None = None
    is_public: bool | None = None
    items: list[ListItemInput] | None = None


@router.get("", response_model=ListListsResponse)
async def list_lists(
    list_lists_use_case: FromDishka[ListListsUseCase],
    category: str | None = None,
    user_id: str | None = None,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> ListListsResponse:
    """Browse lists, most voted first.

    Args:
        category: Category slug filter
        user_id: Owner filter; includes the owner's private lists
        page: 1-based page number
        limit: Page size
    """
    return await list_lists_use_case.execute(
        ListListsRequest(category=category, user_id=user_id, page=page, limit=limit)
    )


@router.post("", response_model=CreateListResponse, status_code=status.HTTP_201_CREATED)
async def create_list(
    body: CreateListAPIRequest,
    request: Request,
    create_list_use_case: FromDishka[CreateListUseCase],
    session_manager: FromDishka[SessionManager],
) -> CreateListResponse:
    """Create a list. Requires authentication."""
    session = load_session(request, session_manager)
    user_id = require_user_id(session, "You must be logged in to create a list")

    result = await create_list_use_case.execute(
        CreateListRequest(user_id=user_id, **body.model_dump())
    )
    logger.info(f"List created: {result.list.slug} by {user_id}")
    return result


@router.get("/{list_id}", response_model=GetListResponse)
async def get_list(
    list_id: str,
    request: Request,
    get_list_use_case: FromDishka[GetListUseCase],
    session_manager: FromDishka[SessionManager],
) -> GetListResponse:
    """View a list by id or slug.

    Private lists are only visible to their owner.
    """
    session = load_session(request, session_manager)
    return await get_list_use_case.execute(
        GetListRequest(id_or_slug=list_id, viewer_id=session.user_id)
    )


@router.put("/{list_id}", response_model=UpdateListResponse)
async def update_list(
    list_id: str,
    body: UpdateListAPIRequest,
    request: Request,
    update_list_use_case: FromDishka[UpdateListUseCase],
    session_manager: FromDishka[SessionManager],
) -> UpdateListResponse:
    """Edit a list the caller owns."""
    session = load_session(request, session_manager)
    user_id = require_user_id(session, "You must be logged in")

    return await update_list_use_case.execute(
        UpdateListRequest(
            user_id=user_id,
            list_id=list_id,
            **body.model_dump(exclude_unset=True),
        )
    )


@router.delete("/{list_id}", response_model=DeleteListResponse)
async def delete_list(
    list_id: str,
    request: Request,
    delete_list_use_case: FromDishka[DeleteListUseCase],
    session_manager: FromDishka[SessionManager],
) -> DeleteListResponse:
    """Delete a list the caller owns, with its votes."""
    session = load_session(request, session_manager)
    user_id = require_user_id(session, "You must be logged in")

    result = await delete_list_use_case.execute(
        DeleteListRequest(user_id=user_id, list_id=list_id)
    )
    logger.info(f"List deleted: {list_id} by {user_id}")
    return result
