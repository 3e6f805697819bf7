"""Vote routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request
from pydantic import BaseModel

from topten.adapter.session import SessionManager
from topten.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    ListVotesRequest,
    ListVotesResponse,
    ListVotesUseCase,
    RemoveVoteRequest,
    RemoveVoteResponse,
    RemoveVoteUseCase,
)
from topten.interface.api.dependencies import load_session, require_user_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/votes", tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for casting a vote."""

    list_id: str = ""


@router.get("", response_model=ListVotesResponse)
async def list_votes(
    request: Request,
    list_votes_use_case: FromDishka[ListVotesUseCase],
    session_manager: FromDishka[SessionManager],
) -> ListVotesResponse:
    """The signed-in user's votes; empty when signed out."""
    session = load_session(request, session_manager)
    return await list_votes_use_case.execute(
        ListVotesRequest(user_id=session.user_id)
    )


@router.post("", response_model=CastVoteResponse)
async def cast_vote(
    body: CastVoteAPIRequest,
    request: Request,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    session_manager: FromDishka[SessionManager],
) -> CastVoteResponse:
    """Vote for a list.

    Any earlier vote in the same category moves to this list.

    Raises:
        UnauthenticatedError: If signed out
        NotFoundError: If the list does not exist
        ListNotPublicError: If the list is private
        AlreadyVotedError: If the vote already points at this list
    """
    session = load_session(request, session_manager)
    user_id = require_user_id(session, "You must be logged in to vote")

    result = await cast_vote_use_case.execute(
        CastVoteRequest(user_id=user_id, list_id=body.list_id)
    )
    logger.info(f"Vote {result.outcome.value} by {user_id} for {result.voted_list_id}")
    return result


@router.delete("", response_model=RemoveVoteResponse)
async def remove_vote(
    request: Request,
    remove_vote_use_case: FromDishka[RemoveVoteUseCase],
    session_manager: FromDishka[SessionManager],
    list_id: str = "",
) -> RemoveVoteResponse:
    """Withdraw the signed-in user's vote for a list.

    Args:
        list_id: Query parameter naming the list
    """
    session = load_session(request, session_manager)
    user_id = require_user_id(session, "You must be logged in")

    return await remove_vote_use_case.execute(
        RemoveVoteRequest(user_id=user_id, list_id=list_id)
    )
