"""Unit tests for the vote use cases."""

from uuid import uuid4

import pytest

from topten.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    ListVotesRequest,
    ListVotesUseCase,
    RemoveVoteRequest,
    RemoveVoteUseCase,
)
from topten.domain.error import NotFoundError, ValidationError
from topten.domain.repository import TopTenListRepository
from topten.domain.service import CategoryService, VoteService
from topten.domain.value import UserId, VoteOutcome
from tests.conftest import BOOKS, make_list
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def save_list(unit_env, **kwargs):
    list_repo = await unit_env.get(TopTenListRepository)
    return await list_repo.create(make_list(UserId(uuid4()), **kwargs))


class TestCastVoteUseCase:
    @pytest.mark.asyncio
    async def test_first_vote_message(self, unit_env):
        use_case = CastVoteUseCase(vote_service=await unit_env.get(VoteService))
        target = await save_list(unit_env)

        result = await use_case.execute(
            CastVoteRequest(user_id=str(uuid4()), list_id=str(target.id))
        )

        assert result.message == "Vote recorded successfully"
        assert result.outcome == VoteOutcome.CREATED
        assert result.voted_list_id == str(target.id)

    @pytest.mark.asyncio
    async def test_switch_message_names_both_lists(self, unit_env):
        use_case = CastVoteUseCase(vote_service=await unit_env.get(VoteService))
        first = await save_list(unit_env, title="Best Films")
        second = await save_list(unit_env, title="Better Films")
        user_id = str(uuid4())
        await use_case.execute(CastVoteRequest(user_id=user_id, list_id=str(first.id)))

        result = await use_case.execute(
            CastVoteRequest(user_id=user_id, list_id=str(second.id))
        )

        assert result.outcome == VoteOutcome.SWITCHED
        assert result.message == 'Vote changed from "Best Films" to "Better Films"'

    @pytest.mark.asyncio
    async def test_missing_list_id(self, unit_env):
        use_case = CastVoteUseCase(vote_service=await unit_env.get(VoteService))

        with pytest.raises(ValidationError, match="List ID is required"):
            await use_case.execute(CastVoteRequest(user_id=str(uuid4())))

    @pytest.mark.asyncio
    async def test_malformed_list_id_is_not_found(self, unit_env):
        use_case = CastVoteUseCase(vote_service=await unit_env.get(VoteService))

        with pytest.raises(NotFoundError, match="List not found"):
            await use_case.execute(
                CastVoteRequest(user_id=str(uuid4()), list_id="not-a-uuid")
            )


class TestRemoveVoteUseCase:
    @pytest.mark.asyncio
    async def test_remove(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        target = await save_list(unit_env)
        user_id = UserId(uuid4())
        await vote_service.cast_vote(user_id, target.id)
        use_case = RemoveVoteUseCase(vote_service=vote_service)

        result = await use_case.execute(
            RemoveVoteRequest(user_id=str(user_id), list_id=str(target.id))
        )

        assert result.message == "Vote removed successfully"
        assert await vote_service.list_votes_for_user(user_id) == []

    @pytest.mark.asyncio
    async def test_missing_list_id(self, unit_env):
        use_case = RemoveVoteUseCase(vote_service=await unit_env.get(VoteService))

        with pytest.raises(ValidationError):
            await use_case.execute(RemoveVoteRequest(user_id=str(uuid4())))

    @pytest.mark.asyncio
    async def test_no_such_vote(self, unit_env):
        use_case = RemoveVoteUseCase(vote_service=await unit_env.get(VoteService))
        target = await save_list(unit_env)

        with pytest.raises(NotFoundError, match="Vote not found"):
            await use_case.execute(
                RemoveVoteRequest(user_id=str(uuid4()), list_id=str(target.id))
            )


class TestListVotesUseCase:
    @pytest.mark.asyncio
    async def test_anonymous_gets_empty_list(self, unit_env):
        use_case = ListVotesUseCase(
            vote_service=await unit_env.get(VoteService),
            category_service=await unit_env.get(CategoryService),
        )

        result = await use_case.execute(ListVotesRequest())

        assert result.votes == []

    @pytest.mark.asyncio
    async def test_votes_carry_list_and_category(self, unit_env):
        vote_service = await unit_env.get(VoteService)
        use_case = ListVotesUseCase(
            vote_service=vote_service,
            category_service=await unit_env.get(CategoryService),
        )
        films = await save_list(unit_env, title="Best Films")
        books = await save_list(unit_env, title="Best Books", category_id=BOOKS)
        user_id = UserId(uuid4())
        await vote_service.cast_vote(user_id, films.id)
        await vote_service.cast_vote(user_id, books.id)

        result = await use_case.execute(ListVotesRequest(user_id=str(user_id)))

        by_title = {vote.list.title: vote for vote in result.votes}
        assert set(by_title) == {"Best Films", "Best Books"}
        assert by_title["Best Films"].list.category.slug == "movies"
        assert by_title["Best Books"].list.category.slug == "books"
        assert by_title["Best Books"].list_id == str(books.id)
        assert by_title["Best Books"].list.slug == books.slug.root
