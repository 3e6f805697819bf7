"""Unit tests for the list use cases."""

from uuid import UUID, uuid4

import pytest

from topten.application.usecase.list import (
    CreateListRequest,
    CreateListUseCase,
    DeleteListRequest,
    DeleteListUseCase,
    GetListRequest,
    GetListUseCase,
    ListItemInput,
    ListListsRequest,
    ListListsUseCase,
    UpdateListRequest,
    UpdateListUseCase,
)
from topten.domain.error import ForbiddenError, NotFoundError, ValidationError
from topten.domain.repository import UserRepository
from topten.domain.service import VoteService
from topten.domain.value import ListId, UserId
from tests.conftest import BOOKS, MOVIES, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ITEMS = [ListItemInput(title=title) for title in ("Alien", "Heat", "Ran", "Ikiru")]


async def create_list(unit_env, user_id: str, **overrides):
    use_case = await unit_env.get(CreateListUseCase)
    fields = {"title": "Best Films", "category_id": str(MOVIES), "items": ITEMS}
    fields.update(overrides)
    return await use_case.execute(CreateListRequest(user_id=user_id, **fields))


async def signed_up(unit_env, username: str = "alice") -> str:
    user_repo = await unit_env.get(UserRepository)
    user = await user_repo.create(make_user(username))
    return str(user.id)


class TestCreateListUseCase:
    @pytest.mark.asyncio
    async def test_create_returns_assembled_list(self, unit_env):
        user_id = await signed_up(unit_env)

        result = await create_list(unit_env, user_id, description="Mine")

        assert result.message == "List created successfully"
        detail = result.list
        assert detail.title == "Best Films"
        assert detail.description == "Mine"
        assert detail.author.username == "alice"
        assert detail.category.slug == "movies"
        assert [item.title for item in detail.items] == ["Alien", "Heat", "Ran", "Ikiru"]
        assert [item.rank for item in detail.items] == [1, 2, 3, 4]
        assert detail.vote_count == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("category_id", ["not-a-uuid", str(uuid4())])
    async def test_bad_category(self, unit_env, category_id):
        user_id = await signed_up(unit_env)

        with pytest.raises(ValidationError, match="Invalid category"):
            await create_list(unit_env, user_id, category_id=category_id)

    @pytest.mark.asyncio
    async def test_missing_category(self, unit_env):
        user_id = await signed_up(unit_env)

        with pytest.raises(ValidationError, match="Title and category are required"):
            await create_list(unit_env, user_id, category_id=None)


class TestGetListUseCase:
    @pytest.mark.asyncio
    async def test_get_by_slug_includes_votes(self, unit_env):
        user_id = await signed_up(unit_env)
        created = (await create_list(unit_env, user_id)).list
        vote_service = await unit_env.get(VoteService)
        await vote_service.cast_vote(UserId(uuid4()), ListId(UUID(created.id)))
        use_case = await unit_env.get(GetListUseCase)

        result = await use_case.execute(GetListRequest(id_or_slug=created.slug))

        assert result.list.id == created.id
        assert result.list.vote_count == 1
        # Detail view shows every item
        assert len(result.list.items) == 4

    @pytest.mark.asyncio
    async def test_private_list_hidden_from_others(self, unit_env):
        owner_id = await signed_up(unit_env)
        created = (await create_list(unit_env, owner_id, is_public=False)).list
        use_case = await unit_env.get(GetListUseCase)

        own = await use_case.execute(
            GetListRequest(id_or_slug=created.id, viewer_id=owner_id)
        )
        assert own.list.id == created.id
        with pytest.raises(NotFoundError):
            await use_case.execute(GetListRequest(id_or_slug=created.id))


class TestUpdateListUseCase:
    @pytest.mark.asyncio
    async def test_only_provided_fields_change(self, unit_env):
        owner_id = await signed_up(unit_env)
        created = (await create_list(unit_env, owner_id, description="Keep me")).list
        use_case = await unit_env.get(UpdateListUseCase)

        result = await use_case.execute(
            UpdateListRequest(user_id=owner_id, list_id=created.id, title="Renamed")
        )

        assert result.message == "List updated successfully"
        assert result.list.title == "Renamed"
        assert result.list.description == "Keep me"
        assert len(result.list.items) == 4

    @pytest.mark.asyncio
    async def test_explicit_null_description_clears_it(self, unit_env):
        owner_id = await signed_up(unit_env)
        created = (await create_list(unit_env, owner_id, description="Old")).list
        use_case = await unit_env.get(UpdateListUseCase)

        result = await use_case.execute(
            UpdateListRequest(user_id=owner_id, list_id=created.id, description=None)
        )

        assert result.list.description is None

    @pytest.mark.asyncio
    async def test_change_category_and_items(self, unit_env):
        owner_id = await signed_up(unit_env)
        created = (await create_list(unit_env, owner_id)).list
        use_case = await unit_env.get(UpdateListUseCase)

        result = await use_case.execute(
            UpdateListRequest(
                user_id=owner_id,
                list_id=created.id,
                category_id=str(BOOKS),
                items=[ListItemInput(title="Dune")],
            )
        )

        assert result.list.category.slug == "books"
        assert [item.title for item in result.list.items] == ["Dune"]

    @pytest.mark.asyncio
    async def test_other_user_is_forbidden(self, unit_env):
        owner_id = await signed_up(unit_env)
        other_id = await signed_up(unit_env, "bob")
        created = (await create_list(unit_env, owner_id)).list
        use_case = await unit_env.get(UpdateListUseCase)

        with pytest.raises(ForbiddenError):
            await use_case.execute(
                UpdateListRequest(user_id=other_id, list_id=created.id, title="Mine")
            )

    @pytest.mark.asyncio
    async def test_malformed_id_is_not_found(self, unit_env):
        owner_id = await signed_up(unit_env)
        use_case = await unit_env.get(UpdateListUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                UpdateListRequest(user_id=owner_id, list_id="nope", title="x")
            )


class TestDeleteListUseCase:
    @pytest.mark.asyncio
    async def test_delete(self, unit_env):
        owner_id = await signed_up(unit_env)
        created = (await create_list(unit_env, owner_id)).list
        use_case = await unit_env.get(DeleteListUseCase)
        get_use_case = await unit_env.get(GetListUseCase)

        result = await use_case.execute(
            DeleteListRequest(user_id=owner_id, list_id=created.id)
        )

        assert result.message == "List deleted successfully"
        with pytest.raises(NotFoundError):
            await get_use_case.execute(
                GetListRequest(id_or_slug=created.id, viewer_id=owner_id)
            )


class TestListListsUseCase:
    @pytest.mark.asyncio
    async def test_browse_previews_top_three_items(self, unit_env):
        owner_id = await signed_up(unit_env)
        await create_list(unit_env, owner_id)
        use_case = await unit_env.get(ListListsUseCase)

        result = await use_case.execute(ListListsRequest())

        assert len(result.lists) == 1
        assert [item.rank for item in result.lists[0].items] == [1, 2, 3]
        assert result.pagination.model_dump() == {
            "page": 1,
            "limit": 12,
            "total": 1,
            "total_pages": 1,
        }

    @pytest.mark.asyncio
    async def test_pagination_metadata(self, unit_env):
        owner_id = await signed_up(unit_env)
        for n in range(5):
            await create_list(unit_env, owner_id, title=f"List {n}")
        use_case = await unit_env.get(ListListsUseCase)

        result = await use_case.execute(ListListsRequest(page=3, limit=2))

        assert len(result.lists) == 1
        assert result.pagination.total == 5
        assert result.pagination.total_pages == 3

    @pytest.mark.asyncio
    async def test_limit_is_capped(self, unit_env):
        use_case = await unit_env.get(ListListsUseCase)

        result = await use_case.execute(ListListsRequest(limit=1000))

        assert result.pagination.limit == 100
        assert result.pagination.total_pages == 0

    @pytest.mark.asyncio
    async def test_owner_filter_includes_private(self, unit_env):
        owner_id = await signed_up(unit_env)
        await create_list(unit_env, owner_id, title="Public")
        await create_list(unit_env, owner_id, title="Private", is_public=False)
        use_case = await unit_env.get(ListListsUseCase)

        mine = await use_case.execute(ListListsRequest(user_id=owner_id))
        everyone = await use_case.execute(ListListsRequest())

        assert {lst.title for lst in mine.lists} == {"Public", "Private"}
        assert [lst.title for lst in everyone.lists] == ["Public"]

    @pytest.mark.asyncio
    async def test_malformed_owner_filter_matches_nothing(self, unit_env):
        owner_id = await signed_up(unit_env)
        await create_list(unit_env, owner_id)
        use_case = await unit_env.get(ListListsUseCase)

        result = await use_case.execute(ListListsRequest(user_id="nope"))

        assert result.lists == []
        assert result.pagination.total == 0

    @pytest.mark.asyncio
    async def test_category_filter(self, unit_env):
        owner_id = await signed_up(unit_env)
        await create_list(unit_env, owner_id, title="Films")
        await create_list(unit_env, owner_id, title="Books", category_id=str(BOOKS))
        use_case = await unit_env.get(ListListsUseCase)

        result = await use_case.execute(ListListsRequest(category="books"))

        assert [lst.title for lst in result.lists] == ["Books"]
