"""Unit tests for CategoryService."""

from uuid import uuid4

import pytest

from topten.domain.repository import TopTenListRepository
from topten.domain.service import CategoryService
from topten.domain.value import UserId
from topten.persistence.seed import DEFAULT_CATEGORIES
from tests.conftest import MOVIES, make_list
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestListCategories:
    @pytest.mark.asyncio
    async def test_seeded_categories_sorted_by_name(self, unit_env):
        category_service = await unit_env.get(CategoryService)

        categories = await category_service.list_categories()

        names = [category.name for category, _ in categories]
        assert len(names) == len(DEFAULT_CATEGORIES)
        assert names == sorted(names)

    @pytest.mark.asyncio
    async def test_counts_lists_per_category(self, unit_env):
        category_service = await unit_env.get(CategoryService)
        list_repo = await unit_env.get(TopTenListRepository)
        owner_id = UserId(uuid4())
        await list_repo.create(make_list(owner_id, "Films"))
        await list_repo.create(make_list(owner_id, "More Films", is_public=False))

        counts = {c.slug: n for c, n in await category_service.list_categories()}

        assert counts["movies"] == 2
        assert counts["books"] == 0

    @pytest.mark.asyncio
    async def test_categories_by_id(self, unit_env):
        category_service = await unit_env.get(CategoryService)

        by_id = await category_service.categories_by_id()

        assert by_id[MOVIES].slug == "movies"
