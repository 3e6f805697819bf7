"""Unit tests for UserService."""

from uuid import uuid4

import pytest

from topten.domain.error import NotFoundError
from topten.domain.repository import UserRepository
from topten.domain.service import UserService
from topten.domain.value import UserId
from tests.conftest import make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestUserService:
    @pytest.mark.asyncio
    async def test_get_by_id(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.create(make_user("alice"))

        assert await user_service.get_by_id(user.id) == user

    @pytest.mark.asyncio
    async def test_get_missing_user_raises(self, unit_env):
        user_service = await unit_env.get(UserService)

        with pytest.raises(NotFoundError, match="User not found"):
            await user_service.get_by_id(UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_find_many_skips_missing(self, unit_env):
        user_service = await unit_env.get(UserService)
        user_repo = await unit_env.get(UserRepository)
        alice = await user_repo.create(make_user("alice"))
        bob = await user_repo.create(make_user("bob"))

        found = await user_service.find_many([alice.id, bob.id, alice.id, UserId(uuid4())])

        assert found == {alice.id: alice, bob.id: bob}
        assert await user_service.find_many([]) == {}
