"""Unit tests for the federated login use cases."""

import pytest

from topten.adapter.google import GoogleOAuthClient, GoogleOAuthError
from topten.application.usecase.auth import (
    CompleteFederatedLoginRequest,
    CompleteFederatedLoginUseCase,
    InitiateFederatedLoginRequest,
    InitiateFederatedLoginUseCase,
)
from topten.domain.error import FederatedLoginError
from topten.domain.service import AuthService
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def complete_use_case(unit_env) -> CompleteFederatedLoginUseCase:
    return CompleteFederatedLoginUseCase(auth_service=await unit_env.get(AuthService))


class TestInitiateFederatedLogin:
    @pytest.mark.asyncio
    async def test_returns_authorization_url(self, unit_env):
        use_case = InitiateFederatedLoginUseCase(
            auth_service=await unit_env.get(AuthService)
        )

        result = await use_case.execute(InitiateFederatedLoginRequest(state="s-1"))

        assert "state=s-1" in result.authorization_url


class TestCompleteFederatedLogin:
    @pytest.mark.asyncio
    async def test_matching_state_signs_in(self, unit_env):
        use_case = await complete_use_case(unit_env)

        result = await use_case.execute(
            CompleteFederatedLoginRequest(code="c", state="s-1", expected_state="s-1")
        )

        assert result.user.email == "mock.user@gmail.com"
        assert result.user.username == "mock-google-user"
        assert result.user.auth_provider == "federated"
        assert result.session.user_id == result.user.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "fields, code",
        [
            (
                {"error": "access_denied", "code": "c", "state": "s", "expected_state": "s"},
                "oauth_cancelled",
            ),
            ({"state": "s", "expected_state": "s"}, "oauth_failed"),
            ({"code": "c", "state": "s"}, "oauth_state_mismatch"),
            ({"code": "c", "state": "other", "expected_state": "s"}, "oauth_state_mismatch"),
            ({"code": "c", "expected_state": "s"}, "oauth_state_mismatch"),
        ],
    )
    async def test_refused_callbacks(self, unit_env, fields, code):
        use_case = await complete_use_case(unit_env)

        with pytest.raises(FederatedLoginError) as error:
            await use_case.execute(CompleteFederatedLoginRequest(**fields))

        assert error.value.code == code

    @pytest.mark.asyncio
    async def test_provider_failure_propagates(self, unit_env):
        google = await unit_env.get(GoogleOAuthClient)
        google.fail("bad-code")
        use_case = await complete_use_case(unit_env)

        with pytest.raises(GoogleOAuthError):
            await use_case.execute(
                CompleteFederatedLoginRequest(
                    code="bad-code", state="s-1", expected_state="s-1"
                )
            )
