"""Unit tests for AuthService."""

import asyncio
from datetime import timedelta

import pytest

import topten.domain.service.auth_service as auth_module
from topten.adapter.google import GoogleOAuthClient
from topten.domain.error import (
    DuplicateEmailError,
    DuplicateUsernameError,
    FederatedOnlyAccountError,
    InvalidCredentialsError,
    ValidationError,
)
from topten.domain.model.common import utc_now
from topten.domain.repository import UserRepository
from topten.domain.service import AuthService
from topten.domain.value import AuthProvider, FederatedIdentity
from tests.conftest import STRONG_PASSWORD, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ADA = FederatedIdentity(
    subject_id="google-ada", email="Ada@Example.com", display_name="Ada Lovelace"
)


class TestSignup:
    @pytest.mark.asyncio
    async def test_signup_creates_local_user(self, unit_env):
        auth_service = await unit_env.get(AuthService)

        user = await auth_service.signup("Alice@Example.com", "Alice", STRONG_PASSWORD)

        assert user.email == "alice@example.com"
        assert user.username == "alice"
        assert user.auth_provider == AuthProvider.LOCAL
        assert user.federated_id is None
        assert user.password_hash and user.password_hash != STRONG_PASSWORD

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email, username, password, message",
        [
            ("", "alice", STRONG_PASSWORD, "Email, username, and password are required"),
            ("a@x.io", "", STRONG_PASSWORD, "Email, username, and password are required"),
            ("a@x.io", "alice", "", "Email, username, and password are required"),
            ("not-an-email", "alice", STRONG_PASSWORD, "Invalid email format"),
            ("a@x.io", "al", STRONG_PASSWORD, "Username must be between 3 and 30"),
            ("a@x.io", "a" * 31, STRONG_PASSWORD, "Username must be between 3 and 30"),
            ("a@x.io", "al ice", STRONG_PASSWORD, "letters, numbers, and hyphens"),
            ("a@x.io", "al_ice", STRONG_PASSWORD, "letters, numbers, and hyphens"),
            ("a@x.io", "alice", "weak", "at least 8 characters"),
        ],
    )
    async def test_signup_rejects_invalid_input(
        self, unit_env, email, username, password, message
    ):
        auth_service = await unit_env.get(AuthService)

        with pytest.raises(ValidationError, match=message):
            await auth_service.signup(email, username, password)

    @pytest.mark.asyncio
    async def test_duplicate_email_is_case_insensitive(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        await auth_service.signup("alice@example.com", "alice", STRONG_PASSWORD)

        with pytest.raises(DuplicateEmailError):
            await auth_service.signup("ALICE@example.com", "alice2", STRONG_PASSWORD)

    @pytest.mark.asyncio
    async def test_duplicate_username_is_case_insensitive(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        await auth_service.signup("alice@example.com", "alice", STRONG_PASSWORD)

        with pytest.raises(DuplicateUsernameError):
            await auth_service.signup("other@example.com", "ALICE", STRONG_PASSWORD)


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_with_correct_password(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        created = await auth_service.signup("alice@example.com", "alice", STRONG_PASSWORD)

        user = await auth_service.login("ALICE@example.com", STRONG_PASSWORD)

        assert user.id == created.id

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        await auth_service.signup("alice@example.com", "alice", STRONG_PASSWORD)

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            await auth_service.login("alice@example.com", "Wr0ng$password")
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            await auth_service.login("nobody@example.com", STRONG_PASSWORD)

        assert wrong_password.value.message == unknown_email.value.message
        assert wrong_password.value.message == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_missing_fields(self, unit_env):
        auth_service = await unit_env.get(AuthService)

        with pytest.raises(ValidationError, match="Email and password are required"):
            await auth_service.login("", STRONG_PASSWORD)

    @pytest.mark.asyncio
    async def test_federated_only_account_is_told_to_use_google(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        await auth_service.resolve_federated_user(ADA)

        with pytest.raises(FederatedOnlyAccountError, match="Sign in with Google"):
            await auth_service.login("ada@example.com", STRONG_PASSWORD)


class TestFederatedLogin:
    @pytest.mark.asyncio
    async def test_new_identity_creates_federated_user(self, unit_env):
        auth_service = await unit_env.get(AuthService)

        user = await auth_service.resolve_federated_user(ADA)

        assert user.email == "ada@example.com"
        assert user.username == "ada-lovelace"
        assert user.federated_id == "google-ada"
        assert user.password_hash is None
        assert user.auth_provider == AuthProvider.FEDERATED

    @pytest.mark.asyncio
    async def test_known_identity_returns_same_user(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        first = await auth_service.resolve_federated_user(ADA)

        second = await auth_service.resolve_federated_user(ADA)

        assert second.id == first.id

    @pytest.mark.asyncio
    async def test_email_match_links_password_account(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        local = await auth_service.signup("ada@example.com", "ada", STRONG_PASSWORD)

        linked = await auth_service.resolve_federated_user(ADA)

        assert linked.id == local.id
        assert linked.username == "ada"
        assert linked.federated_id == "google-ada"
        assert linked.auth_provider == AuthProvider.BOTH
        # Both sign-in methods keep working
        assert (await auth_service.login("ada@example.com", STRONG_PASSWORD)).id == local.id

    @pytest.mark.asyncio
    async def test_taken_username_gets_suffix(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        user_repo = await unit_env.get(UserRepository)
        await user_repo.create(make_user("ada-lovelace", email="other@example.com"))

        user = await auth_service.resolve_federated_user(ADA)

        assert user.username.startswith("ada-lovelace-")
        assert len(user.username) == len("ada-lovelace-") + 6

    @pytest.mark.asyncio
    async def test_email_match_on_passwordless_account_stays_federated(
        self, unit_env
    ):
        auth_service = await unit_env.get(AuthService)
        user_repo = await unit_env.get(UserRepository)
        existing = await user_repo.create(
            make_user(
                "ada",
                email="ada@example.com",
                federated_id="google-previous",
                password_hash=None,
            )
        )

        linked = await auth_service.resolve_federated_user(ADA)

        assert linked.id == existing.id
        assert linked.federated_id == "google-ada"
        assert linked.auth_provider == AuthProvider.FEDERATED

    @pytest.mark.asyncio
    async def test_username_falls_back_after_repeated_collisions(
        self, unit_env, monkeypatch
    ):
        auth_service = await unit_env.get(AuthService)
        user_repo = await unit_env.get(UserRepository)
        await user_repo.create(make_user("ada-lovelace", email="one@example.com"))
        await user_repo.create(make_user("ada-lovelace-taken", email="two@example.com"))
        suffixed = auth_module.generate_unique_username
        bases = []

        def always_taken(base):
            bases.append(base)
            return "ada-lovelace-taken" if base != "user" else suffixed(base)

        monkeypatch.setattr(auth_module, "generate_unique_username", always_taken)

        user = await auth_service.resolve_federated_user(ADA)

        assert bases.count("ada-lovelace") == auth_module.MAX_USERNAME_ATTEMPTS
        assert bases[-1] == "user"
        assert user.username.startswith("user-")
        assert len(user.username) == len("user-") + 6

    @pytest.mark.asyncio
    async def test_overlong_suffixed_username_falls_back(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        user_repo = await unit_env.get(UserRepository)
        # 28 characters, so base plus suffix exceeds the 30 character limit
        await user_repo.create(make_user("bartholomew-fitzgerald-smyth"))

        user = await auth_service.resolve_federated_user(
            FederatedIdentity(
                subject_id="google-bart",
                email="bart@example.com",
                display_name="Bartholomew Fitzgerald-Smyth",
            )
        )

        assert user.username.startswith("user-")
        assert len(user.username) == len("user-") + 6

    @pytest.mark.asyncio
    async def test_identity_without_email_is_rejected(self, unit_env):
        auth_service = await unit_env.get(AuthService)

        with pytest.raises(ValidationError):
            await auth_service.resolve_federated_user(
                FederatedIdentity(subject_id="google-x", email="")
            )

    @pytest.mark.asyncio
    async def test_concurrent_first_logins_resolve_to_one_user(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        user_repo = await unit_env.get(UserRepository)

        first, second = await asyncio.gather(
            auth_service.resolve_federated_user(ADA),
            auth_service.resolve_federated_user(ADA),
        )

        assert first.id == second.id
        assert await user_repo.find_by_federated_id("google-ada") == first

    @pytest.mark.asyncio
    async def test_complete_federated_login_uses_identity_client(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        google = await unit_env.get(GoogleOAuthClient)
        google.register("ada-code", ADA)

        user = await auth_service.complete_federated_login("ada-code")

        assert user.federated_id == "google-ada"

    @pytest.mark.asyncio
    async def test_initiate_federated_login_passes_state(self, unit_env):
        auth_service = await unit_env.get(AuthService)

        url = await auth_service.initiate_federated_login("state-123")

        assert "state=state-123" in url


class TestPasswordReset:
    @pytest.mark.asyncio
    async def test_unknown_email_issues_no_token(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        assert await auth_service.request_password_reset("nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_missing_email_is_rejected(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        with pytest.raises(ValidationError, match="Email is required"):
            await auth_service.request_password_reset("")

    @pytest.mark.asyncio
    async def test_reset_sets_new_password_once(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        await auth_service.signup("alice@example.com", "alice", STRONG_PASSWORD)

        token = await auth_service.request_password_reset("Alice@example.com")
        user = await auth_service.reset_password(token, "N3w$password")

        assert user.reset_token is None
        assert user.reset_token_expiry is None
        assert (await auth_service.login("alice@example.com", "N3w$password")).id == user.id
        with pytest.raises(InvalidCredentialsError):
            await auth_service.login("alice@example.com", STRONG_PASSWORD)
        with pytest.raises(ValidationError, match="Invalid or expired reset token"):
            await auth_service.reset_password(token, "An0ther$password")

    @pytest.mark.asyncio
    async def test_expired_token_is_rejected(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        user_repo = await unit_env.get(UserRepository)
        user = await auth_service.signup("alice@example.com", "alice", STRONG_PASSWORD)
        token = await auth_service.request_password_reset("alice@example.com")
        await user_repo.update(
            user.id, reset_token_expiry=utc_now() - timedelta(minutes=1)
        )

        with pytest.raises(ValidationError, match="Invalid or expired reset token"):
            await auth_service.reset_password(token, "N3w$password")

    @pytest.mark.asyncio
    async def test_weak_new_password_is_rejected(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        await auth_service.signup("alice@example.com", "alice", STRONG_PASSWORD)
        token = await auth_service.request_password_reset("alice@example.com")

        with pytest.raises(ValidationError, match="capital letter"):
            await auth_service.reset_password(token, "lowercase1!")

    @pytest.mark.asyncio
    async def test_federated_only_account_gains_password(self, unit_env):
        auth_service = await unit_env.get(AuthService)
        await auth_service.resolve_federated_user(ADA)
        token = await auth_service.request_password_reset("ada@example.com")

        user = await auth_service.reset_password(token, "N3w$password")

        assert user.auth_provider == AuthProvider.BOTH
        assert (await auth_service.login("ada@example.com", "N3w$password")).id == user.id
