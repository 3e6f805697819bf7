"""Authentication domain service.

Password signup/login, federated login with account linking, and password
reset. Session cookies are handled by the caller; this service only decides
which user (if any) a request authenticates as.
"""

import asyncio
import re
from datetime import timedelta
from uuid import uuid4

import logfire

from topten.config import AuthSettings
from topten.domain.error import (
    ConstraintViolationError,
    DuplicateEmailError,
    DuplicateUsernameError,
    FederatedOnlyAccountError,
    InvalidCredentialsError,
    StorageFailureError,
    ValidationError,
)
from topten.domain.model import User
from topten.domain.model.common import utc_now
from topten.domain.repository import UserRepository
from topten.domain.value import AuthProvider, FederatedIdentity, UserId
from topten.util.password import (
    generate_reset_token,
    hash_password,
    validate_password,
    verify_password,
)
from topten.util.slug import (
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    generate_unique_username,
    generate_username_from_google,
    is_canonical_username,
    slugify,
)

from .base import Service

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
EMAIL_MAX_LENGTH = 255

# Regenerations of a colliding federated username before falling back
MAX_USERNAME_ATTEMPTS = 10

# Passes over the federated resolution strategies when a concurrent request
# wins a unique constraint race
MAX_RESOLVE_ATTEMPTS = 3

FALLBACK_USERNAME_BASE = "user"


class FederatedIdentityClient:
    """Interface to the federated identity provider."""

    async def initiate_authorization(self, state: str) -> str:
        """Build the provider authorization URL.

        Args:
            state: Opaque CSRF state echoed back on the callback

        Returns:
            Authorization URL to redirect the user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str) -> FederatedIdentity:
        """Exchange an authorization code for a verified identity.

        Args:
            code: Authorization code from the callback

        Returns:
            Verified identity assertion
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for authentication operations."""

    def __init__(
        self,
        user_repository: UserRepository,
        identity_client: FederatedIdentityClient,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize auth service.

        Args:
            user_repository: User repository
            identity_client: Federated identity provider client
            auth_settings: Authentication settings
        """
        self.user_repository = user_repository
        self.identity_client = identity_client
        self.auth_settings = auth_settings

    async def signup(self, email: str, username: str, password: str) -> User:
        """Register a password account.

        Args:
            email: Email address (any case)
            username: Requested username (any case, must be slug-shaped)
            password: Plaintext password

        Returns:
            The created user

        Raises:
            ValidationError: If any field is missing or malformed
            DuplicateEmailError: If the email is registered
            DuplicateUsernameError: If the username is taken
        """
        with logfire.span("auth_service.signup", username=username):
            if not email or not username or not password:
                raise ValidationError("Email, username, and password are required")
            if len(email) > EMAIL_MAX_LENGTH or not EMAIL_RE.fullmatch(email):
                raise ValidationError("Invalid email format")
            if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
                raise ValidationError("Username must be between 3 and 30 characters")
            if slugify(username) != username.lower():
                raise ValidationError(
                    "Username can only contain letters, numbers, and hyphens"
                )
            check = validate_password(password)
            if not check.valid:
                raise ValidationError(check.reason or "Invalid password")

            email = email.lower()
            username = username.lower()

            if await self.user_repository.find_by_email(email):
                logfire.info("Signup rejected: email registered")
                raise DuplicateEmailError()
            if await self.user_repository.find_by_username(username):
                logfire.info("Signup rejected: username taken", username=username)
                raise DuplicateUsernameError()

            # bcrypt is CPU-bound; keep it off the event loop
            password_hash = await asyncio.to_thread(hash_password, password)

            user = User(
                id=UserId(uuid4()),
                email=email,
                username=username,
                password_hash=password_hash,
                auth_provider=AuthProvider.LOCAL,
            )
            try:
                created = await self.user_repository.create(user)
            except ConstraintViolationError as e:
                # Lost a race with a concurrent signup
                logfire.warn("Signup constraint violation", constraint=e.constraint)
                raise self._duplicate_error(e) from e

            logfire.info("User signed up", user_id=str(created.id), username=username)
            return created

    async def login(self, email: str, password: str) -> User:
        """Authenticate with email and password.

        Raises:
            ValidationError: If a field is missing
            InvalidCredentialsError: Unknown email or wrong password
            FederatedOnlyAccountError: The account has no password
        """
        with logfire.span("auth_service.login"):
            if not email or not password:
                raise ValidationError("Email and password are required")

            user = await self.user_repository.find_by_email(email.lower())
            if not user:
                logfire.info("Login failed: unknown email")
                raise InvalidCredentialsError()
            if not user.has_password:
                logfire.info("Login refused: federated-only account", user_id=str(user.id))
                raise FederatedOnlyAccountError()

            matches = await asyncio.to_thread(
                verify_password, password, user.password_hash
            )
            if not matches:
                logfire.info("Login failed: wrong password", user_id=str(user.id))
                raise InvalidCredentialsError()

            logfire.info("User logged in", user_id=str(user.id))
            return user

    async def initiate_federated_login(self, state: str) -> str:
        """Authorization URL for the federated identity provider."""
        with logfire.span("auth_service.initiate_federated_login"):
            return await self.identity_client.initiate_authorization(state)

    async def complete_federated_login(self, code: str) -> User:
        """Exchange the callback code and resolve the matching user."""
        with logfire.span("auth_service.complete_federated_login"):
            identity = await self.identity_client.complete_authorization(code)
            return await self.resolve_federated_user(identity)

    async def resolve_federated_user(self, identity: FederatedIdentity) -> User:
        """Find, link or create the user for a verified federated identity.

        Strategies, in order:
        1. A user already holding this federated id
        2. A user with the same email: link the federated id to it
        3. A new federated-only user with a derived username

        A unique constraint violation means a concurrent request created or
        linked the same account; the strategies are re-run against the new
        state.

        Args:
            identity: Verified identity assertion

        Returns:
            The resolved user

        Raises:
            ValidationError: If the assertion lacks a subject or email
            StorageFailureError: If resolution keeps colliding
        """
        with logfire.span(
            "auth_service.resolve_federated_user", subject_id=identity.subject_id
        ):
            if not identity.subject_id or not identity.email:
                raise ValidationError("Identity provider did not return an email")

            email = identity.email.lower()

            for attempt in range(1, MAX_RESOLVE_ATTEMPTS + 1):
                try:
                    user = await self.user_repository.find_by_federated_id(
                        identity.subject_id
                    )
                    if user:
                        logfire.info("Federated login", user_id=str(user.id))
                        return user

                    user = await self.user_repository.find_by_email(email)
                    if user:
                        return await self._link_federated_id(user, identity.subject_id)

                    return await self._create_federated_user(identity, email)
                except ConstraintViolationError as e:
                    logfire.warn(
                        "Federated login collided, retrying",
                        constraint=e.constraint,
                        attempt=attempt,
                    )

            logfire.error(
                "Federated login could not settle", subject_id=identity.subject_id
            )
            raise StorageFailureError("federated resolution exhausted retries")

    async def request_password_reset(self, email: str) -> str | None:
        """Issue a password reset token if the account exists.

        Callers must respond identically whether or not a token was issued.

        Returns:
            The new token, or None if no account has this email

        Raises:
            ValidationError: If the email is missing
        """
        with logfire.span("auth_service.request_password_reset"):
            if not email:
                raise ValidationError("Email is required")

            user = await self.user_repository.find_by_email(email.lower())
            if not user:
                logfire.info("Password reset requested for unknown email")
                return None

            token = generate_reset_token()
            expiry = utc_now() + timedelta(
                minutes=self.auth_settings.password_reset_expiry_minutes
            )
            await self.user_repository.update(
                user.id, reset_token=token, reset_token_expiry=expiry
            )
            logfire.info("Password reset token issued", user_id=str(user.id))
            return token

    async def reset_password(self, token: str, new_password: str) -> User:
        """Set a new password using a reset token.

        The token is single use. A federated-only account gains a password
        and becomes usable with both methods.

        Raises:
            ValidationError: Missing fields, weak password, or a bad/expired token
        """
        with logfire.span("auth_service.reset_password"):
            if not token or not new_password:
                raise ValidationError("Token and new password are required")
            check = validate_password(new_password)
            if not check.valid:
                raise ValidationError(check.reason or "Invalid password")

            user = await self.user_repository.find_by_reset_token(token)
            if (
                not user
                or user.reset_token_expiry is None
                or user.reset_token_expiry <= utc_now()
            ):
                logfire.info("Password reset with invalid or expired token")
                raise ValidationError("Invalid or expired reset token")

            password_hash = await asyncio.to_thread(hash_password, new_password)
            updated = await self.user_repository.update(
                user.id,
                password_hash=password_hash,
                auth_provider=AuthProvider.for_credentials(
                    has_password=True, has_federated_id=user.federated_id is not None
                ),
                reset_token=None,
                reset_token_expiry=None,
            )
            logfire.info("Password reset completed", user_id=str(user.id))
            return updated

    async def _link_federated_id(self, user: User, subject_id: str) -> User:
        """Attach a federated id to an existing account (idempotent)."""
        if user.federated_id == subject_id:
            return user
        if user.federated_id is not None:
            logfire.warn(
                "Replacing federated id on email match", user_id=str(user.id)
            )
        linked = await self.user_repository.update(
            user.id,
            federated_id=subject_id,
            auth_provider=AuthProvider.for_credentials(
                has_password=user.has_password, has_federated_id=True
            ),
        )
        logfire.info(
            "Federated identity linked",
            user_id=str(user.id),
            auth_provider=linked.auth_provider.value,
        )
        return linked

    async def _create_federated_user(
        self, identity: FederatedIdentity, email: str
    ) -> User:
        username = await self._pick_federated_username(identity, email)
        user = User(
            id=UserId(uuid4()),
            email=email,
            username=username,
            password_hash=None,
            federated_id=identity.subject_id,
            auth_provider=AuthProvider.FEDERATED,
        )
        created = await self.user_repository.create(user)
        logfire.info(
            "Federated user created", user_id=str(created.id), username=username
        )
        return created

    async def _pick_federated_username(
        self, identity: FederatedIdentity, email: str
    ) -> str:
        """Derive a free username; always terminates."""
        base = generate_username_from_google(identity.display_name, email)
        candidate = base
        attempts = 0
        while await self.user_repository.find_by_username(candidate):
            attempts += 1
            if attempts > MAX_USERNAME_ATTEMPTS:
                # The unique constraint catches the unlikely collision here
                candidate = generate_unique_username(FALLBACK_USERNAME_BASE)
                break
            candidate = generate_unique_username(base)

        if not is_canonical_username(candidate):
            candidate = generate_unique_username(FALLBACK_USERNAME_BASE)
        return candidate

    @staticmethod
    def _duplicate_error(error: ConstraintViolationError) -> Exception:
        constraint = error.constraint or ""
        if "email" in constraint:
            return DuplicateEmailError()
        if "username" in constraint:
            return DuplicateUsernameError()
        return StorageFailureError(str(error))
