"""In-memory user repository for testing."""

from typing import Any, Optional, Sequence

from topten.domain.error import ConstraintViolationError, NotFoundError
from topten.domain.model.common import utc_now
from topten.domain.model.user import User
from topten.domain.repository.user import UserRepository
from topten.domain.value import UserId

from .database import InMemoryDatabase

# Unique columns and the constraint names the Postgres schema uses
_UNIQUE_COLUMNS = {
    "email": "uq_users_email",
    "username": "uq_users_username",
    "federated_id": "uq_users_federated_id",
    "reset_token": "uq_users_reset_token",
}


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, db: Optional[InMemoryDatabase] = None) -> None:
        self.db = db or InMemoryDatabase()

    def _find(self, field: str, value: Any) -> Optional[User]:
        for user in self.db.users.values():
            if getattr(user, field) == value:
                return user
        return None

    def _check_unique(self, user: User) -> None:
        for field, constraint in _UNIQUE_COLUMNS.items():
            value = getattr(user, field)
            if value is None:
                continue
            other = self._find(field, value)
            if other is not None and other.id != user.id:
                raise ConstraintViolationError(constraint)

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        await self.db.checkpoint()
        return self.db.users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Batch lookup of users."""
        await self.db.checkpoint()
        return [self.db.users[uid] for uid in user_ids if uid in self.db.users]

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by email."""
        await self.db.checkpoint()
        return self._find("email", email)

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by username."""
        await self.db.checkpoint()
        return self._find("username", username)

    async def find_by_federated_id(self, federated_id: str) -> Optional[User]:
        """Find a user by federated subject id."""
        await self.db.checkpoint()
        return self._find("federated_id", federated_id)

    async def find_by_reset_token(self, reset_token: str) -> Optional[User]:
        """Find a user holding a reset token."""
        await self.db.checkpoint()
        return self._find("reset_token", reset_token)

    async def create(self, user: User) -> User:
        """Insert a user.

        Raises:
            ConstraintViolationError: On a duplicate id or unique column
        """
        await self.db.checkpoint()
        if user.id in self.db.users:
            raise ConstraintViolationError("users_pkey")
        self._check_unique(user)
        self.db.users[user.id] = user
        return user

    async def update(self, user_id: UserId, **fields: Any) -> User:
        """Update some fields, re-validating the resulting user."""
        await self.db.checkpoint()
        current = self.db.users.get(user_id)
        if current is None:
            raise NotFoundError("User", str(user_id))
        data = current.model_dump()
        data.update(fields)
        data["updated_at"] = utc_now()
        updated = User.model_validate(data)
        self._check_unique(updated)
        self.db.users[user_id] = updated
        return updated
