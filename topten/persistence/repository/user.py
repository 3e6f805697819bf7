"""PostgreSQL implementation of User repository."""

from typing import Any, Optional, Sequence

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from topten.domain.error import ConstraintViolationError, NotFoundError
from topten.domain.model import User
from topten.domain.model.common import utc_now
from topten.domain.repository import UserRepository
from topten.domain.value import AuthProvider, UserId
from topten.persistence.database import constraint_name
from topten.persistence.mappers import row_to_user, user_to_dict
from topten.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _find_one(self, *conditions: Any) -> Optional[User]:
        stmt = select(users_table).where(*conditions)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return await self._find_one(users_table.c.id == user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Batch lookup of users."""
        if not user_ids:
            return []
        stmt = select(users_table).where(users_table.c.id.in_(list(user_ids)))
        result = await self.session.execute(stmt)
        return [row_to_user(dict(row)) for row in result.mappings().all()]

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by lowercase email."""
        return await self._find_one(users_table.c.email == email)

    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by lowercase username."""
        return await self._find_one(users_table.c.username == username)

    async def find_by_federated_id(self, federated_id: str) -> Optional[User]:
        """Find a user by federated subject id."""
        return await self._find_one(users_table.c.federated_id == federated_id)

    async def find_by_reset_token(self, reset_token: str) -> Optional[User]:
        """Find a user holding a reset token."""
        return await self._find_one(users_table.c.reset_token == reset_token)

    async def create(self, user: User) -> User:
        """Insert a user inside a savepoint so a collision leaves the
        request transaction usable."""
        stmt = insert(users_table).values(**user_to_dict(user))
        try:
            async with self.session.begin_nested():
                await self.session.execute(stmt)
        except IntegrityError as e:
            raise ConstraintViolationError(constraint_name(e)) from e
        return user

    async def update(self, user_id: UserId, **fields: Any) -> User:
        """Update some columns and return the fresh row."""
        values = {
            key: value.value if isinstance(value, AuthProvider) else value
            for key, value in fields.items()
        }
        values["updated_at"] = utc_now()
        stmt = (
            update(users_table)
            .where(users_table.c.id == user_id)
            .values(**values)
            .returning(*users_table.c)
        )
        try:
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                row = result.mappings().first()
        except IntegrityError as e:
            raise ConstraintViolationError(constraint_name(e)) from e
        if not row:
            raise NotFoundError("User", str(user_id))
        return row_to_user(dict(row))
