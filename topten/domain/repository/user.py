"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from topten.domain.model.user import User
from topten.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Email and username lookups expect lowercase input; stored values are
    canonical lowercase.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Batch lookup of users (missing ids are skipped)."""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by lowercase email."""
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by lowercase username."""
        pass

    @abstractmethod
    async def find_by_federated_id(self, federated_id: str) -> Optional[User]:
        """Find a user by federated identity provider subject id."""
        pass

    @abstractmethod
    async def find_by_reset_token(self, reset_token: str) -> Optional[User]:
        """Find a user holding a password reset token."""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: The user to insert

        Returns:
            The stored user

        Raises:
            ConstraintViolationError: If email, username or federated id is taken
        """
        pass

    @abstractmethod
    async def update(self, user_id: UserId, **fields: Any) -> User:
        """Update some fields of a user.

        ``updated_at`` is refreshed automatically.

        Args:
            user_id: The user to update
            **fields: Column values to set

        Returns:
            The updated user

        Raises:
            NotFoundError: If the user does not exist
            ConstraintViolationError: If the update collides with another user
        """
        pass
