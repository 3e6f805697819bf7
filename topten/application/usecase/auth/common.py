"""Shared auth response models."""

from datetime import datetime

from pydantic import BaseModel

from topten.domain.model import User
from topten.domain.value import AuthProvider


class UserInfo(BaseModel):
    """Public projection of a user."""

    id: str
    email: str
    username: str
    auth_provider: AuthProvider
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email,
            username=user.username,
            auth_provider=user.auth_provider,
            created_at=user.created_at,
        )
