"""User aggregate root.

Users sign in with a password, a federated identity, or both.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from topten.domain.model.common import DomainModel, utc_now
from topten.domain.value import AuthProvider, UserId


class User(DomainModel):
    """User aggregate root.

    Business rules:
    - email and username are stored lowercase and are unique
    - at least one of password_hash / federated_id is present
    - auth_provider reflects exactly which of them are present
    """

    id: UserId
    email: str = Field(min_length=3, max_length=255)
    username: str = Field(min_length=3, max_length=30, pattern=r"^[a-z0-9-]+$")
    password_hash: Optional[str] = None
    federated_id: Optional[str] = None
    auth_provider: AuthProvider = AuthProvider.LOCAL
    reset_token: Optional[str] = None
    reset_token_expiry: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def check_credentials(self) -> "User":
        """Ensure auth_provider matches the credentials present."""
        if self.password_hash is None and self.federated_id is None:
            raise ValueError("User must have a password or a federated identity")
        expected = AuthProvider.for_credentials(
            has_password=self.password_hash is not None,
            has_federated_id=self.federated_id is not None,
        )
        if self.auth_provider != expected:
            raise ValueError(
                f"auth_provider must be {expected.value} for the credentials present"
            )
        return self

    @property
    def has_password(self) -> bool:
        return self.password_hash is not None
