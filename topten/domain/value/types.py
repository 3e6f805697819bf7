"""Domain value objects for Top Ten."""

import re
from enum import Enum

from pydantic import field_validator

from topten.domain.value.common import RootValueObject, ValueObject


class AuthProvider(str, Enum):
    """Which credentials a user can sign in with."""

    LOCAL = "local"
    FEDERATED = "federated"
    BOTH = "both"

    @classmethod
    def for_credentials(cls, has_password: bool, has_federated_id: bool) -> "AuthProvider":
        """Provider value implied by the credentials present."""
        if has_password and has_federated_id:
            return cls.BOTH
        if has_federated_id:
            return cls.FEDERATED
        return cls.LOCAL


class VoteOutcome(str, Enum):
    """Result of a successful cast vote."""

    CREATED = "created"
    SWITCHED = "switched"


class Slug(RootValueObject[str]):
    """URL-friendly list identifier.

    Lowercase alphanumeric words joined by single hyphens.
    Example: 'best-movies-of-2024-k3x9z1'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not v or len(v) > 220:
            raise ValueError("Slug must be 1-220 characters")
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with single hyphens between words"
            )
        return v


class FederatedIdentity(ValueObject):
    """Verified assertion from the federated identity provider.

    Only produced after the provider's signature and audience checks pass.
    """

    subject_id: str
    email: str
    display_name: str | None = None
    picture_url: str | None = None
