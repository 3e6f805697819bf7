"""Domain value objects for Top Ten."""

from topten.domain.value.identifiers import (
    CategoryId,
    ListId,
    ListItemId,
    UserId,
    VoteId,
)
from topten.domain.value.types import (
    AuthProvider,
    FederatedIdentity,
    Slug,
    VoteOutcome,
)

__all__ = [
    # Identifiers
    "UserId",
    "CategoryId",
    "ListId",
    "ListItemId",
    "VoteId",
    # Types
    "AuthProvider",
    "FederatedIdentity",
    "Slug",
    "VoteOutcome",
]
