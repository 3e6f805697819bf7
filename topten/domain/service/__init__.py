"""Domain services for Top Ten."""

from .auth_service import AuthService, FederatedIdentityClient
from .base import Service
from .category_service import CategoryService
from .list_service import ListItemDraft, ListService
from .user_service import UserService
from .vote_service import CastVoteResult, VoteService

__all__ = [
    "Service",
    "AuthService",
    "FederatedIdentityClient",
    "CategoryService",
    "ListService",
    "ListItemDraft",
    "UserService",
    "VoteService",
    "CastVoteResult",
]
