"""Repository interfaces for the domain layer."""

from topten.domain.repository.category import CategoryRepository
from topten.domain.repository.top_ten_list import ListQuery, TopTenListRepository
from topten.domain.repository.user import UserRepository
from topten.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "CategoryRepository",
    "TopTenListRepository",
    "ListQuery",
    "VoteRepository",
]
