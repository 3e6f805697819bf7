"""In-memory repository implementations for testing."""

from .category import InMemoryCategoryRepository
from .database import InMemoryDatabase
from .top_ten_list import InMemoryTopTenListRepository
from .user import InMemoryUserRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryDatabase",
    "InMemoryCategoryRepository",
    "InMemoryTopTenListRepository",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
