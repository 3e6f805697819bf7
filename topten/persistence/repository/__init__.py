"""PostgreSQL repository implementations."""

from topten.persistence.repository.category import PostgresCategoryRepository
from topten.persistence.repository.top_ten_list import PostgresTopTenListRepository
from topten.persistence.repository.user import PostgresUserRepository
from topten.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresCategoryRepository",
    "PostgresTopTenListRepository",
    "PostgresVoteRepository",
]
