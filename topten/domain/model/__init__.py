"""Domain model entities for Top Ten."""

from topten.domain.model.category import Category
from topten.domain.model.session import SessionData
from topten.domain.model.top_ten_list import MAX_LIST_ITEMS, ListItem, TopTenList
from topten.domain.model.user import User
from topten.domain.model.vote import Vote

__all__ = [
    "User",
    "Category",
    "TopTenList",
    "ListItem",
    "MAX_LIST_ITEMS",
    "Vote",
    "SessionData",
]
