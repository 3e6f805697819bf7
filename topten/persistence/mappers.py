"""Mappers between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
rather than through SQLAlchemy's ORM.
"""

from typing import Any, Dict, Iterable
from uuid import UUID

from topten.domain.model import Category, ListItem, TopTenList, User, Vote
from topten.domain.value import (
    AuthProvider,
    CategoryId,
    ListId,
    ListItemId,
    Slug,
    UserId,
    VoteId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        username=row["username"],
        password_hash=row.get("password_hash"),
        federated_id=row.get("federated_id"),
        auth_provider=AuthProvider(row["auth_provider"]),
        reset_token=row.get("reset_token"),
        reset_token_expiry=row.get("reset_token_expiry"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump()
    data["auth_provider"] = user.auth_provider.value
    return data


def row_to_category(row: Dict[str, Any]) -> Category:
    """Convert database row to Category domain model."""
    return Category(
        id=CategoryId(_uuid(row["id"])),
        name=row["name"],
        slug=row["slug"],
        description=row.get("description"),
        icon=row.get("icon"),
        created_at=row["created_at"],
    )


def row_to_list_item(row: Dict[str, Any]) -> ListItem:
    """Convert database row to ListItem domain model."""
    return ListItem(
        id=ListItemId(_uuid(row["id"])),
        rank=row["rank"],
        title=row["title"],
        description=row.get("description"),
        image_url=row.get("image_url"),
    )


def row_to_list(
    row: Dict[str, Any], item_rows: Iterable[Dict[str, Any]] = ()
) -> TopTenList:
    """Convert a list row plus its item rows to a TopTenList.

    Args:
        row: top_ten_lists row
        item_rows: list_items rows for this list, in any order

    Returns:
        TopTenList with items sorted by rank
    """
    items = sorted((row_to_list_item(r) for r in item_rows), key=lambda i: i.rank)
    return TopTenList(
        id=ListId(_uuid(row["id"])),
        slug=Slug(row["slug"]),
        title=row["title"],
        description=row.get("description"),
        user_id=UserId(_uuid(row["user_id"])),
        category_id=CategoryId(_uuid(row["category_id"])),
        is_public=row["is_public"],
        items=items,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def list_to_dict(top_ten_list: TopTenList) -> Dict[str, Any]:
    """Convert TopTenList to a top_ten_lists row (items excluded)."""
    return {
        "id": top_ten_list.id,
        "slug": top_ten_list.slug.root,
        "title": top_ten_list.title,
        "description": top_ten_list.description,
        "user_id": top_ten_list.user_id,
        "category_id": top_ten_list.category_id,
        "is_public": top_ten_list.is_public,
        "created_at": top_ten_list.created_at,
        "updated_at": top_ten_list.updated_at,
    }


def list_items_to_dicts(top_ten_list: TopTenList) -> list[Dict[str, Any]]:
    """Convert a list's items to list_items rows."""
    return [
        {
            "id": item.id,
            "list_id": top_ten_list.id,
            "rank": item.rank,
            "title": item.title,
            "description": item.description,
            "image_url": item.image_url,
        }
        for item in top_ten_list.items
    ]


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        list_id=ListId(_uuid(row["list_id"])),
        category_id=CategoryId(_uuid(row["category_id"])),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return vote.model_dump()
