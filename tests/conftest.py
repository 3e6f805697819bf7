"""Test configuration and fixtures."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from topten.domain.model import ListItem, TopTenList, User
from topten.domain.value import AuthProvider, CategoryId, ListId, ListItemId, Slug, UserId
from topten.persistence.seed import category_id_for

# Spans and logs stay local during tests
logfire.configure(send_to_logfire=False, console=False)

STRONG_PASSWORD = "Sup3r$ecret"

# Throwaway bcrypt hash; tests that need a real one sign up instead
FAKE_PASSWORD_HASH = "$2b$12$" + "a" * 53

MOVIES = CategoryId(category_id_for("movies"))
BOOKS = CategoryId(category_id_for("books"))


def make_user(
    username: str = "alice",
    email: str | None = None,
    federated_id: str | None = None,
    password_hash: str | None = FAKE_PASSWORD_HASH,
) -> User:
    """Build a user with consistent credentials."""
    return User(
        id=UserId(uuid4()),
        email=email or f"{username}@example.com",
        username=username,
        password_hash=password_hash,
        federated_id=federated_id,
        auth_provider=AuthProvider.for_credentials(
            has_password=password_hash is not None,
            has_federated_id=federated_id is not None,
        ),
    )


def make_list(
    owner_id: UserId,
    title: str = "Best Films",
    category_id: CategoryId = MOVIES,
    is_public: bool = True,
    item_titles: tuple[str, ...] = ("Alien", "Heat", "Ran"),
    created_at: datetime | None = None,
) -> TopTenList:
    """Build a list whose items are ranked in the given order."""
    list_id = ListId(uuid4())
    stamp = created_at or datetime.now(timezone.utc)
    return TopTenList(
        id=list_id,
        slug=Slug(f"list-{str(list_id)[:8]}"),
        title=title,
        user_id=owner_id,
        category_id=category_id,
        is_public=is_public,
        items=[
            ListItem(id=ListItemId(uuid4()), rank=rank, title=item_title)
            for rank, item_title in enumerate(item_titles, start=1)
        ],
        created_at=stamp,
        updated_at=stamp,
    )
