"""Top ten list aggregate.

A list owns its ranked items; items never exist outside a list.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from topten.domain.model.common import DomainModel, utc_now
from topten.domain.value import CategoryId, ListId, ListItemId, Slug, UserId

MAX_LIST_ITEMS = 10


class ListItem(DomainModel):
    """Ranked entry in a list."""

    id: ListItemId
    rank: int = Field(ge=1, le=MAX_LIST_ITEMS)
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    image_url: Optional[str] = None


class TopTenList(DomainModel):
    """Top ten list aggregate root.

    Business rules:
    - 1 to 10 items, ranked 1..n in order
    - slug is unique across lists
    - private lists are visible to their owner only
    """

    id: ListId
    slug: Slug
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    user_id: UserId
    category_id: CategoryId
    is_public: bool = True
    items: list[ListItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("items")
    @classmethod
    def validate_items(cls, items: list[ListItem]) -> list[ListItem]:
        """Items must be ranked contiguously from 1."""
        if len(items) > MAX_LIST_ITEMS:
            raise ValueError(f"Maximum {MAX_LIST_ITEMS} items allowed per list")
        ranks = [item.rank for item in items]
        if ranks != list(range(1, len(items) + 1)):
            raise ValueError("Item ranks must run from 1 in order")
        return items

    def is_visible_to(self, viewer_id: Optional[UserId]) -> bool:
        """Whether a viewer (None for anonymous) may see this list."""
        return self.is_public or (viewer_id is not None and viewer_id == self.user_id)
