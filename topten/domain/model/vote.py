"""Vote entity.

A vote is a user's pick of the best list within one category.
"""

from datetime import datetime

from pydantic import Field

from topten.domain.model.common import DomainModel, utc_now
from topten.domain.value import CategoryId, ListId, UserId, VoteId


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - At most one vote per user per category (unique on user_id, category_id)
    - category_id is always the voted list's category
    """

    id: VoteId
    user_id: UserId
    list_id: ListId
    category_id: CategoryId
    created_at: datetime = Field(default_factory=utc_now)
