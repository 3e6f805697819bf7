"""Category entity.

Categories are seeded reference data; every list belongs to exactly one.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from topten.domain.model.common import DomainModel, utc_now
from topten.domain.value import CategoryId


class Category(DomainModel):
    """Category entity."""

    id: CategoryId
    name: str = Field(min_length=1, max_length=100)
    slug: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    icon: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
