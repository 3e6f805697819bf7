"""Strongly typed identifiers for Top Ten domain entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
CategoryId = NewType("CategoryId", UUID)
ListId = NewType("ListId", UUID)
ListItemId = NewType("ListItemId", UUID)
VoteId = NewType("VoteId", UUID)
