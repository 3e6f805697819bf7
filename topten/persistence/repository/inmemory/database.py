"""Shared state for the in-memory repositories.

One InMemoryDatabase plays the role of the relational store: repositories
built on the same instance see each other's writes, and it enforces the
same unique constraints (under the same names) as the Postgres schema.
"""

import asyncio
from typing import Optional

from topten.domain.model import Category, TopTenList, User, Vote
from topten.domain.value import CategoryId, ListId, UserId, VoteId
from topten.persistence.seed import default_categories


class InMemoryDatabase:
    """Dict-backed store.

    Every repository call awaits ``checkpoint()`` once before touching the
    dicts, so concurrent tasks interleave between calls exactly where they
    could against a real database; the mutation that follows runs without
    suspending and is therefore atomic.
    """

    def __init__(self, categories: Optional[list[Category]] = None) -> None:
        seed = default_categories() if categories is None else categories
        self.users: dict[UserId, User] = {}
        self.categories: dict[CategoryId, Category] = {c.id: c for c in seed}
        self.lists: dict[ListId, TopTenList] = {}
        self.votes: dict[VoteId, Vote] = {}

    async def checkpoint(self) -> None:
        """Yield to the event loop, like a round trip to the store would."""
        await asyncio.sleep(0)

    def vote_count(self, list_id: ListId) -> int:
        return sum(1 for vote in self.votes.values() if vote.list_id == list_id)

    def delete_votes_for_list(self, list_id: ListId) -> None:
        for vote_id in [v.id for v in self.votes.values() if v.list_id == list_id]:
            del self.votes[vote_id]
