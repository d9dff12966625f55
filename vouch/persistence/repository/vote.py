"""PostgreSQL implementation of Vote repository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from vouch.domain.model import Vote
from vouch.domain.repository import VoteRepository
from vouch.domain.value import Identity, VotableType, VoteId
from vouch.persistence.mappers import row_to_vote, vote_to_dict
from vouch.persistence.tables import votes_table


def _on_item(item_type: VotableType, item_id: UUID):
    return select(votes_table).where(
        votes_table.c.item_type == item_type.value,
        votes_table.c.item_id == item_id,
    )


class PostgresVoteRepository(VoteRepository):
    """Votes stored in the ``votes`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_voter_and_item(
        self, voter: Identity, item_type: VotableType, item_id: UUID
    ) -> Optional[Vote]:
        stmt = _on_item(item_type, item_id).where(votes_table.c.voter == voter)
        row = (await self.session.execute(stmt)).mappings().first()
        return row_to_vote(dict(row)) if row else None

    async def find_by_item(self, item_type: VotableType, item_id: UUID) -> List[Vote]:
        result = await self.session.execute(_on_item(item_type, item_id))
        return [row_to_vote(dict(row)) for row in result.mappings()]

    async def save(self, vote: Vote) -> Vote:
        # Savepoint keeps the outer transaction usable after a conflict
        async with self.session.begin_nested():
            await self.session.execute(insert(votes_table).values(**vote_to_dict(vote)))
        return vote

    async def delete(self, vote_id: VoteId) -> None:
        await self.session.execute(delete(votes_table).where(votes_table.c.id == vote_id))
