"""PostgreSQL implementation of Friendship repository."""

from typing import List, Optional

from sqlalchemy import and_, delete, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vouch.domain.model import Friendship
from vouch.domain.model.friendship import pair_key
from vouch.domain.repository import FriendshipRepository
from vouch.domain.value import FriendshipId, FriendshipStatus, Identity
from vouch.persistence.mappers import friendship_to_dict, row_to_friendship
from vouch.persistence.tables import friendships_table


class PostgresFriendshipRepository(FriendshipRepository):
    """PostgreSQL implementation of FriendshipRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, friendship_id: FriendshipId) -> Optional[Friendship]:
        """Find a friendship by ID."""
        stmt = select(friendships_table).where(friendships_table.c.id == friendship_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_friendship(row._asdict()) if row else None

    async def find_by_pair(
        self, first: Identity, second: Identity
    ) -> Optional[Friendship]:
        """Find the friendship between two identities in either direction."""
        stmt = select(friendships_table).where(
            friendships_table.c.pair_key == pair_key(first, second)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_friendship(row._asdict()) if row else None

    async def find_accepted(self, identity: Identity) -> List[Friendship]:
        """Find accepted friendships involving an identity."""
        stmt = (
            select(friendships_table)
            .where(
                and_(
                    friendships_table.c.status == FriendshipStatus.ACCEPTED.value,
                    or_(
                        friendships_table.c.requester == identity,
                        friendships_table.c.target == identity,
                    ),
                )
            )
            .order_by(friendships_table.c.created_at)
        )
        # Savepoint: a failed read must not abort the rest of the transaction
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        return [row_to_friendship(row._asdict()) for row in rows]

    async def find_pending_for_target(self, target: Identity) -> List[Friendship]:
        """Find pending friend requests addressed to an identity."""
        stmt = (
            select(friendships_table)
            .where(
                and_(
                    friendships_table.c.status == FriendshipStatus.PENDING.value,
                    friendships_table.c.target == target,
                )
            )
            .order_by(friendships_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_friendship(row._asdict()) for row in result.fetchall()]

    async def save(self, friendship: Friendship) -> Friendship:
        """Save a new friendship.

        The unique pair_key column rejects a second friendship for the pair.
        """
        # Savepoint keeps the outer transaction usable after a conflict
        async with self.session.begin_nested():
            stmt = insert(friendships_table).values(**friendship_to_dict(friendship))
            await self.session.execute(stmt)
        return friendship

    async def update(self, friendship: Friendship) -> Friendship:
        """Persist a status change on an existing friendship."""
        stmt = (
            update(friendships_table)
            .where(friendships_table.c.id == friendship.id)
            .values(
                status=friendship.status.value,
                accepted_at=friendship.accepted_at,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return friendship

    async def delete(self, friendship_id: FriendshipId) -> None:
        """Delete a friendship."""
        stmt = delete(friendships_table).where(friendships_table.c.id == friendship_id)
        await self.session.execute(stmt)
        await self.session.flush()
