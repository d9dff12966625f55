"""In-memory friendship repository for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from vouch.domain.model.friendship import Friendship, pair_key
from vouch.domain.repository.friendship import FriendshipRepository
from vouch.domain.value import FriendshipId, FriendshipStatus, Identity


class InMemoryFriendshipRepository(FriendshipRepository):
    """In-memory implementation of FriendshipRepository for testing.

    Mirrors the unique pair_key constraint of the friendships table.
    """

    def __init__(self) -> None:
        self._friendships: dict[FriendshipId, Friendship] = {}

    async def find_by_id(self, friendship_id: FriendshipId) -> Optional[Friendship]:
        """Find a friendship by ID."""
        return self._friendships.get(friendship_id)

    async def find_by_pair(
        self, first: Identity, second: Identity
    ) -> Optional[Friendship]:
        """Find the friendship between two identities in either direction."""
        key = pair_key(first, second)
        for friendship in self._friendships.values():
            if friendship.pair_key == key:
                return friendship
        return None

    async def find_accepted(self, identity: Identity) -> list[Friendship]:
        """Find accepted friendships involving an identity, oldest first."""
        friendships = [
            f
            for f in self._friendships.values()
            if f.status == FriendshipStatus.ACCEPTED and f.involves(identity)
        ]
        friendships.sort(key=lambda f: f.created_at)
        return friendships

    async def find_pending_for_target(self, target: Identity) -> list[Friendship]:
        """Find pending friend requests addressed to an identity."""
        friendships = [
            f
            for f in self._friendships.values()
            if f.status == FriendshipStatus.PENDING and f.target == target
        ]
        friendships.sort(key=lambda f: f.created_at)
        return friendships

    async def save(self, friendship: Friendship) -> Friendship:
        """Save a new friendship.

        Raises:
            IntegrityError: If a friendship already exists for the pair
        """
        if await self.find_by_pair(friendship.requester, friendship.target):
            raise IntegrityError("Duplicate friendship", None, Exception())

        self._friendships[friendship.id] = friendship
        return friendship

    async def update(self, friendship: Friendship) -> Friendship:
        """Persist a status change on an existing friendship."""
        self._friendships[friendship.id] = friendship
        return friendship

    async def delete(self, friendship_id: FriendshipId) -> None:
        """Delete a friendship."""
        self._friendships.pop(friendship_id, None)
