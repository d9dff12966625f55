"""Friendship repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from vouch.domain.model.friendship import Friendship
from vouch.domain.value import FriendshipId, Identity


class FriendshipRepository(ABC):
    """Repository for Friendship entity.

    At most one friendship exists per unordered identity pair; the
    implementation enforces this at write time.
    """

    @abstractmethod
    async def find_by_id(self, friendship_id: FriendshipId) -> Optional[Friendship]:
        """Find a friendship by ID."""
        pass

    @abstractmethod
    async def find_by_pair(self, first: Identity, second: Identity) -> Optional[Friendship]:
        """Find the friendship between two identities in either direction."""
        pass

    @abstractmethod
    async def find_accepted(self, identity: Identity) -> List[Friendship]:
        """Find accepted friendships involving an identity.

        Args:
            identity: Either side of the friendship

        Returns:
            Accepted friendships, oldest first
        """
        pass

    @abstractmethod
    async def find_pending_for_target(self, target: Identity) -> List[Friendship]:
        """Find pending friend requests addressed to an identity."""
        pass

    @abstractmethod
    async def save(self, friendship: Friendship) -> Friendship:
        """Save a new friendship.

        Raises:
            IntegrityError: If a friendship already exists for the pair
        """
        pass

    @abstractmethod
    async def update(self, friendship: Friendship) -> Friendship:
        """Persist a status change on an existing friendship."""
        pass

    @abstractmethod
    async def delete(self, friendship_id: FriendshipId) -> None:
        """Delete a friendship."""
        pass
