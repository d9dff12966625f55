"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from vouch.domain.model.vote import Vote
from vouch.domain.value import Identity, VotableType, VoteId


class VoteRepository(ABC):
    """Helpfulness votes on recommendations and requests.

    Items are addressed by ``(item_type, item_id)``; the id is not
    checked against the votable tables here.
    """

    @abstractmethod
    async def find_by_voter_and_item(
        self, voter: Identity, item_type: VotableType, item_id: UUID
    ) -> Optional[Vote]:
        """The voter's current vote on the item, if any."""
        pass

    @abstractmethod
    async def find_by_item(self, item_type: VotableType, item_id: UUID) -> List[Vote]:
        """Every vote on the item, in no particular order."""
        pass

    @abstractmethod
    async def save(self, vote: Vote) -> Vote:
        """Insert a new vote.

        Raises:
            IntegrityError: If the voter already has a vote on the item
        """
        pass

    @abstractmethod
    async def delete(self, vote_id: VoteId) -> None:
        """Remove a vote; unknown ids are ignored."""
        pass
