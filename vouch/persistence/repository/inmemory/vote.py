"""In-memory vote repository for testing."""

from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from vouch.domain.model.vote import Vote
from vouch.domain.repository.vote import VoteRepository
from vouch.domain.value import Identity, VotableType, VoteId

VoteKey = tuple[VotableType, UUID, Identity]


class InMemoryVoteRepository(VoteRepository):
    """Votes keyed like the ``unique_vote`` constraint."""

    def __init__(self) -> None:
        self._votes: dict[VoteKey, Vote] = {}

    @staticmethod
    def _key(vote: Vote) -> VoteKey:
        return (vote.item_type, vote.item_id, vote.voter)

    async def find_by_voter_and_item(
        self, voter: Identity, item_type: VotableType, item_id: UUID
    ) -> Optional[Vote]:
        return self._votes.get((item_type, item_id, voter))

    async def find_by_item(self, item_type: VotableType, item_id: UUID) -> list[Vote]:
        return [
            vote
            for (kind, target, _), vote in self._votes.items()
            if kind == item_type and target == item_id
        ]

    async def save(self, vote: Vote) -> Vote:
        key = self._key(vote)
        if key in self._votes:
            raise IntegrityError("unique_vote", None, Exception())
        self._votes[key] = vote
        return vote

    async def delete(self, vote_id: VoteId) -> None:
        self._votes = {k: v for k, v in self._votes.items() if v.id != vote_id}
