"""Vote entity.

Votes record whether a recommendation or request was helpful.
Each identity casts at most one vote per item.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from vouch.domain.model.common import DomainModel, utc_now
from vouch.domain.value import Identity, VotableType, VoteId, VoteType


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per voter per item (enforced by database unique constraint)
    - Casting the same direction again removes the vote
    - Polymorphic reference to the votable (recommendation or request)
    """

    id: VoteId
    item_id: UUID  # RecommendationId or RequestId
    item_type: VotableType
    voter: Identity
    vote_type: VoteType
    created_at: datetime = Field(default_factory=utc_now)


class VoteTally(DomainModel):
    """Vote counts for one item, plus the viewer's own vote if any."""

    up: int = Field(default=0, ge=0)
    down: int = Field(default=0, ge=0)
    viewer_vote: Optional[VoteType] = None

    @property
    def score(self) -> int:
        return self.up - self.down

    @classmethod
    def from_votes(cls, votes: list[Vote], viewer: Identity | None) -> "VoteTally":
        up = sum(1 for v in votes if v.vote_type == VoteType.UP)
        viewer_vote = next((v.vote_type for v in votes if v.voter == viewer), None)
        return cls(up=up, down=len(votes) - up, viewer_vote=viewer_vote)
