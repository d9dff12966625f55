"""Friendship entity.

A friendship links two identities. Only accepted friendships place
someone in a user's circle.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from vouch.domain.model.common import DomainModel, utc_now
from vouch.domain.value import FriendshipId, FriendshipStatus, Identity


def pair_key(first: str, second: str) -> str:
    """Order-independent key for an identity pair."""
    low, high = sorted((first, second))
    return f"{low}|{high}"


class Friendship(DomainModel):
    """Friendship between a requester and a target."""

    id: FriendshipId
    requester: Identity
    target: Identity
    status: FriendshipStatus = FriendshipStatus.PENDING
    created_at: datetime = Field(default_factory=utc_now)
    accepted_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_distinct_sides(self) -> "Friendship":
        if self.requester == self.target:
            raise ValueError("Cannot befriend yourself")
        return self

    @property
    def pair_key(self) -> str:
        return pair_key(self.requester, self.target)

    @property
    def is_accepted(self) -> bool:
        return self.status == FriendshipStatus.ACCEPTED

    def involves(self, identity: str) -> bool:
        return identity in (self.requester, self.target)

    def other(self, identity: str) -> Identity:
        """Return the side of the friendship that is not ``identity``.

        Raises:
            ValueError: If ``identity`` is not part of this friendship
        """
        if identity == self.requester:
            return self.target
        if identity == self.target:
            return self.requester
        raise ValueError(f"{identity} is not part of friendship {self.id}")

    def accept(self) -> "Friendship":
        return self.model_copy(
            update={"status": FriendshipStatus.ACCEPTED, "accepted_at": utc_now()}
        )
