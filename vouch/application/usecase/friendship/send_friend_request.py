"""Send friend request use case."""

from datetime import datetime

from pydantic import BaseModel

from vouch.application.usecase.base import parse_identity
from vouch.domain.model import Friendship
from vouch.domain.service import FriendshipService
from vouch.domain.value import FriendshipStatus, Identity


class FriendshipItem(BaseModel):
    """Friendship in responses."""

    friendship_id: str
    requester: str
    target: str
    status: FriendshipStatus
    created_at: datetime
    accepted_at: datetime | None


def to_friendship_item(friendship: Friendship) -> FriendshipItem:
    return FriendshipItem(
        friendship_id=str(friendship.id),
        requester=friendship.requester,
        target=friendship.target,
        status=friendship.status,
        created_at=friendship.created_at,
        accepted_at=friendship.accepted_at,
    )


class SendFriendRequestRequest(BaseModel):
    """Send friend request request."""

    requester: str  # Identity from authenticated session
    target: str  # Email address of the person to befriend


class SendFriendRequestUseCase:
    """Use case for sending a friend request by email."""

    def __init__(self, friendship_service: FriendshipService) -> None:
        self.friendship_service = friendship_service

    async def execute(self, request: SendFriendRequestRequest) -> FriendshipItem:
        """Execute send friend request flow.

        Raises:
            ValidationError: If the target is not an email or is the requester
            DuplicateFriendshipError: If the pair already has a friendship
        """
        target = parse_identity(request.target)
        friendship = await self.friendship_service.send_request(
            Identity(request.requester), target
        )
        return to_friendship_item(friendship)
