"""Respond to friend request use case."""

from pydantic import BaseModel

from vouch.application.usecase.base import parse_uuid
from vouch.application.usecase.friendship.send_friend_request import (
    FriendshipItem,
    to_friendship_item,
)
from vouch.domain.service import FriendshipService
from vouch.domain.value import FriendshipId, Identity


class RespondFriendRequestRequest(BaseModel):
    """Respond to friend request request."""

    friendship_id: str  # UUID string
    identity: str  # Identity from authenticated session
    accept: bool


class RespondFriendRequestResponse(BaseModel):
    """Respond to friend request response."""

    friendship: FriendshipItem | None  # None when declined


class RespondFriendRequestUseCase:
    """Use case for accepting or declining a friend request."""

    def __init__(self, friendship_service: FriendshipService) -> None:
        self.friendship_service = friendship_service

    async def execute(
        self, request: RespondFriendRequestRequest
    ) -> RespondFriendRequestResponse:
        friendship_id = FriendshipId(parse_uuid(request.friendship_id))
        identity = Identity(request.identity)

        if request.accept:
            accepted = await self.friendship_service.accept(friendship_id, identity)
            return RespondFriendRequestResponse(friendship=to_friendship_item(accepted))

        await self.friendship_service.decline(friendship_id, identity)
        return RespondFriendRequestResponse(friendship=None)
