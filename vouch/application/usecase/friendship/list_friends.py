"""List friends use case."""

from pydantic import BaseModel

from vouch.application.usecase.friendship.send_friend_request import (
    FriendshipItem,
    to_friendship_item,
)
from vouch.domain.service import FriendshipService
from vouch.domain.value import Handle, Identity


class FriendItem(BaseModel):
    identity: str
    handle: str


class ListFriendsRequest(BaseModel):
    """List friends request."""

    identity: str  # Identity from authenticated session


class ListFriendsResponse(BaseModel):
    """List friends response."""

    friends: list[FriendItem]
    incoming: list[FriendshipItem]


class ListFriendsUseCase:
    """Use case for the friends screen: accepted friends and pending requests."""

    def __init__(self, friendship_service: FriendshipService) -> None:
        self.friendship_service = friendship_service

    async def execute(self, request: ListFriendsRequest) -> ListFriendsResponse:
        identity = Identity(request.identity)
        friends = await self.friendship_service.list_friends(identity)
        incoming = await self.friendship_service.list_incoming(identity)
        return ListFriendsResponse(
            friends=[
                FriendItem(identity=f, handle=str(Handle.from_identity(f)))
                for f in friends
            ],
            incoming=[to_friendship_item(f) for f in incoming],
        )
