"""Friendship use cases."""

from .list_friends import (
    FriendItem,
    ListFriendsRequest,
    ListFriendsResponse,
    ListFriendsUseCase,
)
from .respond_friend_request import (
    RespondFriendRequestRequest,
    RespondFriendRequestResponse,
    RespondFriendRequestUseCase,
)
from .send_friend_request import (
    FriendshipItem,
    SendFriendRequestRequest,
    SendFriendRequestUseCase,
)

__all__ = [
    "FriendItem",
    "FriendshipItem",
    "ListFriendsRequest",
    "ListFriendsResponse",
    "ListFriendsUseCase",
    "RespondFriendRequestRequest",
    "RespondFriendRequestResponse",
    "RespondFriendRequestUseCase",
    "SendFriendRequestRequest",
    "SendFriendRequestUseCase",
]
