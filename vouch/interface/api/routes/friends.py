"""Friendship routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from vouch.application.usecase.friendship import (
    FriendshipItem,
    ListFriendsRequest,
    ListFriendsResponse,
    ListFriendsUseCase,
    RespondFriendRequestRequest,
    RespondFriendRequestResponse,
    RespondFriendRequestUseCase,
    SendFriendRequestRequest,
    SendFriendRequestUseCase,
)
from vouch.domain.service import JWTService
from vouch.interface.api.auth import require_identity

router = APIRouter(prefix="/friends", tags=["friends"], route_class=DishkaRoute)


class SendFriendRequestAPIRequest(BaseModel):
    """API request for befriending someone."""

    target: str = Field(min_length=3, max_length=320)  # Email address


@router.get("", response_model=ListFriendsResponse)
async def list_friends(
    list_friends_use_case: FromDishka[ListFriendsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> ListFriendsResponse:
    """List accepted friends and pending incoming requests."""
    identity = require_identity(
        jwt_service, auth_token, authorization, action="list friends"
    )
    return await list_friends_use_case.execute(ListFriendsRequest(identity=identity))


@router.post(
    "", response_model=FriendshipItem, status_code=status.HTTP_201_CREATED
)
async def send_friend_request(
    request: SendFriendRequestAPIRequest,
    send_use_case: FromDishka[SendFriendRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> FriendshipItem:
    """Send a friend request.

    Raises:
        HTTPException: 401 if not authenticated, 409 if a friendship between
            the two already exists in either direction
    """
    identity = require_identity(
        jwt_service, auth_token, authorization, action="add friends"
    )
    return await send_use_case.execute(
        SendFriendRequestRequest(requester=identity, target=request.target)
    )


async def _respond(
    friendship_id: str,
    accept: bool,
    respond_use_case: RespondFriendRequestUseCase,
    jwt_service: JWTService,
    auth_token: str | None,
    authorization: str | None,
) -> RespondFriendRequestResponse:
    identity = require_identity(
        jwt_service, auth_token, authorization, action="answer friend requests"
    )
    return await respond_use_case.execute(
        RespondFriendRequestRequest(
            friendship_id=friendship_id, identity=identity, accept=accept
        )
    )


@router.post("/{friendship_id}/accept", response_model=RespondFriendRequestResponse)
async def accept_friend_request(
    friendship_id: str,
    respond_use_case: FromDishka[RespondFriendRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RespondFriendRequestResponse:
    """Accept a pending friend request addressed to the caller."""
    return await _respond(
        friendship_id, True, respond_use_case, jwt_service, auth_token, authorization
    )


@router.post("/{friendship_id}/decline", response_model=RespondFriendRequestResponse)
async def decline_friend_request(
    friendship_id: str,
    respond_use_case: FromDishka[RespondFriendRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RespondFriendRequestResponse:
    """Decline a pending friend request addressed to the caller."""
    return await _respond(
        friendship_id, False, respond_use_case, jwt_service, auth_token, authorization
    )
