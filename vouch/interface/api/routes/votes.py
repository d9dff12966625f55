"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header
from pydantic import BaseModel

from vouch.application.usecase.vote import (
    CastVoteRequest,
    CastVoteUseCase,
    GetVotesRequest,
    GetVotesUseCase,
    VoteTallyResponse,
)
from vouch.domain.service import JWTService
from vouch.domain.value import VotableType, VoteType
from vouch.interface.api.auth import extract_token, require_identity

router = APIRouter(prefix="/votes", tags=["votes"], route_class=DishkaRoute)


class CastVoteAPIRequest(BaseModel):
    """API request for voting."""

    vote_type: VoteType


@router.post("/{item_type}/{item_id}", response_model=VoteTallyResponse)
async def cast_vote(
    item_type: VotableType,
    item_id: str,
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> VoteTallyResponse:
    """Vote on a recommendation or request.

    Voting the same direction again withdraws the vote; voting the other
    direction replaces it.

    Args:
        item_type: recommendation or request
        item_id: Item UUID
        request: Vote direction
        cast_vote_use_case: Cast vote use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie
        authorization: Optional bearer token header

    Returns:
        The item's tally after the vote

    Raises:
        HTTPException: 401 if not authenticated, 404 if the item does not exist
    """
    identity = require_identity(jwt_service, auth_token, authorization, action="vote")
    return await cast_vote_use_case.execute(
        CastVoteRequest(
            item_type=item_type,
            item_id=item_id,
            voter=identity,
            vote_type=request.vote_type,
        )
    )


@router.get("/{item_type}/{item_id}", response_model=VoteTallyResponse)
async def get_votes(
    item_type: VotableType,
    item_id: str,
    get_votes_use_case: FromDishka[GetVotesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> VoteTallyResponse:
    """Get an item's tally.

    If authenticated, includes the caller's own vote.
    """
    viewer = jwt_service.get_identity_from_token(
        extract_token(auth_token, authorization)
    )
    return await get_votes_use_case.execute(
        GetVotesRequest(item_type=item_type, item_id=item_id, viewer=viewer)
    )
