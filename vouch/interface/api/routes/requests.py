"""Recommendation request routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from vouch.application.usecase.request import (
    CreateRequestRequest,
    CreateRequestResponse,
    CreateRequestUseCase,
    RespondToRequestRequest,
    RespondToRequestResponse,
    RespondToRequestUseCase,
)
from vouch.domain.service import JWTService
from vouch.domain.value import Category
from vouch.interface.api.auth import require_identity

router = APIRouter(prefix="/requests", tags=["requests"], route_class=DishkaRoute)


class CreateRequestAPIRequest(BaseModel):
    """API request for asking friends for a recommendation."""

    category: Category
    question: str = Field(min_length=1, max_length=500)
    description: str | None = Field(default=None, max_length=2000)


class RespondToRequestAPIRequest(BaseModel):
    """API request for answering a recommendation request."""

    recommendation_text: str = Field(min_length=1, max_length=500)
    rating: int = Field(ge=1, le=5)
    notes: str | None = Field(default=None, max_length=2000)
    share_as_recommendation: bool = True


@router.post(
    "",
    response_model=CreateRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_request(
    request: CreateRequestAPIRequest,
    create_request_use_case: FromDishka[CreateRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CreateRequestResponse:
    """Ask friends for a recommendation.

    Requires authentication.
    """
    identity = require_identity(
        jwt_service, auth_token, authorization, action="ask for recommendations"
    )
    return await create_request_use_case.execute(
        CreateRequestRequest(
            requester=identity,
            category=request.category,
            question=request.question,
            description=request.description,
        )
    )


@router.post(
    "/{request_id}/responses",
    response_model=RespondToRequestResponse,
    status_code=status.HTTP_201_CREATED,
)
async def respond_to_request(
    request_id: str,
    request: RespondToRequestAPIRequest,
    respond_use_case: FromDishka[RespondToRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> RespondToRequestResponse:
    """Answer a friend's recommendation request.

    Requires authentication. The responder must be in the requester's
    circle and may not answer their own request.

    Args:
        request_id: Request UUID
        request: Response content
        respond_use_case: Respond to request use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie
        authorization: Optional bearer token header

    Returns:
        The stored response and, when shared, the recommendation created from it

    Raises:
        HTTPException: 401 if not authenticated, 404 if the request does not
            exist, 409 on a rule violation or a concurrent response
    """
    identity = require_identity(
        jwt_service, auth_token, authorization, action="respond to requests"
    )
    return await respond_use_case.execute(
        RespondToRequestRequest(
            request_id=request_id,
            responder=identity,
            recommendation_text=request.recommendation_text,
            rating=request.rating,
            notes=request.notes,
            share_as_recommendation=request.share_as_recommendation,
        )
    )
