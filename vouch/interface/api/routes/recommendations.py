"""Recommendation routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status
from pydantic import BaseModel, Field

from vouch.application.usecase.recommendation import (
    CommentOnRecommendationRequest,
    CommentOnRecommendationResponse,
    CommentOnRecommendationUseCase,
    CreateRecommendationRequest,
    CreateRecommendationResponse,
    CreateRecommendationUseCase,
    GetRecommendationCommentsRequest,
    GetRecommendationCommentsResponse,
    GetRecommendationCommentsUseCase,
)
from vouch.domain.service import JWTService
from vouch.domain.value import Category
from vouch.interface.api.auth import require_identity

router = APIRouter(
    prefix="/recommendations", tags=["recommendations"], route_class=DishkaRoute
)


class CreateRecommendationAPIRequest(BaseModel):
    """API request for sharing a recommendation."""

    title: str = Field(min_length=1, max_length=200)
    category: Category
    rating: int = Field(ge=1, le=5)
    notes: str | None = Field(default=None, max_length=2000)


class CommentOnRecommendationAPIRequest(BaseModel):
    """API request for commenting on a recommendation."""

    text: str = Field(min_length=1, max_length=1000)


@router.post(
    "",
    response_model=CreateRecommendationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_recommendation(
    request: CreateRecommendationAPIRequest,
    create_recommendation_use_case: FromDishka[CreateRecommendationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CreateRecommendationResponse:
    """Share a recommendation with friends.

    Requires authentication.
    """
    identity = require_identity(
        jwt_service, auth_token, authorization, action="share recommendations"
    )
    return await create_recommendation_use_case.execute(
        CreateRecommendationRequest(
            author=identity,
            title=request.title,
            category=request.category,
            rating=request.rating,
            notes=request.notes,
        )
    )


@router.get(
    "/{recommendation_id}/comments",
    response_model=GetRecommendationCommentsResponse,
)
async def get_recommendation_comments(
    recommendation_id: str,
    get_comments_use_case: FromDishka[GetRecommendationCommentsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> GetRecommendationCommentsResponse:
    """List the comments on a friend's recommendation, oldest first.

    Raises:
        HTTPException: 401 if not authenticated, 403 if the author is not
            in the caller's circle, 404 if the recommendation does not exist
    """
    identity = require_identity(
        jwt_service, auth_token, authorization, action="read comments"
    )
    return await get_comments_use_case.execute(
        GetRecommendationCommentsRequest(
            recommendation_id=recommendation_id, viewer=identity
        )
    )


@router.post(
    "/{recommendation_id}/comments",
    response_model=CommentOnRecommendationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def comment_on_recommendation(
    recommendation_id: str,
    request: CommentOnRecommendationAPIRequest,
    comment_use_case: FromDishka[CommentOnRecommendationUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
    authorization: str | None = Header(default=None),
) -> CommentOnRecommendationResponse:
    """Comment on a recommendation.

    Raises:
        HTTPException: 401 if not authenticated, 403 if the author is not
            in the caller's circle, 404 if the recommendation does not exist,
            409 if recommendation comments are switched off
    """
    identity = require_identity(
        jwt_service, auth_token, authorization, action="post comments"
    )
    return await comment_use_case.execute(
        CommentOnRecommendationRequest(
            recommendation_id=recommendation_id, author=identity, text=request.text
        )
    )
