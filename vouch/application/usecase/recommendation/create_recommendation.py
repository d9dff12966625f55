"""Create recommendation use case."""

from pydantic import BaseModel

from vouch.application.usecase.feed.items import (
    RecommendationItem,
    to_recommendation_item,
)
from vouch.domain.service import RecommendationService
from vouch.domain.value import Category, Identity


class CreateRecommendationRequest(BaseModel):
    """Create recommendation request."""

    author: str  # Identity from authenticated session
    title: str
    category: Category
    rating: int
    notes: str | None = None


class CreateRecommendationResponse(BaseModel):
    """Create recommendation response."""

    recommendation: RecommendationItem


class CreateRecommendationUseCase:
    """Use case for sharing a standalone recommendation."""

    def __init__(self, recommendation_service: RecommendationService) -> None:
        self.recommendation_service = recommendation_service

    async def execute(
        self, request: CreateRecommendationRequest
    ) -> CreateRecommendationResponse:
        recommendation = await self.recommendation_service.create_recommendation(
            author=Identity(request.author),
            title=request.title,
            category=request.category,
            rating=request.rating,
            notes=request.notes,
        )
        return CreateRecommendationResponse(
            recommendation=to_recommendation_item(recommendation)
        )
