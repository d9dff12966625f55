"""Get recommendation comments use case."""

from pydantic import BaseModel

from vouch.application.usecase.base import parse_uuid
from vouch.application.usecase.recommendation.comment_on_recommendation import (
    RecommendationCommentItem,
    ensure_recommendation_comments_enabled,
    to_recommendation_comment_item,
)
from vouch.domain.service import FeatureFlagService, RecommendationService
from vouch.domain.value import Identity, RecommendationId


class GetRecommendationCommentsRequest(BaseModel):
    """Get recommendation comments request."""

    recommendation_id: str  # UUID string
    viewer: str  # Identity from authenticated session


class GetRecommendationCommentsResponse(BaseModel):
    """Get recommendation comments response."""

    recommendation_id: str
    comments: list[RecommendationCommentItem]
    total: int


class GetRecommendationCommentsUseCase:
    """Use case for listing comments on a recommendation."""

    def __init__(
        self,
        recommendation_service: RecommendationService,
        feature_flag_service: FeatureFlagService,
    ) -> None:
        self.recommendation_service = recommendation_service
        self.feature_flag_service = feature_flag_service

    async def execute(
        self, request: GetRecommendationCommentsRequest
    ) -> GetRecommendationCommentsResponse:
        await ensure_recommendation_comments_enabled(self.feature_flag_service)
        comments = await self.recommendation_service.list_comments(
            RecommendationId(parse_uuid(request.recommendation_id)),
            Identity(request.viewer),
        )
        items = [to_recommendation_comment_item(c) for c in comments]
        return GetRecommendationCommentsResponse(
            recommendation_id=request.recommendation_id,
            comments=items,
            total=len(items),
        )
