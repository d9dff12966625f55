"""Comment on recommendation use case."""

from datetime import datetime

from pydantic import BaseModel

from vouch.application.usecase.base import parse_uuid
from vouch.domain.error import BusinessRuleViolationError
from vouch.domain.model import RecommendationComment
from vouch.domain.service import FeatureFlagService, RecommendationService
from vouch.domain.value import Identity, RecommendationId

RECOMMENDATION_COMMENTS_FLAG = "enable_recommendation_comments"


class RecommendationCommentItem(BaseModel):
    """Recommendation comment in responses."""

    comment_id: str
    recommendation_id: str
    author_handle: str
    text: str
    created_at: datetime


def to_recommendation_comment_item(
    comment: RecommendationComment,
) -> RecommendationCommentItem:
    return RecommendationCommentItem(
        comment_id=str(comment.id),
        recommendation_id=str(comment.recommendation_id),
        author_handle=str(comment.author_handle),
        text=comment.text,
        created_at=comment.created_at,
    )


class CommentOnRecommendationRequest(BaseModel):
    """Comment on recommendation request."""

    recommendation_id: str  # UUID string
    author: str  # Identity from authenticated session
    text: str


class CommentOnRecommendationResponse(BaseModel):
    """Comment on recommendation response."""

    comment: RecommendationCommentItem


async def ensure_recommendation_comments_enabled(
    feature_flag_service: FeatureFlagService,
) -> None:
    """Raises BusinessRuleViolationError when the feature is switched off."""
    if not await feature_flag_service.is_enabled(RECOMMENDATION_COMMENTS_FLAG):
        raise BusinessRuleViolationError("Recommendation comments are disabled")


class CommentOnRecommendationUseCase:
    """Use case for commenting on a recommendation."""

    def __init__(
        self,
        recommendation_service: RecommendationService,
        feature_flag_service: FeatureFlagService,
    ) -> None:
        """Initialize comment on recommendation use case.

        Args:
            recommendation_service: Recommendation domain service
            feature_flag_service: Gates the feature
        """
        self.recommendation_service = recommendation_service
        self.feature_flag_service = feature_flag_service

    async def execute(
        self, request: CommentOnRecommendationRequest
    ) -> CommentOnRecommendationResponse:
        """Execute comment flow.

        Raises:
            BusinessRuleViolationError: If recommendation comments are disabled
            ValidationError: If the text is blank or too long
            NotFoundError: If the recommendation does not exist
        """
        await ensure_recommendation_comments_enabled(self.feature_flag_service)
        comment = await self.recommendation_service.add_comment(
            RecommendationId(parse_uuid(request.recommendation_id)),
            Identity(request.author),
            request.text,
        )
        return CommentOnRecommendationResponse(
            comment=to_recommendation_comment_item(comment)
        )
