"""Recommendation use cases."""

from .backfill_origins import (
    BackfillOriginsRequest,
    BackfillOriginsResponse,
    BackfillOriginsUseCase,
)
from .comment_on_recommendation import (
    CommentOnRecommendationRequest,
    CommentOnRecommendationResponse,
    CommentOnRecommendationUseCase,
    RecommendationCommentItem,
)
from .create_recommendation import (
    CreateRecommendationRequest,
    CreateRecommendationResponse,
    CreateRecommendationUseCase,
)
from .get_recommendation_comments import (
    GetRecommendationCommentsRequest,
    GetRecommendationCommentsResponse,
    GetRecommendationCommentsUseCase,
)

__all__ = [
    "BackfillOriginsRequest",
    "BackfillOriginsResponse",
    "BackfillOriginsUseCase",
    "CommentOnRecommendationRequest",
    "CommentOnRecommendationResponse",
    "CommentOnRecommendationUseCase",
    "CreateRecommendationRequest",
    "CreateRecommendationResponse",
    "CreateRecommendationUseCase",
    "GetRecommendationCommentsRequest",
    "GetRecommendationCommentsResponse",
    "GetRecommendationCommentsUseCase",
    "RecommendationCommentItem",
]
