"""PostgreSQL repository implementations."""

from vouch.persistence.repository.comment import PostgresCommentRepository
from vouch.persistence.repository.feature_flag import PostgresFeatureFlagRepository
from vouch.persistence.repository.friendship import PostgresFriendshipRepository
from vouch.persistence.repository.recommendation import (
    PostgresRecommendationRepository,
)
from vouch.persistence.repository.recommendation_comment import (
    PostgresRecommendationCommentRepository,
)
from vouch.persistence.repository.request import (
    PostgresRecommendationRequestRepository,
)
from vouch.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresFeatureFlagRepository",
    "PostgresFriendshipRepository",
    "PostgresRecommendationRepository",
    "PostgresRecommendationCommentRepository",
    "PostgresRecommendationRequestRepository",
    "PostgresVoteRepository",
]
