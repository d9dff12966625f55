"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .feature_flag import InMemoryFeatureFlagRepository
from .friendship import InMemoryFriendshipRepository
from .recommendation import InMemoryRecommendationRepository
from .recommendation_comment import InMemoryRecommendationCommentRepository
from .request import InMemoryRecommendationRequestRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryFeatureFlagRepository",
    "InMemoryFriendshipRepository",
    "InMemoryRecommendationRepository",
    "InMemoryRecommendationCommentRepository",
    "InMemoryRecommendationRequestRepository",
    "InMemoryVoteRepository",
]
