"""Repository interfaces for Vouch domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from vouch.domain.repository.change_feed import (
    ChangeFeed,
    ChangeListener,
    ChangeSubscription,
)
from vouch.domain.repository.comment import CommentRepository
from vouch.domain.repository.feature_flag import FeatureFlagRepository
from vouch.domain.repository.friendship import FriendshipRepository
from vouch.domain.repository.recommendation import RecommendationRepository
from vouch.domain.repository.recommendation_comment import (
    RecommendationCommentRepository,
)
from vouch.domain.repository.request import RecommendationRequestRepository
from vouch.domain.repository.vote import VoteRepository

__all__ = [
    "ChangeFeed",
    "ChangeListener",
    "ChangeSubscription",
    "CommentRepository",
    "FeatureFlagRepository",
    "FriendshipRepository",
    "RecommendationRepository",
    "RecommendationCommentRepository",
    "RecommendationRequestRepository",
    "VoteRepository",
]
