"""Domain model entities for Vouch."""

from vouch.domain.model.comment import Comment
from vouch.domain.model.feature_flags import FeatureFlags
from vouch.domain.model.feed import (
    ActivityFeedItem,
    FeedItem,
    FeedSnapshot,
    Freshness,
    RecommendationFeedItem,
    RecommendationOrigin,
    Thread,
)
from vouch.domain.model.friendship import Friendship
from vouch.domain.model.recommendation import Recommendation
from vouch.domain.model.recommendation_comment import RecommendationComment
from vouch.domain.model.request import RecommendationRequest, Response
from vouch.domain.model.vote import Vote, VoteTally

__all__ = [
    "Recommendation",
    "RecommendationRequest",
    "Response",
    "Comment",
    "RecommendationComment",
    "Vote",
    "VoteTally",
    "Friendship",
    "FeatureFlags",
    "RecommendationOrigin",
    "Freshness",
    "RecommendationFeedItem",
    "ActivityFeedItem",
    "FeedItem",
    "FeedSnapshot",
    "Thread",
]
