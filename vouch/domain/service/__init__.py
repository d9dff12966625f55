"""Domain services."""

from .base import Service
from .feature_flag_service import FeatureFlagCache, FeatureFlagService
from .feed_service import FeedService
from .friendship_service import FriendshipService
from .jwt_service import JWTService
from .recommendation_service import RecommendationService
from .request_service import RequestService
from .subscription import FeedSubscription, ThreadSubscription
from .thread_service import ThreadService, can_access
from .vote_service import VoteService

__all__ = [
    "FeatureFlagCache",
    "FeatureFlagService",
    "FeedService",
    "FeedSubscription",
    "FriendshipService",
    "JWTService",
    "RecommendationService",
    "RequestService",
    "Service",
    "ThreadService",
    "ThreadSubscription",
    "VoteService",
    "can_access",
]
