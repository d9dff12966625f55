"""Domain value objects for Vouch."""

from vouch.domain.value.identifiers import (
    CommentId,
    FriendshipId,
    Identity,
    RecommendationCommentId,
    RecommendationId,
    RequestId,
    ResponseId,
    VoteId,
    normalize_identity,
)
from vouch.domain.value.types import (
    ActivityCategory,
    Category,
    Collection,
    FeedFilter,
    FeedFilterMode,
    FriendshipStatus,
    Handle,
    RequestStatus,
    ThreadKey,
    VotableType,
    VoteType,
)

__all__ = [
    # Identifiers
    "Identity",
    "RecommendationId",
    "RequestId",
    "ResponseId",
    "CommentId",
    "RecommendationCommentId",
    "VoteId",
    "FriendshipId",
    "normalize_identity",
    # Types
    "ActivityCategory",
    "Category",
    "Collection",
    "FeedFilter",
    "FeedFilterMode",
    "FriendshipStatus",
    "Handle",
    "RequestStatus",
    "ThreadKey",
    "VotableType",
    "VoteType",
]
