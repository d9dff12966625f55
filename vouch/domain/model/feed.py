"""Feed read models.

Feed items are derived views built fresh on every aggregation pass; they
are never stored.
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from vouch.domain.model.comment import Comment
from vouch.domain.model.common import DomainModel, utc_now
from vouch.domain.model.recommendation import Recommendation
from vouch.domain.model.request import RecommendationRequest, Response
from vouch.domain.value import ActivityCategory, Handle, Identity, RequestId


class RecommendationOrigin(DomainModel):
    """The request and response a recommendation was shared from."""

    request_id: RequestId
    response_index: int = Field(ge=0)
    requester: Identity
    requester_handle: Handle


class Freshness(DomainModel):
    """Recency and unread state of one request."""

    sort_timestamp: datetime
    unread_count: int = Field(default=0, ge=0)


class RecommendationFeedItem(DomainModel):
    kind: Literal["recommendation"] = "recommendation"
    recommendation: Recommendation
    origin: Optional[RecommendationOrigin] = None
    comment_count: int = Field(default=0, ge=0)
    sort_timestamp: datetime

    @property
    def item_key(self) -> str:
        return f"rec_{self.recommendation.id}"


class ActivityFeedItem(DomainModel):
    kind: Literal["activity"] = "activity"
    category: ActivityCategory
    request: RecommendationRequest
    comments: tuple[Comment, ...] = ()
    unread_count: int = Field(default=0, ge=0)
    # Response index to unread count; sums to unread_count
    unread_by_thread: dict[int, int] = Field(default_factory=dict)
    sort_timestamp: datetime

    @property
    def item_key(self) -> str:
        return f"activity_{self.request.id}"


FeedItem = Annotated[
    Union[RecommendationFeedItem, ActivityFeedItem], Field(discriminator="kind")
]


class FeedSnapshot(DomainModel):
    """One published state of a viewer's feed.

    ``degraded_streams`` names the source streams that could not be loaded
    and were treated as empty (or kept at their last good value).
    """

    viewer: Identity
    items: tuple[FeedItem, ...] = ()
    degraded_streams: tuple[str, ...] = ()
    generated_at: datetime = Field(default_factory=utc_now)
    version: int = Field(default=0, ge=0)

    @property
    def is_degraded(self) -> bool:
        return bool(self.degraded_streams)


class Thread(DomainModel):
    """A two-party response thread as seen by one of its participants."""

    request: RecommendationRequest
    response: Response
    comments: tuple[Comment, ...] = ()
