"""Build feed use case."""

from datetime import datetime

from pydantic import BaseModel

from vouch.application.usecase.feed.items import FeedEntry, to_feed_entry
from vouch.domain.error import ValidationError
from vouch.domain.model import FeedSnapshot
from vouch.domain.service import FeedService
from vouch.domain.value import FeedFilter, Identity


class BuildFeedRequest(BaseModel):
    """Build feed request."""

    viewer: str  # Identity from authenticated session
    filter: str | None = None


class BuildFeedResponse(BaseModel):
    """Build feed response."""

    filter: str
    items: list[FeedEntry]
    total: int
    degraded_streams: list[str]
    generated_at: datetime
    version: int

    @classmethod
    def from_snapshot(
        cls, snapshot: FeedSnapshot, feed_filter: FeedFilter
    ) -> "BuildFeedResponse":
        items = [to_feed_entry(item) for item in snapshot.items]
        return cls(
            filter=str(feed_filter),
            items=items,
            total=len(items),
            degraded_streams=list(snapshot.degraded_streams),
            generated_at=snapshot.generated_at,
            version=snapshot.version,
        )


def parse_feed_filter(value: str | None) -> FeedFilter:
    """Parse a feed filter.

    Raises:
        ValidationError: If the filter is unknown
    """
    try:
        return FeedFilter.parse(value)
    except ValueError as e:
        raise ValidationError(str(e)) from e


class BuildFeedUseCase:
    """Use case for building a viewer's feed."""

    def __init__(self, feed_service: FeedService) -> None:
        """Initialize build feed use case.

        Args:
            feed_service: Feed domain service
        """
        self.feed_service = feed_service

    async def execute(self, request: BuildFeedRequest) -> BuildFeedResponse:
        """Execute build feed flow.

        Args:
            request: Build feed request

        Returns:
            Ordered feed entries, with any streams that could not be loaded

        Raises:
            ValidationError: If the filter is unknown
            RetrievalError: If the viewer's circle could not be resolved
        """
        feed_filter = parse_feed_filter(request.filter)
        snapshot = await self.feed_service.build_feed(
            Identity(request.viewer), feed_filter
        )
        return BuildFeedResponse.from_snapshot(snapshot, feed_filter)
