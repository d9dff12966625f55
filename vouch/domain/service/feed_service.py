"""Feed domain service.

Loads the source streams a viewer's feed is built from and runs the pure
aggregation over them. Losing one stream degrades the feed rather than
failing it; only the circle is required.
"""

from typing import Iterable, Optional

import logfire
from sqlalchemy.exc import SQLAlchemyError

from vouch.domain.feed.aggregate import FeedSources, aggregate_feed, apply_filter
from vouch.domain.model.feed import FeedSnapshot
from vouch.domain.repository import (
    CommentRepository,
    RecommendationCommentRepository,
    RecommendationRepository,
    RecommendationRequestRepository,
)
from vouch.domain.value import Collection, FeedFilter, Identity

from .base import Service
from .friendship_service import FriendshipService

# Streams loaded after the circle, in dependency order
CONTENT_STREAMS: tuple[Collection, ...] = (
    Collection.RECOMMENDATIONS,
    Collection.RECOMMENDATION_REQUESTS,
    Collection.RECOMMENDATION_COMMENTS,
    Collection.RECOMMENDATION_VOUCH_COMMENTS,
)

FEED_STREAMS: tuple[Collection, ...] = (Collection.FRIENDSHIPS, *CONTENT_STREAMS)


class FeedService(Service):
    """Domain service for building feeds."""

    def __init__(
        self,
        friendship_service: FriendshipService,
        recommendation_repository: RecommendationRepository,
        request_repository: RecommendationRequestRepository,
        comment_repository: CommentRepository,
        recommendation_comment_repository: RecommendationCommentRepository,
    ) -> None:
        self.friendship_service = friendship_service
        self.recommendation_repository = recommendation_repository
        self.request_repository = request_repository
        self.comment_repository = comment_repository
        self.recommendation_comment_repository = recommendation_comment_repository

    async def resolve_circle(self, viewer: Identity) -> frozenset[Identity]:
        """Resolve the viewer's circle.

        Raises:
            RetrievalError: If friendships could not be read
        """
        return await self.friendship_service.resolve_circle(viewer)

    async def _load_stream(
        self, stream: Collection, viewer: Identity, sources: FeedSources
    ) -> FeedSources:
        if stream == Collection.RECOMMENDATIONS:
            recommendations = await self.recommendation_repository.find_by_authors(
                sources.circle
            )
            return sources.model_copy(update={"recommendations": tuple(recommendations)})

        if stream == Collection.RECOMMENDATION_REQUESTS:
            requests = await self.request_repository.find_relevant(sources.circle, viewer)
            return sources.model_copy(update={"requests": tuple(requests)})

        if stream == Collection.RECOMMENDATION_COMMENTS:
            comments = await self.comment_repository.find_by_requests(
                [request.id for request in sources.requests]
            )
            return sources.model_copy(update={"comments": tuple(comments)})

        if stream == Collection.RECOMMENDATION_VOUCH_COMMENTS:
            counts = await self.recommendation_comment_repository.count_by_recommendations(
                [recommendation.id for recommendation in sources.recommendations]
            )
            return sources.model_copy(update={"recommendation_comment_counts": counts})

        raise ValueError(f"Not a content stream: {stream}")

    async def load_sources(
        self,
        viewer: Identity,
        circle: frozenset[Identity],
        streams: Optional[Iterable[Collection]] = None,
        previous: Optional[FeedSources] = None,
    ) -> tuple[FeedSources, frozenset[Collection]]:
        """Load content streams for a viewer.

        Streams not listed in ``streams`` keep their value from ``previous``.
        A stream that fails to load keeps its previous value too (empty if
        there is none) and is reported as degraded.

        Args:
            viewer: Identity the feed is for
            circle: The viewer's resolved circle
            streams: Streams to (re)load; all content streams when None
            previous: Sources from an earlier load, if any

        Returns:
            The loaded sources and the set of degraded streams
        """
        wanted = set(CONTENT_STREAMS if streams is None else streams)
        sources = (previous or FeedSources()).model_copy(update={"circle": circle})
        degraded: set[Collection] = set()

        for stream in CONTENT_STREAMS:
            if stream not in wanted:
                continue
            try:
                sources = await self._load_stream(stream, viewer, sources)
            except SQLAlchemyError as e:
                logfire.error(
                    "Feed stream failed to load",
                    stream=stream.value,
                    viewer=viewer,
                    error=str(e),
                )
                degraded.add(stream)

        return sources, frozenset(degraded)

    async def build_feed(
        self, viewer: Identity, feed_filter: Optional[FeedFilter] = None
    ) -> FeedSnapshot:
        """Build a viewer's feed once.

        Raises:
            RetrievalError: If the circle could not be resolved
        """
        feed_filter = feed_filter or FeedFilter()
        with logfire.span(
            "feed_service.build_feed", viewer=viewer, filter=str(feed_filter)
        ):
            circle = await self.resolve_circle(viewer)
            sources, degraded = await self.load_sources(viewer, circle)

            items = aggregate_feed(
                viewer,
                sources.circle,
                sources.recommendations,
                sources.requests,
                sources.comments,
                sources.recommendation_comment_counts,
            )
            visible = apply_filter(items, feed_filter)

            logfire.info(
                "Feed built",
                viewer=viewer,
                circle_size=len(circle),
                items=len(items),
                visible=len(visible),
                degraded=sorted(s.value for s in degraded),
            )
            return FeedSnapshot(
                viewer=viewer,
                items=tuple(visible),
                degraded_streams=tuple(sorted(s.value for s in degraded)),
            )
