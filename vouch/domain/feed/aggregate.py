"""Feed aggregation: merge, order and filter feed items.

Aggregation is a pure, synchronous function of its inputs. It never awaits,
so a pass always sees one consistent set of source snapshots, and running
it again on the same inputs yields the same feed.
"""

from collections import defaultdict
from typing import Iterable, Mapping, Optional, Sequence

from pydantic import Field

from vouch.domain.feed.context import find_context
from vouch.domain.feed.freshness import compute_freshness, thread_unread_counts
from vouch.domain.feed.relevance import classify
from vouch.domain.model.comment import Comment
from vouch.domain.model.common import DomainModel
from vouch.domain.model.feed import ActivityFeedItem, FeedItem, RecommendationFeedItem
from vouch.domain.model.recommendation import Recommendation
from vouch.domain.model.request import RecommendationRequest
from vouch.domain.value import (
    FeedFilter,
    FeedFilterMode,
    Identity,
    RecommendationId,
    RequestId,
)


class FeedSources(DomainModel):
    """Full snapshots of every stream a feed pass reads."""

    circle: frozenset[Identity] = frozenset()
    recommendations: tuple[Recommendation, ...] = ()
    requests: tuple[RecommendationRequest, ...] = ()
    comments: tuple[Comment, ...] = ()
    recommendation_comment_counts: Mapping[RecommendationId, int] = Field(
        default_factory=dict
    )


def sort_items(items: Iterable[FeedItem]) -> list[FeedItem]:
    """Order items newest first.

    Items with equal ``sort_timestamp`` are ordered by ``item_key``
    ascending so the output never depends on input order.
    """
    by_key = sorted(items, key=lambda item: item.item_key)
    return sorted(by_key, key=lambda item: item.sort_timestamp, reverse=True)


def aggregate_feed(
    viewer: Identity,
    circle: frozenset[Identity],
    recommendations: Sequence[Recommendation],
    requests: Sequence[RecommendationRequest],
    comments: Sequence[Comment],
    recommendation_comment_counts: Optional[Mapping[RecommendationId, int]] = None,
) -> list[FeedItem]:
    """Build the ordered feed for one viewer."""
    counts = recommendation_comment_counts or {}
    items: list[FeedItem] = []

    for recommendation in recommendations:
        if recommendation.author not in circle:
            continue
        items.append(
            RecommendationFeedItem(
                recommendation=recommendation,
                origin=find_context(recommendation, requests),
                comment_count=counts.get(recommendation.id, 0),
                sort_timestamp=recommendation.created_at,
            )
        )

    comments_by_request: dict[RequestId, list[Comment]] = defaultdict(list)
    for comment in comments:
        comments_by_request[comment.request_id].append(comment)

    for request in requests:
        category = classify(request, viewer, circle)
        if category is None:
            continue
        thread_comments = sorted(
            comments_by_request.get(request.id, []), key=lambda c: c.created_at
        )
        freshness = compute_freshness(request, thread_comments, viewer)
        items.append(
            ActivityFeedItem(
                category=category,
                request=request,
                comments=tuple(thread_comments),
                unread_count=freshness.unread_count,
                unread_by_thread=thread_unread_counts(request, thread_comments, viewer),
                sort_timestamp=freshness.sort_timestamp,
            )
        )

    return sort_items(items)


def apply_filter(items: Sequence[FeedItem], feed_filter: FeedFilter) -> list[FeedItem]:
    """Narrow an aggregated feed for display.

    Returns a new list; ``items`` is left untouched and keeps its order.
    """
    mode = feed_filter.mode
    if mode == FeedFilterMode.ALL:
        return list(items)
    if mode == FeedFilterMode.RECOMMENDATIONS:
        return [i for i in items if isinstance(i, RecommendationFeedItem)]
    if mode == FeedFilterMode.ACTIVITY:
        return [i for i in items if isinstance(i, ActivityFeedItem)]
    if mode == FeedFilterMode.ACTIVITY_CATEGORY:
        return [
            i
            for i in items
            if isinstance(i, ActivityFeedItem)
            and i.category == feed_filter.activity_category
        ]
    # Content category applies to both recommendations and requests
    return [
        i
        for i in items
        if (
            i.recommendation.category
            if isinstance(i, RecommendationFeedItem)
            else i.request.category
        )
        == feed_filter.category
    ]


class FeedAggregator:
    """Aggregates feeds, reusing the last result while inputs are unchanged.

    The cache key is the viewer, the circle and a version number per
    source stream. Callers bump a stream's version whenever they reload it.
    """

    def __init__(self) -> None:
        self._key: Optional[tuple] = None
        self._items: list[FeedItem] = []
        self.passes = 0

    def aggregate(
        self,
        viewer: Identity,
        sources: FeedSources,
        versions: Mapping[str, int],
    ) -> list[FeedItem]:
        key = (viewer, sources.circle, tuple(sorted(versions.items())))
        if key == self._key:
            return list(self._items)

        self._items = aggregate_feed(
            viewer,
            sources.circle,
            sources.recommendations,
            sources.requests,
            sources.comments,
            sources.recommendation_comment_counts,
        )
        self._key = key
        self.passes += 1
        return list(self._items)
