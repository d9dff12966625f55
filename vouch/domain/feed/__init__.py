"""Feed aggregation algorithms.

Everything here is pure and synchronous; loading and publishing live in
the domain services.
"""

from vouch.domain.feed.aggregate import (
    FeedAggregator,
    FeedSources,
    aggregate_feed,
    apply_filter,
    sort_items,
)
from vouch.domain.feed.circle import cap_circle, resolve_circle
from vouch.domain.feed.context import find_context, match_heuristically
from vouch.domain.feed.freshness import compute_freshness, thread_unread_counts
from vouch.domain.feed.relevance import classify

__all__ = [
    "FeedAggregator",
    "FeedSources",
    "aggregate_feed",
    "apply_filter",
    "sort_items",
    "cap_circle",
    "resolve_circle",
    "find_context",
    "match_heuristically",
    "compute_freshness",
    "thread_unread_counts",
    "classify",
]
