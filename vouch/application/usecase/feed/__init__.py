"""Feed use cases."""

from .build_feed import (
    BuildFeedRequest,
    BuildFeedResponse,
    BuildFeedUseCase,
    parse_feed_filter,
)

__all__ = [
    "BuildFeedRequest",
    "BuildFeedResponse",
    "BuildFeedUseCase",
    "parse_feed_filter",
]
