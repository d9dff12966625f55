"""Recency and unread state of request threads."""

from collections import Counter
from typing import Iterable

from vouch.domain.model.comment import Comment
from vouch.domain.model.feed import Freshness
from vouch.domain.model.request import RecommendationRequest
from vouch.domain.value import Identity


def compute_freshness(
    request: RecommendationRequest,
    comments: Iterable[Comment],
    self_identity: Identity,
) -> Freshness:
    """Fold a request, its responses and its comments into one Freshness.

    ``sort_timestamp`` is the latest touch on the request. ``unread_count``
    counts comments by anyone but the viewer across every response thread
    of the request; comments for other requests are ignored. Nothing
    records what was read, so "unread" means "written by someone else".
    """
    latest = request.created_at
    for response in request.responses:
        latest = max(latest, response.created_at)

    unread = 0
    for comment in comments:
        if comment.request_id != request.id:
            continue
        latest = max(latest, comment.created_at)
        if comment.author != self_identity:
            unread += 1

    return Freshness(sort_timestamp=latest, unread_count=unread)


def thread_unread_counts(
    request: RecommendationRequest,
    comments: Iterable[Comment],
    self_identity: Identity,
) -> dict[int, int]:
    """Per-thread breakdown of the request's unread count.

    Returns a mapping of response index to other-authored comment count,
    with an entry for every response. The values sum to the request-level
    ``unread_count``.
    """
    counts: Counter[int] = Counter(
        comment.response_index
        for comment in comments
        if comment.request_id == request.id and comment.author != self_identity
    )
    return {response.index: counts.get(response.index, 0) for response in request.responses}
