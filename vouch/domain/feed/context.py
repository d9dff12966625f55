"""Linking recommendations to the request they were shared from."""

from typing import Optional, Sequence

from vouch.domain.model.feed import RecommendationOrigin
from vouch.domain.model.recommendation import Recommendation
from vouch.domain.model.request import RecommendationRequest


def _origin(
    request: RecommendationRequest, response_index: int
) -> RecommendationOrigin:
    return RecommendationOrigin(
        request_id=request.id,
        response_index=response_index,
        requester=request.requester,
        requester_handle=request.requester_handle,
    )


def match_heuristically(
    recommendation: Recommendation, requests: Sequence[RecommendationRequest]
) -> Optional[RecommendationOrigin]:
    """Find the first response whose responder and text match.

    Requests are scanned in the given order and responses by index; the
    first (request, index) pair where the responder is the author and the
    response text equals the title wins. Duplicate matches later in the
    scan are ignored.
    """
    for request in requests:
        for response in request.responses:
            if (
                response.responder == recommendation.author
                and response.recommendation_text == recommendation.title
            ):
                return _origin(request, response.index)
    return None


def find_context(
    recommendation: Recommendation, requests: Sequence[RecommendationRequest]
) -> Optional[RecommendationOrigin]:
    """Return the origin of a recommendation, if it has one.

    Recommendations created while answering a request carry an explicit
    origin stamp, which is used when the stamped request is among
    ``requests``. Unstamped records fall back to the text match.
    """
    if recommendation.has_origin:
        for request in requests:
            if request.id == recommendation.origin_request_id:
                return _origin(request, recommendation.origin_response_index or 0)
        return None
    return match_heuristically(recommendation, requests)
