"""Role-based relevance of a request to one viewer."""

from typing import Optional

from vouch.domain.model.request import RecommendationRequest
from vouch.domain.value import ActivityCategory, Identity


def classify(
    request: RecommendationRequest,
    self_identity: Identity,
    circle: frozenset[Identity],
) -> Optional[ActivityCategory]:
    """Assign an activity category, or None if the request is not relevant.

    Rules are evaluated in order and the first match wins:

    1. The viewer asked: ``my_open_request`` with no responses, otherwise
       ``my_request_with_responses``.
    2. The viewer answered: ``my_response_with_followups``, even when the
       requester is also a friend.
    3. A friend asked and nobody has answered yet: ``friend_needs_help``.
    """
    if request.requester == self_identity:
        if request.is_open:
            return ActivityCategory.MY_OPEN_REQUEST
        return ActivityCategory.MY_REQUEST_WITH_RESPONSES

    if request.has_response_from(self_identity):
        return ActivityCategory.MY_RESPONSE_WITH_FOLLOWUPS

    if request.requester in circle and request.is_open:
        return ActivityCategory.FRIEND_NEEDS_HELP

    return None
