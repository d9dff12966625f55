"""In-memory recommendation request repository for testing."""

from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError

from vouch.domain.model.request import RecommendationRequest, Response
from vouch.domain.repository.request import RecommendationRequestRepository
from vouch.domain.value import Identity, RequestId


class InMemoryRecommendationRequestRepository(RecommendationRequestRepository):
    """In-memory implementation of RecommendationRequestRepository for testing.

    Appends are checked against the request's current response count,
    mirroring the unique (request_id, index) constraint.
    """

    def __init__(self) -> None:
        self._requests: dict[RequestId, RecommendationRequest] = {}

    async def find_by_id(self, request_id: RequestId) -> Optional[RecommendationRequest]:
        """Find a request, with its responses, by ID."""
        return self._requests.get(request_id)

    async def find_all(self) -> list[RecommendationRequest]:
        """Find every request, newest first."""
        requests = list(self._requests.values())
        requests.sort(key=lambda r: r.created_at, reverse=True)
        return requests

    async def find_relevant(
        self, requesters: Iterable[Identity], responder: Identity
    ) -> list[RecommendationRequest]:
        """Find requests by circle members or answered by the viewer."""
        wanted = set(requesters)
        requests = [
            r
            for r in self._requests.values()
            if r.requester in wanted or r.has_response_from(responder)
        ]
        requests.sort(key=lambda r: r.created_at, reverse=True)
        return requests

    async def save(self, request: RecommendationRequest) -> RecommendationRequest:
        """Save a new request."""
        self._requests[request.id] = request
        return request

    async def append_response(self, response: Response) -> Response:
        """Append a response at the end of its request.

        Raises:
            IntegrityError: If the request is missing or the index is taken
        """
        request = self._requests.get(response.request_id)
        if request is None:
            raise IntegrityError("Unknown request", None, Exception())
        if response.index != len(request.responses):
            raise IntegrityError("Duplicate response index", None, Exception())

        self._requests[request.id] = request.with_response(response)
        return response
