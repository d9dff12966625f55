"""Recommendation request repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from vouch.domain.model.request import RecommendationRequest, Response
from vouch.domain.value import Identity, RequestId


class RecommendationRequestRepository(ABC):
    """Repository for the RecommendationRequest aggregate.

    Responses are persisted with their request and loaded in index order.
    """

    @abstractmethod
    async def find_by_id(self, request_id: RequestId) -> Optional[RecommendationRequest]:
        """Find a request, with its responses, by ID.

        Args:
            request_id: The request's unique identifier

        Returns:
            The request if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[RecommendationRequest]:
        """Find every request, newest first."""
        pass

    @abstractmethod
    async def find_relevant(
        self, requesters: Iterable[Identity], responder: Identity
    ) -> List[RecommendationRequest]:
        """Find requests a viewer may see in their feed.

        A request is returned when its requester is one of ``requesters``
        or when ``responder`` has answered it.

        Args:
            requesters: Identities in the viewer's circle
            responder: The viewer

        Returns:
            Matching requests, newest first
        """
        pass

    @abstractmethod
    async def save(self, request: RecommendationRequest) -> RecommendationRequest:
        """Save a new request.

        Args:
            request: The request to save (without responses)

        Returns:
            The saved request
        """
        pass

    @abstractmethod
    async def append_response(self, response: Response) -> Response:
        """Atomically append a response at the end of a request.

        The response's index must equal the request's current response
        count. Two concurrent appends for the same index cannot both succeed.

        Args:
            response: The response to append

        Returns:
            The stored response

        Raises:
            IntegrityError: If another response already holds this index
        """
        pass
