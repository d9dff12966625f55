"""Respond to request use case."""

import logfire
from pydantic import BaseModel

from vouch.application.usecase.base import parse_uuid
from vouch.application.usecase.feed.items import (
    RecommendationItem,
    ResponseItem,
    to_recommendation_item,
    to_response_item,
)
from vouch.domain.model import RecommendationOrigin
from vouch.domain.service import RequestService
from vouch.domain.value import Identity, RequestId


class RespondToRequestRequest(BaseModel):
    """Respond to request request."""

    request_id: str  # UUID string
    responder: str  # Identity from authenticated session
    recommendation_text: str
    rating: int
    notes: str | None = None
    share_as_recommendation: bool = True


class RespondToRequestResponse(BaseModel):
    """Respond to request response."""

    request_id: str
    response: ResponseItem
    recommendation: RecommendationItem | None = None


class RespondToRequestUseCase:
    """Use case for answering a friend's request."""

    def __init__(self, request_service: RequestService) -> None:
        """Initialize respond to request use case.

        Args:
            request_service: Request domain service
        """
        self.request_service = request_service

    async def execute(
        self, request: RespondToRequestRequest
    ) -> RespondToRequestResponse:
        """Execute respond flow.

        Steps:
        1. Validate the response (before anything is written)
        2. Append it atomically to the request
        3. Optionally share it as a recommendation stamped with its origin

        Raises:
            ValidationError: If the response is malformed
            NotFoundError: If the request does not exist
            BusinessRuleViolationError: If responding is not allowed
            WriteConflictError: If a concurrent response won the race; retry
        """
        request_id = RequestId(parse_uuid(request.request_id))

        with logfire.span(
            "respond_to_request.execute",
            request_id=request.request_id,
            responder=request.responder,
        ):
            response, shared = await self.request_service.respond(
                request_id=request_id,
                responder=Identity(request.responder),
                recommendation_text=request.recommendation_text,
                rating=request.rating,
                notes=request.notes,
                share_as_recommendation=request.share_as_recommendation,
            )

        recommendation = None
        if shared:
            answered = await self.request_service.get_request(request_id)
            origin = RecommendationOrigin(
                request_id=answered.id,
                response_index=response.index,
                requester=answered.requester,
                requester_handle=answered.requester_handle,
            )
            recommendation = to_recommendation_item(shared, origin)

        return RespondToRequestResponse(
            request_id=request.request_id,
            response=to_response_item(response),
            recommendation=recommendation,
        )
