"""Recommendation request domain service."""

from typing import Optional
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from vouch.domain.error import BusinessRuleViolationError, NotFoundError, WriteConflictError
from vouch.domain.model.recommendation import Recommendation
from vouch.domain.model.request import RecommendationRequest, Response
from vouch.domain.repository import ChangeFeed, RecommendationRequestRepository
from vouch.domain.value import (
    Category,
    Collection,
    Handle,
    Identity,
    RequestId,
    ResponseId,
)

from .base import Service
from .friendship_service import FriendshipService
from .recommendation_service import RecommendationService


class RequestService(Service):
    """Domain service for recommendation requests and their responses."""

    def __init__(
        self,
        request_repository: RecommendationRequestRepository,
        recommendation_service: RecommendationService,
        friendship_service: FriendshipService,
        change_feed: ChangeFeed,
    ) -> None:
        """Initialize request service.

        Args:
            request_repository: Request repository
            recommendation_service: Used to share responses as recommendations
            friendship_service: Used to check who may respond
            change_feed: Change notifications for written collections
        """
        self.request_repository = request_repository
        self.recommendation_service = recommendation_service
        self.friendship_service = friendship_service
        self.change_feed = change_feed

    async def create_request(
        self,
        requester: Identity,
        category: Category,
        question: str,
        description: Optional[str] = None,
    ) -> RecommendationRequest:
        """Ask the requester's circle for recommendations.

        Raises:
            ValidationError: If the question is blank or too long
        """
        with logfire.span(
            "request_service.create_request",
            requester=requester,
            category=str(category),
        ):
            request = RecommendationRequest.build(
                id=RequestId(uuid4()),
                requester=requester,
                requester_handle=Handle.from_identity(requester),
                category=category,
                question=question,
                description=description,
            )

            saved = await self.request_repository.save(request)
            self.change_feed.publish(Collection.RECOMMENDATION_REQUESTS)
            logfire.info(
                "Request created", request_id=str(saved.id), requester=requester
            )
            return saved

    async def get_request(self, request_id: RequestId) -> RecommendationRequest:
        """Get a request with its responses.

        Raises:
            NotFoundError: If the request does not exist
        """
        request = await self.request_repository.find_by_id(request_id)
        if not request:
            raise NotFoundError("Request", str(request_id))
        return request

    async def respond(
        self,
        request_id: RequestId,
        responder: Identity,
        recommendation_text: str,
        rating: int,
        notes: Optional[str] = None,
        share_as_recommendation: bool = True,
    ) -> tuple[Response, Optional[Recommendation]]:
        """Answer a request.

        The response is appended at the end of the request with the
        repository's atomic append. When ``share_as_recommendation`` is set
        the answer is also published as a recommendation stamped with its
        origin (request id and response index).

        Returns:
            The stored response and the shared recommendation, if any

        Raises:
            ValidationError: If the response is malformed (checked first)
            NotFoundError: If the request does not exist
            BusinessRuleViolationError: If the responder asked the question
                or is not in the requester's circle
            WriteConflictError: If a concurrent response took the same index
        """
        with logfire.span(
            "request_service.respond",
            request_id=str(request_id),
            responder=responder,
            share_as_recommendation=share_as_recommendation,
        ):
            draft = Response.build(
                id=ResponseId(uuid4()),
                request_id=request_id,
                index=0,
                responder=responder,
                responder_handle=Handle.from_identity(responder),
                recommendation_text=recommendation_text,
                rating=rating,
                notes=notes,
            )

            request = await self.get_request(request_id)
            if request.requester == responder:
                raise BusinessRuleViolationError(
                    "You cannot respond to your own request"
                )

            circle = await self.friendship_service.resolve_circle(request.requester)
            if responder not in circle:
                logfire.warn(
                    "Response from outside requester's circle",
                    request_id=str(request_id),
                    responder=responder,
                )
                raise BusinessRuleViolationError(
                    "Only friends of the requester can respond"
                )

            response = draft.model_copy(update={"index": len(request.responses)})
            try:
                stored = await self.request_repository.append_response(response)
            except IntegrityError as e:
                logfire.warn(
                    "Response append lost a race",
                    request_id=str(request_id),
                    index=response.index,
                )
                raise WriteConflictError("Request", str(request_id)) from e

            self.change_feed.publish(Collection.RECOMMENDATION_REQUESTS)
            logfire.info(
                "Response appended",
                request_id=str(request_id),
                index=stored.index,
                responder=responder,
            )

            shared = None
            if share_as_recommendation:
                shared = await self.recommendation_service.create_recommendation(
                    author=responder,
                    title=stored.recommendation_text,
                    category=request.category,
                    rating=stored.rating,
                    notes=stored.notes,
                    origin_request_id=request.id,
                    origin_response_index=stored.index,
                )

            return stored, shared
