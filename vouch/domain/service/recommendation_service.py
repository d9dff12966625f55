"""Recommendation domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from vouch.config import FeedSettings
from vouch.domain.error import AccessDeniedError, NotFoundError, ValidationError
from vouch.domain.feed.context import match_heuristically
from vouch.domain.model.recommendation import Recommendation
from vouch.domain.model.recommendation_comment import RecommendationComment
from vouch.domain.repository import (
    ChangeFeed,
    RecommendationCommentRepository,
    RecommendationRepository,
    RecommendationRequestRepository,
)
from vouch.domain.value import (
    Category,
    Collection,
    Handle,
    Identity,
    RecommendationCommentId,
    RecommendationId,
    RequestId,
)

from .base import Service
from .friendship_service import FriendshipService


class RecommendationService(Service):
    """Domain service for recommendations and their public comments."""

    def __init__(
        self,
        recommendation_repository: RecommendationRepository,
        recommendation_comment_repository: RecommendationCommentRepository,
        request_repository: RecommendationRequestRepository,
        friendship_service: FriendshipService,
        change_feed: ChangeFeed,
        feed_settings: FeedSettings,
    ) -> None:
        self.friendship_service = friendship_service
        self.recommendation_repository = recommendation_repository
        self.recommendation_comment_repository = recommendation_comment_repository
        self.request_repository = request_repository
        self.change_feed = change_feed
        self.feed_settings = feed_settings

    async def create_recommendation(
        self,
        author: Identity,
        title: str,
        category: Category,
        rating: int,
        notes: Optional[str] = None,
        origin_request_id: Optional[RequestId] = None,
        origin_response_index: Optional[int] = None,
    ) -> Recommendation:
        """Create a recommendation.

        Args:
            author: Author identity
            title: What is being recommended
            category: Content category
            rating: 1-5 stars
            notes: Optional notes
            origin_request_id: Request this was shared from, if any
            origin_response_index: Response index within that request

        Returns:
            Created recommendation

        Raises:
            ValidationError: If any field is invalid
        """
        with logfire.span(
            "recommendation_service.create_recommendation",
            author=author,
            category=str(category),
            has_origin=origin_request_id is not None,
        ):
            recommendation = Recommendation.build(
                id=RecommendationId(uuid4()),
                author=author,
                author_handle=Handle.from_identity(author),
                title=title,
                category=category,
                rating=rating,
                notes=notes,
                origin_request_id=origin_request_id,
                origin_response_index=origin_response_index,
            )

            saved = await self.recommendation_repository.save(recommendation)
            self.change_feed.publish(Collection.RECOMMENDATIONS)
            logfire.info(
                "Recommendation created",
                recommendation_id=str(saved.id),
                author=author,
            )
            return saved

    async def get_recommendation(
        self, recommendation_id: RecommendationId
    ) -> Recommendation:
        """Get a recommendation by ID.

        Raises:
            NotFoundError: If the recommendation does not exist
        """
        recommendation = await self.recommendation_repository.find_by_id(
            recommendation_id
        )
        if not recommendation:
            raise NotFoundError("Recommendation", str(recommendation_id))
        return recommendation

    async def _get_visible(
        self, recommendation_id: RecommendationId, viewer: Identity
    ) -> Recommendation:
        recommendation = await self.get_recommendation(recommendation_id)
        circle = await self.friendship_service.resolve_circle(viewer)
        if recommendation.author not in circle:
            logfire.warn(
                "Recommendation comments outside circle",
                recommendation_id=str(recommendation_id),
                viewer=viewer,
            )
            raise AccessDeniedError()
        return recommendation

    async def add_comment(
        self, recommendation_id: RecommendationId, author: Identity, text: str
    ) -> RecommendationComment:
        """Comment on a recommendation by someone in the author's circle.

        Raises:
            ValidationError: If the text is blank or too long
            NotFoundError: If the recommendation does not exist
            AccessDeniedError: If the author is not a friend of the commenter
            RetrievalError: If the commenter's circle could not be read
        """
        with logfire.span(
            "recommendation_service.add_comment",
            recommendation_id=str(recommendation_id),
            author=author,
        ):
            comment = RecommendationComment.build(
                id=RecommendationCommentId(uuid4()),
                recommendation_id=recommendation_id,
                author=author,
                author_handle=Handle.from_identity(author),
                text=text,
            )
            max_length = self.feed_settings.recommendation_comment_max_length
            if len(comment.text) > max_length:
                raise ValidationError(
                    f"Comment must be at most {max_length} characters"
                )

            await self._get_visible(recommendation_id, author)

            saved = await self.recommendation_comment_repository.save(comment)
            self.change_feed.publish(Collection.RECOMMENDATION_VOUCH_COMMENTS)
            logfire.info(
                "Recommendation comment added",
                comment_id=str(saved.id),
                recommendation_id=str(recommendation_id),
            )
            return saved

    async def list_comments(
        self, recommendation_id: RecommendationId, viewer: Identity
    ) -> list[RecommendationComment]:
        """List comments on a recommendation, oldest first.

        Raises:
            NotFoundError: If the recommendation does not exist
            AccessDeniedError: If the author is not in the viewer's circle
        """
        with logfire.span(
            "recommendation_service.list_comments",
            recommendation_id=str(recommendation_id),
            viewer=viewer,
        ):
            await self._get_visible(recommendation_id, viewer)
            return await self.recommendation_comment_repository.find_by_recommendation(
                recommendation_id
            )

    async def backfill_origins(self) -> int:
        """Stamp origins onto recommendations created before stamping existed.

        Each unstamped recommendation is matched against every request with
        the responder/text heuristic; matches are written once and later
        feed passes use the stamp.

        Returns:
            Number of recommendations stamped
        """
        with logfire.span("recommendation_service.backfill_origins"):
            unstamped = await self.recommendation_repository.find_without_origin()
            if not unstamped:
                return 0

            requests = await self.request_repository.find_all()
            stamped = 0
            for recommendation in unstamped:
                origin = match_heuristically(recommendation, requests)
                if origin is None:
                    continue
                if await self.recommendation_repository.set_origin(
                    recommendation.id, origin.request_id, origin.response_index
                ):
                    stamped += 1

            if stamped:
                self.change_feed.publish(Collection.RECOMMENDATIONS)
            logfire.info(
                "Recommendation origins backfilled",
                candidates=len(unstamped),
                stamped=stamped,
            )
            return stamped
