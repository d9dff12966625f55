"""Comment thread domain service.

A thread is the private follow-up between a requester and one responder,
addressed by (request id, response index). Only those two identities may
read or write it. Every call re-reads the request and checks access here,
whatever the client already checked.
"""

from typing import Optional
from uuid import uuid4

import logfire

from vouch.config import FeedSettings
from vouch.domain.error import AccessDeniedError, NotFoundError, ValidationError
from vouch.domain.model.comment import Comment
from vouch.domain.model.feed import Thread
from vouch.domain.model.request import RecommendationRequest, Response
from vouch.domain.repository import (
    ChangeFeed,
    CommentRepository,
    RecommendationRequestRepository,
)
from vouch.domain.value import Collection, CommentId, Handle, Identity, ThreadKey

from .base import Service


def can_access(
    request: RecommendationRequest, response_index: int, identity: Identity
) -> bool:
    """True iff ``identity`` is the requester or that response's responder.

    An index with no response grants access to nobody.
    """
    response = request.response_at(response_index)
    if response is None:
        return False
    return identity in (request.requester, response.responder)


class ThreadService(Service):
    """Domain service for gated two-party comment threads."""

    def __init__(
        self,
        request_repository: RecommendationRequestRepository,
        comment_repository: CommentRepository,
        change_feed: ChangeFeed,
        feed_settings: FeedSettings,
    ) -> None:
        self.request_repository = request_repository
        self.comment_repository = comment_repository
        self.change_feed = change_feed
        self.feed_settings = feed_settings

    async def _authorize(
        self, key: ThreadKey, identity: Identity
    ) -> tuple[RecommendationRequest, Response]:
        request = await self.request_repository.find_by_id(key.request_id)
        if not request:
            raise NotFoundError("Request", str(key.request_id))

        response: Optional[Response] = request.response_at(key.response_index)
        # Unknown index is denied rather than reported missing
        if response is None or not can_access(request, key.response_index, identity):
            logfire.warn("Thread access denied", thread=str(key), identity=identity)
            raise AccessDeniedError()
        return request, response

    async def open_thread(self, key: ThreadKey, identity: Identity) -> Thread:
        """Open a thread for reading.

        Raises:
            NotFoundError: If the request does not exist
            AccessDeniedError: If the identity is not a participant
        """
        with logfire.span(
            "thread_service.open_thread", thread=str(key), identity=identity
        ):
            request, response = await self._authorize(key, identity)
            comments = await self.comment_repository.find_by_thread(key)
            return Thread(request=request, response=response, comments=tuple(comments))

    async def post_comment(
        self, key: ThreadKey, identity: Identity, text: str
    ) -> Comment:
        """Post a comment to a thread.

        Raises:
            ValidationError: If the text is blank or too long
            NotFoundError: If the request does not exist
            AccessDeniedError: If the identity is not a participant
        """
        with logfire.span(
            "thread_service.post_comment", thread=str(key), identity=identity
        ):
            comment = Comment.build(
                id=CommentId(uuid4()),
                request_id=key.request_id,
                response_index=key.response_index,
                author=identity,
                author_handle=Handle.from_identity(identity),
                text=text,
            )
            max_length = self.feed_settings.comment_max_length
            if len(comment.text) > max_length:
                raise ValidationError(
                    f"Comment must be at most {max_length} characters"
                )

            await self._authorize(key, identity)

            saved = await self.comment_repository.save(comment)
            self.change_feed.publish(Collection.RECOMMENDATION_COMMENTS)
            logfire.info(
                "Thread comment posted", comment_id=str(saved.id), thread=str(key)
            )
            return saved
