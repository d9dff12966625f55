"""Open thread use case."""

from pydantic import BaseModel

from vouch.application.usecase.base import parse_uuid
from vouch.application.usecase.feed.items import (
    CommentItem,
    RequestItem,
    ResponseItem,
    to_comment_item,
    to_request_item,
    to_response_item,
)
from vouch.domain.service import ThreadService
from vouch.domain.value import Identity, RequestId, ThreadKey


class OpenThreadRequest(BaseModel):
    """Open thread request."""

    request_id: str  # UUID string
    response_index: int
    viewer: str  # Identity from authenticated session


class OpenThreadResponse(BaseModel):
    """Open thread response."""

    request: RequestItem
    response: ResponseItem
    comments: list[CommentItem]
    total: int


class OpenThreadUseCase:
    """Use case for reading a requester/responder thread."""

    def __init__(self, thread_service: ThreadService) -> None:
        self.thread_service = thread_service

    async def execute(self, request: OpenThreadRequest) -> OpenThreadResponse:
        """Execute open thread flow.

        Raises:
            NotFoundError: If the request does not exist
            AccessDeniedError: If the viewer is not a participant
        """
        key = ThreadKey(
            request_id=RequestId(parse_uuid(request.request_id)),
            response_index=request.response_index,
        )
        thread = await self.thread_service.open_thread(key, Identity(request.viewer))

        comments = [to_comment_item(c) for c in thread.comments]
        return OpenThreadResponse(
            request=to_request_item(thread.request),
            response=to_response_item(thread.response),
            comments=comments,
            total=len(comments),
        )
