"""Post thread comment use case."""

from pydantic import BaseModel

from vouch.application.usecase.base import parse_uuid
from vouch.application.usecase.feed.items import CommentItem, to_comment_item
from vouch.domain.service import ThreadService
from vouch.domain.value import Identity, RequestId, ThreadKey


class PostThreadCommentRequest(BaseModel):
    """Post thread comment request."""

    request_id: str  # UUID string
    response_index: int
    author: str  # Identity from authenticated session
    text: str


class PostThreadCommentResponse(BaseModel):
    """Post thread comment response."""

    comment: CommentItem


class PostThreadCommentUseCase:
    """Use case for posting to a requester/responder thread."""

    def __init__(self, thread_service: ThreadService) -> None:
        self.thread_service = thread_service

    async def execute(
        self, request: PostThreadCommentRequest
    ) -> PostThreadCommentResponse:
        key = ThreadKey(
            request_id=RequestId(parse_uuid(request.request_id)),
            response_index=request.response_index,
        )
        comment = await self.thread_service.post_comment(
            key, Identity(request.author), request.text
        )
        return PostThreadCommentResponse(comment=to_comment_item(comment))
