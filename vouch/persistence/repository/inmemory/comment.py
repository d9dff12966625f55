"""In-memory thread comment repository for testing."""

from typing import Iterable

from vouch.domain.model.comment import Comment
from vouch.domain.repository.comment import CommentRepository
from vouch.domain.value import CommentId, RequestId, ThreadKey


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_thread(self, key: ThreadKey) -> list[Comment]:
        """Find the comments of one thread, oldest first."""
        comments = [
            c
            for c in self._comments.values()
            if c.request_id == key.request_id and c.response_index == key.response_index
        ]
        comments.sort(key=lambda c: c.created_at)
        return comments

    async def find_by_requests(self, request_ids: Iterable[RequestId]) -> list[Comment]:
        """Find comments on any thread of the given requests, oldest first."""
        wanted = set(request_ids)
        comments = [c for c in self._comments.values() if c.request_id in wanted]
        comments.sort(key=lambda c: c.created_at)
        return comments

    async def save(self, comment: Comment) -> Comment:
        """Save a new comment."""
        self._comments[comment.id] = comment
        return comment
