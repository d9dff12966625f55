"""Thread comment repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, List

from vouch.domain.model.comment import Comment
from vouch.domain.value import RequestId, ThreadKey


class CommentRepository(ABC):
    """Repository for two-party thread comments."""

    @abstractmethod
    async def find_by_thread(self, key: ThreadKey) -> List[Comment]:
        """Find the comments of one thread, oldest first.

        Args:
            key: Request id and response index of the thread

        Returns:
            The thread's comments
        """
        pass

    @abstractmethod
    async def find_by_requests(self, request_ids: Iterable[RequestId]) -> List[Comment]:
        """Find comments on any thread of the given requests, oldest first.

        Args:
            request_ids: Requests whose threads to load

        Returns:
            Comments across all response threads of those requests
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a new comment."""
        pass
