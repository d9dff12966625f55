"""PostgreSQL implementation of thread Comment repository."""

from typing import Iterable, List

from sqlalchemy import and_, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from vouch.domain.model import Comment
from vouch.domain.repository import CommentRepository
from vouch.domain.value import RequestId, ThreadKey
from vouch.persistence.mappers import comment_to_dict, row_to_comment
from vouch.persistence.tables import thread_comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_thread(self, key: ThreadKey) -> List[Comment]:
        """Find the comments of one thread, oldest first."""
        stmt = (
            select(thread_comments_table)
            .where(
                and_(
                    thread_comments_table.c.request_id == key.request_id,
                    thread_comments_table.c.response_index == key.response_index,
                )
            )
            .order_by(thread_comments_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_by_requests(self, request_ids: Iterable[RequestId]) -> List[Comment]:
        """Find comments on any thread of the given requests, oldest first."""
        ids = list(request_ids)
        if not ids:
            return []

        stmt = (
            select(thread_comments_table)
            .where(thread_comments_table.c.request_id.in_(ids))
            .order_by(thread_comments_table.c.created_at)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        return [row_to_comment(row._asdict()) for row in rows]

    async def save(self, comment: Comment) -> Comment:
        """Save a new comment."""
        stmt = insert(thread_comments_table).values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment
