"""PostgreSQL implementation of RecommendationComment repository."""

from typing import Iterable, List

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from vouch.domain.model import RecommendationComment
from vouch.domain.repository import RecommendationCommentRepository
from vouch.domain.value import RecommendationId
from vouch.persistence.mappers import (
    recommendation_comment_to_dict,
    row_to_recommendation_comment,
)
from vouch.persistence.tables import recommendation_comments_table


class PostgresRecommendationCommentRepository(RecommendationCommentRepository):
    """PostgreSQL implementation of RecommendationCommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_recommendation(
        self, recommendation_id: RecommendationId
    ) -> List[RecommendationComment]:
        """Find comments on a recommendation, oldest first."""
        stmt = (
            select(recommendation_comments_table)
            .where(recommendation_comments_table.c.recommendation_id == recommendation_id)
            .order_by(recommendation_comments_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [
            row_to_recommendation_comment(row._asdict()) for row in result.fetchall()
        ]

    async def count_by_recommendations(
        self, recommendation_ids: Iterable[RecommendationId]
    ) -> dict[RecommendationId, int]:
        """Count comments per recommendation (batch query)."""
        ids = list(recommendation_ids)
        if not ids:
            return {}

        stmt = (
            select(
                recommendation_comments_table.c.recommendation_id,
                func.count().label("count"),
            )
            .where(recommendation_comments_table.c.recommendation_id.in_(ids))
            .group_by(recommendation_comments_table.c.recommendation_id)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        return {RecommendationId(row.recommendation_id): row.count for row in rows}

    async def save(self, comment: RecommendationComment) -> RecommendationComment:
        """Save a new comment."""
        stmt = insert(recommendation_comments_table).values(
            **recommendation_comment_to_dict(comment)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return comment
