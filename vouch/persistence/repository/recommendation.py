"""PostgreSQL implementation of Recommendation repository."""

from typing import Iterable, List, Optional

from sqlalchemy import and_, desc, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vouch.domain.model import Recommendation
from vouch.domain.repository import RecommendationRepository
from vouch.domain.value import Identity, RecommendationId, RequestId
from vouch.persistence.mappers import recommendation_to_dict, row_to_recommendation
from vouch.persistence.tables import recommendations_table


class PostgresRecommendationRepository(RecommendationRepository):
    """PostgreSQL implementation of RecommendationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(
        self, recommendation_id: RecommendationId
    ) -> Optional[Recommendation]:
        """Find a recommendation by ID."""
        stmt = select(recommendations_table).where(
            recommendations_table.c.id == recommendation_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_recommendation(row._asdict()) if row else None

    async def find_by_authors(
        self, authors: Iterable[Identity]
    ) -> List[Recommendation]:
        """Find recommendations by any of the given authors, newest first."""
        author_list = list(authors)
        if not author_list:
            return []

        stmt = (
            select(recommendations_table)
            .where(recommendations_table.c.author.in_(author_list))
            .order_by(desc(recommendations_table.c.created_at))
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        return [row_to_recommendation(row._asdict()) for row in rows]

    async def find_without_origin(self) -> List[Recommendation]:
        """Find unstamped recommendations, oldest first."""
        stmt = (
            select(recommendations_table)
            .where(recommendations_table.c.origin_request_id.is_(None))
            .order_by(recommendations_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_recommendation(row._asdict()) for row in result.fetchall()]

    async def save(self, recommendation: Recommendation) -> Recommendation:
        """Save a new recommendation."""
        stmt = insert(recommendations_table).values(
            **recommendation_to_dict(recommendation)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return recommendation

    async def set_origin(
        self,
        recommendation_id: RecommendationId,
        request_id: RequestId,
        response_index: int,
    ) -> bool:
        """Stamp the origin onto an unstamped recommendation."""
        stmt = (
            update(recommendations_table)
            .where(
                and_(
                    recommendations_table.c.id == recommendation_id,
                    recommendations_table.c.origin_request_id.is_(None),
                )
            )
            .values(
                origin_request_id=request_id,
                origin_response_index=response_index,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]
