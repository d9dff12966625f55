"""PostgreSQL implementation of FeatureFlag repository."""

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from vouch.domain.repository import FeatureFlagRepository
from vouch.persistence.tables import feature_flags_table


class PostgresFeatureFlagRepository(FeatureFlagRepository):
    """Feature flag overrides stored in the feature_flags table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_all(self) -> dict[str, bool]:
        stmt = select(feature_flags_table.c.name, feature_flags_table.c.enabled)
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            rows = result.fetchall()
        return {row.name: row.enabled for row in rows}

    async def set(self, name: str, enabled: bool) -> None:
        stmt = insert(feature_flags_table).values(name=name, enabled=enabled)
        stmt = stmt.on_conflict_do_update(
            index_elements=[feature_flags_table.c.name],
            set_={"enabled": enabled, "updated_at": func.now()},
        )
        await self.session.execute(stmt)
        await self.session.flush()
