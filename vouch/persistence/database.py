"""Database engine and session factory for PostgreSQL.

Every connection runs in UTC and at READ COMMITTED. A live feed connection
keeps one session open for as long as the client is connected, and each
refresh must see rows committed since the previous one.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from vouch.config import Settings

APPLICATION_NAME = "vouch-api"


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine (asyncpg driver)."""
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        pool_recycle=settings.database.pool_recycle_seconds,
        isolation_level="READ COMMITTED",
        connect_args={
            "server_settings": {
                "application_name": APPLICATION_NAME,
                "timezone": "UTC",
            }
        },
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the session factory.

    Mapped rows are turned into frozen domain models straight away, so
    nothing needs refreshing after commit.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
