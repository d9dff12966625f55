"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from vouch.config import Settings
from vouch.domain.repository import (
    ChangeFeed,
    CommentRepository,
    FeatureFlagRepository,
    FriendshipRepository,
    RecommendationCommentRepository,
    RecommendationRepository,
    RecommendationRequestRepository,
    VoteRepository,
)
from vouch.persistence.change_feed import InProcessChangeFeed, TransactionalChangeFeed
from vouch.persistence.database import create_engine, create_session_factory
from vouch.persistence.repository import (
    PostgresCommentRepository,
    PostgresFeatureFlagRepository,
    PostgresFriendshipRepository,
    PostgresRecommendationCommentRepository,
    PostgresRecommendationRepository,
    PostgresRecommendationRequestRepository,
    PostgresVoteRepository,
)
from vouch.util.di.base import ProviderBase
from vouch.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Swappable persistence component: repositories, session and change feed."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Postgres repositories sharing one session per request scope."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide the instrumented engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()
        logfire.info("Database engine disposed")

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_change_hub(self) -> InProcessChangeFeed:
        return InProcessChangeFeed()

    @provide(scope=Scope.REQUEST)
    def get_transactional_change_feed(
        self, hub: InProcessChangeFeed
    ) -> TransactionalChangeFeed:
        """Holds notifications until the request commits."""
        return TransactionalChangeFeed(hub)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        change_feed: TransactionalChangeFeed,
    ) -> AsyncIterator[AsyncSession]:
        """One transaction per request scope.

        Committed when the scope exits cleanly; buffered change
        notifications go out only after that commit.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Request transaction committed", changes=len(change_feed.pending))
                change_feed.flush()
            except Exception as e:
                logfire.warn(
                    "Request transaction rolled back",
                    error_type=type(e).__name__,
                    error=str(e),
                )
                await session.rollback()
                change_feed.discard()
                raise

    @provide(scope=Scope.REQUEST)
    def get_change_feed(
        self, change_feed: TransactionalChangeFeed, session: AsyncSession
    ) -> ChangeFeed:
        """Provide the change feed that writers publish to.

        Depends on the session so the flush on commit is always registered.
        """
        return change_feed

    @provide(scope=Scope.REQUEST)
    def get_friendship_repository(self, session: AsyncSession) -> FriendshipRepository:
        return PostgresFriendshipRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_recommendation_repository(
        self, session: AsyncSession
    ) -> RecommendationRepository:
        return PostgresRecommendationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_request_repository(
        self, session: AsyncSession
    ) -> RecommendationRequestRepository:
        return PostgresRecommendationRequestRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_recommendation_comment_repository(
        self, session: AsyncSession
    ) -> RecommendationCommentRepository:
        return PostgresRecommendationCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, session: AsyncSession) -> VoteRepository:
        return PostgresVoteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_feature_flag_repository(
        self, session: AsyncSession
    ) -> FeatureFlagRepository:
        return PostgresFeatureFlagRepository(session)
