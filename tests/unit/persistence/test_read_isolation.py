"""Feed reads against a session with Postgres abort semantics."""

import pytest
from sqlalchemy.exc import InternalError, OperationalError

from vouch.config import FeedSettings
from vouch.domain.service import FeedService, FriendshipService
from vouch.domain.value import Collection
from vouch.persistence.change_feed import InProcessChangeFeed
from vouch.persistence.repository import (
    PostgresCommentRepository,
    PostgresFriendshipRepository,
    PostgresRecommendationCommentRepository,
    PostgresRecommendationRepository,
    PostgresRecommendationRequestRepository,
)
from tests.conftest import ALICE


class EmptyResult:
    def fetchall(self):
        return []

    def fetchone(self):
        return None


class Savepoint:
    def __init__(self, session: "AbortingSession") -> None:
        self.session = session

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is not None:
            # ROLLBACK TO SAVEPOINT clears the aborted state
            self.session.aborted = False
        return False


class AbortingSession:
    """Fails reads of ``failing`` tables; once a statement fails, every
    later statement fails until a savepoint is rolled back."""

    def __init__(self, failing: set[str]) -> None:
        self.failing = failing
        self.aborted = False
        self.tables: list[str] = []

    def begin_nested(self) -> Savepoint:
        return Savepoint(self)

    async def execute(self, stmt):
        if self.aborted:
            raise InternalError(
                str(stmt), {}, Exception("current transaction is aborted")
            )
        table = stmt.get_final_froms()[0].name
        self.tables.append(table)
        if table in self.failing:
            self.aborted = True
            raise OperationalError(str(stmt), {}, Exception("statement timeout"))
        return EmptyResult()


def build_feed_service(session: AbortingSession) -> FeedService:
    return FeedService(
        friendship_service=FriendshipService(
            PostgresFriendshipRepository(session), InProcessChangeFeed(), FeedSettings()
        ),
        recommendation_repository=PostgresRecommendationRepository(session),
        request_repository=PostgresRecommendationRequestRepository(session),
        comment_repository=PostgresCommentRepository(session),
        recommendation_comment_repository=PostgresRecommendationCommentRepository(
            session
        ),
    )


class TestReadIsolation:
    """A failed stream read leaves the transaction usable for the next one."""

    @pytest.mark.asyncio
    async def test_next_stream_loads_after_a_failed_one(self):
        session = AbortingSession(failing={"recommendations"})
        feed_service = build_feed_service(session)
        circle = await feed_service.resolve_circle(ALICE)

        sources, degraded = await feed_service.load_sources(ALICE, circle)

        assert degraded == frozenset({Collection.RECOMMENDATIONS})
        assert "recommendation_requests" in session.tables
        assert not session.aborted

    @pytest.mark.asyncio
    async def test_circle_resolves_after_a_failed_stream(self):
        session = AbortingSession(failing={"recommendations"})
        feed_service = build_feed_service(session)
        await feed_service.load_sources(ALICE, frozenset({ALICE}))

        circle = await feed_service.resolve_circle(ALICE)

        assert circle == frozenset({ALICE})
