"""Unit tests for live feed and thread subscriptions."""

import asyncio
from contextlib import asynccontextmanager

import pytest
from sqlalchemy.exc import OperationalError

from vouch.domain.error import AccessDeniedError, RetrievalError
from vouch.domain.model.feed import RecommendationFeedItem
from vouch.domain.repository import (
    ChangeFeed,
    CommentRepository,
    RecommendationCommentRepository,
    RecommendationRequestRepository,
)
from vouch.domain.service import (
    FeedService,
    FeedSubscription,
    FriendshipService,
    RecommendationService,
    RequestService,
    ThreadService,
    ThreadSubscription,
)
from vouch.domain.service.subscription import expand_dirty
from vouch.domain.value import Category, Collection, FeedFilter, ThreadKey
from vouch.persistence.repository.inmemory import InMemoryRecommendationRepository
from tests.conftest import ALICE, BOB, CAROL, make_recommendation
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class FlakyRecommendationRepository(InMemoryRecommendationRepository):
    def __init__(self) -> None:
        super().__init__()
        self.available = True

    async def find_by_authors(self, authors):
        if not self.available:
            raise OperationalError("SELECT recommendations", {}, Exception("timeout"))
        return await super().find_by_authors(authors)


async def befriend(env, first, second) -> None:
    friendship_service = await env.get(FriendshipService)
    pending = await friendship_service.send_request(first, second)
    await friendship_service.accept(pending.id, second)


class ScopeCounter:
    """Hands out one service per load and tracks open scopes."""

    def __init__(self, service) -> None:
        self.service = service
        self.entered = 0
        self.open = 0

    @asynccontextmanager
    async def __call__(self):
        self.entered += 1
        self.open += 1
        try:
            yield self.service
        finally:
            self.open -= 1


async def subscribe(env, viewer=ALICE, feed_filter=None) -> FeedSubscription:
    return FeedSubscription(
        viewer,
        ScopeCounter(await env.get(FeedService)),
        await env.get(ChangeFeed),
        feed_filter,
    )


class TestExpandDirty:
    def test_friendships_invalidate_all_content(self):
        assert expand_dirty({Collection.FRIENDSHIPS}) == {
            Collection.FRIENDSHIPS,
            Collection.RECOMMENDATIONS,
            Collection.RECOMMENDATION_REQUESTS,
            Collection.RECOMMENDATION_COMMENTS,
            Collection.RECOMMENDATION_VOUCH_COMMENTS,
        }

    def test_leaf_stream_stays_alone(self):
        assert expand_dirty({Collection.VOTES}) == {Collection.VOTES}


class TestFeedSubscription:
    """Tests for FeedSubscription."""

    @pytest.mark.asyncio
    async def test_start_publishes_first_version(self, unit_env):
        subscription = await subscribe(unit_env)

        snapshot = await subscription.start()

        assert snapshot.version == 1
        assert subscription.latest is snapshot

    @pytest.mark.asyncio
    async def test_each_load_uses_its_own_scope(self, unit_env):
        scopes = ScopeCounter(await unit_env.get(FeedService))
        change_feed = await unit_env.get(ChangeFeed)
        subscription = FeedSubscription(ALICE, scopes, change_feed)

        await subscription.start()
        assert (scopes.entered, scopes.open) == (1, 0)

        change_feed.publish(Collection.RECOMMENDATIONS)
        await subscription.refresh()
        assert (scopes.entered, scopes.open) == (2, 0)

    @pytest.mark.asyncio
    async def test_change_marks_dirty_and_refresh_republishes(self, unit_env):
        await befriend(unit_env, ALICE, BOB)
        subscription = await subscribe(unit_env)
        await subscription.start()
        recommendations = await unit_env.get(RecommendationService)

        await recommendations.create_recommendation(BOB, "Arrival", Category.MOVIES, 5)
        assert Collection.RECOMMENDATIONS in subscription.pending

        snapshot = await subscription.refresh()

        assert snapshot.version == 2
        assert [i.recommendation.title for i in snapshot.items] == ["Arrival"]
        assert subscription.pending == frozenset()

    @pytest.mark.asyncio
    async def test_new_friend_brings_their_content(self, unit_env):
        recommendations = await unit_env.get(RecommendationService)
        await recommendations.create_recommendation(BOB, "Arrival", Category.MOVIES, 5)
        subscription = await subscribe(unit_env)
        first = await subscription.start()
        assert first.items == ()

        await befriend(unit_env, ALICE, BOB)
        snapshot = await subscription.refresh()

        assert len(snapshot.items) == 1

    @pytest.mark.asyncio
    async def test_close_releases_every_listener(self, unit_env):
        change_feed = await unit_env.get(ChangeFeed)
        subscription = await subscribe(unit_env)
        await subscription.start()
        assert change_feed.listener_count() > 0

        subscription.close()
        subscription.close()

        assert change_feed.listener_count() == 0
        assert subscription.closed
        assert await subscription.refresh() is None

    @pytest.mark.asyncio
    async def test_set_filter_does_not_reaggregate(self, unit_env):
        await befriend(unit_env, ALICE, BOB)
        recommendations = await unit_env.get(RecommendationService)
        requests = await unit_env.get(RequestService)
        await recommendations.create_recommendation(BOB, "Arrival", Category.MOVIES, 5)
        await requests.create_request(BOB, Category.SERVICES, "Dentist?")
        subscription = await subscribe(unit_env)
        full = await subscription.start()
        passes = subscription._aggregator.passes

        narrowed = subscription.set_filter(FeedFilter.parse("recommendations"))

        assert len(full.items) == 2
        assert [type(i) for i in narrowed.items] == [RecommendationFeedItem]
        assert narrowed.version == full.version + 1
        assert subscription._aggregator.passes == passes

    @pytest.mark.asyncio
    async def test_failed_reload_keeps_last_known_good(self, unit_env):
        flaky = FlakyRecommendationRepository()
        await flaky.save(make_recommendation(BOB, title="Arrival"))
        await befriend(unit_env, ALICE, BOB)
        feed_service = FeedService(
            friendship_service=await unit_env.get(FriendshipService),
            recommendation_repository=flaky,
            request_repository=await unit_env.get(RecommendationRequestRepository),
            comment_repository=await unit_env.get(CommentRepository),
            recommendation_comment_repository=await unit_env.get(
                RecommendationCommentRepository
            ),
        )
        change_feed = await unit_env.get(ChangeFeed)
        subscription = FeedSubscription(ALICE, ScopeCounter(feed_service), change_feed)
        await subscription.start()

        flaky.available = False
        change_feed.publish(Collection.RECOMMENDATIONS)
        degraded = await subscription.refresh()

        assert degraded.degraded_streams == (Collection.RECOMMENDATIONS.value,)
        assert [i.recommendation.title for i in degraded.items] == ["Arrival"]

        flaky.available = True
        change_feed.publish(Collection.RECOMMENDATIONS)
        recovered = await subscription.refresh()

        assert not recovered.is_degraded

    @pytest.mark.asyncio
    async def test_updates_yields_on_change(self, unit_env):
        await befriend(unit_env, ALICE, BOB)
        subscription = await subscribe(unit_env)
        updates = subscription.updates()

        first = await updates.__anext__()
        recommendations = await unit_env.get(RecommendationService)
        await recommendations.create_recommendation(BOB, "Arrival", Category.MOVIES, 5)
        second = await asyncio.wait_for(updates.__anext__(), timeout=1)

        assert second.version == first.version + 1
        subscription.close()
        with pytest.raises(StopAsyncIteration):
            await asyncio.wait_for(updates.__anext__(), timeout=1)

    @pytest.mark.asyncio
    async def test_circle_failure_on_start_closes(self, unit_env):
        class BrokenFeedService:
            async def resolve_circle(self, viewer):
                raise RetrievalError("friendships", "timeout")

        change_feed = await unit_env.get(ChangeFeed)
        subscription = FeedSubscription(
            ALICE, ScopeCounter(BrokenFeedService()), change_feed
        )

        with pytest.raises(RetrievalError):
            await subscription.start()

        assert subscription.closed
        assert change_feed.listener_count() == 0


class TestThreadSubscription:
    """Tests for ThreadSubscription."""

    async def open_thread(self, env):
        await befriend(env, ALICE, BOB)
        requests = await env.get(RequestService)
        request = await requests.create_request(ALICE, Category.MOVIES, "Sci-fi?")
        await requests.respond(request.id, BOB, "Arrival", 5)
        return ThreadKey(request_id=request.id, response_index=0)

    @pytest.mark.asyncio
    async def test_delivers_only_new_comments(self, unit_env):
        key = await self.open_thread(unit_env)
        threads = await unit_env.get(ThreadService)
        await threads.post_comment(key, ALICE, "Thanks!")
        subscription = ThreadSubscription(
            key, BOB, threads, await unit_env.get(ChangeFeed)
        )

        existing = await subscription.start()
        await threads.post_comment(key, BOB, "Enjoy")
        new = await subscription.refresh()

        assert [c.text for c in existing] == ["Thanks!"]
        assert [c.text for c in new] == ["Enjoy"]
        assert await subscription.refresh() == []
        subscription.close()

    @pytest.mark.asyncio
    async def test_outsider_cannot_subscribe(self, unit_env):
        key = await self.open_thread(unit_env)
        change_feed = await unit_env.get(ChangeFeed)
        subscription = ThreadSubscription(
            key, CAROL, await unit_env.get(ThreadService), change_feed
        )

        with pytest.raises(AccessDeniedError):
            await subscription.start()

        assert change_feed.listener_count(Collection.RECOMMENDATION_COMMENTS) == 0
