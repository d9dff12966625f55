"""Unit tests for FeedService."""

import pytest
from sqlalchemy.exc import OperationalError

from vouch.config import FeedSettings
from vouch.domain.error import RetrievalError
from vouch.domain.model.feed import ActivityFeedItem, RecommendationFeedItem
from vouch.domain.repository import (
    CommentRepository,
    RecommendationCommentRepository,
    RecommendationRequestRepository,
)
from vouch.domain.service import (
    FeedService,
    FriendshipService,
    RecommendationService,
    RequestService,
    ThreadService,
)
from vouch.domain.value import (
    ActivityCategory,
    Category,
    Collection,
    FeedFilter,
    ThreadKey,
)
from vouch.persistence.change_feed import InProcessChangeFeed
from vouch.persistence.repository.inmemory import (
    InMemoryFriendshipRepository,
    InMemoryRecommendationRepository,
)
from tests.conftest import ALICE, BOB, CAROL
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


class UnavailableRecommendationRepository(InMemoryRecommendationRepository):
    async def find_by_authors(self, authors):
        raise OperationalError("SELECT recommendations", {}, Exception("timeout"))


class UnavailableFriendshipRepository(InMemoryFriendshipRepository):
    async def find_accepted(self, identity):
        raise OperationalError("SELECT friendships", {}, Exception("timeout"))


async def befriend(env, first, second) -> None:
    friendship_service = await env.get(FriendshipService)
    pending = await friendship_service.send_request(first, second)
    await friendship_service.accept(pending.id, second)


class TestBuildFeed:
    """Tests for build_feed."""

    @pytest.mark.asyncio
    async def test_new_user_gets_empty_feed(self, unit_env):
        service = await unit_env.get(FeedService)

        snapshot = await service.build_feed(ALICE)

        assert snapshot.items == ()
        assert not snapshot.is_degraded

    @pytest.mark.asyncio
    async def test_request_answer_and_follow_up(self, unit_env):
        """Alice asks, Bob answers and shares, Alice follows up."""
        await befriend(unit_env, ALICE, BOB)
        requests = await unit_env.get(RequestService)
        threads = await unit_env.get(ThreadService)
        feed = await unit_env.get(FeedService)

        request = await requests.create_request(ALICE, Category.MOVIES, "Sci-fi?")
        bob_feed = await feed.build_feed(BOB)
        assert [i.category for i in bob_feed.items] == [
            ActivityCategory.FRIEND_NEEDS_HELP
        ]

        await requests.respond(request.id, BOB, "Arrival", 5)
        await threads.post_comment(
            ThreadKey(request_id=request.id, response_index=0), ALICE, "Thanks!"
        )

        alice_feed = await feed.build_feed(ALICE)
        activity = [i for i in alice_feed.items if isinstance(i, ActivityFeedItem)]
        shared = [i for i in alice_feed.items if isinstance(i, RecommendationFeedItem)]

        assert activity[0].category == ActivityCategory.MY_REQUEST_WITH_RESPONSES
        assert [c.text for c in activity[0].comments] == ["Thanks!"]
        assert shared[0].recommendation.title == "Arrival"
        assert shared[0].origin.request_id == request.id
        assert shared[0].origin.requester == ALICE

        bob_feed = await feed.build_feed(BOB)
        assert ActivityCategory.MY_RESPONSE_WITH_FOLLOWUPS in [
            i.category for i in bob_feed.items if isinstance(i, ActivityFeedItem)
        ]

    @pytest.mark.asyncio
    async def test_strangers_content_not_shown(self, unit_env):
        recommendations = await unit_env.get(RecommendationService)
        await recommendations.create_recommendation(CAROL, "Arrival", Category.MOVIES, 5)
        feed = await unit_env.get(FeedService)

        snapshot = await feed.build_feed(ALICE)

        assert snapshot.items == ()

    @pytest.mark.asyncio
    async def test_filter_applied(self, unit_env):
        await befriend(unit_env, ALICE, BOB)
        recommendations = await unit_env.get(RecommendationService)
        requests = await unit_env.get(RequestService)
        await recommendations.create_recommendation(BOB, "Arrival", Category.MOVIES, 5)
        await requests.create_request(BOB, Category.SERVICES, "Dentist?")
        feed = await unit_env.get(FeedService)

        movies = await feed.build_feed(ALICE, FeedFilter.parse("movies"))
        activity = await feed.build_feed(ALICE, FeedFilter.parse("activity"))

        assert [type(i) for i in movies.items] == [RecommendationFeedItem]
        assert [type(i) for i in activity.items] == [ActivityFeedItem]

    @pytest.mark.asyncio
    async def test_failed_stream_degrades_feed(self, unit_env):
        await befriend(unit_env, ALICE, BOB)
        requests = await unit_env.get(RequestService)
        await requests.create_request(BOB, Category.SERVICES, "Dentist?")
        service = FeedService(
            friendship_service=await unit_env.get(FriendshipService),
            recommendation_repository=UnavailableRecommendationRepository(),
            request_repository=await unit_env.get(RecommendationRequestRepository),
            comment_repository=await unit_env.get(CommentRepository),
            recommendation_comment_repository=await unit_env.get(
                RecommendationCommentRepository
            ),
        )

        snapshot = await service.build_feed(ALICE)

        assert snapshot.degraded_streams == (Collection.RECOMMENDATIONS.value,)
        # The remaining streams still produce items
        assert len(snapshot.items) == 1

    @pytest.mark.asyncio
    async def test_circle_failure_is_fatal(self, unit_env):
        change_feed = InProcessChangeFeed()
        friendships = FriendshipService(
            UnavailableFriendshipRepository(), change_feed, FeedSettings()
        )
        service = FeedService(
            friendship_service=friendships,
            recommendation_repository=InMemoryRecommendationRepository(),
            request_repository=await unit_env.get(RecommendationRequestRepository),
            comment_repository=await unit_env.get(CommentRepository),
            recommendation_comment_repository=await unit_env.get(
                RecommendationCommentRepository
            ),
        )

        with pytest.raises(RetrievalError):
            await service.build_feed(ALICE)
