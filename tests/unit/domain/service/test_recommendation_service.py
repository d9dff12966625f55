"""Unit tests for RecommendationService."""

from uuid import uuid4

import pytest

from vouch.domain.error import AccessDeniedError, NotFoundError, ValidationError
from vouch.domain.repository import (
    RecommendationRepository,
    RecommendationRequestRepository,
)
from vouch.domain.service import FriendshipService, RecommendationService
from vouch.domain.value import Category, RecommendationId
from tests.conftest import (
    ALICE,
    BOB,
    CAROL,
    make_recommendation,
    make_request,
    make_response,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def befriend(env, first, second) -> None:
    friendship_service = await env.get(FriendshipService)
    pending = await friendship_service.send_request(first, second)
    await friendship_service.accept(pending.id, second)


class TestCreateRecommendation:
    """Tests for create_recommendation."""

    @pytest.mark.asyncio
    async def test_creates_unstamped_recommendation(self, unit_env):
        service = await unit_env.get(RecommendationService)

        recommendation = await service.create_recommendation(
            ALICE, "Arrival", Category.MOVIES, 5, notes="Bring tissues"
        )

        assert recommendation.author == ALICE
        assert str(recommendation.author_handle) == "alice"
        assert not recommendation.has_origin

    @pytest.mark.asyncio
    async def test_rating_out_of_range(self, unit_env):
        service = await unit_env.get(RecommendationService)

        with pytest.raises(ValidationError):
            await service.create_recommendation(ALICE, "Arrival", Category.MOVIES, 0)


class TestComments:
    """Tests for public recommendation comments."""

    @pytest.mark.asyncio
    async def test_add_and_list_oldest_first(self, unit_env):
        service = await unit_env.get(RecommendationService)
        await befriend(unit_env, ALICE, BOB)
        await befriend(unit_env, ALICE, CAROL)
        recommendation = await service.create_recommendation(
            ALICE, "Arrival", Category.MOVIES, 5
        )

        await service.add_comment(recommendation.id, BOB, "Loved it")
        await service.add_comment(recommendation.id, CAROL, "  Same here  ")
        comments = await service.list_comments(recommendation.id, ALICE)

        assert [c.text for c in comments] == ["Loved it", "Same here"]
        assert [c.author for c in comments] == [BOB, CAROL]

    @pytest.mark.asyncio
    async def test_length_limit(self, unit_env):
        service = await unit_env.get(RecommendationService)
        await befriend(unit_env, ALICE, BOB)
        recommendation = await service.create_recommendation(
            ALICE, "Arrival", Category.MOVIES, 5
        )

        await service.add_comment(recommendation.id, BOB, "x" * 300)
        with pytest.raises(ValidationError):
            await service.add_comment(recommendation.id, BOB, "x" * 301)

    @pytest.mark.asyncio
    async def test_unknown_recommendation(self, unit_env):
        service = await unit_env.get(RecommendationService)
        missing = RecommendationId(uuid4())

        with pytest.raises(NotFoundError):
            await service.add_comment(missing, BOB, "Hello?")
        with pytest.raises(NotFoundError):
            await service.list_comments(missing, BOB)


    @pytest.mark.asyncio
    async def test_stranger_cannot_read_or_comment(self, unit_env):
        service = await unit_env.get(RecommendationService)
        recommendation = await service.create_recommendation(
            ALICE, "Arrival", Category.MOVIES, 5
        )

        with pytest.raises(AccessDeniedError):
            await service.add_comment(recommendation.id, CAROL, "stranger here")
        with pytest.raises(AccessDeniedError):
            await service.list_comments(recommendation.id, CAROL)

    @pytest.mark.asyncio
    async def test_author_may_comment_on_own_recommendation(self, unit_env):
        service = await unit_env.get(RecommendationService)
        recommendation = await service.create_recommendation(
            ALICE, "Arrival", Category.MOVIES, 5
        )

        await service.add_comment(recommendation.id, ALICE, "Still holds up")

        assert len(await service.list_comments(recommendation.id, ALICE)) == 1

class TestBackfillOrigins:
    """Tests for backfill_origins."""

    @pytest.mark.asyncio
    async def test_stamps_matching_recommendations_once(self, unit_env):
        service = await unit_env.get(RecommendationService)
        recommendations = await unit_env.get(RecommendationRepository)
        requests = await unit_env.get(RecommendationRequestRepository)

        request = make_request(ALICE)
        request = request.with_response(
            make_response(request.id, 0, BOB, recommendation_text="Arrival")
        )
        await requests.save(request)
        matching = await recommendations.save(
            make_recommendation(BOB, title="Arrival", category=Category.MOVIES)
        )
        unrelated = await recommendations.save(make_recommendation(CAROL))

        assert await service.backfill_origins() == 1
        assert await service.backfill_origins() == 0

        stamped = await recommendations.find_by_id(matching.id)
        assert stamped.origin_request_id == request.id
        assert stamped.origin_response_index == 0
        assert not (await recommendations.find_by_id(unrelated.id)).has_origin

    @pytest.mark.asyncio
    async def test_nothing_to_do(self, unit_env):
        service = await unit_env.get(RecommendationService)

        assert await service.backfill_origins() == 0
