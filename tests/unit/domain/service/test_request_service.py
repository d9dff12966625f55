"""Unit tests for RequestService."""

from uuid import uuid4

import pytest

from vouch.domain.error import (
    BusinessRuleViolationError,
    NotFoundError,
    ValidationError,
    WriteConflictError,
)
from vouch.domain.repository import (
    ChangeFeed,
    RecommendationRepository,
    RecommendationRequestRepository,
)
from vouch.domain.service import FriendshipService, RequestService
from vouch.domain.value import Category, Collection, RequestId, RequestStatus
from vouch.persistence.change_feed import InProcessChangeFeed
from vouch.persistence.repository.inmemory import (
    InMemoryRecommendationRequestRepository,
)
from tests.conftest import ALICE, BOB, CAROL, make_response
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()


async def befriend(env, first, second) -> None:
    friendship_service = await env.get(FriendshipService)
    pending = await friendship_service.send_request(first, second)
    await friendship_service.accept(pending.id, second)


class TestCreateRequest:
    """Tests for create_request."""

    @pytest.mark.asyncio
    async def test_creates_open_request(self, unit_env):
        service = await unit_env.get(RequestService)

        request = await service.create_request(
            ALICE, Category.SERVICES, "  Good plumber near me?  "
        )

        assert request.status == RequestStatus.OPEN
        assert request.question == "Good plumber near me?"
        assert str(request.requester_handle) == "alice"

    @pytest.mark.asyncio
    async def test_blank_question_rejected(self, unit_env):
        service = await unit_env.get(RequestService)
        repo = await unit_env.get(RecommendationRequestRepository)

        with pytest.raises(ValidationError):
            await service.create_request(ALICE, Category.SERVICES, "   ")

        assert await repo.find_all() == []

    @pytest.mark.asyncio
    async def test_publishes_change(self, unit_env):
        service = await unit_env.get(RequestService)
        change_feed = await unit_env.get(ChangeFeed)
        seen = []
        change_feed.subscribe(Collection.RECOMMENDATION_REQUESTS, seen.append)

        await service.create_request(ALICE, Category.MOVIES, "Something funny?")

        assert seen == [Collection.RECOMMENDATION_REQUESTS]


class TestRespond:
    """Tests for respond."""

    @pytest.mark.asyncio
    async def test_friend_response_appended_and_shared(self, unit_env):
        await befriend(unit_env, ALICE, BOB)
        service = await unit_env.get(RequestService)
        request = await service.create_request(ALICE, Category.PRODUCTS, "Coffee?")

        response, recommendation = await service.respond(
            request.id, BOB, "Blue Bottle", 5, notes="Try the Giant Steps"
        )

        assert response.index == 0
        stored = await service.get_request(request.id)
        assert stored.status == RequestStatus.ANSWERED
        assert stored.responses[0].responder == BOB

        assert recommendation is not None
        assert recommendation.author == BOB
        assert recommendation.title == "Blue Bottle"
        assert recommendation.category == Category.PRODUCTS
        assert recommendation.origin_request_id == request.id
        assert recommendation.origin_response_index == 0

    @pytest.mark.asyncio
    async def test_indices_assigned_in_append_order(self, unit_env):
        await befriend(unit_env, ALICE, BOB)
        await befriend(unit_env, ALICE, CAROL)
        service = await unit_env.get(RequestService)
        request = await service.create_request(ALICE, Category.PRODUCTS, "Coffee?")

        first, _ = await service.respond(request.id, BOB, "Blue Bottle", 5)
        second, _ = await service.respond(request.id, CAROL, "Stumptown", 4)

        assert (first.index, second.index) == (0, 1)

    @pytest.mark.asyncio
    async def test_response_without_sharing(self, unit_env):
        await befriend(unit_env, ALICE, BOB)
        service = await unit_env.get(RequestService)
        recommendations = await unit_env.get(RecommendationRepository)
        request = await service.create_request(ALICE, Category.PRODUCTS, "Coffee?")

        _, recommendation = await service.respond(
            request.id, BOB, "Blue Bottle", 5, share_as_recommendation=False
        )

        assert recommendation is None
        assert await recommendations.find_by_authors([BOB]) == []

    @pytest.mark.asyncio
    async def test_cannot_respond_to_own_request(self, unit_env):
        service = await unit_env.get(RequestService)
        request = await service.create_request(ALICE, Category.PRODUCTS, "Coffee?")

        with pytest.raises(BusinessRuleViolationError):
            await service.respond(request.id, ALICE, "Blue Bottle", 5)

    @pytest.mark.asyncio
    async def test_stranger_cannot_respond(self, unit_env):
        service = await unit_env.get(RequestService)
        request = await service.create_request(ALICE, Category.PRODUCTS, "Coffee?")

        with pytest.raises(BusinessRuleViolationError, match="friends"):
            await service.respond(request.id, CAROL, "Blue Bottle", 5)

    @pytest.mark.asyncio
    async def test_invalid_rating_rejected_before_lookup(self, unit_env):
        """Validation runs first, even for a request that doesn't exist."""
        service = await unit_env.get(RequestService)

        with pytest.raises(ValidationError):
            await service.respond(RequestId(uuid4()), BOB, "Blue Bottle", 9)

    @pytest.mark.asyncio
    async def test_unknown_request(self, unit_env):
        service = await unit_env.get(RequestService)

        with pytest.raises(NotFoundError):
            await service.respond(RequestId(uuid4()), BOB, "Blue Bottle", 5)

    @pytest.mark.asyncio
    async def test_lost_append_race_is_a_write_conflict(self, unit_env):
        """A concurrent response taking the same index is not silently merged."""
        await befriend(unit_env, ALICE, BOB)
        await befriend(unit_env, ALICE, CAROL)

        class RacingRepository(InMemoryRecommendationRequestRepository):
            async def append_response(self, response):
                # Carol's response lands between our read and our append
                competing = make_response(response.request_id, response.index, CAROL)
                await super().append_response(competing)
                return await super().append_response(response)

        racing_repo = RacingRepository()
        service = RequestService(
            request_repository=racing_repo,
            recommendation_service=None,
            friendship_service=await unit_env.get(FriendshipService),
            change_feed=InProcessChangeFeed(),
        )
        request = await service.create_request(ALICE, Category.PRODUCTS, "Coffee?")

        with pytest.raises(WriteConflictError):
            await service.respond(
                request.id, BOB, "Blue Bottle", 5, share_as_recommendation=False
            )

        stored = await racing_repo.find_by_id(request.id)
        assert [r.responder for r in stored.responses] == [CAROL]
