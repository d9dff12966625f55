"""Unit tests for the request use cases."""

import pytest

from vouch.application.usecase.request import (
    CreateRequestRequest,
    CreateRequestUseCase,
    RespondToRequestRequest,
    RespondToRequestUseCase,
)
from vouch.domain.error import ValidationError
from vouch.domain.service import FriendshipService
from vouch.domain.value import Category, RequestStatus
from tests.conftest import ALICE, BOB
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestRespondToRequestUseCase:
    """Tests for RespondToRequestUseCase."""

    @pytest.mark.asyncio
    async def test_shared_recommendation_carries_origin(self, unit_env):
        friendships = await unit_env.get(FriendshipService)
        pending = await friendships.send_request(ALICE, BOB)
        await friendships.accept(pending.id, BOB)
        create = await unit_env.get(CreateRequestUseCase)
        respond = await unit_env.get(RespondToRequestUseCase)

        created = await create.execute(
            CreateRequestRequest(
                requester=ALICE, category=Category.MOVIES, question="Sci-fi?"
            )
        )
        assert created.request.status == RequestStatus.OPEN
        assert created.request.responses == []

        response = await respond.execute(
            RespondToRequestRequest(
                request_id=created.request.request_id,
                responder=BOB,
                recommendation_text="Arrival",
                rating=5,
            )
        )

        assert response.response.index == 0
        assert response.response.responder_handle == "bob"
        assert response.recommendation.title == "Arrival"
        assert response.recommendation.origin.request_id == created.request.request_id
        assert response.recommendation.origin.requester_handle == "alice"

    @pytest.mark.asyncio
    async def test_malformed_request_id(self, unit_env):
        respond = await unit_env.get(RespondToRequestUseCase)

        with pytest.raises(ValidationError, match="Invalid identifier"):
            await respond.execute(
                RespondToRequestRequest(
                    request_id="not-a-uuid",
                    responder=BOB,
                    recommendation_text="Arrival",
                    rating=5,
                )
            )
