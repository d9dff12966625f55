"""Unit tests for the recommendation comment use cases."""

import pytest

from vouch.application.usecase.recommendation import (
    CommentOnRecommendationRequest,
    CommentOnRecommendationUseCase,
    GetRecommendationCommentsRequest,
    GetRecommendationCommentsUseCase,
)
from vouch.domain.error import AccessDeniedError, BusinessRuleViolationError
from vouch.domain.repository import FeatureFlagRepository
from vouch.domain.service import FriendshipService, RecommendationService
from vouch.domain.value import Category
from tests.conftest import ALICE, BOB, CAROL
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestRecommendationComments:
    """Tests for commenting on and listing recommendation comments."""

    @pytest.mark.asyncio
    async def test_comment_then_list(self, unit_env):
        friendships = await unit_env.get(FriendshipService)
        pending = await friendships.send_request(ALICE, BOB)
        await friendships.accept(pending.id, BOB)
        recommendations = await unit_env.get(RecommendationService)
        recommendation = await recommendations.create_recommendation(
            ALICE, "Arrival", Category.MOVIES, 5
        )
        comment = await unit_env.get(CommentOnRecommendationUseCase)
        listing = await unit_env.get(GetRecommendationCommentsUseCase)

        created = await comment.execute(
            CommentOnRecommendationRequest(
                recommendation_id=str(recommendation.id), author=BOB, text="Loved it"
            )
        )
        response = await listing.execute(
            GetRecommendationCommentsRequest(
                recommendation_id=str(recommendation.id), viewer=ALICE
            )
        )

        assert created.comment.author_handle == "bob"
        assert response.total == 1
        assert response.comments[0].comment_id == created.comment.comment_id

    @pytest.mark.asyncio
    async def test_disabled_by_flag(self, unit_env):
        flags = await unit_env.get(FeatureFlagRepository)
        await flags.set("enable_recommendation_comments", False)
        recommendations = await unit_env.get(RecommendationService)
        recommendation = await recommendations.create_recommendation(
            ALICE, "Arrival", Category.MOVIES, 5
        )
        comment = await unit_env.get(CommentOnRecommendationUseCase)
        listing = await unit_env.get(GetRecommendationCommentsUseCase)

        with pytest.raises(BusinessRuleViolationError):
            await comment.execute(
                CommentOnRecommendationRequest(
                    recommendation_id=str(recommendation.id), author=BOB, text="Hi"
                )
            )
        with pytest.raises(BusinessRuleViolationError):
            await listing.execute(
                GetRecommendationCommentsRequest(
                    recommendation_id=str(recommendation.id), viewer=BOB
                )
            )

    @pytest.mark.asyncio
    async def test_stranger_denied(self, unit_env):
        recommendations = await unit_env.get(RecommendationService)
        recommendation = await recommendations.create_recommendation(
            ALICE, "Arrival", Category.MOVIES, 5
        )
        listing = await unit_env.get(GetRecommendationCommentsUseCase)

        with pytest.raises(AccessDeniedError):
            await listing.execute(
                GetRecommendationCommentsRequest(
                    recommendation_id=str(recommendation.id), viewer=CAROL
                )
            )
