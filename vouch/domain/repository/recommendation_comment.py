"""Recommendation comment repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, List

from vouch.domain.model.recommendation_comment import RecommendationComment
from vouch.domain.value import RecommendationId


class RecommendationCommentRepository(ABC):
    """Repository for public comments on recommendations."""

    @abstractmethod
    async def find_by_recommendation(
        self, recommendation_id: RecommendationId
    ) -> List[RecommendationComment]:
        """Find comments on a recommendation, oldest first."""
        pass

    @abstractmethod
    async def count_by_recommendations(
        self, recommendation_ids: Iterable[RecommendationId]
    ) -> dict[RecommendationId, int]:
        """Count comments per recommendation (batch query).

        Args:
            recommendation_ids: Recommendations to count comments for

        Returns:
            Mapping of recommendation id to comment count; recommendations
            without comments may be absent
        """
        pass

    @abstractmethod
    async def save(self, comment: RecommendationComment) -> RecommendationComment:
        """Save a new comment."""
        pass
