"""In-memory recommendation repository for testing."""

from typing import Iterable, Optional

from vouch.domain.model.recommendation import Recommendation
from vouch.domain.repository.recommendation import RecommendationRepository
from vouch.domain.value import Identity, RecommendationId, RequestId


class InMemoryRecommendationRepository(RecommendationRepository):
    """In-memory implementation of RecommendationRepository for testing."""

    def __init__(self) -> None:
        self._recommendations: dict[RecommendationId, Recommendation] = {}

    async def find_by_id(
        self, recommendation_id: RecommendationId
    ) -> Optional[Recommendation]:
        """Find a recommendation by ID."""
        return self._recommendations.get(recommendation_id)

    async def find_by_authors(
        self, authors: Iterable[Identity]
    ) -> list[Recommendation]:
        """Find recommendations by any of the given authors, newest first."""
        wanted = set(authors)
        recommendations = [
            r for r in self._recommendations.values() if r.author in wanted
        ]
        recommendations.sort(key=lambda r: r.created_at, reverse=True)
        return recommendations

    async def find_without_origin(self) -> list[Recommendation]:
        """Find unstamped recommendations, oldest first."""
        recommendations = [
            r for r in self._recommendations.values() if not r.has_origin
        ]
        recommendations.sort(key=lambda r: r.created_at)
        return recommendations

    async def save(self, recommendation: Recommendation) -> Recommendation:
        """Save a new recommendation."""
        self._recommendations[recommendation.id] = recommendation
        return recommendation

    async def set_origin(
        self,
        recommendation_id: RecommendationId,
        request_id: RequestId,
        response_index: int,
    ) -> bool:
        """Stamp the origin onto an unstamped recommendation."""
        recommendation = self._recommendations.get(recommendation_id)
        if recommendation is None or recommendation.has_origin:
            return False

        # Create updated recommendation (since models are immutable)
        self._recommendations[recommendation_id] = recommendation.model_copy(
            update={
                "origin_request_id": request_id,
                "origin_response_index": response_index,
            }
        )
        return True
