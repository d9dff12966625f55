"""Recommendation repository interface."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from vouch.domain.model.recommendation import Recommendation
from vouch.domain.value import Identity, RecommendationId, RequestId


class RecommendationRepository(ABC):
    """Repository for Recommendation entity.

    Defines the contract for recommendation persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(
        self, recommendation_id: RecommendationId
    ) -> Optional[Recommendation]:
        """Find a recommendation by ID.

        Args:
            recommendation_id: The recommendation's unique identifier

        Returns:
            The recommendation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_authors(
        self, authors: Iterable[Identity]
    ) -> List[Recommendation]:
        """Find all recommendations written by any of the given authors.

        Args:
            authors: Identities whose recommendations to load

        Returns:
            Recommendations, newest first
        """
        pass

    @abstractmethod
    async def find_without_origin(self) -> List[Recommendation]:
        """Find recommendations that carry no origin stamp.

        Returns:
            Unstamped recommendations, oldest first
        """
        pass

    @abstractmethod
    async def save(self, recommendation: Recommendation) -> Recommendation:
        """Save a new recommendation.

        Args:
            recommendation: The recommendation to save

        Returns:
            The saved recommendation
        """
        pass

    @abstractmethod
    async def set_origin(
        self,
        recommendation_id: RecommendationId,
        request_id: RequestId,
        response_index: int,
    ) -> bool:
        """Stamp the origin onto a recommendation that has none.

        Args:
            recommendation_id: The recommendation to stamp
            request_id: Originating request
            response_index: Index of the originating response

        Returns:
            True if the stamp was written, False if the recommendation is
            missing or already stamped
        """
        pass
