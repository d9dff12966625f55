"""In-memory recommendation comment repository for testing."""

from collections import Counter
from typing import Iterable

from vouch.domain.model.recommendation_comment import RecommendationComment
from vouch.domain.repository.recommendation_comment import (
    RecommendationCommentRepository,
)
from vouch.domain.value import RecommendationCommentId, RecommendationId


class InMemoryRecommendationCommentRepository(RecommendationCommentRepository):
    """In-memory implementation of RecommendationCommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[RecommendationCommentId, RecommendationComment] = {}

    async def find_by_recommendation(
        self, recommendation_id: RecommendationId
    ) -> list[RecommendationComment]:
        """Find comments on a recommendation, oldest first."""
        comments = [
            c
            for c in self._comments.values()
            if c.recommendation_id == recommendation_id
        ]
        comments.sort(key=lambda c: c.created_at)
        return comments

    async def count_by_recommendations(
        self, recommendation_ids: Iterable[RecommendationId]
    ) -> dict[RecommendationId, int]:
        """Count comments per recommendation (batch query)."""
        wanted = set(recommendation_ids)
        if not wanted:
            return {}
        return dict(
            Counter(
                c.recommendation_id
                for c in self._comments.values()
                if c.recommendation_id in wanted
            )
        )

    async def save(self, comment: RecommendationComment) -> RecommendationComment:
        """Save a new comment."""
        self._comments[comment.id] = comment
        return comment
