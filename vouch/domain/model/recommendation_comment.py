"""Recommendation comment entity."""

from datetime import datetime

from pydantic import Field, field_validator

from vouch.domain.model.common import DomainModel, utc_now
from vouch.domain.value import (
    Handle,
    Identity,
    RecommendationCommentId,
    RecommendationId,
)


class RecommendationComment(DomainModel):
    """Public comment on a recommendation, visible to anyone who sees it."""

    id: RecommendationCommentId
    recommendation_id: RecommendationId
    author: Identity
    author_handle: Handle
    text: str = Field(min_length=1, max_length=300)
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Comment must not be blank")
        return stripped
