"""Recommendation entity.

A recommendation is a rated product, service or movie that a user vouches
for. Recommendations are visible to the author's circle.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from vouch.domain.model.common import DomainModel, utc_now
from vouch.domain.value import Category, Handle, Identity, RecommendationId, RequestId


class Recommendation(DomainModel):
    """Recommendation entity.

    When a recommendation was shared while answering a request, it carries
    an explicit origin (request id and response index). Older records have
    no origin stamp and are linked heuristically by the context matcher.
    """

    id: RecommendationId
    author: Identity
    author_handle: Handle
    title: str = Field(min_length=1, max_length=200)
    category: Category
    rating: int = Field(ge=1, le=5)
    notes: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now)
    origin_request_id: Optional[RequestId] = None
    origin_response_index: Optional[int] = Field(default=None, ge=0)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Title must not be blank")
        return stripped

    @field_validator("notes")
    @classmethod
    def empty_notes_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @model_validator(mode="after")
    def validate_origin_pair(self) -> "Recommendation":
        """Origin request and index are set together or not at all."""
        if (self.origin_request_id is None) != (self.origin_response_index is None):
            raise ValueError("Origin request and response index must be set together")
        return self

    @property
    def has_origin(self) -> bool:
        return self.origin_request_id is not None
