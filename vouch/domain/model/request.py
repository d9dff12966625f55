"""Recommendation request aggregate.

A request asks the requester's circle for recommendations. Answers are
Response entities addressed by (request id, index); the index is assigned
when the response is appended and never changes, since comment threads
point at it.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator, model_validator

from vouch.domain.model.common import DomainModel, utc_now
from vouch.domain.value import (
    Category,
    Handle,
    Identity,
    RequestId,
    RequestStatus,
    ResponseId,
)


class Response(DomainModel):
    """Response entity: one recommendation given in answer to a request."""

    id: ResponseId
    request_id: RequestId
    index: int = Field(ge=0)
    responder: Identity
    responder_handle: Handle
    recommendation_text: str = Field(min_length=1, max_length=200)
    rating: int = Field(ge=1, le=5)
    notes: Optional[str] = Field(default=None, max_length=300)
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("recommendation_text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Recommendation must not be blank")
        return stripped

    @field_validator("notes")
    @classmethod
    def empty_notes_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None


class RecommendationRequest(DomainModel):
    """Recommendation request aggregate root.

    Responses are kept ordered by index; index i is always at position i.
    """

    id: RequestId
    requester: Identity
    requester_handle: Handle
    category: Category
    question: str = Field(min_length=1, max_length=300)
    description: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now)
    responses: tuple[Response, ...] = ()

    @field_validator("question")
    @classmethod
    def strip_question(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Question must not be blank")
        return stripped

    @field_validator("description")
    @classmethod
    def empty_description_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @model_validator(mode="after")
    def validate_response_positions(self) -> "RecommendationRequest":
        """Responses must belong to this request and sit at their own index."""
        for position, response in enumerate(self.responses):
            if response.request_id != self.id:
                raise ValueError("Response belongs to a different request")
            if response.index != position:
                raise ValueError(
                    f"Response index {response.index} stored at position {position}"
                )
        return self

    @property
    def status(self) -> RequestStatus:
        """Open until the first response arrives."""
        return RequestStatus.OPEN if not self.responses else RequestStatus.ANSWERED

    @property
    def is_open(self) -> bool:
        return self.status == RequestStatus.OPEN

    def response_at(self, index: int) -> Optional[Response]:
        """Return the response at an index, or None if there is none."""
        if 0 <= index < len(self.responses):
            return self.responses[index]
        return None

    def has_response_from(self, identity: Identity) -> bool:
        return any(r.responder == identity for r in self.responses)

    def with_response(self, response: Response) -> "RecommendationRequest":
        """Return a copy with a response appended at the end."""
        return self.model_copy(update={"responses": (*self.responses, response)})
