"""Thread comment entity.

Thread comments are the private follow-up discussion between a requester
and one responder, attached to a single response of a request.
"""

from datetime import datetime

from pydantic import Field, field_validator

from vouch.domain.model.common import DomainModel, utc_now
from vouch.domain.value import CommentId, Handle, Identity, RequestId, ThreadKey


class Comment(DomainModel):
    """Comment in a two-party response thread."""

    id: CommentId
    request_id: RequestId
    response_index: int = Field(ge=0)
    author: Identity
    author_handle: Handle
    text: str = Field(min_length=1, max_length=500)
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Comment must not be blank")
        return stripped

    @property
    def thread_key(self) -> ThreadKey:
        return ThreadKey(request_id=self.request_id, response_index=self.response_index)
