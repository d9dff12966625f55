"""Feed item representations returned to clients.

Only handles are exposed; identities (email addresses) stay server-side.
"""

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from vouch.domain.model import (
    Comment,
    FeedItem,
    Recommendation,
    RecommendationFeedItem,
    RecommendationOrigin,
    RecommendationRequest,
    Response,
)
from vouch.domain.value import ActivityCategory, Category, RequestStatus


class OriginItem(BaseModel):
    """Request a recommendation was shared from."""

    request_id: str
    response_index: int
    requester_handle: str


class RecommendationItem(BaseModel):
    recommendation_id: str
    author_handle: str
    title: str
    category: Category
    rating: int
    notes: str | None
    created_at: datetime
    origin: OriginItem | None = None


class ResponseItem(BaseModel):
    response_id: str
    index: int
    responder_handle: str
    recommendation_text: str
    rating: int
    notes: str | None
    created_at: datetime


class RequestItem(BaseModel):
    request_id: str
    requester_handle: str
    category: Category
    question: str
    description: str | None
    status: RequestStatus
    created_at: datetime
    responses: list[ResponseItem]


class CommentItem(BaseModel):
    comment_id: str
    request_id: str
    response_index: int
    author_handle: str
    text: str
    created_at: datetime


class RecommendationEntry(BaseModel):
    """Feed entry for a recommendation."""

    kind: Literal["recommendation"] = "recommendation"
    item_key: str
    sort_timestamp: datetime
    recommendation: RecommendationItem
    comment_count: int


class ActivityEntry(BaseModel):
    """Feed entry for request activity relevant to the viewer."""

    kind: Literal["activity"] = "activity"
    item_key: str
    sort_timestamp: datetime
    category: ActivityCategory
    request: RequestItem
    comments: list[CommentItem]
    unread_count: int
    unread_by_thread: dict[int, int]


FeedEntry = Annotated[
    Union[RecommendationEntry, ActivityEntry], Field(discriminator="kind")
]


def to_origin_item(origin: RecommendationOrigin) -> OriginItem:
    return OriginItem(
        request_id=str(origin.request_id),
        response_index=origin.response_index,
        requester_handle=str(origin.requester_handle),
    )


def to_recommendation_item(
    recommendation: Recommendation, origin: RecommendationOrigin | None = None
) -> RecommendationItem:
    return RecommendationItem(
        recommendation_id=str(recommendation.id),
        author_handle=str(recommendation.author_handle),
        title=recommendation.title,
        category=recommendation.category,
        rating=recommendation.rating,
        notes=recommendation.notes,
        created_at=recommendation.created_at,
        origin=to_origin_item(origin) if origin else None,
    )


def to_response_item(response: Response) -> ResponseItem:
    return ResponseItem(
        response_id=str(response.id),
        index=response.index,
        responder_handle=str(response.responder_handle),
        recommendation_text=response.recommendation_text,
        rating=response.rating,
        notes=response.notes,
        created_at=response.created_at,
    )


def to_request_item(request: RecommendationRequest) -> RequestItem:
    return RequestItem(
        request_id=str(request.id),
        requester_handle=str(request.requester_handle),
        category=request.category,
        question=request.question,
        description=request.description,
        status=request.status,
        created_at=request.created_at,
        responses=[to_response_item(r) for r in request.responses],
    )


def to_comment_item(comment: Comment) -> CommentItem:
    return CommentItem(
        comment_id=str(comment.id),
        request_id=str(comment.request_id),
        response_index=comment.response_index,
        author_handle=str(comment.author_handle),
        text=comment.text,
        created_at=comment.created_at,
    )


def to_feed_entry(item: FeedItem) -> RecommendationEntry | ActivityEntry:
    if isinstance(item, RecommendationFeedItem):
        return RecommendationEntry(
            item_key=item.item_key,
            sort_timestamp=item.sort_timestamp,
            recommendation=to_recommendation_item(item.recommendation, item.origin),
            comment_count=item.comment_count,
        )
    return ActivityEntry(
        item_key=item.item_key,
        sort_timestamp=item.sort_timestamp,
        category=item.category,
        request=to_request_item(item.request),
        comments=[to_comment_item(c) for c in item.comments],
        unread_count=item.unread_count,
        unread_by_thread=dict(item.unread_by_thread),
    )
