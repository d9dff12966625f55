"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we map rows by hand.
Stored handles are a display cache: a missing one is re-derived from the
identity on read.
"""

from typing import Any, Dict, Iterable
from uuid import UUID

from vouch.domain.model import (
    Comment,
    Friendship,
    Recommendation,
    RecommendationComment,
    RecommendationRequest,
    Response,
    Vote,
)
from vouch.domain.model.friendship import pair_key
from vouch.domain.value import (
    Category,
    CommentId,
    FriendshipId,
    FriendshipStatus,
    Handle,
    Identity,
    RecommendationCommentId,
    RecommendationId,
    RequestId,
    ResponseId,
    VotableType,
    VoteId,
    VoteType,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _handle(stored: str | None, identity: str) -> Handle:
    return Handle(stored) if stored else Handle.from_identity(identity)


def row_to_friendship(row: Dict[str, Any]) -> Friendship:
    """Convert database row to Friendship domain model."""
    return Friendship(
        id=FriendshipId(_uuid(row["id"])),
        requester=Identity(row["requester"]),
        target=Identity(row["target"]),
        status=FriendshipStatus(row["status"]),
        created_at=row["created_at"],
        accepted_at=row.get("accepted_at"),
    )


def friendship_to_dict(friendship: Friendship) -> Dict[str, Any]:
    """Convert Friendship domain model to database dict."""
    return {
        "id": friendship.id,
        "requester": friendship.requester,
        "target": friendship.target,
        "pair_key": pair_key(friendship.requester, friendship.target),
        "status": friendship.status.value,
        "created_at": friendship.created_at,
        "accepted_at": friendship.accepted_at,
    }


def row_to_recommendation(row: Dict[str, Any]) -> Recommendation:
    """Convert database row to Recommendation domain model."""
    origin_request_id = row.get("origin_request_id")
    return Recommendation(
        id=RecommendationId(_uuid(row["id"])),
        author=Identity(row["author"]),
        author_handle=_handle(row.get("author_handle"), row["author"]),
        title=row["title"],
        category=Category(row["category"]),
        rating=row["rating"],
        notes=row.get("notes"),
        created_at=row["created_at"],
        origin_request_id=RequestId(_uuid(origin_request_id))
        if origin_request_id
        else None,
        origin_response_index=row.get("origin_response_index"),
    )


def recommendation_to_dict(recommendation: Recommendation) -> Dict[str, Any]:
    """Convert Recommendation domain model to database dict."""
    data = recommendation.model_dump()
    data["author_handle"] = str(recommendation.author_handle)
    data["category"] = recommendation.category.value
    return data


def row_to_response(row: Dict[str, Any]) -> Response:
    """Convert database row to Response domain model."""
    return Response(
        id=ResponseId(_uuid(row["id"])),
        request_id=RequestId(_uuid(row["request_id"])),
        index=row["index"],
        responder=Identity(row["responder"]),
        responder_handle=_handle(row.get("responder_handle"), row["responder"]),
        recommendation_text=row["recommendation_text"],
        rating=row["rating"],
        notes=row.get("notes"),
        created_at=row["created_at"],
    )


def response_to_dict(response: Response) -> Dict[str, Any]:
    """Convert Response domain model to database dict."""
    data = response.model_dump()
    data["responder_handle"] = str(response.responder_handle)
    return data


def row_to_request(
    row: Dict[str, Any], responses: Iterable[Response] = ()
) -> RecommendationRequest:
    """Convert database row plus its response rows to the request aggregate.

    Args:
        row: Request row as dict
        responses: The request's responses (any order)

    Returns:
        RecommendationRequest domain model with responses in index order
    """
    return RecommendationRequest(
        id=RequestId(_uuid(row["id"])),
        requester=Identity(row["requester"]),
        requester_handle=_handle(row.get("requester_handle"), row["requester"]),
        category=Category(row["category"]),
        question=row["question"],
        description=row.get("description"),
        created_at=row["created_at"],
        responses=tuple(sorted(responses, key=lambda r: r.index)),
    )


def request_to_dict(request: RecommendationRequest) -> Dict[str, Any]:
    """Convert RecommendationRequest to database dict (responses excluded)."""
    data = request.model_dump(exclude={"responses"})
    data["requester_handle"] = str(request.requester_handle)
    data["category"] = request.category.value
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to thread Comment domain model."""
    return Comment(
        id=CommentId(_uuid(row["id"])),
        request_id=RequestId(_uuid(row["request_id"])),
        response_index=row["response_index"],
        author=Identity(row["author"]),
        author_handle=_handle(row.get("author_handle"), row["author"]),
        text=row["text"],
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert thread Comment domain model to database dict."""
    data = comment.model_dump()
    data["author_handle"] = str(comment.author_handle)
    return data


def row_to_recommendation_comment(row: Dict[str, Any]) -> RecommendationComment:
    """Convert database row to RecommendationComment domain model."""
    return RecommendationComment(
        id=RecommendationCommentId(_uuid(row["id"])),
        recommendation_id=RecommendationId(_uuid(row["recommendation_id"])),
        author=Identity(row["author"]),
        author_handle=_handle(row.get("author_handle"), row["author"]),
        text=row["text"],
        created_at=row["created_at"],
    )


def recommendation_comment_to_dict(comment: RecommendationComment) -> Dict[str, Any]:
    """Convert RecommendationComment domain model to database dict."""
    data = comment.model_dump()
    data["author_handle"] = str(comment.author_handle)
    return data


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(_uuid(row["id"])),
        item_id=_uuid(row["item_id"]),
        item_type=VotableType(row["item_type"]),
        voter=Identity(row["voter"]),
        vote_type=VoteType(row["vote_type"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    data = vote.model_dump()
    data["item_type"] = vote.item_type.value
    data["vote_type"] = vote.vote_type.value
    return data
