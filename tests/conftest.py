"""Test configuration and shared builders.

The ``make_*`` helpers build valid domain entities with sensible defaults;
pass keyword arguments to override any field.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from vouch.domain.model import (
    Comment,
    Friendship,
    Recommendation,
    RecommendationRequest,
    Response,
)
from vouch.domain.value import (
    Category,
    CommentId,
    FriendshipId,
    FriendshipStatus,
    Handle,
    Identity,
    RecommendationId,
    RequestId,
    ResponseId,
)

ALICE = Identity("alice@example.com")
BOB = Identity("bob@example.com")
CAROL = Identity("carol@example.com")
DAVE = Identity("dave@example.com")

BASE_TIME = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    """Timestamp ``minutes`` after a fixed base time."""
    return BASE_TIME + timedelta(minutes=minutes)


def make_recommendation(author: Identity = ALICE, **overrides) -> Recommendation:
    data = {
        "id": RecommendationId(uuid4()),
        "author": author,
        "author_handle": Handle.from_identity(author),
        "title": "Blue Bottle Coffee",
        "category": Category.PRODUCTS,
        "rating": 5,
        "created_at": at(0),
    }
    data.update(overrides)
    return Recommendation(**data)


def make_response(
    request_id: RequestId, index: int = 0, responder: Identity = BOB, **overrides
) -> Response:
    data = {
        "id": ResponseId(uuid4()),
        "request_id": request_id,
        "index": index,
        "responder": responder,
        "responder_handle": Handle.from_identity(responder),
        "recommendation_text": "Blue Bottle Coffee",
        "rating": 4,
        "created_at": at(10 + index),
    }
    data.update(overrides)
    return Response(**data)


def make_request(
    requester: Identity = ALICE,
    responders: tuple[Identity, ...] = (),
    **overrides,
) -> RecommendationRequest:
    """Build a request, appending one response per responder in order."""
    request_id = overrides.pop("id", None) or RequestId(uuid4())
    data = {
        "id": request_id,
        "requester": requester,
        "requester_handle": Handle.from_identity(requester),
        "category": Category.PRODUCTS,
        "question": "Best coffee beans?",
        "created_at": at(0),
        "responses": tuple(
            make_response(request_id, index, responder)
            for index, responder in enumerate(responders)
        ),
    }
    data.update(overrides)
    return RecommendationRequest(**data)


def make_comment(
    request_id: RequestId,
    response_index: int = 0,
    author: Identity = ALICE,
    **overrides,
) -> Comment:
    data = {
        "id": CommentId(uuid4()),
        "request_id": request_id,
        "response_index": response_index,
        "author": author,
        "author_handle": Handle.from_identity(author),
        "text": "Thanks, which roast?",
        "created_at": at(20),
    }
    data.update(overrides)
    return Comment(**data)


def make_friendship(
    requester: Identity = ALICE,
    target: Identity = BOB,
    accepted: bool = True,
    **overrides,
) -> Friendship:
    data = {
        "id": FriendshipId(uuid4()),
        "requester": requester,
        "target": target,
        "status": FriendshipStatus.ACCEPTED if accepted else FriendshipStatus.PENDING,
        "created_at": at(0),
        "accepted_at": at(1) if accepted else None,
    }
    data.update(overrides)
    return Friendship(**data)
