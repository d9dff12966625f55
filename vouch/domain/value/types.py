"""Domain value objects for Vouch.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from vouch.domain.value.common import RootValueObject, ValueObject
from vouch.domain.value.identifiers import RequestId


class Category(str, Enum):
    """What a recommendation or request is about."""

    PRODUCTS = "products"
    SERVICES = "services"
    MOVIES = "movies"


class RequestStatus(str, Enum):
    """Derived status of a recommendation request.

    A request has no explicit closing transition: it is open until the
    first response arrives.
    """

    OPEN = "open"
    ANSWERED = "answered"


class ActivityCategory(str, Enum):
    """Role-based category of a request as seen by one viewer."""

    MY_OPEN_REQUEST = "my_open_request"
    MY_REQUEST_WITH_RESPONSES = "my_request_with_responses"
    MY_RESPONSE_WITH_FOLLOWUPS = "my_response_with_followups"
    FRIEND_NEEDS_HELP = "friend_needs_help"


class FriendshipStatus(str, Enum):
    """Status of a friendship."""

    PENDING = "pending"
    ACCEPTED = "accepted"


class VotableType(str, Enum):
    """Type of entity that can be voted on."""

    RECOMMENDATION = "recommendation"
    REQUEST = "request"


class VoteType(str, Enum):
    """Direction of a helpfulness vote."""

    UP = "up"
    DOWN = "down"


class Collection(str, Enum):
    """Stored collections that publish change notifications."""

    RECOMMENDATIONS = "recommendations"
    RECOMMENDATION_REQUESTS = "recommendation_requests"
    RECOMMENDATION_COMMENTS = "recommendation_comments"
    FRIENDSHIPS = "friendships"
    RECOMMENDATION_VOUCH_COMMENTS = "recommendation_vouch_comments"
    VOTES = "votes"


class Handle(RootValueObject[str]):
    """Display label for a user.

    Always derivable from the identity (the part before the '@'); stored
    copies are a display cache only.
    """

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Handle must be 1-255 characters")
        return v

    @classmethod
    def from_identity(cls, identity: str) -> "Handle":
        """Derive the handle from an identity."""
        return cls(identity.split("@", 1)[0])


class ThreadKey(ValueObject):
    """Address of a two-party comment thread: one response of one request."""

    request_id: RequestId
    response_index: int = Field(ge=0)

    def __str__(self) -> str:
        return f"{self.request_id}#{self.response_index}"


class FeedFilterMode(str, Enum):
    """How a feed is narrowed at view time."""

    ALL = "all"
    RECOMMENDATIONS = "recommendations"
    ACTIVITY = "activity"
    CATEGORY = "category"
    ACTIVITY_CATEGORY = "activity_category"


class FeedFilter(ValueObject):
    """View-time feed filter.

    Accepts the short forms used by the feed tabs: ``all``,
    ``recommendations``, ``activity``, a content category
    (``products``/``services``/``movies``) or an activity category value.
    """

    mode: FeedFilterMode = FeedFilterMode.ALL
    category: Optional[Category] = None
    activity_category: Optional[ActivityCategory] = None

    @classmethod
    def parse(cls, value: str | None) -> "FeedFilter":
        """Parse a filter from its query-string form.

        Raises:
            ValueError: If the value names no known filter
        """
        if value is None or value == "" or value == FeedFilterMode.ALL.value:
            return cls()
        if value == FeedFilterMode.RECOMMENDATIONS.value:
            return cls(mode=FeedFilterMode.RECOMMENDATIONS)
        if value == FeedFilterMode.ACTIVITY.value:
            return cls(mode=FeedFilterMode.ACTIVITY)
        try:
            return cls(mode=FeedFilterMode.CATEGORY, category=Category(value))
        except ValueError:
            pass
        try:
            return cls(
                mode=FeedFilterMode.ACTIVITY_CATEGORY,
                activity_category=ActivityCategory(value),
            )
        except ValueError:
            raise ValueError(f"Unknown feed filter: {value}") from None

    def __str__(self) -> str:
        if self.mode == FeedFilterMode.CATEGORY and self.category:
            return self.category.value
        if self.mode == FeedFilterMode.ACTIVITY_CATEGORY and self.activity_category:
            return self.activity_category.value
        return self.mode.value
