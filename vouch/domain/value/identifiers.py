"""Strongly typed identifiers for Vouch domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Core domain entity identifiers
RecommendationId = NewType("RecommendationId", UUID)
RequestId = NewType("RequestId", UUID)
ResponseId = NewType("ResponseId", UUID)
CommentId = NewType("CommentId", UUID)
RecommendationCommentId = NewType("RecommendationCommentId", UUID)
VoteId = NewType("VoteId", UUID)
FriendshipId = NewType("FriendshipId", UUID)

# A user's identity is their (normalised) email address
Identity = NewType("Identity", str)


def normalize_identity(value: str) -> Identity:
    """Normalise a raw email into an Identity.

    Raises:
        ValueError: If the value is not an email-like string
    """
    cleaned = value.strip().lower()
    local, sep, domain = cleaned.partition("@")
    if not sep or not local or not domain:
        raise ValueError(f"Identity must be an email address: {value!r}")
    return Identity(cleaned)
