"""SQLAlchemy Core tables.

Kept in step with the Alembic migrations by hand; identities are stored
as lower-cased email strings.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

CATEGORY = Enum("products", "services", "movies", name="category", create_type=False)

# ============================================================================
# FRIENDSHIPS TABLE
# ============================================================================
friendships_table = Table(
    "friendships",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("requester", String(320), nullable=False),
    Column("target", String(320), nullable=False),
    # Sorted "a|b" identity pair; one friendship per unordered pair
    Column("pair_key", String(641), nullable=False, unique=True),
    Column(
        "status",
        Enum("pending", "accepted", name="friendship_status", create_type=False),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("requester <> target", name="friendship_distinct_sides"),
)

Index("idx_friendships_requester", friendships_table.c.requester)
Index("idx_friendships_target", friendships_table.c.target)

# ============================================================================
# RECOMMENDATION REQUESTS TABLE
# ============================================================================
recommendation_requests_table = Table(
    "recommendation_requests",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("requester", String(320), nullable=False),
    Column("requester_handle", String(255), nullable=True),  # Display cache
    Column("category", CATEGORY, nullable=False),
    Column("question", String(300), nullable=False),
    Column("description", String(500), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_requests_requester", recommendation_requests_table.c.requester)
Index("idx_requests_created_at", recommendation_requests_table.c.created_at.desc())

# ============================================================================
# REQUEST RESPONSES TABLE
# ============================================================================
request_responses_table = Table(
    "request_responses",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "request_id",
        UUID,
        ForeignKey("recommendation_requests.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("index", Integer, nullable=False),  # Position, assigned at append
    Column("responder", String(320), nullable=False),
    Column("responder_handle", String(255), nullable=True),  # Display cache
    Column("recommendation_text", String(200), nullable=False),
    Column("rating", Integer, nullable=False),
    Column("notes", String(300), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("request_id", "index", name="unique_response_index"),
    CheckConstraint('"index" >= 0', name="response_index_non_negative"),
    CheckConstraint("rating BETWEEN 1 AND 5", name="response_rating_range"),
)

Index("idx_responses_responder", request_responses_table.c.responder)

# ============================================================================
# RECOMMENDATIONS TABLE
# ============================================================================
recommendations_table = Table(
    "recommendations",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("author", String(320), nullable=False),
    Column("author_handle", String(255), nullable=True),  # Display cache
    Column("title", String(200), nullable=False),
    Column("category", CATEGORY, nullable=False),
    Column("rating", Integer, nullable=False),
    Column("notes", String(500), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "origin_request_id",
        UUID,
        ForeignKey("recommendation_requests.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("origin_response_index", Integer, nullable=True),
    CheckConstraint("rating BETWEEN 1 AND 5", name="recommendation_rating_range"),
    CheckConstraint(
        "(origin_request_id IS NULL) = (origin_response_index IS NULL)",
        name="recommendation_origin_pair",
    ),
)

Index("idx_recommendations_author", recommendations_table.c.author)
Index("idx_recommendations_created_at", recommendations_table.c.created_at.desc())

# ============================================================================
# THREAD COMMENTS TABLE (requester <-> responder)
# ============================================================================
thread_comments_table = Table(
    "thread_comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "request_id",
        UUID,
        ForeignKey("recommendation_requests.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("response_index", Integer, nullable=False),
    Column("author", String(320), nullable=False),
    Column("author_handle", String(255), nullable=True),  # Display cache
    Column("text", String(500), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_thread_comments_thread",
    thread_comments_table.c.request_id,
    thread_comments_table.c.response_index,
)

# ============================================================================
# RECOMMENDATION COMMENTS TABLE (public)
# ============================================================================
recommendation_comments_table = Table(
    "recommendation_comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "recommendation_id",
        UUID,
        ForeignKey("recommendations.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("author", String(320), nullable=False),
    Column("author_handle", String(255), nullable=True),  # Display cache
    Column("text", String(300), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_recommendation_comments_recommendation",
    recommendation_comments_table.c.recommendation_id,
)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("item_id", UUID, nullable=False),
    Column(
        "item_type",
        Enum("recommendation", "request", name="votable_type", create_type=False),
        nullable=False,
    ),
    Column("voter", String(320), nullable=False),
    Column(
        "vote_type",
        Enum("up", "down", name="vote_type", create_type=False),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("item_id", "item_type", "voter", name="unique_vote"),
)

Index("idx_votes_item", votes_table.c.item_type, votes_table.c.item_id)

# ============================================================================
# FEATURE FLAGS TABLE
# ============================================================================
feature_flags_table = Table(
    "feature_flags",
    metadata,
    Column("name", String(100), primary_key=True),
    Column("enabled", Boolean, nullable=False),
    Column("description", Text, nullable=True),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)
