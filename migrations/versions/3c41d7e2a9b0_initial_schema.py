"""initial_schema

Create the schema for Vouch:
- Friendships (one row per unordered identity pair)
- Recommendation requests and their appended responses
- Recommendations (optionally stamped with the request/response they came from)
- Thread comments (private requester <-> responder follow-ups)
- Recommendation comments (public)
- Votes (up/down, one per voter per item)
- Feature flags (stored overrides)

Revision ID: 3c41d7e2a9b0
Revises:
Create Date: 2025-11-02 18:12:44.310512

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c41d7e2a9b0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _created_at_column(name: str = "created_at") -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _category_column() -> sa.Column:
    return sa.Column(
        "category",
        postgresql.ENUM(
            "products", "services", "movies", name="category", create_type=False
        ),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    # Enable required extensions
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE category AS ENUM ('products', 'services', 'movies');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE friendship_status AS ENUM ('pending', 'accepted');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE votable_type AS ENUM ('recommendation', 'request');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE vote_type AS ENUM ('up', 'down');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # FRIENDSHIPS table
    # ========================================================================
    op.create_table(
        "friendships",
        _id_column(),
        sa.Column("requester", sa.String(320), nullable=False),
        sa.Column("target", sa.String(320), nullable=False),
        sa.Column("pair_key", sa.String(641), nullable=False),  # "a|b", sorted
        sa.Column(
            "status",
            postgresql.ENUM(
                "pending", "accepted", name="friendship_status", create_type=False
            ),
            nullable=False,
            server_default="pending",
        ),
        _created_at_column(),
        sa.Column("accepted_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("pair_key", name="friendships_pair_key_key"),
        sa.CheckConstraint("requester <> target", name="friendship_distinct_sides"),
    )
    op.create_index("idx_friendships_requester", "friendships", ["requester"])
    op.create_index("idx_friendships_target", "friendships", ["target"])

    # ========================================================================
    # RECOMMENDATION_REQUESTS table
    # ========================================================================
    op.create_table(
        "recommendation_requests",
        _id_column(),
        sa.Column("requester", sa.String(320), nullable=False),
        sa.Column("requester_handle", sa.String(255), nullable=True),
        _category_column(),
        sa.Column("question", sa.String(300), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_requests_requester", "recommendation_requests", ["requester"]
    )
    op.create_index(
        "idx_requests_created_at",
        "recommendation_requests",
        [sa.text("created_at DESC")],
    )

    # ========================================================================
    # REQUEST_RESPONSES table (index assigned at append, never reused)
    # ========================================================================
    op.create_table(
        "request_responses",
        _id_column(),
        sa.Column("request_id", sa.UUID(), nullable=False),
        sa.Column("index", sa.Integer(), nullable=False),
        sa.Column("responder", sa.String(320), nullable=False),
        sa.Column("responder_handle", sa.String(255), nullable=True),
        sa.Column("recommendation_text", sa.String(200), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("notes", sa.String(300), nullable=True),
        _created_at_column(),
        sa.ForeignKeyConstraint(
            ["request_id"], ["recommendation_requests.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("request_id", "index", name="unique_response_index"),
        sa.CheckConstraint('"index" >= 0', name="response_index_non_negative"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="response_rating_range"),
    )
    op.create_index("idx_responses_responder", "request_responses", ["responder"])

    # ========================================================================
    # RECOMMENDATIONS table
    # ========================================================================
    op.create_table(
        "recommendations",
        _id_column(),
        sa.Column("author", sa.String(320), nullable=False),
        sa.Column("author_handle", sa.String(255), nullable=True),
        sa.Column("title", sa.String(200), nullable=False),
        _category_column(),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("notes", sa.String(500), nullable=True),
        _created_at_column(),
        sa.Column("origin_request_id", sa.UUID(), nullable=True),
        sa.Column("origin_response_index", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ["origin_request_id"],
            ["recommendation_requests.id"],
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "rating BETWEEN 1 AND 5", name="recommendation_rating_range"
        ),
        sa.CheckConstraint(
            "(origin_request_id IS NULL) = (origin_response_index IS NULL)",
            name="recommendation_origin_pair",
        ),
    )
    op.create_index("idx_recommendations_author", "recommendations", ["author"])
    op.create_index(
        "idx_recommendations_created_at",
        "recommendations",
        [sa.text("created_at DESC")],
    )

    # ========================================================================
    # THREAD_COMMENTS table
    # ========================================================================
    op.create_table(
        "thread_comments",
        _id_column(),
        sa.Column("request_id", sa.UUID(), nullable=False),
        sa.Column("response_index", sa.Integer(), nullable=False),
        sa.Column("author", sa.String(320), nullable=False),
        sa.Column("author_handle", sa.String(255), nullable=True),
        sa.Column("text", sa.String(500), nullable=False),
        _created_at_column(),
        sa.ForeignKeyConstraint(
            ["request_id"], ["recommendation_requests.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_thread_comments_thread",
        "thread_comments",
        ["request_id", "response_index"],
    )

    # ========================================================================
    # RECOMMENDATION_COMMENTS table
    # ========================================================================
    op.create_table(
        "recommendation_comments",
        _id_column(),
        sa.Column("recommendation_id", sa.UUID(), nullable=False),
        sa.Column("author", sa.String(320), nullable=False),
        sa.Column("author_handle", sa.String(255), nullable=True),
        sa.Column("text", sa.String(300), nullable=False),
        _created_at_column(),
        sa.ForeignKeyConstraint(
            ["recommendation_id"], ["recommendations.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_recommendation_comments_recommendation",
        "recommendation_comments",
        ["recommendation_id"],
    )

    # ========================================================================
    # VOTES table
    # ========================================================================
    op.create_table(
        "votes",
        _id_column(),
        sa.Column("item_id", sa.UUID(), nullable=False),
        sa.Column(
            "item_type",
            postgresql.ENUM(
                "recommendation", "request", name="votable_type", create_type=False
            ),
            nullable=False,
        ),
        sa.Column("voter", sa.String(320), nullable=False),
        sa.Column(
            "vote_type",
            postgresql.ENUM("up", "down", name="vote_type", create_type=False),
            nullable=False,
        ),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("item_id", "item_type", "voter", name="unique_vote"),
    )
    op.create_index("idx_votes_item", "votes", ["item_type", "item_id"])

    # ========================================================================
    # FEATURE_FLAGS table
    # ========================================================================
    op.create_table(
        "feature_flags",
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        _created_at_column("updated_at"),
        sa.PrimaryKeyConstraint("name"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("feature_flags")
    op.drop_index("idx_votes_item", table_name="votes")
    op.drop_table("votes")
    op.drop_index(
        "idx_recommendation_comments_recommendation",
        table_name="recommendation_comments",
    )
    op.drop_table("recommendation_comments")
    op.drop_index("idx_thread_comments_thread", table_name="thread_comments")
    op.drop_table("thread_comments")
    op.drop_index("idx_recommendations_created_at", table_name="recommendations")
    op.drop_index("idx_recommendations_author", table_name="recommendations")
    op.drop_table("recommendations")
    op.drop_index("idx_responses_responder", table_name="request_responses")
    op.drop_table("request_responses")
    op.drop_index("idx_requests_created_at", table_name="recommendation_requests")
    op.drop_index("idx_requests_requester", table_name="recommendation_requests")
    op.drop_table("recommendation_requests")
    op.drop_index("idx_friendships_target", table_name="friendships")
    op.drop_index("idx_friendships_requester", table_name="friendships")
    op.drop_table("friendships")

    op.execute("DROP TYPE IF EXISTS vote_type")
    op.execute("DROP TYPE IF EXISTS votable_type")
    op.execute("DROP TYPE IF EXISTS friendship_status")
    op.execute("DROP TYPE IF EXISTS category")
