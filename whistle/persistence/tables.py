"""SQLAlchemy table definitions for Whistle.

They match the schema defined in Alembic migrations. Posts and users live
in other services, so their IDs are stored without foreign keys.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE (flat, parent pointer only)
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, nullable=False),
    Column("author_id", UUID, nullable=False),
    # Not a foreign key: parents may be purged or imported out of order
    Column("parent_id", UUID, nullable=True),
    Column("body", Text, nullable=False),
    Column("score", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("edited_at", TIMESTAMP(timezone=True), nullable=True),
    Column("is_removed", Boolean, nullable=False, server_default="false"),
    Column("removed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("removed_by", UUID, nullable=True),
    Column("removal_reason", Text, nullable=True),
    Column("is_distinguished", Boolean, nullable=False, server_default="false"),
    # Set when the comment came with a paid boost; the boost may be missing
    Column("boost_id", UUID, nullable=True),
    CheckConstraint("length(body) > 0", name="body_not_empty"),
)

Index(
    "idx_comments_post_created",
    comments_table.c.post_id,
    comments_table.c.created_at,
    comments_table.c.id,
)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# POST BOOSTS TABLE (paid boosts, written by the payment flow)
# ============================================================================
post_boosts_table = Table(
    "post_boosts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, nullable=False),
    Column("user_id", UUID, nullable=False),
    Column("amount_cents", Integer, nullable=False),
    Column("currency", String(3), nullable=False, server_default="usd"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("amount_cents >= 0", name="amount_not_negative"),
)

Index("idx_post_boosts_post_id", post_boosts_table.c.post_id)

# ============================================================================
# PROFILES TABLE (author display data)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("user_id", UUID, primary_key=True),
    Column("username", String(255), nullable=True),
    Column("display_name", String(255), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# COMMENT VOTES TABLE (one row per user per comment)
# ============================================================================
comment_votes_table = Table(
    "comment_votes",
    metadata,
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("user_id", UUID, primary_key=True),
    Column("direction", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("direction IN (1, -1)", name="valid_direction"),
)

Index("idx_comment_votes_user_id", comment_votes_table.c.user_id)

# ============================================================================
# USER ROLES TABLE
# ============================================================================
user_roles_table = Table(
    "user_roles",
    metadata,
    Column("user_id", UUID, primary_key=True),
    Column("role", String(20), primary_key=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("role IN ('admin', 'moderator', 'user')", name="valid_role"),
)

# ============================================================================
# COMMENT EDITS TABLE (previous bodies)
# ============================================================================
comment_edits_table = Table(
    "comment_edits",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "comment_id",
        UUID,
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("previous_body", Text, nullable=False),
    Column("edited_by", UUID, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_comment_edits_comment_id",
    comment_edits_table.c.comment_id,
    comment_edits_table.c.created_at,
)
