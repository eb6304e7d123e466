"""comment_schema

Create the schema for threaded comments:
- Comments (flat rows with a parent pointer, soft delete)
- Post boosts (paid boosts referenced by comments)
- Profiles (author display data)
- Comment votes (one signed vote per user per comment)
- User roles (moderation capability)
- Comment edits (previous bodies)

Revision ID: 3c1f0a7d92e4
Revises:
Create Date: 2026-10-19 10:12:44.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f0a7d92e4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    if nullable:
        return sa.Column(name, sa.TIMESTAMP(timezone=True), nullable=True)
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False, server_default="0"),
        _timestamp("created_at"),
        sa.Column("is_edited", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("edited_at", nullable=True),
        sa.Column("is_removed", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("removed_at", nullable=True),
        sa.Column("removed_by", sa.UUID(), nullable=True),
        sa.Column("removal_reason", sa.Text(), nullable=True),
        sa.Column(
            "is_distinguished", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("boost_id", sa.UUID(), nullable=True),
        sa.CheckConstraint("length(body) > 0", name="body_not_empty"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_comments_post_created", "comments", ["post_id", "created_at", "id"]
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index("idx_comments_author_id", "comments", ["author_id"])

    # ========================================================================
    # POST_BOOSTS table
    # ========================================================================
    op.create_table(
        "post_boosts",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False, server_default="usd"),
        _timestamp("created_at"),
        sa.CheckConstraint("amount_cents >= 0", name="amount_not_negative"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_post_boosts_post_id", "post_boosts", ["post_id"])

    # ========================================================================
    # PROFILES table
    # ========================================================================
    op.create_table(
        "profiles",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("username", sa.String(255), nullable=True),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("user_id"),
    )

    # ========================================================================
    # COMMENT_VOTES table
    # ========================================================================
    op.create_table(
        "comment_votes",
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("direction", sa.SmallInteger(), nullable=False),
        _timestamp("created_at"),
        sa.CheckConstraint("direction IN (1, -1)", name="valid_direction"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("comment_id", "user_id"),
    )
    op.create_index("idx_comment_votes_user_id", "comment_votes", ["user_id"])

    # ========================================================================
    # USER_ROLES table
    # ========================================================================
    op.create_table(
        "user_roles",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        _timestamp("created_at"),
        sa.CheckConstraint(
            "role IN ('admin', 'moderator', 'user')", name="valid_role"
        ),
        sa.PrimaryKeyConstraint("user_id", "role"),
    )

    # ========================================================================
    # COMMENT_EDITS table
    # ========================================================================
    op.create_table(
        "comment_edits",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("previous_body", sa.Text(), nullable=False),
        sa.Column("edited_by", sa.UUID(), nullable=False),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_comment_edits_comment_id", "comment_edits", ["comment_id", "created_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("comment_edits")
    op.drop_table("user_roles")
    op.drop_table("comment_votes")
    op.drop_table("profiles")
    op.drop_table("post_boosts")
    op.drop_table("comments")
