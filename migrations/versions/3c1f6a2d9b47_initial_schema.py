"""initial_schema

Create the Inkwell schema:
- Users (read-only mirror of blog accounts)
- Categories (flat storage of the category tree, derived stats columns)
- Posts (the slice category stats and delete guards depend on)
- Comments (author snapshot, weak parent reference, reaction arrays)

Revision ID: 3c1f6a2d9b47
Revises:
Create Date: 2026-10-19 09:12:44.518302

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f6a2d9b47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUM_TYPES = {
    "user_role": ("user", "author", "admin"),
    "category_status": ("active", "inactive"),
    "post_status": ("draft", "published", "scheduled", "archived"),
    "comment_status": ("pending", "approved", "spam", "trash"),
}


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    for name, values in ENUM_TYPES.items():
        labels = ", ".join(f"'{v}'" for v in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # Users
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("username", sa.String(50), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("last_name", sa.String(100), nullable=False, server_default=""),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column(
            "role",
            postgresql.ENUM(name="user_role", create_type=False),
            nullable=False,
            server_default="user",
        ),
    )
    op.create_index("idx_users_email", "users", ["email"], unique=True)

    # Categories
    op.create_table(
        "categories",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=False, server_default=""),
        sa.Column("parent_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("color", sa.String(7), nullable=False, server_default="#1976d2"),
        sa.Column("icon", sa.String(100), nullable=False, server_default=""),
        sa.Column("meta_title", sa.String(60), nullable=False, server_default=""),
        sa.Column(
            "meta_description", sa.String(160), nullable=False, server_default=""
        ),
        sa.Column(
            "status",
            postgresql.ENUM(name="category_status", create_type=False),
            nullable=False,
            server_default="active",
        ),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_posts", sa.Integer, nullable=False, server_default="0"),
        sa.Column("total_views", sa.Integer, nullable=False, server_default="0"),
        sa.Column(
            "created_by",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint(
            "parent_id IS NULL OR parent_id <> id", name="not_own_parent"
        ),
    )
    op.create_index("idx_categories_slug", "categories", ["slug"], unique=True)
    op.create_index(
        "idx_categories_parent_sort", "categories", ["parent_id", "sort_order"]
    )
    op.create_index("idx_categories_status", "categories", ["status"])

    # Posts
    op.create_table(
        "posts",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column(
            "category_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("categories.id"),
            nullable=False,
        ),
        sa.Column(
            "status",
            postgresql.ENUM(name="post_status", create_type=False),
            nullable=False,
            server_default="draft",
        ),
        sa.Column("views", sa.Integer, nullable=False, server_default="0"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )
    op.create_index(
        "idx_posts_category_status", "posts", ["category_id", "status"]
    )
    op.create_index("idx_posts_created_at", "posts", ["created_at"])

    # Comments
    op.create_table(
        "comments",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "post_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("posts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("parent_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("author_name", sa.String(100), nullable=False),
        sa.Column("author_email", sa.String(255), nullable=False),
        sa.Column("author_website", sa.Text, nullable=False, server_default=""),
        sa.Column(
            "author_ip_address", sa.String(45), nullable=False, server_default=""
        ),
        sa.Column("author_user_agent", sa.Text, nullable=False, server_default=""),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(name="comment_status", create_type=False),
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "likes",
            postgresql.ARRAY(postgresql.UUID(as_uuid=True)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column(
            "dislikes",
            postgresql.ARRAY(postgresql.UUID(as_uuid=True)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("is_edited", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("edited_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("edited_by", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column(
            "moderation_notes", sa.String(1000), nullable=False, server_default=""
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint(
            "char_length(content) BETWEEN 1 AND 5000", name="content_length"
        ),
    )
    op.create_index(
        "idx_comments_post_parent_status",
        "comments",
        ["post_id", "parent_id", "status"],
    )
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index(
        "idx_comments_status_created_at", "comments", ["status", "created_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("comments")
    op.drop_table("posts")
    op.drop_table("categories")
    op.drop_table("users")

    for name in reversed(list(ENUM_TYPES)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
