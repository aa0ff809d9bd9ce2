"""SQLAlchemy table definitions for Inkwell.

Core tables only; rows are mapped to pydantic domain models by hand in
``mappers``. Must match the schema created by the Alembic migrations.
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
)
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

metadata = MetaData()

# ============================================================================
# USERS TABLE (read-only mirror of accounts)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("username", String(50), nullable=True),
    Column("first_name", String(100), nullable=False, server_default=""),
    Column("last_name", String(100), nullable=False, server_default=""),
    Column("email", String(255), nullable=False),
    Column(
        "role",
        Enum("user", "author", "admin", name="user_role", create_type=False),
        nullable=False,
        server_default="user",
    ),
)

Index("idx_users_email", users_table.c.email, unique=True)

# ============================================================================
# CATEGORIES TABLE
# ============================================================================
# No foreign key on parent_id: the hierarchy is a weak reference and
# acyclicity is enforced by CategoryService, not the database.
categories_table = Table(
    "categories",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("name", String(50), nullable=False),
    Column("slug", String(100), nullable=False),
    Column("description", String(500), nullable=False, server_default=""),
    Column("parent_id", UUID(as_uuid=True), nullable=True),
    Column("color", String(7), nullable=False, server_default="#1976d2"),
    Column("icon", String(100), nullable=False, server_default=""),
    Column("meta_title", String(60), nullable=False, server_default=""),
    Column("meta_description", String(160), nullable=False, server_default=""),
    Column(
        "status",
        Enum("active", "inactive", name="category_status", create_type=False),
        nullable=False,
        server_default="active",
    ),
    Column("sort_order", Integer, nullable=False, server_default="0"),
    Column("total_posts", Integer, nullable=False, server_default="0"),
    Column("total_views", Integer, nullable=False, server_default="0"),
    Column("created_by", UUID(as_uuid=True), ForeignKey("users.id"), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("parent_id IS NULL OR parent_id <> id", name="not_own_parent"),
)

Index("idx_categories_slug", categories_table.c.slug, unique=True)
Index(
    "idx_categories_parent_sort",
    categories_table.c.parent_id,
    categories_table.c.sort_order,
)
Index("idx_categories_status", categories_table.c.status)

# ============================================================================
# POSTS TABLE (the slice stats and guards depend on)
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("title", String(200), nullable=False),
    Column(
        "category_id", UUID(as_uuid=True), ForeignKey("categories.id"), nullable=False
    ),
    Column(
        "status",
        Enum(
            "draft",
            "published",
            "scheduled",
            "archived",
            name="post_status",
            create_type=False,
        ),
        nullable=False,
        server_default="draft",
    ),
    Column("views", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_posts_category_status", posts_table.c.category_id, posts_table.c.status)
Index("idx_posts_created_at", posts_table.c.created_at)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
# Author columns are a snapshot taken at creation. parent_id is a weak
# reference so deleting a comment leaves its replies in place.
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column(
        "post_id",
        UUID(as_uuid=True),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("parent_id", UUID(as_uuid=True), nullable=True),
    Column("author_name", String(100), nullable=False),
    Column("author_email", String(255), nullable=False),
    Column("author_website", Text, nullable=False, server_default=""),
    Column("author_ip_address", String(45), nullable=False, server_default=""),
    Column("author_user_agent", Text, nullable=False, server_default=""),
    Column("content", Text, nullable=False),
    Column(
        "status",
        Enum(
            "pending",
            "approved",
            "spam",
            "trash",
            name="comment_status",
            create_type=False,
        ),
        nullable=False,
        server_default="pending",
    ),
    Column(
        "likes", ARRAY(UUID(as_uuid=True)), nullable=False, server_default="{}"
    ),
    Column(
        "dislikes", ARRAY(UUID(as_uuid=True)), nullable=False, server_default="{}"
    ),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("edited_at", TIMESTAMP(timezone=True), nullable=True),
    Column("edited_by", UUID(as_uuid=True), nullable=True),
    Column("moderation_notes", String(1000), nullable=False, server_default=""),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("char_length(content) BETWEEN 1 AND 5000", name="content_length"),
)

Index(
    "idx_comments_post_parent_status",
    comments_table.c.post_id,
    comments_table.c.parent_id,
    comments_table.c.status,
)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_status_created_at", comments_table.c.status, comments_table.c.created_at)
