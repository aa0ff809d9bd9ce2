"""Mappers between database rows and domain models.

Domain models are frozen pydantic models, so rows are mapped by hand
rather than through SQLAlchemy's ORM.
"""

from typing import Any, Dict
from uuid import UUID

from inkwell.domain.model import (
    Category,
    CategoryStats,
    Comment,
    CommentAuthor,
    Post,
    User,
)
from inkwell.domain.value import (
    CategoryId,
    CategoryStatus,
    CommentId,
    CommentStatus,
    Email,
    HexColor,
    PostId,
    PostStatus,
    Slug,
    UserId,
    UserRole,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return _uuid(value) if value is not None else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(_uuid(row["id"])),
        username=row.get("username"),
        first_name=row.get("first_name") or "",
        last_name=row.get("last_name") or "",
        email=Email(row["email"]),
        role=UserRole(row["role"]),
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return {
        "id": user.id,
        "username": user.username,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "email": user.email.root,
        "role": user.role.value,
    }


def row_to_category(row: Dict[str, Any]) -> Category:
    """Convert database row to Category domain model.

    Stats are stored flat as ``total_posts``/``total_views`` columns.
    """
    parent_id = _optional_uuid(row.get("parent_id"))
    return Category(
        id=CategoryId(_uuid(row["id"])),
        name=row["name"],
        slug=Slug(row["slug"]),
        description=row.get("description") or "",
        parent_id=CategoryId(parent_id) if parent_id else None,
        color=HexColor(row["color"]),
        icon=row.get("icon") or "",
        meta_title=row.get("meta_title") or "",
        meta_description=row.get("meta_description") or "",
        status=CategoryStatus(row["status"]),
        sort_order=row["sort_order"],
        stats=CategoryStats(
            total_posts=row["total_posts"], total_views=row["total_views"]
        ),
        created_by=UserId(_uuid(row["created_by"])),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def category_to_dict(category: Category) -> Dict[str, Any]:
    """Convert Category domain model to database dict."""
    return {
        "id": category.id,
        "name": category.name,
        "slug": category.slug.root,
        "description": category.description,
        "parent_id": category.parent_id,
        "color": category.color.root,
        "icon": category.icon,
        "meta_title": category.meta_title,
        "meta_description": category.meta_description,
        "status": category.status.value,
        "sort_order": category.sort_order,
        "total_posts": category.stats.total_posts,
        "total_views": category.stats.total_views,
        "created_by": category.created_by,
        "created_at": category.created_at,
        "updated_at": category.updated_at,
    }


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model."""
    return Post(
        id=PostId(_uuid(row["id"])),
        title=row["title"],
        category_id=CategoryId(_uuid(row["category_id"])),
        status=PostStatus(row["status"]),
        views=row["views"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    return {
        "id": post.id,
        "title": post.title,
        "category_id": post.category_id,
        "status": post.status.value,
        "views": post.views,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Author snapshot columns are prefixed ``author_``; reaction arrays
    become frozensets.
    """
    parent_id = _optional_uuid(row.get("parent_id"))
    edited_by = _optional_uuid(row.get("edited_by"))
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author=CommentAuthor(
            name=row["author_name"],
            email=Email(row["author_email"]),
            website=row.get("author_website") or "",
            ip_address=row.get("author_ip_address") or "",
            user_agent=row.get("author_user_agent") or "",
        ),
        content=row["content"],
        parent_id=CommentId(parent_id) if parent_id else None,
        status=CommentStatus(row["status"]),
        likes=frozenset(UserId(_uuid(u)) for u in row.get("likes") or []),
        dislikes=frozenset(UserId(_uuid(u)) for u in row.get("dislikes") or []),
        is_edited=row.get("is_edited", False),
        edited_at=row.get("edited_at"),
        edited_by=UserId(edited_by) if edited_by else None,
        moderation_notes=row.get("moderation_notes") or "",
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "parent_id": comment.parent_id,
        "author_name": comment.author.name,
        "author_email": comment.author.email.root,
        "author_website": comment.author.website,
        "author_ip_address": comment.author.ip_address,
        "author_user_agent": comment.author.user_agent,
        "content": comment.content,
        "status": comment.status.value,
        "likes": list(comment.likes),
        "dislikes": list(comment.dislikes),
        "is_edited": comment.is_edited,
        "edited_at": comment.edited_at,
        "edited_by": comment.edited_by,
        "moderation_notes": comment.moderation_notes,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }
