"""Domain value objects for Inkwell."""

from inkwell.domain.value.identifiers import CategoryId, CommentId, PostId, UserId
from inkwell.domain.value.types import (
    CategoryStatus,
    CommentStatus,
    Email,
    HexColor,
    PostStatus,
    Reaction,
    Slug,
    UserRole,
)

__all__ = [
    # Identifiers
    "CategoryId",
    "CommentId",
    "PostId",
    "UserId",
    # Types
    "CategoryStatus",
    "CommentStatus",
    "Email",
    "HexColor",
    "PostStatus",
    "Reaction",
    "Slug",
    "UserRole",
]
