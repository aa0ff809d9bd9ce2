"""Domain value objects for Inkwell.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules for slugs, colours and emails, plus the
status enums that drive category visibility and comment moderation.
"""

import re
from enum import Enum

from pydantic import field_validator

from inkwell.domain.value.common import RootValueObject

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class CategoryStatus(str, Enum):
    """Visibility of a category."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class CommentStatus(str, Enum):
    """Moderation state of a comment.

    There is no terminal state: moderators may force any status at any time.
    Only approved comments are shown publicly.
    """

    PENDING = "pending"
    APPROVED = "approved"
    SPAM = "spam"
    TRASH = "trash"


class PostStatus(str, Enum):
    """Publication state of a post."""

    DRAFT = "draft"
    PUBLISHED = "published"
    SCHEDULED = "scheduled"
    ARCHIVED = "archived"


class UserRole(str, Enum):
    """Role of an account."""

    USER = "user"
    AUTHOR = "author"
    ADMIN = "admin"

    @property
    def is_elevated(self) -> bool:
        """Whether this role may moderate content it does not own."""
        return self is UserRole.ADMIN


class Slug(RootValueObject[str]):
    """URL-safe identifier for categories.

    Lowercase alphanumerics separated by single hyphens, 1-100 characters.
    Examples: 'machine-learning', 'travel-tips-2025'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if len(v) < 1 or len(v) > 100:
            raise ValueError("Slug must be 1-100 characters")
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug can only contain lowercase letters, numbers, and single hyphens"
            )
        return v

    @classmethod
    def from_text(cls, text: str) -> "Slug":
        """Derive a slug from a display name.

        Raises:
            ValueError: If the text contains no usable characters
        """
        slug = re.sub(r"[^a-z0-9]+", "-", text.lower())
        return cls(slug.strip("-")[:100].rstrip("-"))


class HexColor(RootValueObject[str]):
    """Six digit hex colour such as '#1976d2'."""

    @field_validator("root")
    @classmethod
    def validate_hex(cls, v: str) -> str:
        if not re.match(r"^#[0-9a-fA-F]{6}$", v):
            raise ValueError("Color must be a valid hex color")
        return v.lower()


class Email(RootValueObject[str]):
    """Email address, trimmed and lowercased.

    Only a basic ``local@domain.tld`` shape check is applied.
    """

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Please provide a valid email")
        return v


class Reaction(str, Enum):
    """Kind of reaction a user can leave on a comment.

    A user holds at most one reaction per comment.
    """

    LIKE = "like"
    DISLIKE = "dislike"

    @property
    def opposite(self) -> "Reaction":
        return Reaction.DISLIKE if self is Reaction.LIKE else Reaction.LIKE
