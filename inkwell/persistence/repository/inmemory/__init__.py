"""In-memory repository implementations for testing."""

from .category import InMemoryCategoryRepository
from .comment import InMemoryCommentRepository
from .post import InMemoryPostRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCategoryRepository",
    "InMemoryCommentRepository",
    "InMemoryPostRepository",
    "InMemoryUserRepository",
]
