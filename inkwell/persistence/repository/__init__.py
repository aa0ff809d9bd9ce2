"""PostgreSQL repository implementations."""

from inkwell.persistence.repository.category import PostgresCategoryRepository
from inkwell.persistence.repository.comment import PostgresCommentRepository
from inkwell.persistence.repository.post import PostgresPostRepository
from inkwell.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresCategoryRepository",
    "PostgresCommentRepository",
    "PostgresPostRepository",
    "PostgresUserRepository",
]
