"""Repository interfaces for the Inkwell domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from inkwell.domain.repository.category import (
    CategoryFilter,
    CategoryRepository,
    CategorySortField,
)
from inkwell.domain.repository.comment import CommentRepository
from inkwell.domain.repository.post import PostRepository
from inkwell.domain.repository.tree import TreeNodeRepository
from inkwell.domain.repository.user import UserRepository

__all__ = [
    "CategoryFilter",
    "CategoryRepository",
    "CategorySortField",
    "CommentRepository",
    "PostRepository",
    "TreeNodeRepository",
    "UserRepository",
]
