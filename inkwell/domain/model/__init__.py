"""Domain model entities for Inkwell."""

from inkwell.domain.model.category import Category, CategoryStats
from inkwell.domain.model.comment import Comment, CommentAuthor
from inkwell.domain.model.post import Post
from inkwell.domain.model.user import Principal, User

__all__ = [
    "Category",
    "CategoryStats",
    "Comment",
    "CommentAuthor",
    "Post",
    "Principal",
    "User",
]
