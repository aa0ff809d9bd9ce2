"""Domain services."""

from .base import Service
from .category_service import (
    CategoryUpdate,
    CategoryDetail,
    CategoryPage,
    CategoryPosts,
    CategoryRef,
    CategoryService,
    CategoryTreeNode,
    CategoryView,
    CreatorRef,
    MergeResult,
)
from .comment_service import (
    CommentAuthorInfo,
    CommentPage,
    CommentService,
    CommentTreeNode,
    ReactionCounts,
)
from .post_service import PostService

__all__ = [
    "CategoryUpdate",
    "CategoryDetail",
    "CategoryPage",
    "CategoryPosts",
    "CategoryRef",
    "CategoryService",
    "CategoryTreeNode",
    "CategoryView",
    "CommentAuthorInfo",
    "CommentPage",
    "CommentService",
    "CommentTreeNode",
    "CreatorRef",
    "MergeResult",
    "PostService",
    "ReactionCounts",
    "Service",
]
