"""Post repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from inkwell.domain.model.category import CategoryStats
from inkwell.domain.model.post import Post
from inkwell.domain.value import CategoryId, PostId


class PostRepository(ABC):
    """Repository for the post slice categories and comments rely on."""

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> None:
        """Delete a post."""
        pass

    @abstractmethod
    async def count_by_category(self, category_id: CategoryId) -> int:
        """Count posts in a category regardless of status."""
        pass

    @abstractmethod
    async def aggregate_category_stats(self, category_id: CategoryId) -> CategoryStats:
        """Sum published posts and their views in a category.

        Returns:
            Zeroed stats when nothing is published
        """
        pass

    @abstractmethod
    async def reassign_category(
        self, source_ids: List[CategoryId], target_id: CategoryId
    ) -> int:
        """Move every post of any source category to the target.

        Returns:
            Number of posts moved
        """
        pass

    @abstractmethod
    async def find_published_in_categories(
        self, category_ids: List[CategoryId], limit: int = 10, offset: int = 0
    ) -> List[Post]:
        """Find published posts in any of the categories, newest first."""
        pass

    @abstractmethod
    async def count_published_in_categories(
        self, category_ids: List[CategoryId]
    ) -> int:
        """Count published posts in any of the categories."""
        pass
