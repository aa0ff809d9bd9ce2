"""In-memory post repository for testing."""

from datetime import datetime
from typing import Optional

from inkwell.domain.model.category import CategoryStats
from inkwell.domain.model.post import Post
from inkwell.domain.repository.post import PostRepository
from inkwell.domain.value import CategoryId, PostId, PostStatus


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def save(self, post: Post) -> Post:
        """Save or update a post."""
        self._posts[post.id] = post
        return post

    async def delete(self, post_id: PostId) -> None:
        """Delete a post."""
        self._posts.pop(post_id, None)

    async def count_by_category(self, category_id: CategoryId) -> int:
        """Count posts in a category."""
        return sum(1 for p in self._posts.values() if p.category_id == category_id)

    async def aggregate_category_stats(self, category_id: CategoryId) -> CategoryStats:
        """Sum published posts and views in a category."""
        published = [
            p
            for p in self._posts.values()
            if p.category_id == category_id and p.status == PostStatus.PUBLISHED
        ]
        return CategoryStats(
            total_posts=len(published),
            total_views=sum(p.views for p in published),
        )

    async def reassign_category(
        self, source_ids: list[CategoryId], target_id: CategoryId
    ) -> int:
        """Move posts of the sources to the target."""
        sources = set(source_ids)
        moved = 0
        for post_id, post in list(self._posts.items()):
            if post.category_id in sources:
                self._posts[post_id] = post.model_copy(
                    update={"category_id": target_id, "updated_at": datetime.now()}
                )
                moved += 1
        return moved

    def _published_in(self, category_ids: list[CategoryId]) -> list[Post]:
        wanted = set(category_ids)
        return [
            p
            for p in self._posts.values()
            if p.category_id in wanted and p.status == PostStatus.PUBLISHED
        ]

    async def find_published_in_categories(
        self, category_ids: list[CategoryId], limit: int = 10, offset: int = 0
    ) -> list[Post]:
        """Find published posts in any of the categories."""
        posts = sorted(
            self._published_in(category_ids), key=lambda p: p.created_at, reverse=True
        )
        return posts[offset : offset + limit]

    async def count_published_in_categories(
        self, category_ids: list[CategoryId]
    ) -> int:
        """Count published posts in any of the categories."""
        return len(self._published_in(category_ids))
