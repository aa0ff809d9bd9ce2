"""Post domain service.

Posts are owned by the wider blog; this service only covers the writes
that must keep category stats in step.
"""

from datetime import datetime

import logfire

from inkwell.domain.model.post import Post
from inkwell.domain.repository import PostRepository
from inkwell.domain.value import PostId

from .base import Service
from .category_service import CategoryService


class PostService(Service):
    """Domain service for post operations."""

    def __init__(
        self, post_repository: PostRepository, category_service: CategoryService
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            category_service: Used to refresh category stats after writes
        """
        self.post_repository = post_repository
        self.category_service = category_service

    async def save_post(self, post: Post) -> Post:
        """Save a post and refresh the stats of affected categories.

        When the category changes both the old and new categories are
        refreshed. Refresh failures are logged, never raised.

        Args:
            post: Post to save

        Returns:
            Saved post
        """
        with logfire.span(
            "post_service.save_post", post_id=str(post.id), title=post.title
        ):
            previous = await self.post_repository.find_by_id(post.id)
            saved = await self.post_repository.save(
                post.model_copy(update={"updated_at": datetime.now()})
            )
            logfire.info("Post saved", post_id=str(saved.id))

            affected = [saved.category_id]
            if previous is not None and previous.category_id != saved.category_id:
                affected.append(previous.category_id)

            for category_id in affected:
                await self.category_service.refresh_stats_quietly(category_id)

            return saved

    async def delete_post(self, post_id: PostId) -> None:
        """Delete a post and refresh its category's stats."""
        with logfire.span("post_service.delete_post", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if post is None:
                logfire.warn("Post not found", post_id=str(post_id))
                return

            await self.post_repository.delete(post_id)
            logfire.info("Post deleted", post_id=str(post_id))
            await self.category_service.refresh_stats_quietly(post.category_id)
