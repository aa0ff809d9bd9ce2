"""In-memory comment repository for testing."""

from collections import Counter
from datetime import datetime
from typing import Optional

from inkwell.domain.model.comment import Comment
from inkwell.domain.repository.comment import CommentRepository
from inkwell.domain.value import CommentId, CommentStatus, PostId, Reaction, UserId


def _newest_first(comments: list[Comment]) -> list[Comment]:
    return sorted(comments, key=lambda c: c.created_at, reverse=True)


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Mutating methods never await between reading and writing a record, so
    each behaves atomically under asyncio like a single SQL statement.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, node_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(node_id)

    async def find_children(self, parent_id: Optional[CommentId]) -> list[Comment]:
        """Find direct children of a comment."""
        return _newest_first(
            [c for c in self._comments.values() if c.parent_id == parent_id]
        )

    async def count_children(self, parent_id: CommentId) -> int:
        """Count direct children of a comment."""
        return sum(1 for c in self._comments.values() if c.parent_id == parent_id)

    async def find_top_level(
        self, post_id: PostId, status: Optional[CommentStatus] = None
    ) -> list[Comment]:
        """Find top-level comments of a post."""
        return _newest_first(
            [
                c
                for c in self._comments.values()
                if c.post_id == post_id
                and c.parent_id is None
                and (status is None or c.status == status)
            ]
        )

    async def find_replies(
        self, parent_ids: list[CommentId], status: Optional[CommentStatus] = None
    ) -> list[Comment]:
        """Find direct replies to any of the given comments."""
        parents = set(parent_ids)
        return _newest_first(
            [
                c
                for c in self._comments.values()
                if c.parent_id in parents and (status is None or c.status == status)
            ]
        )

    def _filter(
        self, status: Optional[CommentStatus], post_id: Optional[PostId]
    ) -> list[Comment]:
        return [
            c
            for c in self._comments.values()
            if (status is None or c.status == status)
            and (post_id is None or c.post_id == post_id)
        ]

    async def find_page(
        self,
        status: Optional[CommentStatus] = None,
        post_id: Optional[PostId] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Comment]:
        """Find one page of comments."""
        return _newest_first(self._filter(status, post_id))[offset : offset + limit]

    async def count(
        self,
        status: Optional[CommentStatus] = None,
        post_id: Optional[PostId] = None,
    ) -> int:
        """Count comments."""
        return len(self._filter(status, post_id))

    async def count_by_posts(
        self, post_ids: list[PostId], status: CommentStatus
    ) -> dict[PostId, int]:
        """Count comments in a status grouped by post."""
        wanted = set(post_ids)
        return dict(
            Counter(
                c.post_id
                for c in self._comments.values()
                if c.post_id in wanted and c.status == status
            )
        )

    async def save(self, node: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[node.id] = node
        return node

    async def delete(self, node_id: CommentId) -> None:
        """Delete a comment."""
        self._comments.pop(node_id, None)

    async def toggle_reaction(
        self, comment_id: CommentId, user_id: UserId, reaction: Reaction
    ) -> Optional[Comment]:
        """Flip the user's membership in the reaction set."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        sets = {Reaction.LIKE: comment.likes, Reaction.DISLIKE: comment.dislikes}
        if user_id in sets[reaction]:
            sets[reaction] = sets[reaction] - {user_id}
        else:
            sets[reaction] = sets[reaction] | {user_id}
            sets[reaction.opposite] = sets[reaction.opposite] - {user_id}

        updated = comment.model_copy(
            update={
                "likes": sets[Reaction.LIKE],
                "dislikes": sets[Reaction.DISLIKE],
                "updated_at": datetime.now(),
            }
        )
        self._comments[comment_id] = updated
        return updated

    async def update_status(
        self,
        comment_id: CommentId,
        status: CommentStatus,
        moderation_notes: Optional[str] = None,
    ) -> Optional[Comment]:
        """Write a moderation status."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        changes: dict = {"status": status, "updated_at": datetime.now()}
        if moderation_notes is not None:
            changes["moderation_notes"] = moderation_notes

        updated = comment.model_copy(update=changes)
        self._comments[comment_id] = updated
        return updated

    async def update_content(
        self,
        comment_id: CommentId,
        content: str,
        edited_by: UserId,
        edited_at: datetime,
    ) -> Optional[Comment]:
        """Write an edit to the stored record's content fields."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return None

        updated = comment.model_copy(
            update={
                "content": content,
                "is_edited": True,
                "edited_at": edited_at,
                "edited_by": edited_by,
                "updated_at": edited_at,
            }
        )
        self._comments[comment_id] = updated
        return updated
