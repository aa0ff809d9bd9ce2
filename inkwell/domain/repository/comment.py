"""Comment repository interface."""

from abc import abstractmethod
from datetime import datetime
from typing import Dict, List, Optional

from inkwell.domain.model.comment import Comment
from inkwell.domain.repository.tree import TreeNodeRepository
from inkwell.domain.value import CommentId, CommentStatus, PostId, Reaction, UserId


class CommentRepository(TreeNodeRepository[CommentId, Comment]):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Listings are newest first unless stated otherwise.
    """

    @abstractmethod
    async def find_top_level(
        self, post_id: PostId, status: Optional[CommentStatus] = None
    ) -> List[Comment]:
        """Find comments of a post that have no parent.

        Args:
            post_id: The post ID
            status: Only return comments in this status (None for all)

        Returns:
            Top-level comments, newest first
        """
        pass

    @abstractmethod
    async def find_replies(
        self, parent_ids: List[CommentId], status: Optional[CommentStatus] = None
    ) -> List[Comment]:
        """Find direct replies to any of the given comments, newest first.

        One query per tree level instead of one per comment.
        """
        pass

    @abstractmethod
    async def find_page(
        self,
        status: Optional[CommentStatus] = None,
        post_id: Optional[PostId] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find one page of comments for moderation listings."""
        pass

    @abstractmethod
    async def count(
        self,
        status: Optional[CommentStatus] = None,
        post_id: Optional[PostId] = None,
    ) -> int:
        """Count comments matching the moderation filters."""
        pass

    @abstractmethod
    async def count_by_posts(
        self, post_ids: List[PostId], status: CommentStatus
    ) -> Dict[PostId, int]:
        """Count comments in a status, grouped by post.

        Posts without matching comments are absent from the result.
        """
        pass

    @abstractmethod
    async def toggle_reaction(
        self, comment_id: CommentId, user_id: UserId, reaction: Reaction
    ) -> Optional[Comment]:
        """Atomically flip a user's membership in the reaction set.

        Adding to one set removes the user from the opposite set in the
        same operation.

        Returns:
            Updated comment, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        comment_id: CommentId,
        status: CommentStatus,
        moderation_notes: Optional[str] = None,
    ) -> Optional[Comment]:
        """Write a moderation status (and notes, when given)."""
        pass

    @abstractmethod
    async def update_content(
        self,
        comment_id: CommentId,
        content: str,
        edited_by: UserId,
        edited_at: datetime,
    ) -> Optional[Comment]:
        """Write an edit to the content and edit markers only.

        Status, moderation notes and reactions are left untouched, so an
        edit never overwrites a concurrent moderation or reaction write.

        Returns:
            Updated comment, or None if it doesn't exist
        """
        pass
