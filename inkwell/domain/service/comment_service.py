"""Comment domain service."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from inkwell.config import CommentSettings, TreeSettings
from inkwell.domain.error import (
    ForbiddenError,
    NotFoundError,
    ParentNotFoundError,
    PostNotFoundError,
    ValidationError,
)
from inkwell.domain.model import Comment, CommentAuthor, Principal
from inkwell.domain.repository import CommentRepository, PostRepository
from inkwell.domain.value import (
    CommentId,
    CommentStatus,
    Email,
    PostId,
    Reaction,
    UserId,
)

from .base import Service

MAX_CONTENT_LENGTH = 5000
MAX_NAME_LENGTH = 100


@dataclass
class CommentAuthorInfo:
    """Who is submitting a comment.

    Either ``principal`` is set (authenticated caller) or the guest fields
    are used. Request metadata is always recorded.
    """

    principal: Optional[Principal] = None
    name: Optional[str] = None
    email: Optional[str] = None
    website: str = ""
    ip_address: str = ""
    user_agent: str = ""


@dataclass
class CommentTreeNode:
    """Comment with its nested replies."""

    comment: Comment
    replies: list["CommentTreeNode"] = field(default_factory=list)


@dataclass
class ReactionCounts:
    """Like and dislike counts after a toggle."""

    likes: int
    dislikes: int


@dataclass
class CommentPage:
    """One page of the moderation queue."""

    items: list[Comment]
    total: int


class CommentService(Service):
    """Domain service for comment threads and moderation."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        comment_settings: CommentSettings,
        tree_settings: TreeSettings,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_repository: Post repository (target post must exist)
            comment_settings: Default status and guest policy
            tree_settings: Reply nesting depth
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.comment_settings = comment_settings
        self.tree_settings = tree_settings

    async def create_comment(
        self,
        post_id: PostId,
        content: str,
        author_info: CommentAuthorInfo,
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Create a comment on a post or a reply to another comment.

        Args:
            post_id: Post being commented on
            content: Comment text (trimmed)
            author_info: Principal or guest identity plus request metadata
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment in the configured default status

        Raises:
            ValidationError: If content or guest identity is invalid, or the
                parent belongs to another post
            ForbiddenError: If guests may not comment
            PostNotFoundError: If the post doesn't exist
            ParentNotFoundError: If the parent comment doesn't exist
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            parent_id=str(parent_id) if parent_id else None,
            authenticated=author_info.principal is not None,
        ):
            text = _clean_content(content)

            post = await self.post_repository.find_by_id(post_id)
            if post is None:
                logfire.warn("Comment target post not found", post_id=str(post_id))
                raise PostNotFoundError(str(post_id))

            author = self._build_author(post_id, author_info)

            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if parent is None:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise ParentNotFoundError("Comment", str(parent_id))
                if parent.post_id != post_id:
                    logfire.warn(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationError("Parent comment does not belong to this post")

            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author=author,
                content=text,
                parent_id=parent_id,
                status=self.comment_settings.default_status,
            )
            saved = await self.comment_repository.save(comment)

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                is_reply=saved.is_reply,
                status=saved.status.value,
            )
            return saved

    async def update_comment(
        self, comment_id: CommentId, content: str, requester: Principal
    ) -> Comment:
        """Edit a comment's content.

        Ownership is email equality between the requester and the stored
        author snapshot.

        Raises:
            NotFoundError: If the comment doesn't exist
            ForbiddenError: If the requester's email doesn't match the author's
            ValidationError: If the new content is empty or too long
        """
        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment_id),
            requester_id=str(requester.id),
        ):
            comment = await self._require(comment_id)

            if requester.email != comment.author.email:
                logfire.warn(
                    "Comment edit by non-author",
                    comment_id=str(comment_id),
                    requester_id=str(requester.id),
                )
                raise ForbiddenError("edit", "comment", str(comment_id))

            saved = await self.comment_repository.update_content(
                comment_id,
                _clean_content(content),
                edited_by=requester.id,
                edited_at=datetime.now(),
            )
            if saved is None:
                raise NotFoundError("Comment", str(comment_id))

            logfire.info("Comment updated", comment_id=str(comment_id))
            return saved

    async def delete_comment(self, comment_id: CommentId, requester: Principal) -> None:
        """Delete a comment as its author or an admin.

        Replies are left in place; they simply stop appearing in the tree.

        Raises:
            NotFoundError: If the comment doesn't exist
            ForbiddenError: If the requester is neither author nor admin
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            requester_id=str(requester.id),
        ):
            comment = await self._require(comment_id)

            is_author = requester.email == comment.author.email
            if not (is_author or requester.is_elevated):
                logfire.warn(
                    "Comment delete by non-author",
                    comment_id=str(comment_id),
                    requester_id=str(requester.id),
                )
                raise ForbiddenError("delete", "comment", str(comment_id))

            await self.comment_repository.delete(comment_id)
            logfire.info(
                "Comment deleted",
                comment_id=str(comment_id),
                by_moderator=not is_author,
            )

    async def toggle_like(
        self, comment_id: CommentId, user_id: UserId
    ) -> ReactionCounts:
        """Toggle the user's like, clearing any dislike they hold."""
        return await self._toggle(comment_id, user_id, Reaction.LIKE)

    async def toggle_dislike(
        self, comment_id: CommentId, user_id: UserId
    ) -> ReactionCounts:
        """Toggle the user's dislike, clearing any like they hold."""
        return await self._toggle(comment_id, user_id, Reaction.DISLIKE)

    async def approve(self, comment_id: CommentId) -> Comment:
        """Approve a comment so it appears publicly."""
        return await self.moderate(comment_id, CommentStatus.APPROVED)

    async def mark_spam(self, comment_id: CommentId) -> Comment:
        """Mark a comment as spam."""
        return await self.moderate(comment_id, CommentStatus.SPAM)

    async def moderate(
        self,
        comment_id: CommentId,
        status: CommentStatus,
        notes: Optional[str] = None,
    ) -> Comment:
        """Force a comment into any moderation status.

        Args:
            comment_id: Comment ID
            status: New status; every status is reachable from every other
            notes: Moderation notes to store, None leaves them unchanged

        Raises:
            NotFoundError: If the comment doesn't exist
            ValidationError: If notes exceed 1000 characters
        """
        with logfire.span(
            "comment_service.moderate",
            comment_id=str(comment_id),
            status=status.value,
        ):
            if notes is not None and len(notes) > 1000:
                raise ValidationError("Moderation notes cannot exceed 1000 characters")

            updated = await self.comment_repository.update_status(
                comment_id, status, moderation_notes=notes
            )
            if updated is None:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment moderated", comment_id=str(comment_id), status=status.value
            )
            return updated

    async def get_tree(
        self,
        post_id: PostId,
        status: Optional[CommentStatus] = CommentStatus.APPROVED,
    ) -> list[CommentTreeNode]:
        """Build the comment tree of a post.

        Top-level comments with ``tree.max_depth`` levels of replies below
        them, each level filtered by the same status and ordered newest
        first. Replies whose parent is not in the tree (deleted, filtered
        out, or on another post) are not shown.

        Args:
            post_id: Post ID
            status: Status filter for every level, None for all statuses

        Returns:
            Top-level comment nodes, newest first
        """
        max_depth = self.tree_settings.max_depth
        with logfire.span(
            "comment_service.get_tree",
            post_id=str(post_id),
            status=status.value if status else None,
            max_depth=max_depth,
        ):
            roots = [
                CommentTreeNode(comment=c)
                for c in await self.comment_repository.find_top_level(post_id, status)
            ]

            level = roots
            total = len(roots)
            for _ in range(max_depth):
                if not level:
                    break
                by_id = {node.comment.id: node for node in level}
                replies = await self.comment_repository.find_replies(
                    list(by_id), status
                )

                next_level = []
                for reply in replies:
                    parent = by_id.get(reply.parent_id) if reply.parent_id else None
                    if parent is None or reply.post_id != post_id:
                        continue
                    node = CommentTreeNode(comment=reply)
                    parent.replies.append(node)
                    next_level.append(node)

                total += len(next_level)
                level = next_level

            logfire.info(
                "Built comment tree",
                post_id=str(post_id),
                top_level=len(roots),
                total=total,
            )
            return roots

    async def get_comment_counts(self, post_ids: list[PostId]) -> dict[PostId, int]:
        """Count approved comments per post.

        Posts without approved comments are absent from the result.
        """
        with logfire.span(
            "comment_service.get_comment_counts", post_count=len(post_ids)
        ):
            if not post_ids:
                return {}
            return await self.comment_repository.count_by_posts(
                post_ids, CommentStatus.APPROVED
            )

    async def list_for_moderation(
        self,
        status: Optional[CommentStatus] = None,
        post_id: Optional[PostId] = None,
        page: int = 1,
        limit: int = 20,
    ) -> CommentPage:
        """List comments for the moderation queue, newest first."""
        with logfire.span(
            "comment_service.list_for_moderation",
            status=status.value if status else None,
            post_id=str(post_id) if post_id else None,
            page=page,
        ):
            total = await self.comment_repository.count(status=status, post_id=post_id)
            items = await self.comment_repository.find_page(
                status=status,
                post_id=post_id,
                limit=limit,
                offset=(page - 1) * limit,
            )
            return CommentPage(items=items, total=total)

    async def _require(self, comment_id: CommentId) -> Comment:
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            logfire.warn("Comment not found", comment_id=str(comment_id))
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def _toggle(
        self, comment_id: CommentId, user_id: UserId, reaction: Reaction
    ) -> ReactionCounts:
        with logfire.span(
            f"comment_service.toggle_{reaction.value}",
            comment_id=str(comment_id),
            user_id=str(user_id),
        ):
            updated = await self.comment_repository.toggle_reaction(
                comment_id, user_id, reaction
            )
            if updated is None:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            return ReactionCounts(
                likes=len(updated.likes), dislikes=len(updated.dislikes)
            )

    def _build_author(
        self, post_id: PostId, author_info: CommentAuthorInfo
    ) -> CommentAuthor:
        principal = author_info.principal
        if principal is not None:
            name = principal.display_name
            if not name:
                raise ValidationError("Account has no display name")
            return CommentAuthor(
                name=name[:MAX_NAME_LENGTH],
                email=principal.email,
                ip_address=author_info.ip_address,
                user_agent=author_info.user_agent,
            )

        if not self.comment_settings.allow_anonymous:
            logfire.warn("Guest comment rejected", post_id=str(post_id))
            raise ForbiddenError("comment on", "post", str(post_id))

        name = (author_info.name or "").strip()
        if not name or not author_info.email:
            raise ValidationError("Name and email are required for guest comments")
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Name cannot exceed {MAX_NAME_LENGTH} characters"
            )

        try:
            email = Email(author_info.email)
        except PydanticValidationError as e:
            raise ValidationError("Please provide a valid email") from e

        return CommentAuthor(
            name=name,
            email=email,
            website=(author_info.website or "").strip(),
            ip_address=author_info.ip_address,
            user_agent=author_info.user_agent,
        )


def _clean_content(content: str) -> str:
    text = (content or "").strip()
    if not text:
        raise ValidationError("Comment content is required")
    if len(text) > MAX_CONTENT_LENGTH:
        raise ValidationError(
            f"Comment cannot exceed {MAX_CONTENT_LENGTH} characters"
        )
    return text
