"""Response items shared by comment use cases."""

from datetime import datetime

from pydantic import BaseModel

from inkwell.domain.model import Comment
from inkwell.domain.service import CommentTreeNode
from inkwell.domain.value import CommentStatus


class CommentItem(BaseModel):
    """Comment as shown publicly.

    Author email and request metadata are never exposed here.
    """

    comment_id: str
    post_id: str
    parent_id: str | None
    author_name: str
    author_website: str
    content: str
    status: CommentStatus
    likes: int
    dislikes: int
    is_edited: bool
    edited_at: datetime | None
    created_at: datetime

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentItem":
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            author_name=comment.author.name,
            author_website=comment.author.website,
            content=comment.content,
            status=comment.status,
            likes=len(comment.likes),
            dislikes=len(comment.dislikes),
            is_edited=comment.is_edited,
            edited_at=comment.edited_at,
            created_at=comment.created_at,
        )


class ModerationCommentItem(CommentItem):
    """Comment as shown to moderators, with author contact and metadata."""

    author_email: str
    author_ip_address: str
    author_user_agent: str
    moderation_notes: str

    @classmethod
    def from_domain(cls, comment: Comment) -> "ModerationCommentItem":
        public = CommentItem.from_domain(comment).model_dump()
        return cls(
            **public,
            author_email=comment.author.email.root,
            author_ip_address=comment.author.ip_address,
            author_user_agent=comment.author.user_agent,
            moderation_notes=comment.moderation_notes,
        )


class CommentTreeNodeResponse(CommentItem):
    """Comment with nested replies for API response."""

    replies: list["CommentTreeNodeResponse"]

    @classmethod
    def from_node(cls, node: CommentTreeNode) -> "CommentTreeNodeResponse":
        public = CommentItem.from_domain(node.comment).model_dump()
        return cls(
            **public,
            replies=[cls.from_node(child) for child in node.replies],
        )
