"""Comment entity.

Comments form a forest per post: top-level comments have no parent and
replies point at a parent in the same post. The reply list of a comment is
never stored; it is rebuilt by querying children, so deleting a comment
cannot leave a dangling reply reference behind.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from inkwell.domain.model.common import DomainModel
from inkwell.domain.value import CommentId, CommentStatus, Email, PostId, UserId


class CommentAuthor(DomainModel):
    """Snapshot of who wrote a comment, captured at creation time.

    Authenticated authors are copied from their account; guests supply
    name/email/website themselves. The snapshot is never re-resolved, so a
    later profile change does not alter existing comments.
    """

    name: str = Field(min_length=1, max_length=100)
    email: Email
    website: str = ""
    ip_address: str = ""
    user_agent: str = ""


class Comment(DomainModel):
    """Comment on a post or reply to another comment."""

    id: CommentId
    post_id: PostId
    author: CommentAuthor
    content: str = Field(min_length=1, max_length=5000)
    parent_id: Optional[CommentId] = None
    status: CommentStatus = CommentStatus.PENDING
    likes: frozenset[UserId] = frozenset()
    dislikes: frozenset[UserId] = frozenset()
    is_edited: bool = False
    edited_at: Optional[datetime] = None
    edited_by: Optional[UserId] = None
    moderation_notes: str = Field(default="", max_length=1000)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None
