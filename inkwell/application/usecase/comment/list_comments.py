"""List comments for moderation use case."""

import math
from uuid import UUID

from pydantic import BaseModel, Field

from inkwell.domain.service import CommentService
from inkwell.domain.value import CommentStatus, PostId

from .common import ModerationCommentItem


class ListCommentsRequest(BaseModel):
    """List comments request."""

    status: CommentStatus | None = None
    post_id: str | None = None  # UUID string
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1, le=100)


class ListCommentsResponse(BaseModel):
    """List comments response."""

    comments: list[ModerationCommentItem]
    total: int
    page: int
    pages: int


class ListCommentsUseCase:
    """Use case for the admin moderation queue."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list comments flow.

        Args:
            request: Optional status and post filters plus page

        Returns:
            One page of comments, newest first, with author contact details
        """
        page = await self.comment_service.list_for_moderation(
            status=request.status,
            post_id=PostId(UUID(request.post_id)) if request.post_id else None,
            page=request.page,
            limit=request.limit,
        )
        return ListCommentsResponse(
            comments=[ModerationCommentItem.from_domain(c) for c in page.items],
            total=page.total,
            page=request.page,
            pages=math.ceil(page.total / request.limit),
        )
