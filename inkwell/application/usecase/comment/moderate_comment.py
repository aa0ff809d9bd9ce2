"""Moderate comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from inkwell.domain.service import CommentService
from inkwell.domain.value import CommentId, CommentStatus

from .common import ModerationCommentItem


class ModerateCommentRequest(BaseModel):
    """Moderation request: the target status and optional notes."""

    comment_id: str  # UUID string
    status: CommentStatus
    notes: str | None = Field(default=None, max_length=1000)


class ModerateCommentResponse(BaseModel):
    """Moderate comment response."""

    comment: ModerationCommentItem


class ModerateCommentUseCase:
    """Use case for moving a comment between moderation states."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: ModerateCommentRequest
    ) -> ModerateCommentResponse:
        """Execute moderation flow.

        Plain approve and spam actions go through their dedicated service
        operations; anything with notes or another status is force-set.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        comment_id = CommentId(UUID(request.comment_id))
        with logfire.span(
            "moderate_comment.execute",
            comment_id=request.comment_id,
            status=request.status.value,
        ):
            if request.notes is None and request.status == CommentStatus.APPROVED:
                comment = await self.comment_service.approve(comment_id)
            elif request.notes is None and request.status == CommentStatus.SPAM:
                comment = await self.comment_service.mark_spam(comment_id)
            else:
                comment = await self.comment_service.moderate(
                    comment_id, request.status, notes=request.notes
                )

            return ModerateCommentResponse(
                comment=ModerationCommentItem.from_domain(comment)
            )
