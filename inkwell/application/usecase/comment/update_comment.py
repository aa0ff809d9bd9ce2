"""Update comment use case."""

from uuid import UUID

from pydantic import BaseModel

from inkwell.domain.model import Principal
from inkwell.domain.service import CommentService
from inkwell.domain.value import CommentId

from .common import CommentItem


class UpdateCommentRequest(BaseModel):
    """Update comment request."""

    comment_id: str  # UUID string
    content: str  # New content (required, cannot be empty)
    requester: Principal


class UpdateCommentResponse(BaseModel):
    """Update comment response."""

    comment: CommentItem


class UpdateCommentUseCase:
    """Use case for an author editing their comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: UpdateCommentRequest) -> UpdateCommentResponse:
        """Execute update comment flow.

        Raises:
            NotFoundError: If the comment doesn't exist
            ForbiddenError: If the requester isn't the author
            ValidationError: If the content is empty or too long
        """
        comment = await self.comment_service.update_comment(
            CommentId(UUID(request.comment_id)),
            content=request.content,
            requester=request.requester,
        )
        return UpdateCommentResponse(comment=CommentItem.from_domain(comment))
