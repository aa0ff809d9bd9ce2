"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from inkwell.domain.model import Principal
from inkwell.domain.service import CommentService
from inkwell.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str  # UUID string
    requester: Principal


class DeleteCommentUseCase:
    """Use case for deleting a comment as its author or an admin."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> None:
        """Execute delete comment flow.

        Raises:
            NotFoundError: If the comment doesn't exist
            ForbiddenError: If the requester is neither author nor admin
        """
        await self.comment_service.delete_comment(
            CommentId(UUID(request.comment_id)), requester=request.requester
        )
