"""React to comment use case."""

from uuid import UUID

from pydantic import BaseModel

from inkwell.domain.service import CommentService
from inkwell.domain.value import CommentId, Reaction, UserId


class ReactToCommentRequest(BaseModel):
    """Like or dislike toggle request."""

    comment_id: str  # UUID string
    user_id: str  # Authenticated user ID
    reaction: Reaction


class ReactToCommentResponse(BaseModel):
    """Counts after the toggle."""

    likes: int
    dislikes: int


class ReactToCommentUseCase:
    """Use case for toggling a like or dislike.

    Repeating the same reaction removes it; switching reaction moves the
    user from one set to the other.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: ReactToCommentRequest) -> ReactToCommentResponse:
        """Execute toggle flow.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        comment_id = CommentId(UUID(request.comment_id))
        user_id = UserId(UUID(request.user_id))

        if request.reaction is Reaction.LIKE:
            counts = await self.comment_service.toggle_like(comment_id, user_id)
        else:
            counts = await self.comment_service.toggle_dislike(comment_id, user_id)

        return ReactToCommentResponse(likes=counts.likes, dislikes=counts.dislikes)
