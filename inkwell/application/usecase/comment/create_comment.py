"""Create comment use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from inkwell.domain.model import Principal
from inkwell.domain.service import CommentAuthorInfo, CommentService
from inkwell.domain.value import CommentId, CommentStatus, PostId

from .common import CommentItem


class CreateCommentRequest(BaseModel):
    """Create comment request.

    ``principal`` is the authenticated caller; without one the guest
    ``name``/``email``/``website`` fields identify the author.
    """

    post_id: str  # UUID string
    content: str
    parent_id: str | None = None  # Parent comment ID for replies
    principal: Principal | None = None
    name: str | None = None
    email: str | None = None
    website: str = ""
    ip_address: str = ""
    user_agent: str = ""


class CreateCommentResponse(BaseModel):
    """Create comment response."""

    comment: CommentItem
    message: str


class CreateCommentUseCase:
    """Use case for commenting on a post or replying to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            Created comment and a message telling whether it awaits moderation

        Raises:
            PostNotFoundError: If the post doesn't exist
            ParentNotFoundError: If the parent comment doesn't exist
            ValidationError: If content or guest identity is invalid
            ForbiddenError: If guest comments are disabled
        """
        with logfire.span(
            "create_comment.execute",
            post_id=request.post_id,
            parent_id=request.parent_id,
        ):
            comment = await self.comment_service.create_comment(
                post_id=PostId(UUID(request.post_id)),
                content=request.content,
                parent_id=(
                    CommentId(UUID(request.parent_id)) if request.parent_id else None
                ),
                author_info=CommentAuthorInfo(
                    principal=request.principal,
                    name=request.name,
                    email=request.email,
                    website=request.website,
                    ip_address=request.ip_address,
                    user_agent=request.user_agent,
                ),
            )

            message = (
                "Comment submitted and awaiting moderation"
                if comment.status == CommentStatus.PENDING
                else "Comment posted"
            )
            return CreateCommentResponse(
                comment=CommentItem.from_domain(comment), message=message
            )
