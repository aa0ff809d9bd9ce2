"""Get comment tree use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from inkwell.domain.service import CommentService, CommentTreeNode
from inkwell.domain.value import CommentStatus, PostId

from .common import CommentTreeNodeResponse


class GetCommentTreeRequest(BaseModel):
    """Get comment tree request."""

    post_id: str  # UUID string
    status: CommentStatus = CommentStatus.APPROVED


class GetCommentTreeResponse(BaseModel):
    """Get comment tree response."""

    comments: list[CommentTreeNodeResponse]
    total: int


class GetCommentTreeUseCase:
    """Use case for the threaded comment view under a post."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize get comment tree use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: GetCommentTreeRequest) -> GetCommentTreeResponse:
        """Execute get comment tree flow.

        Args:
            request: Post ID and status filter (approved by default)

        Returns:
            Threaded comments, newest first at every level
        """
        with logfire.span(
            "get_comment_tree.execute",
            post_id=request.post_id,
            status=request.status.value,
        ):
            roots = await self.comment_service.get_tree(
                PostId(UUID(request.post_id)), status=request.status
            )

            def count_nodes(node: CommentTreeNode) -> int:
                return 1 + sum(count_nodes(child) for child in node.replies)

            return GetCommentTreeResponse(
                comments=[CommentTreeNodeResponse.from_node(r) for r in roots],
                total=sum(count_nodes(r) for r in roots),
            )
