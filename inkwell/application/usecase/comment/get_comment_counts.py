"""Get comment counts use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from inkwell.domain.service import CommentService
from inkwell.domain.value import PostId


class GetCommentCountsRequest(BaseModel):
    """Get comment counts request."""

    post_ids: list[str] = Field(max_length=100)  # UUID strings


class GetCommentCountsResponse(BaseModel):
    """Approved comment count per post.

    Posts without approved comments are omitted.
    """

    counts: dict[str, int]


class GetCommentCountsUseCase:
    """Use case for batch comment counts, e.g. for post listings."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(
        self, request: GetCommentCountsRequest
    ) -> GetCommentCountsResponse:
        counts = await self.comment_service.get_comment_counts(
            [PostId(UUID(p)) for p in request.post_ids]
        )
        return GetCommentCountsResponse(
            counts={str(post_id): count for post_id, count in counts.items()}
        )
