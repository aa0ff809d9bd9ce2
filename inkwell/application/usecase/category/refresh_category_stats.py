"""Refresh category stats use case."""

from uuid import UUID

from pydantic import BaseModel

from inkwell.domain.error import NotFoundError
from inkwell.domain.service import CategoryService
from inkwell.domain.value import CategoryId


class RefreshCategoryStatsRequest(BaseModel):
    """Refresh category stats request."""

    category_id: str  # UUID string


class RefreshCategoryStatsResponse(BaseModel):
    """Recomputed stats."""

    category_id: str
    total_posts: int
    total_views: int


class RefreshCategoryStatsUseCase:
    """Use case for recomputing a category's derived stats on demand."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(
        self, request: RefreshCategoryStatsRequest
    ) -> RefreshCategoryStatsResponse:
        """Execute refresh flow.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        stats = await self.category_service.update_stats(
            CategoryId(UUID(request.category_id))
        )
        if stats is None:
            raise NotFoundError("Category", request.category_id)

        return RefreshCategoryStatsResponse(
            category_id=request.category_id,
            total_posts=stats.total_posts,
            total_views=stats.total_views,
        )
