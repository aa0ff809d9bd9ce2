"""Get category posts use case."""

import math
from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from inkwell.domain.service import CategoryRef, CategoryService
from inkwell.domain.value import CategoryId

from .common import CategoryRefItem


class CategoryPostItem(BaseModel):
    """Published post in a category listing."""

    post_id: str
    title: str
    category_id: str
    views: int
    created_at: datetime


class GetCategoryPostsRequest(BaseModel):
    """Get category posts request."""

    category_id: str  # UUID string
    include_subcategories: bool = True
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)


class GetCategoryPostsResponse(BaseModel):
    """Get category posts response."""

    category: CategoryRefItem
    posts: list[CategoryPostItem]
    total: int
    page: int
    pages: int


class GetCategoryPostsUseCase:
    """Use case for listing published posts under a category."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: GetCategoryPostsRequest) -> GetCategoryPostsResponse:
        """Execute get category posts flow.

        Posts in descendant categories are included unless
        ``include_subcategories`` is false.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        with logfire.span(
            "get_category_posts.execute",
            category_id=request.category_id,
            include_subcategories=request.include_subcategories,
        ):
            result = await self.category_service.get_category_posts(
                CategoryId(UUID(request.category_id)),
                include_subcategories=request.include_subcategories,
                page=request.page,
                limit=request.limit,
            )

            return GetCategoryPostsResponse(
                category=CategoryRefItem.from_domain(CategoryRef.of(result.category)),
                posts=[
                    CategoryPostItem(
                        post_id=str(p.id),
                        title=p.title,
                        category_id=str(p.category_id),
                        views=p.views,
                        created_at=p.created_at,
                    )
                    for p in result.posts
                ],
                total=result.total,
                page=request.page,
                pages=math.ceil(result.total / request.limit),
            )
