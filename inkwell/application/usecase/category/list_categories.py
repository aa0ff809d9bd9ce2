"""List categories use case."""

import math
from typing import Literal
from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from inkwell.domain.repository import CategoryFilter
from inkwell.domain.service import CategoryService
from inkwell.domain.value import CategoryId, CategoryStatus

from .common import CategoryItem


class ListCategoriesRequest(BaseModel):
    """List categories request.

    ``parent`` is a category ID, or the literal "null" for root categories.
    """

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    status: CategoryStatus | None = CategoryStatus.ACTIVE
    parent: str | None = None
    search: str | None = None
    sort_by: Literal["sort_order", "name", "created_at", "total_posts"] = "sort_order"
    descending: bool = False


class ListCategoriesResponse(BaseModel):
    """List categories response."""

    categories: list[CategoryItem]
    total: int
    page: int
    limit: int
    pages: int


class ListCategoriesUseCase:
    """Use case for the paginated flat category listing."""

    def __init__(self, category_service: CategoryService) -> None:
        """Initialize list categories use case.

        Args:
            category_service: Category domain service
        """
        self.category_service = category_service

    async def execute(self, request: ListCategoriesRequest) -> ListCategoriesResponse:
        """Execute list categories flow.

        Args:
            request: Filters, sort and page

        Returns:
            One page of categories with parent and creator resolved

        Raises:
            ValueError: If parent is neither "null" nor a UUID
        """
        with logfire.span(
            "list_categories.execute",
            page=request.page,
            limit=request.limit,
            parent=request.parent,
        ):
            category_filter = CategoryFilter(
                status=request.status,
                roots_only=request.parent == "null",
                parent_id=(
                    CategoryId(UUID(request.parent))
                    if request.parent and request.parent != "null"
                    else None
                ),
                search=request.search or None,
            )

            page = await self.category_service.list_categories(
                category_filter,
                sort_by=request.sort_by,
                descending=request.descending,
                page=request.page,
                limit=request.limit,
            )

            return ListCategoriesResponse(
                categories=[CategoryItem.from_view(view) for view in page.items],
                total=page.total,
                page=request.page,
                limit=request.limit,
                pages=math.ceil(page.total / request.limit),
            )
