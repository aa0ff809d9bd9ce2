"""Reorder categories use case."""

from uuid import UUID

from pydantic import BaseModel

from inkwell.domain.service import CategoryService
from inkwell.domain.value import CategoryId


class CategoryPosition(BaseModel):
    """New sort position of one category."""

    category_id: str  # UUID string
    sort_order: int


class ReorderCategoriesRequest(BaseModel):
    """Reorder categories request."""

    categories: list[CategoryPosition]


class ReorderCategoriesResponse(BaseModel):
    """Reorder categories response."""

    updated: int


class ReorderCategoriesUseCase:
    """Use case for setting sibling order, e.g. after drag and drop."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(
        self, request: ReorderCategoriesRequest
    ) -> ReorderCategoriesResponse:
        """Execute reorder flow.

        Raises:
            ValidationError: If no categories are given
            NotFoundError: If any category doesn't exist
        """
        updated = await self.category_service.reorder(
            [
                (CategoryId(UUID(p.category_id)), p.sort_order)
                for p in request.categories
            ]
        )
        return ReorderCategoriesResponse(updated=len(updated))
