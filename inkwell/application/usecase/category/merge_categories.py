"""Merge categories use case."""

from uuid import UUID

from pydantic import BaseModel

from inkwell.domain.service import CategoryService
from inkwell.domain.value import CategoryId

from .common import CategoryItem


class MergeCategoriesRequest(BaseModel):
    """Merge categories request."""

    source_ids: list[str]  # UUID strings
    target_id: str  # UUID string


class MergeCategoriesResponse(BaseModel):
    """Merge categories response."""

    target: CategoryItem
    merged: int
    posts_moved: int
    subcategories_moved: int


class MergeCategoriesUseCase:
    """Use case for folding several categories into one."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: MergeCategoriesRequest) -> MergeCategoriesResponse:
        """Execute merge flow.

        Raises:
            ValidationError: If sources are empty or include the target
            TargetNotFoundError: If the target doesn't exist
            SomeSourcesNotFoundError: If any source doesn't exist
        """
        result = await self.category_service.merge(
            [CategoryId(UUID(s)) for s in request.source_ids],
            CategoryId(UUID(request.target_id)),
        )
        return MergeCategoriesResponse(
            target=CategoryItem.from_category(result.target),
            merged=result.merged,
            posts_moved=result.posts_moved,
            subcategories_moved=result.subcategories_moved,
        )
