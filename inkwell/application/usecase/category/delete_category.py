"""Delete category use case."""

from uuid import UUID

from pydantic import BaseModel

from inkwell.domain.service import CategoryService
from inkwell.domain.value import CategoryId


class DeleteCategoryRequest(BaseModel):
    """Delete category request."""

    category_id: str  # UUID string


class DeleteCategoryUseCase:
    """Use case for deleting an empty leaf category."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: DeleteCategoryRequest) -> None:
        """Execute delete category flow.

        Raises:
            NotFoundError: If the category doesn't exist
            HasPostsError: If posts still reference it
            HasSubcategoriesError: If it still has subcategories
        """
        await self.category_service.delete_category(
            CategoryId(UUID(request.category_id))
        )
