"""Update category use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from inkwell.domain.service import CategoryService, CategoryUpdate
from inkwell.domain.value import CategoryId, CategoryStatus

from .common import CategoryItem


class UpdateCategoryRequest(BaseModel):
    """Update category request.

    Only fields explicitly provided are applied. Sending ``parent_id: null``
    moves the category to the root level; omitting it leaves the parent.
    """

    category_id: str  # UUID string
    name: str | None = Field(default=None, min_length=1, max_length=50)
    slug: str | None = None
    description: str | None = Field(default=None, max_length=500)
    parent_id: str | None = None
    color: str | None = None
    icon: str | None = None
    meta_title: str | None = Field(default=None, max_length=60)
    meta_description: str | None = Field(default=None, max_length=160)
    sort_order: int | None = None
    status: CategoryStatus | None = None


class UpdateCategoryResponse(BaseModel):
    """Update category response."""

    category: CategoryItem


class UpdateCategoryUseCase:
    """Use case for editing a category."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: UpdateCategoryRequest) -> UpdateCategoryResponse:
        """Execute update category flow.

        Raises:
            NotFoundError: If the category doesn't exist
            SelfParentError: If the category is made its own parent
            ParentNotFoundError: If the new parent doesn't exist
            CircularHierarchyError: If the new parent is a descendant
            DuplicateSlugError: If the new slug is taken
        """
        provided = request.model_dump(exclude_unset=True, exclude={"category_id"})
        if provided.get("parent_id"):
            provided["parent_id"] = CategoryId(UUID(provided["parent_id"]))

        view = await self.category_service.update_category(
            CategoryId(UUID(request.category_id)), CategoryUpdate(**provided)
        )
        return UpdateCategoryResponse(category=CategoryItem.from_view(view))
