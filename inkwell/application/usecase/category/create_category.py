"""Create category use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from inkwell.domain.service import CategoryService
from inkwell.domain.value import CategoryId, CategoryStatus, UserId

from .common import CategoryItem


class CreateCategoryRequest(BaseModel):
    """Create category request."""

    name: str = Field(min_length=1, max_length=50)
    created_by: str  # User ID of the authenticated admin
    slug: str | None = None
    description: str = Field(default="", max_length=500)
    parent_id: str | None = None
    color: str | None = None
    icon: str = ""
    meta_title: str = Field(default="", max_length=60)
    meta_description: str = Field(default="", max_length=160)
    sort_order: int = 0
    status: CategoryStatus = CategoryStatus.ACTIVE


class CreateCategoryResponse(BaseModel):
    """Create category response."""

    category: CategoryItem


class CreateCategoryUseCase:
    """Use case for creating a category."""

    def __init__(self, category_service: CategoryService) -> None:
        """Initialize create category use case.

        Args:
            category_service: Category domain service
        """
        self.category_service = category_service

    async def execute(self, request: CreateCategoryRequest) -> CreateCategoryResponse:
        """Execute create category flow.

        Raises:
            ParentNotFoundError: If the parent doesn't exist
            CircularHierarchyError: If the parent chain is corrupt
            DuplicateSlugError: If the slug is taken
            ValidationError: If a field is malformed
        """
        view = await self.category_service.create_category(
            name=request.name,
            created_by=UserId(UUID(request.created_by)),
            slug=request.slug,
            description=request.description,
            parent_id=CategoryId(UUID(request.parent_id)) if request.parent_id else None,
            color=request.color,
            icon=request.icon,
            meta_title=request.meta_title,
            meta_description=request.meta_description,
            sort_order=request.sort_order,
            status=request.status,
        )
        return CreateCategoryResponse(category=CategoryItem.from_view(view))
