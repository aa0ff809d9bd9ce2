"""Get category by slug use case."""

from pydantic import BaseModel

from inkwell.domain.service import CategoryRef, CategoryService

from .common import CategoryItem, CategoryRefItem


class GetCategoryRequest(BaseModel):
    """Get category request."""

    slug: str


class GetCategoryResponse(BaseModel):
    """Category page: the category and its place in the tree."""

    category: CategoryItem
    breadcrumb: list[CategoryRefItem]
    siblings: list[CategoryRefItem]
    subcategories: list[CategoryItem]


class GetCategoryUseCase:
    """Use case for the public category page."""

    def __init__(self, category_service: CategoryService) -> None:
        self.category_service = category_service

    async def execute(self, request: GetCategoryRequest) -> GetCategoryResponse:
        """Execute get category flow.

        Raises:
            NotFoundError: If no active category has the slug
        """
        detail = await self.category_service.get_by_slug(request.slug)

        return GetCategoryResponse(
            category=CategoryItem.from_view(detail.view),
            breadcrumb=[CategoryRefItem.from_domain(r) for r in detail.breadcrumb],
            siblings=[
                CategoryRefItem.from_domain(CategoryRef.of(s)) for s in detail.siblings
            ],
            subcategories=[CategoryItem.from_category(s) for s in detail.subcategories],
        )
