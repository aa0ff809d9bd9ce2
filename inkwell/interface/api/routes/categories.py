"""Category routes.

Static paths (``/tree``, ``/reorder``, ``/merge``) are declared before the
``/{slug}`` and ``/{category_id}`` routes so they are matched first.
"""

from typing import Literal
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, Field

from inkwell.application.usecase.category import (
    CategoryPosition,
    CreateCategoryRequest,
    CreateCategoryResponse,
    CreateCategoryUseCase,
    DeleteCategoryRequest,
    DeleteCategoryUseCase,
    GetCategoryPostsRequest,
    GetCategoryPostsResponse,
    GetCategoryPostsUseCase,
    GetCategoryRequest,
    GetCategoryResponse,
    GetCategoryTreeRequest,
    GetCategoryTreeResponse,
    GetCategoryTreeUseCase,
    GetCategoryUseCase,
    ListCategoriesRequest,
    ListCategoriesResponse,
    ListCategoriesUseCase,
    MergeCategoriesRequest,
    MergeCategoriesResponse,
    MergeCategoriesUseCase,
    RefreshCategoryStatsRequest,
    RefreshCategoryStatsResponse,
    RefreshCategoryStatsUseCase,
    ReorderCategoriesRequest,
    ReorderCategoriesResponse,
    ReorderCategoriesUseCase,
    UpdateCategoryRequest,
    UpdateCategoryResponse,
    UpdateCategoryUseCase,
)
from inkwell.config import PaginationSettings
from inkwell.domain.model import Principal
from inkwell.domain.value import CategoryStatus
from inkwell.interface.api.auth import require_admin

router = APIRouter(prefix="/categories", tags=["categories"], route_class=DishkaRoute)


class CreateCategoryAPIRequest(BaseModel):
    """API request for creating a category."""

    name: str = Field(min_length=1, max_length=50)
    slug: str | None = None
    description: str = Field(default="", max_length=500)
    parent_id: UUID | None = None
    color: str | None = None
    icon: str = ""
    meta_title: str = Field(default="", max_length=60)
    meta_description: str = Field(default="", max_length=160)
    sort_order: int = 0
    status: CategoryStatus = CategoryStatus.ACTIVE


class UpdateCategoryAPIRequest(BaseModel):
    """API request for updating a category.

    Omitted fields are left unchanged; ``parent_id: null`` moves the
    category to the root level.
    """

    name: str | None = Field(default=None, min_length=1, max_length=50)
    slug: str | None = None
    description: str | None = Field(default=None, max_length=500)
    parent_id: UUID | None = None
    color: str | None = None
    icon: str | None = None
    meta_title: str | None = Field(default=None, max_length=60)
    meta_description: str | None = Field(default=None, max_length=160)
    sort_order: int | None = None
    status: CategoryStatus | None = None


class CategoryPositionAPIItem(BaseModel):
    category_id: UUID
    sort_order: int


class ReorderCategoriesAPIRequest(BaseModel):
    """API request for reordering categories."""

    categories: list[CategoryPositionAPIItem]


class MergeCategoriesAPIRequest(BaseModel):
    """API request for merging categories into a target."""

    source_ids: list[UUID]
    target_id: UUID


@router.get("", response_model=ListCategoriesResponse)
async def list_categories(
    list_categories_use_case: FromDishka[ListCategoriesUseCase],
    pagination: FromDishka[PaginationSettings],
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    status_filter: CategoryStatus | None = Query(
        default=CategoryStatus.ACTIVE, alias="status"
    ),
    parent: str | None = None,
    search: str | None = None,
    sort_by: Literal["sort_order", "name", "created_at", "total_posts"] = "sort_order",
    descending: bool = False,
) -> ListCategoriesResponse:
    """List categories with pagination.

    Args:
        page: 1-based page number
        limit: Page size (defaults and cap come from pagination settings)
        status_filter: Category status, active by default
        parent: Parent category ID, or "null" for root categories
        search: Case-insensitive match on name or description
        sort_by: Sort field
        descending: Sort direction

    Raises:
        HTTPException: 400 if parent is not "null" or a UUID
    """
    page_size = min(limit or pagination.default_limit, pagination.max_limit)
    try:
        return await list_categories_use_case.execute(
            ListCategoriesRequest(
                page=page,
                limit=page_size,
                status=status_filter,
                parent=parent,
                search=search,
                sort_by=sort_by,
                descending=descending,
            )
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/tree", response_model=GetCategoryTreeResponse)
async def get_category_tree(
    get_category_tree_use_case: FromDishka[GetCategoryTreeUseCase],
    status_filter: CategoryStatus = Query(default=CategoryStatus.ACTIVE, alias="status"),
    include_empty: bool = True,
) -> GetCategoryTreeResponse:
    """Get the nested category tree for navigation."""
    return await get_category_tree_use_case.execute(
        GetCategoryTreeRequest(status=status_filter, include_empty=include_empty)
    )


@router.post("/reorder", response_model=ReorderCategoriesResponse)
async def reorder_categories(
    request: ReorderCategoriesAPIRequest,
    reorder_categories_use_case: FromDishka[ReorderCategoriesUseCase],
    admin: Principal = Depends(require_admin),
) -> ReorderCategoriesResponse:
    """Set the sort order of several categories. Admin only."""
    return await reorder_categories_use_case.execute(
        ReorderCategoriesRequest(
            categories=[
                CategoryPosition(
                    category_id=str(item.category_id), sort_order=item.sort_order
                )
                for item in request.categories
            ]
        )
    )


@router.post("/merge", response_model=MergeCategoriesResponse)
async def merge_categories(
    request: MergeCategoriesAPIRequest,
    merge_categories_use_case: FromDishka[MergeCategoriesUseCase],
    admin: Principal = Depends(require_admin),
) -> MergeCategoriesResponse:
    """Merge source categories into a target. Admin only."""
    return await merge_categories_use_case.execute(
        MergeCategoriesRequest(
            source_ids=[str(s) for s in request.source_ids],
            target_id=str(request.target_id),
        )
    )


@router.post(
    "",
    response_model=CreateCategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    request: CreateCategoryAPIRequest,
    create_category_use_case: FromDishka[CreateCategoryUseCase],
    admin: Principal = Depends(require_admin),
) -> CreateCategoryResponse:
    """Create a category. Admin only.

    The slug is derived from the name when omitted.
    """
    return await create_category_use_case.execute(
        CreateCategoryRequest(
            **request.model_dump(exclude={"parent_id"}),
            parent_id=str(request.parent_id) if request.parent_id else None,
            created_by=str(admin.id),
        )
    )


@router.get("/{slug}", response_model=GetCategoryResponse)
async def get_category(
    slug: str,
    get_category_use_case: FromDishka[GetCategoryUseCase],
) -> GetCategoryResponse:
    """Get an active category by slug with breadcrumb, siblings and children."""
    return await get_category_use_case.execute(GetCategoryRequest(slug=slug))


@router.get("/{category_id}/posts", response_model=GetCategoryPostsResponse)
async def get_category_posts(
    category_id: UUID,
    get_category_posts_use_case: FromDishka[GetCategoryPostsUseCase],
    pagination: FromDishka[PaginationSettings],
    include_subcategories: bool = True,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> GetCategoryPostsResponse:
    """List published posts in a category and, by default, its descendants."""
    return await get_category_posts_use_case.execute(
        GetCategoryPostsRequest(
            category_id=str(category_id),
            include_subcategories=include_subcategories,
            page=page,
            limit=min(limit or pagination.default_limit, pagination.max_limit),
        )
    )


@router.put("/{category_id}", response_model=UpdateCategoryResponse)
async def update_category(
    category_id: UUID,
    request: UpdateCategoryAPIRequest,
    update_category_use_case: FromDishka[UpdateCategoryUseCase],
    admin: Principal = Depends(require_admin),
) -> UpdateCategoryResponse:
    """Update a category. Admin only."""
    provided = request.model_dump(exclude_unset=True)
    if provided.get("parent_id") is not None:
        provided["parent_id"] = str(provided["parent_id"])

    return await update_category_use_case.execute(
        UpdateCategoryRequest(category_id=str(category_id), **provided)
    )


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    delete_category_use_case: FromDishka[DeleteCategoryUseCase],
    admin: Principal = Depends(require_admin),
) -> Response:
    """Delete a category without posts or subcategories. Admin only."""
    await delete_category_use_case.execute(
        DeleteCategoryRequest(category_id=str(category_id))
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{category_id}/stats", response_model=RefreshCategoryStatsResponse)
async def refresh_category_stats(
    category_id: UUID,
    refresh_category_stats_use_case: FromDishka[RefreshCategoryStatsUseCase],
    admin: Principal = Depends(require_admin),
) -> RefreshCategoryStatsResponse:
    """Recompute a category's post and view totals. Admin only."""
    return await refresh_category_stats_use_case.execute(
        RefreshCategoryStatsRequest(category_id=str(category_id))
    )
