"""Category use cases."""

from .create_category import (
    CreateCategoryRequest,
    CreateCategoryResponse,
    CreateCategoryUseCase,
)
from .delete_category import DeleteCategoryRequest, DeleteCategoryUseCase
from .get_category import GetCategoryRequest, GetCategoryResponse, GetCategoryUseCase
from .get_category_posts import (
    GetCategoryPostsRequest,
    GetCategoryPostsResponse,
    GetCategoryPostsUseCase,
)
from .get_category_tree import (
    GetCategoryTreeRequest,
    GetCategoryTreeResponse,
    GetCategoryTreeUseCase,
)
from .list_categories import (
    ListCategoriesRequest,
    ListCategoriesResponse,
    ListCategoriesUseCase,
)
from .merge_categories import (
    MergeCategoriesRequest,
    MergeCategoriesResponse,
    MergeCategoriesUseCase,
)
from .refresh_category_stats import (
    RefreshCategoryStatsRequest,
    RefreshCategoryStatsResponse,
    RefreshCategoryStatsUseCase,
)
from .reorder_categories import (
    CategoryPosition,
    ReorderCategoriesRequest,
    ReorderCategoriesResponse,
    ReorderCategoriesUseCase,
)
from .update_category import (
    UpdateCategoryRequest,
    UpdateCategoryResponse,
    UpdateCategoryUseCase,
)

__all__ = [
    "CategoryPosition",
    "CreateCategoryRequest",
    "CreateCategoryResponse",
    "CreateCategoryUseCase",
    "DeleteCategoryRequest",
    "DeleteCategoryUseCase",
    "GetCategoryPostsRequest",
    "GetCategoryPostsResponse",
    "GetCategoryPostsUseCase",
    "GetCategoryRequest",
    "GetCategoryResponse",
    "GetCategoryTreeRequest",
    "GetCategoryTreeResponse",
    "GetCategoryTreeUseCase",
    "GetCategoryUseCase",
    "ListCategoriesRequest",
    "ListCategoriesResponse",
    "ListCategoriesUseCase",
    "MergeCategoriesRequest",
    "MergeCategoriesResponse",
    "MergeCategoriesUseCase",
    "RefreshCategoryStatsRequest",
    "RefreshCategoryStatsResponse",
    "RefreshCategoryStatsUseCase",
    "ReorderCategoriesRequest",
    "ReorderCategoriesResponse",
    "ReorderCategoriesUseCase",
    "UpdateCategoryRequest",
    "UpdateCategoryResponse",
    "UpdateCategoryUseCase",
]
