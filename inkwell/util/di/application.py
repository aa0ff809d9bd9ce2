"""Application layer DI providers."""

from dishka import Scope, provide

from inkwell.application.usecase.category import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    GetCategoryPostsUseCase,
    GetCategoryTreeUseCase,
    GetCategoryUseCase,
    ListCategoriesUseCase,
    MergeCategoriesUseCase,
    RefreshCategoryStatsUseCase,
    ReorderCategoriesUseCase,
    UpdateCategoryUseCase,
)
from inkwell.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentCountsUseCase,
    GetCommentTreeUseCase,
    ListCommentsUseCase,
    ModerateCommentUseCase,
    ReactToCommentUseCase,
    UpdateCommentUseCase,
)
from inkwell.domain.service import CategoryService, CommentService
from inkwell.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Category use cases
    @provide
    def get_list_categories_use_case(
        self, category_service: CategoryService
    ) -> ListCategoriesUseCase:
        return ListCategoriesUseCase(category_service=category_service)

    @provide
    def get_category_tree_use_case(
        self, category_service: CategoryService
    ) -> GetCategoryTreeUseCase:
        return GetCategoryTreeUseCase(category_service=category_service)

    @provide
    def get_category_use_case(
        self, category_service: CategoryService
    ) -> GetCategoryUseCase:
        return GetCategoryUseCase(category_service=category_service)

    @provide
    def get_category_posts_use_case(
        self, category_service: CategoryService
    ) -> GetCategoryPostsUseCase:
        return GetCategoryPostsUseCase(category_service=category_service)

    @provide
    def get_create_category_use_case(
        self, category_service: CategoryService
    ) -> CreateCategoryUseCase:
        return CreateCategoryUseCase(category_service=category_service)

    @provide
    def get_update_category_use_case(
        self, category_service: CategoryService
    ) -> UpdateCategoryUseCase:
        return UpdateCategoryUseCase(category_service=category_service)

    @provide
    def get_delete_category_use_case(
        self, category_service: CategoryService
    ) -> DeleteCategoryUseCase:
        return DeleteCategoryUseCase(category_service=category_service)

    @provide
    def get_reorder_categories_use_case(
        self, category_service: CategoryService
    ) -> ReorderCategoriesUseCase:
        return ReorderCategoriesUseCase(category_service=category_service)

    @provide
    def get_merge_categories_use_case(
        self, category_service: CategoryService
    ) -> MergeCategoriesUseCase:
        return MergeCategoriesUseCase(category_service=category_service)

    @provide
    def get_refresh_category_stats_use_case(
        self, category_service: CategoryService
    ) -> RefreshCategoryStatsUseCase:
        return RefreshCategoryStatsUseCase(category_service=category_service)

    # Comment use cases
    @provide
    def get_comment_tree_use_case(
        self, comment_service: CommentService
    ) -> GetCommentTreeUseCase:
        return GetCommentTreeUseCase(comment_service=comment_service)

    @provide
    def get_comment_counts_use_case(
        self, comment_service: CommentService
    ) -> GetCommentCountsUseCase:
        return GetCommentCountsUseCase(comment_service=comment_service)

    @provide
    def get_list_comments_use_case(
        self, comment_service: CommentService
    ) -> ListCommentsUseCase:
        return ListCommentsUseCase(comment_service=comment_service)

    @provide
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        return CreateCommentUseCase(comment_service=comment_service)

    @provide
    def get_update_comment_use_case(
        self, comment_service: CommentService
    ) -> UpdateCommentUseCase:
        return UpdateCommentUseCase(comment_service=comment_service)

    @provide
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide
    def get_react_to_comment_use_case(
        self, comment_service: CommentService
    ) -> ReactToCommentUseCase:
        return ReactToCommentUseCase(comment_service=comment_service)

    @provide
    def get_moderate_comment_use_case(
        self, comment_service: CommentService
    ) -> ModerateCommentUseCase:
        return ModerateCommentUseCase(comment_service=comment_service)
