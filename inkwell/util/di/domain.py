"""Domain layer DI providers."""

from dishka import Scope, provide

from inkwell.config import CommentSettings, TreeSettings
from inkwell.domain.repository import (
    CategoryRepository,
    CommentRepository,
    PostRepository,
    UserRepository,
)
from inkwell.domain.service import CategoryService, CommentService, PostService
from inkwell.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with the repository/session
    lifecycle: each HTTP request gets fresh services in its own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_category_service(
        self,
        category_repository: CategoryRepository,
        post_repository: PostRepository,
        user_repository: UserRepository,
        tree_settings: TreeSettings,
    ) -> CategoryService:
        """Provide category hierarchy domain service."""
        return CategoryService(
            category_repository=category_repository,
            post_repository=post_repository,
            user_repository=user_repository,
            tree_settings=tree_settings,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        comment_settings: CommentSettings,
        tree_settings: TreeSettings,
    ) -> CommentService:
        """Provide comment thread domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_repository=post_repository,
            comment_settings=comment_settings,
            tree_settings=tree_settings,
        )

    @provide
    def get_post_service(
        self, post_repository: PostRepository, category_service: CategoryService
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository, category_service=category_service
        )
