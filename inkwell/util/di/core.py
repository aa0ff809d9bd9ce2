"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from inkwell.config import CommentSettings, PaginationSettings, Settings, TreeSettings
from inkwell.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Config provider.

    Settings are loaded once from the environment and .env file; nested
    sections are exposed individually so services depend only on theirs.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_tree_settings(self, settings: Settings) -> TreeSettings:
        return settings.tree

    @provide(scope=Scope.APP)
    def provide_comment_settings(self, settings: Settings) -> CommentSettings:
        return settings.comments

    @provide(scope=Scope.APP)
    def provide_pagination_settings(self, settings: Settings) -> PaginationSettings:
        return settings.pagination
