"""Category repository interface."""

from abc import abstractmethod
from typing import List, Literal, Optional

from inkwell.domain.model.category import Category, CategoryStats
from inkwell.domain.model.common import DomainModel
from inkwell.domain.repository.tree import TreeNodeRepository
from inkwell.domain.value import CategoryId, CategoryStatus, Slug

CategorySortField = Literal["sort_order", "name", "created_at", "total_posts"]


class CategoryFilter(DomainModel):
    """Filter for flat category listings.

    ``roots_only`` selects categories without a parent and takes precedence
    over ``parent_id``.
    """

    status: Optional[CategoryStatus] = None
    parent_id: Optional[CategoryId] = None
    roots_only: bool = False
    search: Optional[str] = None


class CategoryRepository(TreeNodeRepository[CategoryId, Category]):
    """Repository for Category entity.

    Sibling order everywhere is (sort_order, name).
    """

    @abstractmethod
    async def find_by_slug(self, slug: Slug) -> Optional[Category]:
        """Find a category by slug."""
        pass

    @abstractmethod
    async def find_by_ids(self, category_ids: List[CategoryId]) -> List[Category]:
        """Find all categories whose ID is in the list (missing IDs are skipped)."""
        pass

    @abstractmethod
    async def find_all(self, status: Optional[CategoryStatus] = None) -> List[Category]:
        """Find every category, optionally restricted to a status.

        Returns:
            Categories ordered by sort_order then name
        """
        pass

    @abstractmethod
    async def find_page(
        self,
        category_filter: CategoryFilter,
        sort_by: CategorySortField = "sort_order",
        descending: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Category]:
        """Find one page of categories matching a filter.

        Search is a case-insensitive substring match on name or description.
        """
        pass

    @abstractmethod
    async def count(self, category_filter: CategoryFilter) -> int:
        """Count categories matching a filter."""
        pass

    @abstractmethod
    async def reassign_parent(
        self, source_ids: List[CategoryId], target_id: CategoryId
    ) -> int:
        """Point every child of any source at the target instead.

        Returns:
            Number of categories moved
        """
        pass

    @abstractmethod
    async def update_stats(
        self, category_id: CategoryId, stats: CategoryStats
    ) -> Optional[Category]:
        """Overwrite the derived stats of a category.

        Returns:
            The updated category, or None if it no longer exists
        """
        pass

    @abstractmethod
    async def update_sort_order(
        self, category_id: CategoryId, sort_order: int
    ) -> Optional[Category]:
        """Set the sibling sort position of a category."""
        pass
