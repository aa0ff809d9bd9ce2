"""In-memory category repository for testing."""

from datetime import datetime
from typing import Optional

from inkwell.domain.model.category import Category, CategoryStats
from inkwell.domain.repository.category import (
    CategoryFilter,
    CategoryRepository,
    CategorySortField,
)
from inkwell.domain.value import CategoryId, CategoryStatus, Slug


def _sibling_key(category: Category) -> tuple[int, str]:
    return (category.sort_order, category.name)


class InMemoryCategoryRepository(CategoryRepository):
    """In-memory implementation of CategoryRepository for testing."""

    def __init__(self) -> None:
        self._categories: dict[CategoryId, Category] = {}

    async def find_by_id(self, node_id: CategoryId) -> Optional[Category]:
        """Find a category by ID."""
        return self._categories.get(node_id)

    async def find_by_slug(self, slug: Slug) -> Optional[Category]:
        """Find a category by slug."""
        return next(
            (c for c in self._categories.values() if c.slug.root == slug.root), None
        )

    async def find_by_ids(self, category_ids: list[CategoryId]) -> list[Category]:
        """Find categories by ID."""
        wanted = set(category_ids)
        return [c for cid, c in self._categories.items() if cid in wanted]

    async def find_children(self, parent_id: Optional[CategoryId]) -> list[Category]:
        """Find direct children ordered by sort_order then name."""
        children = [c for c in self._categories.values() if c.parent_id == parent_id]
        return sorted(children, key=_sibling_key)

    async def count_children(self, parent_id: CategoryId) -> int:
        """Count direct children."""
        return sum(1 for c in self._categories.values() if c.parent_id == parent_id)

    async def find_all(self, status: Optional[CategoryStatus] = None) -> list[Category]:
        """Find all categories, optionally by status."""
        categories = [
            c for c in self._categories.values() if status is None or c.status == status
        ]
        return sorted(categories, key=_sibling_key)

    def _filter(self, category_filter: CategoryFilter) -> list[Category]:
        categories = list(self._categories.values())

        if category_filter.status is not None:
            categories = [c for c in categories if c.status == category_filter.status]

        if category_filter.roots_only:
            categories = [c for c in categories if c.parent_id is None]
        elif category_filter.parent_id is not None:
            categories = [
                c for c in categories if c.parent_id == category_filter.parent_id
            ]

        if category_filter.search:
            needle = category_filter.search.lower()
            categories = [
                c
                for c in categories
                if needle in c.name.lower() or needle in c.description.lower()
            ]

        return categories

    async def find_page(
        self,
        category_filter: CategoryFilter,
        sort_by: CategorySortField = "sort_order",
        descending: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Category]:
        """Find one page of filtered categories."""
        categories = self._filter(category_filter)

        if sort_by == "total_posts":
            categories.sort(key=lambda c: c.stats.total_posts, reverse=descending)
        else:
            categories.sort(key=lambda c: getattr(c, sort_by), reverse=descending)

        return categories[offset : offset + limit]

    async def count(self, category_filter: CategoryFilter) -> int:
        """Count filtered categories."""
        return len(self._filter(category_filter))

    async def save(self, node: Category) -> Category:
        """Save or update a category."""
        self._categories[node.id] = node
        return node

    async def delete(self, node_id: CategoryId) -> None:
        """Delete a category."""
        self._categories.pop(node_id, None)

    async def reassign_parent(
        self, source_ids: list[CategoryId], target_id: CategoryId
    ) -> int:
        """Move children of the sources under the target."""
        sources = set(source_ids)
        moved = 0
        for category_id, category in list(self._categories.items()):
            if category.parent_id in sources:
                self._categories[category_id] = category.model_copy(
                    update={"parent_id": target_id, "updated_at": datetime.now()}
                )
                moved += 1
        return moved

    async def update_stats(
        self, category_id: CategoryId, stats: CategoryStats
    ) -> Optional[Category]:
        """Overwrite derived stats."""
        category = self._categories.get(category_id)
        if category is None:
            return None
        updated = category.model_copy(update={"stats": stats})
        self._categories[category_id] = updated
        return updated

    async def update_sort_order(
        self, category_id: CategoryId, sort_order: int
    ) -> Optional[Category]:
        """Set the sibling sort position."""
        category = self._categories.get(category_id)
        if category is None:
            return None
        updated = category.model_copy(
            update={"sort_order": sort_order, "updated_at": datetime.now()}
        )
        self._categories[category_id] = updated
        return updated
