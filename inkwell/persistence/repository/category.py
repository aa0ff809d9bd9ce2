"""PostgreSQL implementation of Category repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import asc, desc, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.domain.model import Category, CategoryStats
from inkwell.domain.repository import (
    CategoryFilter,
    CategoryRepository,
    CategorySortField,
)
from inkwell.domain.value import CategoryId, CategoryStatus, Slug
from inkwell.persistence.mappers import category_to_dict, row_to_category
from inkwell.persistence.tables import categories_table

_SIBLING_ORDER = (categories_table.c.sort_order, categories_table.c.name)


class PostgresCategoryRepository(CategoryRepository):
    """PostgreSQL implementation of CategoryRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_all(self, stmt) -> List[Category]:
        result = await self.session.execute(stmt)
        return [row_to_category(row._asdict()) for row in result.fetchall()]

    async def _fetch_one(self, stmt) -> Optional[Category]:
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_category(row._asdict()) if row else None

    async def find_by_id(self, node_id: CategoryId) -> Optional[Category]:
        """Find a category by ID."""
        stmt = select(categories_table).where(categories_table.c.id == node_id)
        return await self._fetch_one(stmt)

    async def find_by_slug(self, slug: Slug) -> Optional[Category]:
        """Find a category by slug."""
        stmt = select(categories_table).where(categories_table.c.slug == slug.root)
        return await self._fetch_one(stmt)

    async def find_by_ids(self, category_ids: List[CategoryId]) -> List[Category]:
        """Find categories by IDs."""
        if not category_ids:
            return []
        stmt = select(categories_table).where(categories_table.c.id.in_(category_ids))
        return await self._fetch_all(stmt)

    async def find_children(self, parent_id: Optional[CategoryId]) -> List[Category]:
        """Find direct children of a category, or roots for None."""
        if parent_id is None:
            condition = categories_table.c.parent_id.is_(None)
        else:
            condition = categories_table.c.parent_id == parent_id
        stmt = select(categories_table).where(condition).order_by(*_SIBLING_ORDER)
        return await self._fetch_all(stmt)

    async def count_children(self, parent_id: CategoryId) -> int:
        """Count direct children of a category."""
        stmt = (
            select(func.count())
            .select_from(categories_table)
            .where(categories_table.c.parent_id == parent_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_all(self, status: Optional[CategoryStatus] = None) -> List[Category]:
        """Find all categories, optionally by status."""
        stmt = select(categories_table).order_by(*_SIBLING_ORDER)
        if status is not None:
            stmt = stmt.where(categories_table.c.status == status.value)
        return await self._fetch_all(stmt)

    def _apply_filter(self, stmt, category_filter: CategoryFilter):
        if category_filter.status is not None:
            stmt = stmt.where(categories_table.c.status == category_filter.status.value)

        if category_filter.roots_only:
            stmt = stmt.where(categories_table.c.parent_id.is_(None))
        elif category_filter.parent_id is not None:
            stmt = stmt.where(categories_table.c.parent_id == category_filter.parent_id)

        if category_filter.search:
            pattern = f"%{category_filter.search}%"
            stmt = stmt.where(
                or_(
                    categories_table.c.name.ilike(pattern),
                    categories_table.c.description.ilike(pattern),
                )
            )
        return stmt

    async def find_page(
        self,
        category_filter: CategoryFilter,
        sort_by: CategorySortField = "sort_order",
        descending: bool = False,
        limit: int = 10,
        offset: int = 0,
    ) -> List[Category]:
        """Find one page of filtered categories."""
        column = categories_table.c[sort_by]
        stmt = self._apply_filter(select(categories_table), category_filter)
        stmt = (
            stmt.order_by(desc(column) if descending else asc(column))
            .limit(limit)
            .offset(offset)
        )
        return await self._fetch_all(stmt)

    async def count(self, category_filter: CategoryFilter) -> int:
        """Count filtered categories."""
        stmt = self._apply_filter(
            select(func.count()).select_from(categories_table), category_filter
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, node: Category) -> Category:
        """Save a category (create or update).

        Derived stats are owned by update_stats and never overwritten here.
        """
        existing = await self.find_by_id(node.id)
        values = category_to_dict(node)

        if existing:
            values.pop("total_posts")
            values.pop("total_views")
            values.pop("created_by")
            stmt = (
                categories_table.update()
                .where(categories_table.c.id == node.id)
                .values(**values)
            )
        else:
            stmt = categories_table.insert().values(**values)

        await self.session.execute(stmt)
        await self.session.flush()
        return await self.find_by_id(node.id) or node

    async def delete(self, node_id: CategoryId) -> None:
        """Delete a category (hard delete)."""
        stmt = categories_table.delete().where(categories_table.c.id == node_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def reassign_parent(
        self, source_ids: List[CategoryId], target_id: CategoryId
    ) -> int:
        """Move children of the sources under the target in one statement."""
        if not source_ids:
            return 0
        stmt = (
            update(categories_table)
            .where(categories_table.c.parent_id.in_(source_ids))
            .values(parent_id=target_id, updated_at=datetime.now())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    async def update_stats(
        self, category_id: CategoryId, stats: CategoryStats
    ) -> Optional[Category]:
        """Overwrite derived stats."""
        stmt = (
            update(categories_table)
            .where(categories_table.c.id == category_id)
            .values(total_posts=stats.total_posts, total_views=stats.total_views)
            .returning(categories_table)
        )
        category = await self._fetch_one(stmt)
        await self.session.flush()
        return category

    async def update_sort_order(
        self, category_id: CategoryId, sort_order: int
    ) -> Optional[Category]:
        """Set the sibling sort position."""
        stmt = (
            update(categories_table)
            .where(categories_table.c.id == category_id)
            .values(sort_order=sort_order, updated_at=datetime.now())
            .returning(categories_table)
        )
        category = await self._fetch_one(stmt)
        await self.session.flush()
        return category
