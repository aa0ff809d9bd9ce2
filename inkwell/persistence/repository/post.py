"""PostgreSQL implementation of Post repository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import desc, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.domain.model import CategoryStats, Post
from inkwell.domain.repository import PostRepository
from inkwell.domain.value import CategoryId, PostId, PostStatus
from inkwell.persistence.mappers import post_to_dict, row_to_post
from inkwell.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        existing = await self.find_by_id(post.id)
        values = post_to_dict(post)

        if existing:
            stmt = (
                posts_table.update()
                .where(posts_table.c.id == post.id)
                .values(**values)
            )
        else:
            stmt = posts_table.insert().values(**values)

        await self.session.execute(stmt)
        await self.session.flush()
        return await self.find_by_id(post.id) or post

    async def delete(self, post_id: PostId) -> None:
        """Delete a post."""
        stmt = posts_table.delete().where(posts_table.c.id == post_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def count_by_category(self, category_id: CategoryId) -> int:
        """Count posts in a category, any status."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(posts_table.c.category_id == category_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def aggregate_category_stats(self, category_id: CategoryId) -> CategoryStats:
        """Sum published posts and their views in one query."""
        stmt = select(
            func.count(posts_table.c.id),
            func.coalesce(func.sum(posts_table.c.views), 0),
        ).where(
            posts_table.c.category_id == category_id,
            posts_table.c.status == PostStatus.PUBLISHED.value,
        )
        result = await self.session.execute(stmt)
        total_posts, total_views = result.one()
        return CategoryStats(total_posts=total_posts, total_views=int(total_views))

    async def reassign_category(
        self, source_ids: List[CategoryId], target_id: CategoryId
    ) -> int:
        """Move posts of the sources to the target."""
        if not source_ids:
            return 0
        stmt = (
            update(posts_table)
            .where(posts_table.c.category_id.in_(source_ids))
            .values(category_id=target_id, updated_at=datetime.now())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0

    def _published_in(self, stmt, category_ids: List[CategoryId]):
        return stmt.where(
            posts_table.c.category_id.in_(category_ids),
            posts_table.c.status == PostStatus.PUBLISHED.value,
        )

    async def find_published_in_categories(
        self, category_ids: List[CategoryId], limit: int = 10, offset: int = 0
    ) -> List[Post]:
        """Find published posts in any of the categories, newest first."""
        if not category_ids:
            return []
        stmt = (
            self._published_in(select(posts_table), category_ids)
            .order_by(desc(posts_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_post(row._asdict()) for row in result.fetchall()]

    async def count_published_in_categories(
        self, category_ids: List[CategoryId]
    ) -> int:
        """Count published posts in any of the categories."""
        if not category_ids:
            return 0
        stmt = self._published_in(
            select(func.count()).select_from(posts_table), category_ids
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
