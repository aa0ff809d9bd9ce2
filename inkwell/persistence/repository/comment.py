"""PostgreSQL implementation of Comment repository."""

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import any_, case, desc, func, literal, select, update
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.domain.model import Comment
from inkwell.domain.repository import CommentRepository
from inkwell.domain.value import CommentId, CommentStatus, PostId, Reaction, UserId
from inkwell.persistence.mappers import comment_to_dict, row_to_comment
from inkwell.persistence.tables import comments_table

_REACTION_COLUMNS = {
    Reaction.LIKE: comments_table.c.likes,
    Reaction.DISLIKE: comments_table.c.dislikes,
}


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository.

    Listings are ordered newest first.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch_all(self, stmt) -> List[Comment]:
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def _fetch_one(self, stmt) -> Optional[Comment]:
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_id(self, node_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == node_id)
        return await self._fetch_one(stmt)

    async def find_children(self, parent_id: Optional[CommentId]) -> List[Comment]:
        """Find direct replies to a comment."""
        if parent_id is None:
            condition = comments_table.c.parent_id.is_(None)
        else:
            condition = comments_table.c.parent_id == parent_id
        stmt = (
            select(comments_table)
            .where(condition)
            .order_by(desc(comments_table.c.created_at))
        )
        return await self._fetch_all(stmt)

    async def count_children(self, parent_id: CommentId) -> int:
        """Count direct replies to a comment."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(comments_table.c.parent_id == parent_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_top_level(
        self, post_id: PostId, status: Optional[CommentStatus] = None
    ) -> List[Comment]:
        """Find top-level comments of a post."""
        stmt = select(comments_table).where(
            comments_table.c.post_id == post_id,
            comments_table.c.parent_id.is_(None),
        )
        if status is not None:
            stmt = stmt.where(comments_table.c.status == status.value)
        stmt = stmt.order_by(desc(comments_table.c.created_at))
        return await self._fetch_all(stmt)

    async def find_replies(
        self, parent_ids: List[CommentId], status: Optional[CommentStatus] = None
    ) -> List[Comment]:
        """Find direct replies to any of the given comments in one query."""
        if not parent_ids:
            return []
        stmt = select(comments_table).where(comments_table.c.parent_id.in_(parent_ids))
        if status is not None:
            stmt = stmt.where(comments_table.c.status == status.value)
        stmt = stmt.order_by(desc(comments_table.c.created_at))
        return await self._fetch_all(stmt)

    def _filtered(
        self, stmt, status: Optional[CommentStatus], post_id: Optional[PostId]
    ):
        if status is not None:
            stmt = stmt.where(comments_table.c.status == status.value)
        if post_id is not None:
            stmt = stmt.where(comments_table.c.post_id == post_id)
        return stmt

    async def find_page(
        self,
        status: Optional[CommentStatus] = None,
        post_id: Optional[PostId] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Comment]:
        """Find one page of comments."""
        stmt = (
            self._filtered(select(comments_table), status, post_id)
            .order_by(desc(comments_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        return await self._fetch_all(stmt)

    async def count(
        self,
        status: Optional[CommentStatus] = None,
        post_id: Optional[PostId] = None,
    ) -> int:
        """Count comments."""
        stmt = self._filtered(
            select(func.count()).select_from(comments_table), status, post_id
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_posts(
        self, post_ids: List[PostId], status: CommentStatus
    ) -> Dict[PostId, int]:
        """Count comments in a status grouped by post."""
        if not post_ids:
            return {}
        stmt = (
            select(comments_table.c.post_id, func.count())
            .where(
                comments_table.c.post_id.in_(post_ids),
                comments_table.c.status == status.value,
            )
            .group_by(comments_table.c.post_id)
        )
        result = await self.session.execute(stmt)
        return {PostId(post_id): count for post_id, count in result.all()}

    async def save(self, node: Comment) -> Comment:
        """Save a comment (create or update).

        Reaction sets are left to toggle_reaction on update.
        """
        existing = await self.find_by_id(node.id)
        values = comment_to_dict(node)

        if existing:
            values.pop("likes")
            values.pop("dislikes")
            stmt = (
                comments_table.update()
                .where(comments_table.c.id == node.id)
                .values(**values)
            )
        else:
            stmt = comments_table.insert().values(**values)

        await self.session.execute(stmt)
        await self.session.flush()
        return await self.find_by_id(node.id) or node

    async def delete(self, node_id: CommentId) -> None:
        """Delete a comment (hard delete). Replies are not touched."""
        stmt = comments_table.delete().where(comments_table.c.id == node_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def toggle_reaction(
        self, comment_id: CommentId, user_id: UserId, reaction: Reaction
    ) -> Optional[Comment]:
        """Toggle a reaction in a single UPDATE ... RETURNING.

        Both SET expressions read the pre-update row, so the toggle and the
        removal from the opposite set happen atomically.
        """
        column = _REACTION_COLUMNS[reaction]
        opposite = _REACTION_COLUMNS[reaction.opposite]
        user = literal(user_id, type_=UUID(as_uuid=True))
        already = user == any_(column)

        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(
                {
                    column: case(
                        (already, func.array_remove(column, user, type_=column.type)),
                        else_=func.array_append(column, user, type_=column.type),
                    ),
                    opposite: case(
                        (already, opposite),
                        else_=func.array_remove(opposite, user, type_=opposite.type),
                    ),
                    comments_table.c.updated_at: datetime.now(),
                }
            )
            .returning(comments_table)
        )
        comment = await self._fetch_one(stmt)
        await self.session.flush()
        return comment

    async def update_status(
        self,
        comment_id: CommentId,
        status: CommentStatus,
        moderation_notes: Optional[str] = None,
    ) -> Optional[Comment]:
        """Write a moderation status."""
        values: dict = {"status": status.value, "updated_at": datetime.now()}
        if moderation_notes is not None:
            values["moderation_notes"] = moderation_notes

        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(**values)
            .returning(comments_table)
        )
        comment = await self._fetch_one(stmt)
        await self.session.flush()
        return comment

    async def update_content(
        self,
        comment_id: CommentId,
        content: str,
        edited_by: UserId,
        edited_at: datetime,
    ) -> Optional[Comment]:
        """Write an edit without touching status or reactions."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment_id)
            .values(
                content=content,
                is_edited=True,
                edited_at=edited_at,
                edited_by=edited_by,
                updated_at=edited_at,
            )
            .returning(comments_table)
        )
        comment = await self._fetch_one(stmt)
        await self.session.flush()
        return comment
