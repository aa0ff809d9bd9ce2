"""Integration tests for the PostgreSQL repositories.

Run against a migrated database (``alembic upgrade head``) reachable at
DATABASE__URL; skipped when that variable is not set.
"""

import os
from datetime import datetime
from uuid import uuid4

import pytest

from inkwell.domain.model import CategoryStats, Comment, CommentAuthor, Post
from inkwell.domain.repository import (
    CategoryFilter,
    CategoryRepository,
    CommentRepository,
    PostRepository,
    UserRepository,
)
from inkwell.domain.value import (
    CommentId,
    CommentStatus,
    Email,
    PostStatus,
    Reaction,
    UserId,
)
from tests.conftest import make_category, make_post, make_principal
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"), reason="PostgreSQL not configured"
)

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


def unique(name: str) -> str:
    return f"{name} {uuid4().hex[:8]}"


async def seed_category(env, name: str = "Category", **kwargs):
    user_repo = await env.get(UserRepository)
    category_repo = await env.get(CategoryRepository)
    creator = await user_repo.save(
        make_principal(username=None, email=f"{uuid4().hex[:8]}@example.com")
    )
    return await category_repo.save(
        make_category(unique(name), created_by=creator.id, **kwargs)
    )


class TestCategoryRepositoryIntegration:
    """Integration tests for PostgresCategoryRepository."""

    @pytest.mark.asyncio
    async def test_round_trip_by_slug(self, integration_env):
        """Slug lookups extract the root value before querying."""
        # Arrange
        category_repo = await integration_env.get(CategoryRepository)
        category = await seed_category(integration_env)

        # Act
        found = await category_repo.find_by_slug(category.slug)

        # Assert
        assert found is not None
        assert found.id == category.id
        assert found.color.root == "#1976d2"
        assert found.stats == CategoryStats()

    @pytest.mark.asyncio
    async def test_children_and_reassign(self, integration_env):
        """Children are found by parent and moved in one statement."""
        # Arrange
        category_repo = await integration_env.get(CategoryRepository)
        parent = await seed_category(integration_env)
        target = await seed_category(integration_env)
        child = await seed_category(integration_env, parent_id=parent.id)

        # Act
        before = await category_repo.find_children(parent.id)
        moved = await category_repo.reassign_parent([parent.id], target.id)
        after = await category_repo.find_children(target.id)

        # Assert
        assert [c.id for c in before] == [child.id]
        assert moved == 1
        assert [c.id for c in after] == [child.id]
        assert await category_repo.count(CategoryFilter(parent_id=target.id)) == 1

    @pytest.mark.asyncio
    async def test_save_keeps_stats(self, integration_env):
        """Regular saves don't overwrite derived stats."""
        # Arrange
        category_repo = await integration_env.get(CategoryRepository)
        category = await seed_category(integration_env)
        await category_repo.update_stats(
            category.id, CategoryStats(total_posts=2, total_views=9)
        )

        # Act
        await category_repo.save(category.model_copy(update={"description": "New"}))
        found = await category_repo.find_by_id(category.id)

        # Assert
        assert found is not None
        assert found.description == "New"
        assert found.stats.total_posts == 2

    @pytest.mark.asyncio
    async def test_search_matches_name_or_description(self, integration_env):
        """Search is case-insensitive over name and description."""
        # Arrange
        category_repo = await integration_env.get(CategoryRepository)
        token = uuid4().hex[:10]
        by_name = await seed_category(integration_env, name=f"Quokka {token}")
        by_description = await seed_category(integration_env)
        await category_repo.save(
            by_description.model_copy(update={"description": f"About {token}"})
        )
        await seed_category(integration_env, name="Unrelated")
        search = CategoryFilter(search=token.upper())

        # Act
        page = await category_repo.find_page(search, sort_by="name")
        total = await category_repo.count(search)

        # Assert
        assert {c.id for c in page} == {by_name.id, by_description.id}
        assert total == 2

    @pytest.mark.asyncio
    async def test_roots_only_skips_children(self, integration_env):
        """The roots filter drops categories that have a parent."""
        # Arrange
        category_repo = await integration_env.get(CategoryRepository)
        token = uuid4().hex[:10]
        root = await seed_category(integration_env, name=f"Root {token}")
        await seed_category(
            integration_env, name=f"Child {token}", parent_id=root.id
        )
        roots = CategoryFilter(search=token, roots_only=True)

        # Act
        page = await category_repo.find_page(roots, limit=5)
        total = await category_repo.count(roots)

        # Assert
        assert [c.id for c in page] == [root.id]
        assert total == 1


class TestPostRepositoryIntegration:
    """Integration tests for PostgresPostRepository."""

    @pytest.mark.asyncio
    async def test_aggregate_published_only(self, integration_env):
        """Stats sum published posts and their views."""
        # Arrange
        post_repo = await integration_env.get(PostRepository)
        category = await seed_category(integration_env)
        await post_repo.save(make_post(category.id, views=4))
        await post_repo.save(make_post(category.id, views=6))
        await post_repo.save(make_post(category.id, status=PostStatus.DRAFT, views=50))

        # Act
        stats = await post_repo.aggregate_category_stats(category.id)

        # Assert
        assert stats == CategoryStats(total_posts=2, total_views=10)
        assert await post_repo.count_by_category(category.id) == 3


class TestCommentRepositoryIntegration:
    """Integration tests for PostgresCommentRepository."""

    async def _seed_post(self, env) -> Post:
        post_repo = await env.get(PostRepository)
        category = await seed_category(env)
        return await post_repo.save(make_post(category.id))

    async def _seed_comment(
        self,
        env,
        post: Post | None = None,
        parent_id: CommentId | None = None,
        status: CommentStatus = CommentStatus.APPROVED,
    ) -> Comment:
        comment_repo = await env.get(CommentRepository)
        post = post or await self._seed_post(env)
        return await comment_repo.save(
            Comment(
                id=CommentId(uuid4()),
                post_id=post.id,
                author=CommentAuthor(name="Guest", email=Email("guest@example.com")),
                content="Hello",
                parent_id=parent_id,
                status=status,
            )
        )

    @pytest.mark.asyncio
    async def test_toggle_is_exclusive(self, integration_env):
        """Liking clears a dislike in the same statement."""
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        comment = await self._seed_comment(integration_env)
        user_id = UserId(uuid4())

        # Act
        await comment_repo.toggle_reaction(comment.id, user_id, Reaction.DISLIKE)
        updated = await comment_repo.toggle_reaction(comment.id, user_id, Reaction.LIKE)

        # Assert
        assert updated is not None
        assert updated.likes == frozenset({user_id})
        assert updated.dislikes == frozenset()

    @pytest.mark.asyncio
    async def test_toggles_from_many_users(self, integration_env):
        """Toggles from different users all land."""
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        comment = await self._seed_comment(integration_env)
        users = [UserId(uuid4()) for _ in range(5)]

        # Act
        for user_id in users:
            await comment_repo.toggle_reaction(comment.id, user_id, Reaction.LIKE)
        found = await comment_repo.find_by_id(comment.id)

        # Assert
        assert found is not None
        assert found.likes == frozenset(users)

    @pytest.mark.asyncio
    async def test_counts_by_post(self, integration_env):
        """Counts are grouped by post and filtered by status."""
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        comment = await self._seed_comment(integration_env)

        # Act
        counts = await comment_repo.count_by_posts(
            [comment.post_id], CommentStatus.APPROVED
        )

        # Assert
        assert counts == {comment.post_id: 1}

    @pytest.mark.asyncio
    async def test_top_level_filters_post_parent_and_status(self, integration_env):
        """Only parentless comments of the post in the status are returned."""
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        post = await self._seed_post(integration_env)
        older = await self._seed_comment(integration_env, post=post)
        newer = await self._seed_comment(integration_env, post=post)
        await self._seed_comment(integration_env, post=post, parent_id=older.id)
        await self._seed_comment(
            integration_env, post=post, status=CommentStatus.PENDING
        )
        await self._seed_comment(integration_env)

        # Act
        top_level = await comment_repo.find_top_level(post.id, CommentStatus.APPROVED)

        # Assert
        assert [c.id for c in top_level] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_replies_for_several_parents_in_one_query(self, integration_env):
        """Replies to any listed parent come back, filtered by status."""
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        post = await self._seed_post(integration_env)
        first = await self._seed_comment(integration_env, post=post)
        second = await self._seed_comment(integration_env, post=post)
        reply_a = await self._seed_comment(
            integration_env, post=post, parent_id=first.id
        )
        reply_b = await self._seed_comment(
            integration_env, post=post, parent_id=second.id
        )
        await self._seed_comment(
            integration_env,
            post=post,
            parent_id=first.id,
            status=CommentStatus.SPAM,
        )

        # Act
        replies = await comment_repo.find_replies(
            [first.id, second.id], CommentStatus.APPROVED
        )
        none = await comment_repo.find_replies([], CommentStatus.APPROVED)

        # Assert
        assert {c.id for c in replies} == {reply_a.id, reply_b.id}
        assert {c.parent_id for c in replies} == {first.id, second.id}
        assert none == []

    @pytest.mark.asyncio
    async def test_edit_leaves_status_alone(self, integration_env):
        """Content edits only write the content and edit markers."""
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        comment = await self._seed_comment(
            integration_env, status=CommentStatus.PENDING
        )
        await comment_repo.update_status(comment.id, CommentStatus.SPAM)
        editor = UserId(uuid4())

        # Act
        edited = await comment_repo.update_content(
            comment.id, "Edited", edited_by=editor, edited_at=datetime.now()
        )

        # Assert
        assert edited is not None
        assert edited.content == "Edited"
        assert edited.is_edited
        assert edited.edited_by == editor
        assert edited.status == CommentStatus.SPAM
