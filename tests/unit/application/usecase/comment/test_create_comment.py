"""Unit tests for CreateCommentUseCase."""

from uuid import uuid4

import pytest

from inkwell.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
)
from inkwell.domain.repository import PostRepository
from inkwell.domain.value import CategoryId, CommentStatus
from tests.conftest import make_post, make_principal
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestCreateCommentUseCase:
    """Tests for CreateCommentUseCase."""

    @pytest.mark.asyncio
    async def test_guest_comment_awaits_moderation(self, unit_env):
        """Pending comments are reported as awaiting moderation."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        use_case = await unit_env.get(CreateCommentUseCase)
        post = await post_repo.save(make_post(CategoryId(uuid4())))

        # Act
        response = await use_case.execute(
            CreateCommentRequest(
                post_id=str(post.id),
                content="Great read",
                name="Guest",
                email="guest@example.com",
                website="https://guest.example.com",
            )
        )

        # Assert
        assert response.message == "Comment submitted and awaiting moderation"
        assert response.comment.status == CommentStatus.PENDING
        assert response.comment.author_name == "Guest"
        assert response.comment.author_website == "https://guest.example.com"
        assert "author_email" not in response.model_dump()["comment"]

    @pytest.mark.asyncio
    async def test_reply_links_parent(self, unit_env):
        """Replies carry the parent comment ID."""
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        use_case = await unit_env.get(CreateCommentUseCase)
        post = await post_repo.save(make_post(CategoryId(uuid4())))
        principal = make_principal()
        parent = await use_case.execute(
            CreateCommentRequest(
                post_id=str(post.id), content="Top", principal=principal
            )
        )

        # Act
        reply = await use_case.execute(
            CreateCommentRequest(
                post_id=str(post.id),
                content="Reply",
                parent_id=parent.comment.comment_id,
                principal=principal,
            )
        )

        # Assert
        assert reply.comment.parent_id == parent.comment.comment_id
        assert reply.comment.author_name == principal.username
