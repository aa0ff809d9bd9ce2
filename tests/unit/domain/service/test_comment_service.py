"""Unit tests for CommentService."""

import asyncio
from typing import Optional
from uuid import uuid4

import pytest

from inkwell.config import CommentSettings, TreeSettings
from inkwell.domain.error import (
    ForbiddenError,
    NotFoundError,
    ParentNotFoundError,
    PostNotFoundError,
    ValidationError,
)
from inkwell.domain.model import Comment
from inkwell.domain.repository import CommentRepository, PostRepository
from inkwell.domain.service import CommentAuthorInfo, CommentService
from inkwell.domain.value import (
    CategoryId,
    CommentId,
    CommentStatus,
    PostId,
    UserId,
    UserRole,
)
from inkwell.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryPostRepository,
)
from tests.conftest import make_post, make_principal
from tests.harness import create_env_fixture

# Unit test fixture - in-memory persistence
unit_env = create_env_fixture()

GUEST = CommentAuthorInfo(
    name="Guest", email="Guest@Example.com", ip_address="10.0.0.1"
)


class StaleReadCommentRepository(InMemoryCommentRepository):
    """Comment repository whose reads can lag behind its writes."""

    def __init__(self) -> None:
        super().__init__()
        self.snapshots: dict[CommentId, Comment] = {}

    async def find_by_id(self, node_id: CommentId) -> Optional[Comment]:
        if node_id in self.snapshots:
            return self.snapshots[node_id]
        return await super().find_by_id(node_id)


async def seed_post(unit_env):
    post_repo = await unit_env.get(PostRepository)
    return await post_repo.save(make_post(CategoryId(uuid4())))


async def approved_comment(service: CommentService, post_id, parent_id=None):
    """Create a guest comment and approve it."""
    comment = await service.create_comment(
        post_id=post_id, content="Hello", author_info=GUEST, parent_id=parent_id
    )
    return await service.approve(comment.id)


class TestCreateComment:
    """Tests for create_comment."""

    @pytest.mark.asyncio
    async def test_guest_comment_is_pending(self, unit_env):
        """New comments await moderation and keep request metadata."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)

        # Act
        comment = await service.create_comment(
            post_id=post.id, content="  First!  ", author_info=GUEST
        )

        # Assert
        assert comment.status == CommentStatus.PENDING
        assert comment.content == "First!"
        assert comment.parent_id is None
        assert comment.author.name == "Guest"
        assert comment.author.email.root == "guest@example.com"
        assert comment.author.ip_address == "10.0.0.1"

    @pytest.mark.asyncio
    async def test_authenticated_author_copied_from_principal(self, unit_env):
        """Authenticated comments use the account's display name and email."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)
        principal = make_principal(username=None, first_name="Ada", last_name="L")

        # Act
        comment = await service.create_comment(
            post_id=post.id,
            content="Nice post",
            author_info=CommentAuthorInfo(principal=principal, name="ignored"),
        )

        # Assert
        assert comment.author.name == "Ada L"
        assert comment.author.email == principal.email

    @pytest.mark.asyncio
    async def test_guest_without_email_raises(self, unit_env):
        """Guests must give a name and an email."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError, match="Name and email"):
            await service.create_comment(
                post_id=post.id,
                content="Hi",
                author_info=CommentAuthorInfo(name="Guest"),
            )

    @pytest.mark.asyncio
    async def test_guest_with_malformed_email_raises(self, unit_env):
        """Guest emails are shape checked."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError, match="valid email"):
            await service.create_comment(
                post_id=post.id,
                content="Hi",
                author_info=CommentAuthorInfo(name="Guest", email="not-an-email"),
            )

    @pytest.mark.asyncio
    async def test_blank_content_raises(self, unit_env):
        """Whitespace-only content is empty."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError, match="content is required"):
            await service.create_comment(
                post_id=post.id, content="   ", author_info=GUEST
            )

    @pytest.mark.asyncio
    async def test_too_long_content_raises(self, unit_env):
        """Content is capped at 5000 characters."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)

        # Act & Assert
        with pytest.raises(ValidationError, match="5000"):
            await service.create_comment(
                post_id=post.id, content="x" * 5001, author_info=GUEST
            )

    @pytest.mark.asyncio
    async def test_missing_post_raises(self, unit_env):
        """The post must exist."""
        # Arrange
        service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(PostNotFoundError):
            await service.create_comment(
                post_id=PostId(uuid4()), content="Hi", author_info=GUEST
            )

    @pytest.mark.asyncio
    async def test_missing_parent_raises(self, unit_env):
        """Replies need an existing parent."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)

        # Act & Assert
        with pytest.raises(ParentNotFoundError):
            await service.create_comment(
                post_id=post.id,
                content="Reply",
                author_info=GUEST,
                parent_id=CommentId(uuid4()),
            )

    @pytest.mark.asyncio
    async def test_parent_on_other_post_raises(self, unit_env):
        """A reply must stay on its parent's post."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)
        other_post = await seed_post(unit_env)
        parent = await service.create_comment(
            post_id=other_post.id, content="Elsewhere", author_info=GUEST
        )

        # Act & Assert
        with pytest.raises(ValidationError, match="does not belong"):
            await service.create_comment(
                post_id=post.id,
                content="Reply",
                author_info=GUEST,
                parent_id=parent.id,
            )

    @pytest.mark.asyncio
    async def test_guests_forbidden_when_anonymous_disabled(self):
        """With anonymous comments off, guests are refused."""
        # Arrange
        post_repo = InMemoryPostRepository()
        post = await post_repo.save(make_post(CategoryId(uuid4())))
        service = CommentService(
            comment_repository=InMemoryCommentRepository(),
            post_repository=post_repo,
            comment_settings=CommentSettings(allow_anonymous=False),
            tree_settings=TreeSettings(),
        )

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await service.create_comment(
                post_id=post.id, content="Hi", author_info=GUEST
            )

    @pytest.mark.asyncio
    async def test_default_status_from_settings(self):
        """Pre-moderation can be turned off through settings."""
        # Arrange
        post_repo = InMemoryPostRepository()
        post = await post_repo.save(make_post(CategoryId(uuid4())))
        service = CommentService(
            comment_repository=InMemoryCommentRepository(),
            post_repository=post_repo,
            comment_settings=CommentSettings(default_status=CommentStatus.APPROVED),
            tree_settings=TreeSettings(),
        )

        # Act
        comment = await service.create_comment(
            post_id=post.id, content="Hi", author_info=GUEST
        )

        # Assert
        assert comment.status == CommentStatus.APPROVED


class TestEditAndDelete:
    """Tests for update_comment and delete_comment."""

    @pytest.mark.asyncio
    async def test_author_can_edit(self, unit_env):
        """Ownership is matched on email, case-insensitively."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)
        comment = await service.create_comment(
            post_id=post.id, content="Original", author_info=GUEST
        )
        author = make_principal(email="GUEST@example.com")

        # Act
        edited = await service.update_comment(comment.id, "Edited", author)

        # Assert
        assert edited.content == "Edited"
        assert edited.is_edited
        assert edited.edited_by == author.id
        assert edited.edited_at is not None

    @pytest.mark.asyncio
    async def test_other_user_cannot_edit(self, unit_env):
        """Even admins cannot edit someone else's comment."""
        # Arrange
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post = await seed_post(unit_env)
        comment = await service.create_comment(
            post_id=post.id, content="Original", author_info=GUEST
        )
        admin = make_principal(email="admin@example.com", role=UserRole.ADMIN)

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await service.update_comment(comment.id, "Hijacked", admin)

        stored = await comment_repo.find_by_id(comment.id)
        assert stored is not None
        assert stored.content == "Original"

    @pytest.mark.asyncio
    async def test_edit_keeps_moderation_made_after_read(self):
        """An edit based on an older read does not revert the status."""
        # Arrange
        comment_repo = StaleReadCommentRepository()
        post_repo = InMemoryPostRepository()
        post = await post_repo.save(make_post(CategoryId(uuid4())))
        service = CommentService(
            comment_repository=comment_repo,
            post_repository=post_repo,
            comment_settings=CommentSettings(),
            tree_settings=TreeSettings(),
        )
        comment = await service.create_comment(
            post_id=post.id, content="Original", author_info=GUEST
        )
        comment_repo.snapshots[comment.id] = comment
        await comment_repo.update_status(comment.id, CommentStatus.SPAM, "link farm")

        # Act
        await service.update_comment(
            comment.id, "Edited", make_principal(email="guest@example.com")
        )

        # Assert
        comment_repo.snapshots.clear()
        stored = await comment_repo.find_by_id(comment.id)
        assert stored is not None
        assert stored.content == "Edited"
        assert stored.is_edited
        assert stored.status == CommentStatus.SPAM
        assert stored.moderation_notes == "link farm"

    @pytest.mark.asyncio
    async def test_edit_missing_comment_raises(self, unit_env):
        """Editing an unknown comment is a not found."""
        # Arrange
        service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.update_comment(CommentId(uuid4()), "x", make_principal())

    @pytest.mark.asyncio
    async def test_admin_can_delete(self, unit_env):
        """Admins moderate by deleting any comment."""
        # Arrange
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post = await seed_post(unit_env)
        comment = await service.create_comment(
            post_id=post.id, content="Spammy", author_info=GUEST
        )
        admin = make_principal(email="admin@example.com", role=UserRole.ADMIN)

        # Act
        await service.delete_comment(comment.id, admin)

        # Assert
        assert await comment_repo.find_by_id(comment.id) is None

    @pytest.mark.asyncio
    async def test_stranger_cannot_delete(self, unit_env):
        """Non-authors without admin role are refused."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)
        comment = await service.create_comment(
            post_id=post.id, content="Mine", author_info=GUEST
        )

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await service.delete_comment(
                comment.id, make_principal(email="stranger@example.com")
            )


class TestReactions:
    """Tests for toggle_like and toggle_dislike."""

    @pytest.mark.asyncio
    async def test_like_then_dislike_switches(self, unit_env):
        """A user holds at most one reaction per comment."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)
        comment = await approved_comment(service, post.id)
        user_id = UserId(uuid4())

        # Act
        liked = await service.toggle_like(comment.id, user_id)
        disliked = await service.toggle_dislike(comment.id, user_id)

        # Assert
        assert (liked.likes, liked.dislikes) == (1, 0)
        assert (disliked.likes, disliked.dislikes) == (0, 1)

    @pytest.mark.asyncio
    async def test_second_like_removes_it(self, unit_env):
        """Toggling twice returns to no reaction."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)
        comment = await approved_comment(service, post.id)
        user_id = UserId(uuid4())

        # Act
        await service.toggle_like(comment.id, user_id)
        counts = await service.toggle_like(comment.id, user_id)

        # Assert
        assert (counts.likes, counts.dislikes) == (0, 0)

    @pytest.mark.asyncio
    async def test_concurrent_likes_all_count(self, unit_env):
        """Concurrent toggles from different users are not lost."""
        # Arrange
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post = await seed_post(unit_env)
        comment = await approved_comment(service, post.id)
        users = [UserId(uuid4()) for _ in range(10)]

        # Act
        await asyncio.gather(*(service.toggle_like(comment.id, u) for u in users))

        # Assert
        stored = await comment_repo.find_by_id(comment.id)
        assert stored is not None
        assert stored.likes == frozenset(users)
        assert stored.dislikes == frozenset()

    @pytest.mark.asyncio
    async def test_concurrent_double_like_by_one_user_cancels(self, unit_env):
        """Two overlapping toggles by one user leave no like behind."""
        # Arrange
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post = await seed_post(unit_env)
        comment = await approved_comment(service, post.id)
        user_id = UserId(uuid4())

        # Act
        results = await asyncio.gather(
            service.toggle_like(comment.id, user_id),
            service.toggle_like(comment.id, user_id),
        )

        # Assert
        assert sorted(r.likes for r in results) == [0, 1]
        stored = await comment_repo.find_by_id(comment.id)
        assert stored is not None
        assert stored.likes == frozenset()
        assert stored.dislikes == frozenset()

    @pytest.mark.asyncio
    async def test_react_to_missing_comment_raises(self, unit_env):
        """Unknown comment is a not found."""
        # Arrange
        service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.toggle_dislike(CommentId(uuid4()), UserId(uuid4()))


class TestModeration:
    """Tests for approve, mark_spam and moderate."""

    @pytest.mark.asyncio
    async def test_any_status_reachable(self, unit_env):
        """There is no terminal status."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)
        comment = await service.create_comment(
            post_id=post.id, content="Hi", author_info=GUEST
        )

        # Act
        spam = await service.mark_spam(comment.id)
        trashed = await service.moderate(comment.id, CommentStatus.TRASH, "cleanup")
        restored = await service.approve(comment.id)

        # Assert
        assert spam.status == CommentStatus.SPAM
        assert trashed.status == CommentStatus.TRASH
        assert trashed.moderation_notes == "cleanup"
        assert restored.status == CommentStatus.APPROVED
        assert restored.moderation_notes == "cleanup"

    @pytest.mark.asyncio
    async def test_long_notes_raise(self, unit_env):
        """Notes are capped at 1000 characters."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)
        comment = await service.create_comment(
            post_id=post.id, content="Hi", author_info=GUEST
        )

        # Act & Assert
        with pytest.raises(ValidationError):
            await service.moderate(comment.id, CommentStatus.SPAM, "x" * 1001)

    @pytest.mark.asyncio
    async def test_moderate_missing_comment_raises(self, unit_env):
        """Unknown comment is a not found."""
        # Arrange
        service = await unit_env.get(CommentService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.approve(CommentId(uuid4()))

    @pytest.mark.asyncio
    async def test_moderation_queue_filters_by_status(self, unit_env):
        """The queue lists every status unless filtered."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)
        await approved_comment(service, post.id)
        await service.create_comment(post_id=post.id, content="Hi", author_info=GUEST)

        # Act
        everything = await service.list_for_moderation()
        pending = await service.list_for_moderation(status=CommentStatus.PENDING)

        # Assert
        assert everything.total == 2
        assert pending.total == 1
        assert pending.items[0].status == CommentStatus.PENDING


class TestCommentTree:
    """Tests for get_tree and get_comment_counts."""

    @pytest.mark.asyncio
    async def test_pending_comments_hidden(self, unit_env):
        """Only approved comments appear until moderated."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)
        comment = await service.create_comment(
            post_id=post.id, content="Hi", author_info=GUEST
        )

        # Act
        before = await service.get_tree(post.id)
        await service.approve(comment.id)
        after = await service.get_tree(post.id)

        # Assert
        assert before == []
        assert [n.comment.id for n in after] == [comment.id]

    @pytest.mark.asyncio
    async def test_replies_nested_to_max_depth(self, unit_env):
        """Replies nest two levels below each top-level comment."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)
        root = await approved_comment(service, post.id)
        reply = await approved_comment(service, post.id, root.id)
        nested = await approved_comment(service, post.id, reply.id)
        await approved_comment(service, post.id, nested.id)

        # Act
        tree = await service.get_tree(post.id)

        # Assert
        assert len(tree) == 1
        reply_node = tree[0].replies[0]
        nested_node = reply_node.replies[0]
        assert reply_node.comment.id == reply.id
        assert nested_node.comment.id == nested.id
        assert nested_node.replies == []

    @pytest.mark.asyncio
    async def test_reply_to_deleted_comment_not_shown(self, unit_env):
        """Deleting a parent hides its replies without a dangling reference."""
        # Arrange
        service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post = await seed_post(unit_env)
        root = await approved_comment(service, post.id)
        reply = await approved_comment(service, post.id, root.id)
        admin = make_principal(email="admin@example.com", role=UserRole.ADMIN)

        # Act
        await service.delete_comment(root.id, admin)
        tree = await service.get_tree(post.id)

        # Assert
        assert tree == []
        assert await comment_repo.find_by_id(reply.id) is not None

    @pytest.mark.asyncio
    async def test_unapproved_reply_hidden(self, unit_env):
        """Replies are filtered by status like top-level comments."""
        # Arrange
        service = await unit_env.get(CommentService)
        post = await seed_post(unit_env)
        root = await approved_comment(service, post.id)
        await service.create_comment(
            post_id=post.id, content="Pending", author_info=GUEST, parent_id=root.id
        )

        # Act
        tree = await service.get_tree(post.id)

        # Assert
        assert tree[0].replies == []

    @pytest.mark.asyncio
    async def test_counts_omit_posts_without_approved_comments(self, unit_env):
        """Counts only include approved comments."""
        # Arrange
        service = await unit_env.get(CommentService)
        busy = await seed_post(unit_env)
        quiet = await seed_post(unit_env)
        await approved_comment(service, busy.id)
        await approved_comment(service, busy.id)
        await service.create_comment(post_id=busy.id, content="Hi", author_info=GUEST)
        await service.create_comment(post_id=quiet.id, content="Hi", author_info=GUEST)

        # Act
        counts = await service.get_comment_counts([busy.id, quiet.id])

        # Assert
        assert counts == {busy.id: 2}

    @pytest.mark.asyncio
    async def test_counts_for_no_posts_is_empty(self, unit_env):
        """An empty request returns an empty mapping."""
        # Arrange
        service = await unit_env.get(CommentService)

        # Act & Assert
        assert await service.get_comment_counts([]) == {}
