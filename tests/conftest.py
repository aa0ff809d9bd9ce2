"""Test configuration and fixtures."""

from uuid import uuid4

from inkwell.domain.model import Category, Post, Principal
from inkwell.domain.value import (
    CategoryId,
    CategoryStatus,
    Email,
    PostId,
    PostStatus,
    Slug,
    UserId,
    UserRole,
)


def make_principal(
    username: str | None = "reader",
    email: str = "reader@example.com",
    role: UserRole = UserRole.USER,
    first_name: str = "Rea",
    last_name: str = "Der",
) -> Principal:
    """Build an authenticated caller for tests."""
    return Principal(
        id=UserId(uuid4()),
        username=username,
        first_name=first_name,
        last_name=last_name,
        email=Email(email),
        role=role,
    )


def make_category(
    name: str,
    parent_id: CategoryId | None = None,
    sort_order: int = 0,
    status: CategoryStatus = CategoryStatus.ACTIVE,
    created_by: UserId | None = None,
) -> Category:
    """Build a category with a slug derived from its name."""
    return Category(
        id=CategoryId(uuid4()),
        name=name,
        slug=Slug.from_text(name),
        parent_id=parent_id,
        sort_order=sort_order,
        status=status,
        created_by=created_by or UserId(uuid4()),
    )


def make_post(
    category_id: CategoryId,
    status: PostStatus = PostStatus.PUBLISHED,
    views: int = 0,
    title: str = "A post",
) -> Post:
    """Build a post in a category."""
    return Post(
        id=PostId(uuid4()),
        title=title,
        category_id=category_id,
        status=status,
        views=views,
    )
