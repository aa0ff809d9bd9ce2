"""Response items shared by category use cases."""

from datetime import datetime

from pydantic import BaseModel

from inkwell.domain.model import Category
from inkwell.domain.service import (
    CategoryRef,
    CategoryTreeNode,
    CategoryView,
    CreatorRef,
)
from inkwell.domain.value import CategoryStatus


class CategoryRefItem(BaseModel):
    """Minimal category reference (breadcrumb entry, parent)."""

    category_id: str
    name: str
    slug: str

    @classmethod
    def from_domain(cls, ref: CategoryRef) -> "CategoryRefItem":
        return cls(category_id=str(ref.id), name=ref.name, slug=ref.slug.root)


class CreatorItem(BaseModel):
    """Creator display fields."""

    user_id: str
    first_name: str
    last_name: str
    username: str | None

    @classmethod
    def from_domain(cls, ref: CreatorRef) -> "CreatorItem":
        return cls(
            user_id=str(ref.id),
            first_name=ref.first_name,
            last_name=ref.last_name,
            username=ref.username,
        )


class CategoryItem(BaseModel):
    """Full category in API responses."""

    category_id: str
    name: str
    slug: str
    description: str
    parent_id: str | None
    color: str
    icon: str
    meta_title: str
    meta_description: str
    status: CategoryStatus
    sort_order: int
    total_posts: int
    total_views: int
    created_by_id: str
    created_at: datetime
    updated_at: datetime
    parent: CategoryRefItem | None = None
    created_by: CreatorItem | None = None

    @classmethod
    def from_category(cls, category: Category) -> "CategoryItem":
        return cls(
            category_id=str(category.id),
            name=category.name,
            slug=category.slug.root,
            description=category.description,
            parent_id=str(category.parent_id) if category.parent_id else None,
            color=category.color.root,
            icon=category.icon,
            meta_title=category.meta_title,
            meta_description=category.meta_description,
            status=category.status,
            sort_order=category.sort_order,
            total_posts=category.stats.total_posts,
            total_views=category.stats.total_views,
            created_by_id=str(category.created_by),
            created_at=category.created_at,
            updated_at=category.updated_at,
        )

    @classmethod
    def from_view(cls, view: CategoryView) -> "CategoryItem":
        item = cls.from_category(view.category)
        item.parent = CategoryRefItem.from_domain(view.parent) if view.parent else None
        item.created_by = (
            CreatorItem.from_domain(view.created_by) if view.created_by else None
        )
        return item


class CategoryTreeNodeResponse(BaseModel):
    """Category tree node for API response.

    Recursive structure mirroring the domain tree.
    """

    category_id: str
    name: str
    slug: str
    color: str
    icon: str
    sort_order: int
    total_posts: int
    subcategories: list["CategoryTreeNodeResponse"]

    @classmethod
    def from_domain(cls, node: CategoryTreeNode) -> "CategoryTreeNodeResponse":
        category = node.category
        return cls(
            category_id=str(category.id),
            name=category.name,
            slug=category.slug.root,
            color=category.color.root,
            icon=category.icon,
            sort_order=category.sort_order,
            total_posts=category.stats.total_posts,
            subcategories=[cls.from_domain(child) for child in node.subcategories],
        )
