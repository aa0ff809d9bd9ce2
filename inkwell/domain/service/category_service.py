"""Category domain service.

Maintains the category tree: parent validation and cycle prevention,
breadcrumbs, descendant collection, derived stats, merge and reorder.

Every walk up or down the tree is iterative id-chasing through the
repository with a visited set and an explicit step bound, since the store
itself has no cycle constraint.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import uuid4

import logfire
from pydantic import Field, ValidationError as PydanticValidationError

from inkwell.config import TreeSettings
from inkwell.domain.error import (
    CircularHierarchyError,
    DuplicateSlugError,
    HasPostsError,
    HasSubcategoriesError,
    NotFoundError,
    ParentNotFoundError,
    SelfParentError,
    SomeSourcesNotFoundError,
    TargetNotFoundError,
    ValidationError,
)
from inkwell.domain.model import Category, CategoryStats, Post, User
from inkwell.domain.model.category import DEFAULT_COLOR
from inkwell.domain.model.common import DomainModel
from inkwell.domain.repository import (
    CategoryFilter,
    CategoryRepository,
    CategorySortField,
    PostRepository,
    UserRepository,
)
from inkwell.domain.value import CategoryId, CategoryStatus, HexColor, Slug, UserId

from .base import Service


@dataclass
class CategoryRef:
    """Minimal reference to a category (breadcrumbs, parent display)."""

    id: CategoryId
    name: str
    slug: Slug

    @classmethod
    def of(cls, category: Category) -> "CategoryRef":
        return cls(id=category.id, name=category.name, slug=category.slug)


@dataclass
class CreatorRef:
    """Display fields of the user who created a category."""

    id: UserId
    first_name: str
    last_name: str
    username: Optional[str]

    @classmethod
    def of(cls, user: User) -> "CreatorRef":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            username=user.username,
        )


@dataclass
class CategoryView:
    """Category with its parent and creator resolved for display."""

    category: Category
    parent: Optional[CategoryRef] = None
    created_by: Optional[CreatorRef] = None


@dataclass
class CategoryTreeNode:
    """Node in the category tree with its nested subcategories."""

    category: Category
    subcategories: list["CategoryTreeNode"] = field(default_factory=list)


@dataclass
class CategoryDetail:
    """Public category page: the category plus its navigation context."""

    view: CategoryView
    breadcrumb: list[CategoryRef]
    siblings: list[Category]
    subcategories: list[Category]


@dataclass
class CategoryPage:
    """One page of a flat category listing."""

    items: list[CategoryView]
    total: int


@dataclass
class CategoryPosts:
    """Published posts of a category (and optionally its descendants)."""

    category: Category
    posts: list[Post]
    total: int


@dataclass
class MergeResult:
    """Outcome of merging categories into a target."""

    target: Category
    merged: int
    posts_moved: int
    subcategories_moved: int


class CategoryUpdate(DomainModel):
    """Whitelisted fields an update may change.

    Only fields present in ``model_fields_set`` are applied. ``None`` means
    "unchanged" for every field except ``parent_id``, where an explicit
    ``None`` moves the category to the root level.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    slug: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=500)
    parent_id: Optional[CategoryId] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    meta_title: Optional[str] = Field(default=None, max_length=60)
    meta_description: Optional[str] = Field(default=None, max_length=160)
    sort_order: Optional[int] = None
    status: Optional[CategoryStatus] = None


def _to_slug(value: str) -> Slug:
    try:
        return Slug(value)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid slug '{value}'") from e


def _slug_from_name(name: str) -> Slug:
    try:
        return Slug.from_text(name)
    except PydanticValidationError as e:
        raise ValidationError(f"Cannot derive a slug from name '{name}'") from e


def _to_color(value: str) -> HexColor:
    try:
        return HexColor(value)
    except PydanticValidationError as e:
        raise ValidationError(f"Color must be a valid hex color, got '{value}'") from e


class CategoryService(Service):
    """Domain service for the category hierarchy."""

    def __init__(
        self,
        category_repository: CategoryRepository,
        post_repository: PostRepository,
        user_repository: UserRepository,
        tree_settings: TreeSettings,
    ) -> None:
        """Initialize category service.

        Args:
            category_repository: Category repository
            post_repository: Post repository (delete guard, stats, merge)
            user_repository: User repository (creator display)
            tree_settings: Depth and walk limits
        """
        self.category_repository = category_repository
        self.post_repository = post_repository
        self.user_repository = user_repository
        self.tree_settings = tree_settings

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_category(self, category_id: CategoryId) -> CategoryView:
        """Get a category with parent and creator resolved.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        with logfire.span(
            "category_service.get_category", category_id=str(category_id)
        ):
            category = await self._require(category_id)
            return (await self._resolve_views([category]))[0]

    async def get_by_slug(self, slug: str) -> CategoryDetail:
        """Get an active category by slug with breadcrumb, siblings and children.

        Inactive categories are reported as not found.

        Raises:
            NotFoundError: If no active category owns the slug
        """
        with logfire.span("category_service.get_by_slug", slug=slug):
            try:
                category = await self.category_repository.find_by_slug(Slug(slug))
            except PydanticValidationError:
                category = None

            if category is None or category.status != CategoryStatus.ACTIVE:
                logfire.warn("Category not found by slug", slug=slug)
                raise NotFoundError("Category", slug)

            view = (await self._resolve_views([category]))[0]
            breadcrumb = await self.breadcrumb(category)

            siblings = [
                c
                for c in await self.category_repository.find_children(
                    category.parent_id
                )
                if c.id != category.id and c.status == CategoryStatus.ACTIVE
            ]
            subcategories = [
                c
                for c in await self.category_repository.find_children(category.id)
                if c.status == CategoryStatus.ACTIVE
            ]

            logfire.info(
                "Category found by slug",
                slug=slug,
                category_id=str(category.id),
                depth=len(breadcrumb),
            )
            return CategoryDetail(
                view=view,
                breadcrumb=breadcrumb,
                siblings=siblings,
                subcategories=subcategories,
            )

    async def list_categories(
        self,
        category_filter: CategoryFilter,
        sort_by: CategorySortField = "sort_order",
        descending: bool = False,
        page: int = 1,
        limit: int = 10,
    ) -> CategoryPage:
        """List one page of categories with parent and creator resolved.

        Args:
            category_filter: Status, parent and search filter
            sort_by: Sort field
            descending: Sort direction
            page: 1-based page number
            limit: Page size

        Returns:
            Page of category views and the total match count
        """
        with logfire.span(
            "category_service.list_categories",
            status=category_filter.status.value if category_filter.status else None,
            search=category_filter.search,
            page=page,
            limit=limit,
        ):
            total = await self.category_repository.count(category_filter)
            categories = await self.category_repository.find_page(
                category_filter,
                sort_by=sort_by,
                descending=descending,
                limit=limit,
                offset=(page - 1) * limit,
            )
            logfire.info("Categories listed", count=len(categories), total=total)
            return CategoryPage(
                items=await self._resolve_views(categories), total=total
            )

    async def get_category_posts(
        self,
        category_id: CategoryId,
        include_subcategories: bool = True,
        page: int = 1,
        limit: int = 10,
    ) -> CategoryPosts:
        """Get published posts of a category, optionally including descendants.

        Raises:
            NotFoundError: If the category doesn't exist
        """
        with logfire.span(
            "category_service.get_category_posts",
            category_id=str(category_id),
            include_subcategories=include_subcategories,
        ):
            category = await self._require(category_id)

            category_ids = [category.id]
            if include_subcategories:
                category_ids += await self.collect_descendant_ids(category.id)

            total = await self.post_repository.count_published_in_categories(
                category_ids
            )
            posts = await self.post_repository.find_published_in_categories(
                category_ids, limit=limit, offset=(page - 1) * limit
            )
            logfire.info(
                "Category posts retrieved",
                category_id=str(category_id),
                category_count=len(category_ids),
                total=total,
            )
            return CategoryPosts(category=category, posts=posts, total=total)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create_category(
        self,
        name: str,
        created_by: UserId,
        slug: Optional[str] = None,
        description: str = "",
        parent_id: Optional[CategoryId] = None,
        color: Optional[str] = None,
        icon: str = "",
        meta_title: str = "",
        meta_description: str = "",
        sort_order: int = 0,
        status: CategoryStatus = CategoryStatus.ACTIVE,
    ) -> CategoryView:
        """Create a category.

        The ID is generated before validation so the ancestor walk from the
        proposed parent can be checked against it.

        Args:
            name: Display name
            created_by: Creating admin (immutable afterwards)
            slug: Explicit slug; derived from name when omitted
            description: Description
            parent_id: Parent category, None for a root category
            color: Hex colour, default '#1976d2'
            icon: Icon name
            meta_title: SEO title, defaults to the name
            meta_description: SEO description
            sort_order: Position among siblings
            status: Initial status

        Returns:
            Created category with parent and creator resolved

        Raises:
            ParentNotFoundError: If parent_id doesn't resolve
            CircularHierarchyError: If the parent chain already reaches the new id
            DuplicateSlugError: If the slug is taken
            ValidationError: If a field is malformed
        """
        with logfire.span(
            "category_service.create_category",
            name=name,
            parent_id=str(parent_id) if parent_id else None,
            created_by=str(created_by),
        ):
            category_id = CategoryId(uuid4())
            category_slug = _to_slug(slug) if slug else _slug_from_name(name)

            if await self.category_repository.find_by_slug(category_slug):
                logfire.warn("Duplicate category slug", slug=category_slug.root)
                raise DuplicateSlugError(category_slug.root)

            if parent_id is not None:
                await self._validate_parent(category_id, parent_id)

            try:
                category = Category(
                    id=category_id,
                    name=name,
                    slug=category_slug,
                    description=description,
                    parent_id=parent_id,
                    color=_to_color(color or DEFAULT_COLOR),
                    icon=icon,
                    meta_title=meta_title or name[:60],
                    meta_description=meta_description,
                    status=status,
                    sort_order=sort_order,
                    created_by=created_by,
                )
            except PydanticValidationError as e:
                raise ValidationError(str(e)) from e

            saved = await self.category_repository.save(category)
            logfire.info(
                "Category created",
                category_id=str(saved.id),
                slug=saved.slug.root,
                parent_id=str(parent_id) if parent_id else None,
            )
            return (await self._resolve_views([saved]))[0]

    async def update_category(
        self, category_id: CategoryId, changes: CategoryUpdate
    ) -> CategoryView:
        """Apply whitelisted changes to a category.

        Raises:
            NotFoundError: If the category doesn't exist
            SelfParentError: If the new parent is the category itself
            ParentNotFoundError: If the new parent doesn't resolve
            CircularHierarchyError: If the new parent descends from the category
            DuplicateSlugError: If the new slug belongs to another category
            ValidationError: If a field is malformed
        """
        provided = changes.model_fields_set
        with logfire.span(
            "category_service.update_category",
            category_id=str(category_id),
            fields=sorted(provided),
        ):
            category = await self._require(category_id)
            update: dict = {}

            if "parent_id" in provided and changes.parent_id != category.parent_id:
                if changes.parent_id is not None:
                    if changes.parent_id == category.id:
                        logfire.warn(
                            "Category set as its own parent",
                            category_id=str(category_id),
                        )
                        raise SelfParentError(str(category_id))
                    await self._validate_parent(category.id, changes.parent_id)
                update["parent_id"] = changes.parent_id

            if changes.slug is not None:
                new_slug = _to_slug(changes.slug)
                if new_slug != category.slug:
                    owner = await self.category_repository.find_by_slug(new_slug)
                    if owner is not None and owner.id != category.id:
                        logfire.warn("Duplicate category slug", slug=new_slug.root)
                        raise DuplicateSlugError(new_slug.root)
                    update["slug"] = new_slug

            if changes.color is not None:
                update["color"] = _to_color(changes.color)

            for name in (
                "name",
                "description",
                "icon",
                "meta_title",
                "meta_description",
                "sort_order",
                "status",
            ):
                value = getattr(changes, name)
                if name in provided and value is not None:
                    update[name] = value

            if not update:
                logfire.info("Category unchanged", category_id=str(category_id))
                return (await self._resolve_views([category]))[0]

            update["updated_at"] = datetime.now()
            saved = await self.category_repository.save(
                category.model_copy(update=update)
            )
            logfire.info(
                "Category updated",
                category_id=str(category_id),
                changed=sorted(k for k in update if k != "updated_at"),
            )
            return (await self._resolve_views([saved]))[0]

    async def delete_category(self, category_id: CategoryId) -> None:
        """Delete a category that has no posts and no subcategories.

        Raises:
            NotFoundError: If the category doesn't exist
            HasPostsError: If any post references the category
            HasSubcategoriesError: If any category has it as parent
        """
        with logfire.span(
            "category_service.delete_category", category_id=str(category_id)
        ):
            await self._require(category_id)

            post_count = await self.post_repository.count_by_category(category_id)
            if post_count > 0:
                logfire.warn(
                    "Category delete blocked by posts",
                    category_id=str(category_id),
                    post_count=post_count,
                )
                raise HasPostsError(str(category_id), post_count)

            child_count = await self.category_repository.count_children(category_id)
            if child_count > 0:
                logfire.warn(
                    "Category delete blocked by subcategories",
                    category_id=str(category_id),
                    subcategory_count=child_count,
                )
                raise HasSubcategoriesError(str(category_id), child_count)

            await self.category_repository.delete(category_id)
            logfire.info("Category deleted", category_id=str(category_id))

    async def reorder(self, positions: list[tuple[CategoryId, int]]) -> list[Category]:
        """Set the sibling sort position of several categories.

        All IDs are checked before anything is written.

        Raises:
            ValidationError: If no positions are given
            NotFoundError: If any category doesn't exist
        """
        with logfire.span("category_service.reorder", count=len(positions)):
            if not positions:
                raise ValidationError("Categories array is required")

            ids = [category_id for category_id, _ in positions]
            found = {c.id for c in await self.category_repository.find_by_ids(ids)}
            missing = [str(i) for i in ids if i not in found]
            if missing:
                logfire.warn("Reorder references unknown categories", missing=missing)
                raise NotFoundError("Category", ", ".join(missing))

            updated = []
            for category_id, sort_order in positions:
                category = await self.category_repository.update_sort_order(
                    category_id, sort_order
                )
                if category is not None:
                    updated.append(category)

            logfire.info("Categories reordered", count=len(updated))
            return updated

    async def merge(
        self, source_ids: list[CategoryId], target_id: CategoryId
    ) -> MergeResult:
        """Merge source categories into a target.

        Posts and subcategories of every source move to the target, the
        sources are deleted and the target's stats are recomputed.

        Raises:
            ValidationError: If sources are empty or include the target
            TargetNotFoundError: If the target doesn't exist
            SomeSourcesNotFoundError: If any source doesn't exist
            CircularHierarchyError: If a source is an ancestor of the target
        """
        with logfire.span(
            "category_service.merge",
            source_ids=[str(s) for s in source_ids],
            target_id=str(target_id),
        ):
            sources = list(dict.fromkeys(source_ids))
            if not sources:
                raise ValidationError("Source category IDs are required")
            if target_id in sources:
                raise ValidationError("Target category cannot be one of the sources")

            target = await self.category_repository.find_by_id(target_id)
            if target is None:
                logfire.warn("Merge target not found", target_id=str(target_id))
                raise TargetNotFoundError(str(target_id))

            found = {c.id for c in await self.category_repository.find_by_ids(sources)}
            missing = [str(s) for s in sources if s not in found]
            if missing:
                logfire.warn("Merge sources not found", missing=missing)
                raise SomeSourcesNotFoundError(missing)

            for ancestor_id in await self._ancestor_ids(target):
                if ancestor_id in found:
                    logfire.warn(
                        "Merge source is an ancestor of the target",
                        source_id=str(ancestor_id),
                        target_id=str(target_id),
                    )
                    raise CircularHierarchyError(str(ancestor_id), str(target_id))

            posts_moved = await self.post_repository.reassign_category(
                sources, target_id
            )
            subcategories_moved = await self.category_repository.reassign_parent(
                sources, target_id
            )
            for source_id in sources:
                await self.category_repository.delete(source_id)

            await self.update_stats(target_id)
            refreshed = await self.category_repository.find_by_id(target_id) or target

            logfire.info(
                "Categories merged",
                target_id=str(target_id),
                merged=len(sources),
                posts_moved=posts_moved,
                subcategories_moved=subcategories_moved,
            )
            return MergeResult(
                target=refreshed,
                merged=len(sources),
                posts_moved=posts_moved,
                subcategories_moved=subcategories_moved,
            )

    # ------------------------------------------------------------------
    # Tree operations
    # ------------------------------------------------------------------

    async def build_tree(
        self,
        status: CategoryStatus = CategoryStatus.ACTIVE,
        include_empty: bool = True,
    ) -> list[CategoryTreeNode]:
        """Build the category tree for a status.

        Every category with the status is returned at the top level (not
        only roots), each with subcategories nested ``tree.max_depth``
        levels deep. Children are restricted to the same status. With
        ``include_empty=False`` only top-level nodes without published
        posts are dropped; nested children are left as they are.

        Returns:
            Nodes ordered by sort_order then name at every level
        """
        max_depth = self.tree_settings.max_depth
        with logfire.span(
            "category_service.build_tree",
            status=status.value,
            include_empty=include_empty,
            max_depth=max_depth,
        ):
            categories = await self.category_repository.find_all(status)

            children: dict[CategoryId, list[Category]] = defaultdict(list)
            for category in categories:
                if category.parent_id is not None:
                    children[category.parent_id].append(category)

            def build_subtree(category: Category, depth: int) -> CategoryTreeNode:
                if depth >= max_depth:
                    return CategoryTreeNode(category=category)
                return CategoryTreeNode(
                    category=category,
                    subcategories=[
                        build_subtree(child, depth + 1)
                        for child in children.get(category.id, [])
                    ],
                )

            nodes = [build_subtree(category, 0) for category in categories]
            if not include_empty:
                nodes = [n for n in nodes if n.category.stats.total_posts > 0]

            logfire.info("Built category tree", node_count=len(nodes))
            return nodes

    async def breadcrumb(self, category: Category) -> list[CategoryRef]:
        """Ancestors of a category, root first, excluding the category.

        Stops at the first missing parent, a revisited ID or the walk bound.
        """
        trail: list[CategoryRef] = []
        seen = {category.id}
        parent_id = category.parent_id

        for _ in range(self.tree_settings.max_ancestor_walk):
            if parent_id is None or parent_id in seen:
                break
            parent = await self.category_repository.find_by_id(parent_id)
            if parent is None:
                logfire.warn(
                    "Breadcrumb stopped at missing parent",
                    category_id=str(category.id),
                    parent_id=str(parent_id),
                )
                break
            trail.insert(0, CategoryRef.of(parent))
            seen.add(parent.id)
            parent_id = parent.parent_id

        return trail

    async def collect_descendant_ids(self, category_id: CategoryId) -> list[CategoryId]:
        """Collect the IDs of every descendant of a category.

        The order is unspecified; callers use the result as a set.
        """
        with logfire.span(
            "category_service.collect_descendant_ids", category_id=str(category_id)
        ):
            seen = {category_id}
            descendants: list[CategoryId] = []
            pending = deque([category_id])

            while pending:
                current = pending.popleft()
                for child in await self.category_repository.find_children(current):
                    if child.id in seen:
                        continue
                    seen.add(child.id)
                    descendants.append(child.id)
                    pending.append(child.id)

            logfire.info(
                "Collected descendant categories",
                category_id=str(category_id),
                count=len(descendants),
            )
            return descendants

    async def update_stats(self, category_id: CategoryId) -> Optional[CategoryStats]:
        """Recompute a category's stats from its published posts.

        Idempotent; safe to call after any post status or category change.

        Returns:
            The new stats, or None if the category no longer exists
        """
        with logfire.span(
            "category_service.update_stats", category_id=str(category_id)
        ):
            stats = await self.post_repository.aggregate_category_stats(category_id)
            updated = await self.category_repository.update_stats(category_id, stats)
            if updated is None:
                logfire.warn(
                    "Stats not stored, category missing", category_id=str(category_id)
                )
                return None
            logfire.info(
                "Category stats updated",
                category_id=str(category_id),
                total_posts=stats.total_posts,
                total_views=stats.total_views,
            )
            return stats

    async def refresh_stats_quietly(self, category_id: CategoryId) -> None:
        """Recompute stats, logging instead of raising on failure.

        Used after post writes: a stale counter is preferable to failing
        the write that triggered the refresh.
        """
        try:
            await self.update_stats(category_id)
        except Exception as e:
            logfire.error(
                "Category stats refresh failed",
                category_id=str(category_id),
                error=str(e),
                error_type=type(e).__name__,
            )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _require(self, category_id: CategoryId) -> Category:
        category = await self.category_repository.find_by_id(category_id)
        if category is None:
            logfire.warn("Category not found", category_id=str(category_id))
            raise NotFoundError("Category", str(category_id))
        return category

    async def _validate_parent(
        self, category_id: CategoryId, parent_id: CategoryId
    ) -> None:
        parent = await self.category_repository.find_by_id(parent_id)
        if parent is None:
            logfire.warn("Parent category not found", parent_id=str(parent_id))
            raise ParentNotFoundError("Category", str(parent_id))

        if await self._chain_reaches(parent_id, category_id):
            logfire.warn(
                "Circular category hierarchy rejected",
                category_id=str(category_id),
                parent_id=str(parent_id),
            )
            raise CircularHierarchyError(str(category_id), str(parent_id))

    async def _chain_reaches(
        self, start_id: CategoryId, category_id: CategoryId
    ) -> bool:
        """Whether walking parents from start_id reaches category_id.

        A broken link or a loop that doesn't involve category_id ends the
        walk with no cycle found.

        Raises:
            ValidationError: If the chain is longer than the walk bound
        """
        current: Optional[CategoryId] = start_id
        seen: set[CategoryId] = set()

        for _ in range(self.tree_settings.max_ancestor_walk):
            if current is None:
                return False
            if current == category_id:
                return True
            if current in seen:
                return False
            seen.add(current)
            node = await self.category_repository.find_by_id(current)
            if node is None:
                return False
            current = node.parent_id

        logfire.warn(
            "Ancestor walk bound reached",
            start_id=str(start_id),
            bound=self.tree_settings.max_ancestor_walk,
        )
        raise ValidationError(
            f"Category hierarchy exceeds {self.tree_settings.max_ancestor_walk} levels"
        )

    async def _ancestor_ids(self, category: Category) -> list[CategoryId]:
        ancestors = await self.breadcrumb(category)
        return [ref.id for ref in ancestors]

    async def _resolve_views(self, categories: list[Category]) -> list[CategoryView]:
        parent_ids = list({c.parent_id for c in categories if c.parent_id})
        creator_ids = list({c.created_by for c in categories})

        parents = {
            p.id: CategoryRef.of(p)
            for p in await self.category_repository.find_by_ids(parent_ids)
        }
        creators = {
            u.id: CreatorRef.of(u)
            for u in await self.user_repository.find_by_ids(creator_ids)
        }

        return [
            CategoryView(
                category=c,
                parent=parents.get(c.parent_id) if c.parent_id else None,
                created_by=creators.get(c.created_by),
            )
            for c in categories
        ]
