"""Category entity.

Categories form an n-ary tree through a nullable ``parent_id`` weak
reference. The tree is stored flat; children are found by querying
``parent_id == id`` rather than by following stored child lists.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from inkwell.domain.model.common import DomainModel
from inkwell.domain.value import CategoryId, CategoryStatus, HexColor, Slug, UserId

DEFAULT_COLOR = "#1976d2"


class CategoryStats(DomainModel):
    """Derived counters over published posts.

    Never a source of truth: always recomputable from posts.
    """

    total_posts: int = Field(default=0, ge=0)
    total_views: int = Field(default=0, ge=0)


class Category(DomainModel):
    """Category entity.

    Invariants maintained by CategoryService:
    - parent_id never equals id
    - walking parent_id upward never revisits id
    - created_by never changes after creation
    """

    id: CategoryId
    name: str = Field(min_length=1, max_length=50)
    slug: Slug
    description: str = Field(default="", max_length=500)
    parent_id: Optional[CategoryId] = None
    color: HexColor = HexColor(DEFAULT_COLOR)
    icon: str = ""
    meta_title: str = Field(default="", max_length=60)
    meta_description: str = Field(default="", max_length=160)
    status: CategoryStatus = CategoryStatus.ACTIVE
    sort_order: int = 0
    stats: CategoryStats = CategoryStats()
    created_by: UserId
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
