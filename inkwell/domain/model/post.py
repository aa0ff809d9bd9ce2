"""Post entity.

Only the slice of a blog post that categories and comments depend on:
which category it belongs to, whether it is published, and its views.
"""

from datetime import datetime

from pydantic import Field

from inkwell.domain.model.common import DomainModel
from inkwell.domain.value import CategoryId, PostId, PostStatus


class Post(DomainModel):
    """Post entity."""

    id: PostId
    title: str = Field(min_length=1, max_length=200)
    category_id: CategoryId
    status: PostStatus = PostStatus.DRAFT
    views: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
