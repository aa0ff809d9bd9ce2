"""Unit tests for ListCategoriesUseCase."""

from uuid import uuid4

import pytest

from inkwell.application.usecase.category import (
    ListCategoriesRequest,
    ListCategoriesUseCase,
)
from inkwell.domain.service import CategoryService
from inkwell.domain.value import CategoryStatus, UserId
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def seed(category_service: CategoryService) -> None:
    admin_id = UserId(uuid4())
    research = await category_service.create_category(
        name="Research", created_by=admin_id, sort_order=2
    )
    await category_service.create_category(
        name="Physics", created_by=admin_id, parent_id=research.category.id
    )
    await category_service.create_category(
        name="Art", created_by=admin_id, sort_order=1
    )
    await category_service.create_category(
        name="Archive", created_by=admin_id, status=CategoryStatus.INACTIVE
    )


class TestListCategoriesUseCase:
    """Tests for ListCategoriesUseCase."""

    @pytest.mark.asyncio
    async def test_active_by_default_in_sort_order(self, unit_env):
        """Default listing shows active categories by sort_order."""
        # Arrange
        await seed(await unit_env.get(CategoryService))
        use_case = await unit_env.get(ListCategoriesUseCase)

        # Act
        response = await use_case.execute(ListCategoriesRequest())

        # Assert
        assert [c.name for c in response.categories] == ["Physics", "Art", "Research"]
        assert response.total == 3
        assert response.pages == 1

    @pytest.mark.asyncio
    async def test_null_parent_lists_roots(self, unit_env):
        """parent="null" selects root categories."""
        # Arrange
        await seed(await unit_env.get(CategoryService))
        use_case = await unit_env.get(ListCategoriesUseCase)

        # Act
        response = await use_case.execute(
            ListCategoriesRequest(parent="null", sort_by="name")
        )

        # Assert
        assert [c.name for c in response.categories] == ["Art", "Research"]

    @pytest.mark.asyncio
    async def test_children_of_parent_with_resolved_parent(self, unit_env):
        """Children listings carry the parent reference."""
        # Arrange
        category_service = await unit_env.get(CategoryService)
        await seed(category_service)
        use_case = await unit_env.get(ListCategoriesUseCase)
        research = await category_service.get_by_slug("research")

        # Act
        response = await use_case.execute(
            ListCategoriesRequest(parent=str(research.view.category.id))
        )

        # Assert
        assert [c.name for c in response.categories] == ["Physics"]
        assert response.categories[0].parent is not None
        assert response.categories[0].parent.name == "Research"

    @pytest.mark.asyncio
    async def test_pagination(self, unit_env):
        """Pages are sliced after sorting."""
        # Arrange
        await seed(await unit_env.get(CategoryService))
        use_case = await unit_env.get(ListCategoriesUseCase)

        # Act
        response = await use_case.execute(
            ListCategoriesRequest(page=2, limit=2, sort_by="name")
        )

        # Assert
        assert [c.name for c in response.categories] == ["Research"]
        assert response.total == 3
        assert response.pages == 2

    @pytest.mark.asyncio
    async def test_malformed_parent_raises_value_error(self, unit_env):
        """A parent that is neither "null" nor a UUID is rejected."""
        # Arrange
        use_case = await unit_env.get(ListCategoriesUseCase)

        # Act & Assert
        with pytest.raises(ValueError):
            await use_case.execute(ListCategoriesRequest(parent="not-a-uuid"))
