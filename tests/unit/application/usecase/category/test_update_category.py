"""Unit tests for UpdateCategoryUseCase."""

from uuid import uuid4

import pytest

from inkwell.application.usecase.category import (
    UpdateCategoryRequest,
    UpdateCategoryUseCase,
)
from inkwell.domain.error import CircularHierarchyError
from inkwell.domain.service import CategoryService
from inkwell.domain.value import UserId
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestUpdateCategoryUseCase:
    """Tests for UpdateCategoryUseCase."""

    @pytest.mark.asyncio
    async def test_explicit_null_parent_moves_to_root(self, unit_env):
        """parent_id=None given explicitly detaches the category."""
        # Arrange
        category_service = await unit_env.get(CategoryService)
        use_case = await unit_env.get(UpdateCategoryUseCase)
        admin_id = UserId(uuid4())
        parent = await category_service.create_category(name="Parent", created_by=admin_id)
        child = await category_service.create_category(
            name="Child", created_by=admin_id, parent_id=parent.category.id
        )

        # Act
        response = await use_case.execute(
            UpdateCategoryRequest(
                category_id=str(child.category.id), parent_id=None
            )
        )

        # Assert
        assert response.category.parent_id is None
        assert response.category.parent is None

    @pytest.mark.asyncio
    async def test_omitted_parent_is_kept(self, unit_env):
        """Leaving parent_id out keeps the current parent."""
        # Arrange
        category_service = await unit_env.get(CategoryService)
        use_case = await unit_env.get(UpdateCategoryUseCase)
        admin_id = UserId(uuid4())
        parent = await category_service.create_category(name="Parent", created_by=admin_id)
        child = await category_service.create_category(
            name="Child", created_by=admin_id, parent_id=parent.category.id
        )

        # Act
        response = await use_case.execute(
            UpdateCategoryRequest(
                category_id=str(child.category.id),
                description="Updated",
                color="#FF0000",
            )
        )

        # Assert
        assert response.category.parent_id == str(parent.category.id)
        assert response.category.parent is not None
        assert response.category.parent.slug == "parent"
        assert response.category.description == "Updated"
        assert response.category.color == "#ff0000"

    @pytest.mark.asyncio
    async def test_new_parent_from_string_id(self, unit_env):
        """A parent given as a UUID string is validated like any other."""
        # Arrange
        category_service = await unit_env.get(CategoryService)
        use_case = await unit_env.get(UpdateCategoryUseCase)
        admin_id = UserId(uuid4())
        top = await category_service.create_category(name="Top", created_by=admin_id)
        below = await category_service.create_category(
            name="Below", created_by=admin_id, parent_id=top.category.id
        )

        # Act & Assert
        with pytest.raises(CircularHierarchyError):
            await use_case.execute(
                UpdateCategoryRequest(
                    category_id=str(top.category.id),
                    parent_id=str(below.category.id),
                )
            )
