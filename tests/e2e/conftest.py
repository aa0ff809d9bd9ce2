"""Fixtures for end-to-end API tests."""

import pytest

from inkwell.domain.value import UserRole
from tests.conftest import make_principal
from tests.harness import ApiHarness


@pytest.fixture
def api():
    """App on an in-memory container with admin, reader and other users."""
    return ApiHarness(
        {
            "admin": make_principal(
                username="admin", email="admin@example.com", role=UserRole.ADMIN
            ),
            "reader": make_principal(username="reader", email="reader@example.com"),
            "other": make_principal(username="other", email="other@example.com"),
        }
    )
