"""Unit tests for domain error to HTTP status mapping."""

import pytest

from inkwell.domain.error import (
    CircularHierarchyError,
    DuplicateSlugError,
    ForbiddenError,
    HasPostsError,
    HasSubcategoriesError,
    NotFoundError,
    ParentNotFoundError,
    PostNotFoundError,
    SelfParentError,
    SomeSourcesNotFoundError,
    TargetNotFoundError,
    ValidationError,
)
from inkwell.interface.api.errors import status_for


@pytest.mark.parametrize(
    "error, expected",
    [
        (NotFoundError("Category", "x"), 404),
        (PostNotFoundError("x"), 404),
        (ParentNotFoundError("Category", "x"), 404),
        (TargetNotFoundError("x"), 404),
        (SomeSourcesNotFoundError(["x", "y"]), 404),
        (DuplicateSlugError("travel"), 409),
        (ForbiddenError("edit", "comment", "x"), 403),
        (ValidationError("bad"), 400),
        (SelfParentError("x"), 400),
        (CircularHierarchyError("x", "y"), 400),
        (HasPostsError("x", 3), 400),
        (HasSubcategoriesError("x", 1), 400),
    ],
)
def test_status_for(error, expected):
    assert status_for(error) == expected


def test_parent_not_found_message_names_parent():
    error = ParentNotFoundError("Category", "abc")
    assert str(error) == "Parent category not found: abc"
    assert error.resource == "Category"


def test_some_sources_not_found_lists_missing():
    error = SomeSourcesNotFoundError(["a", "b"])
    assert error.missing == ["a", "b"]
    assert "a, b" in str(error)
