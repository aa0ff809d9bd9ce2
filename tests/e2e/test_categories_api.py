"""End-to-end tests for category endpoints."""

from uuid import UUID, uuid4

from inkwell.domain.value import CategoryId, PostStatus
from tests.conftest import make_post
from tests.harness import as_user


def create(api, name: str, **fields) -> dict:
    response = api.client.post(
        "/categories", json={"name": name, **fields}, headers=as_user("admin")
    )
    assert response.status_code == 201, response.text
    return response.json()["category"]


class TestCategoryWrites:
    """Admin-only category writes."""

    def test_create_requires_admin(self, api):
        """Anonymous callers get 401, non-admins 403."""
        # Act
        anonymous = api.client.post("/categories", json={"name": "Travel"})
        reader = api.client.post(
            "/categories", json={"name": "Travel"}, headers=as_user("reader")
        )

        # Assert
        assert anonymous.status_code == 401
        assert reader.status_code == 403

    def test_create_returns_resolved_category(self, api):
        """Creation derives the slug and resolves the creator."""
        # Act
        category = create(api, "Travel Tips")

        # Assert
        assert category["slug"] == "travel-tips"
        assert category["color"] == "#1976d2"
        assert category["created_by"]["username"] == "admin"
        assert category["parent"] is None

    def test_duplicate_slug_conflicts(self, api):
        """A taken slug is a 409."""
        # Arrange
        create(api, "Travel")

        # Act
        response = api.client.post(
            "/categories", json={"name": "Travel"}, headers=as_user("admin")
        )

        # Assert
        assert response.status_code == 409

    def test_missing_parent_not_found(self, api):
        """An unknown parent is a 404."""
        # Act
        response = api.client.post(
            "/categories",
            json={"name": "Orphan", "parent_id": str(uuid4())},
            headers=as_user("admin"),
        )

        # Assert
        assert response.status_code == 404

    def test_cycle_rejected(self, api):
        """Moving a category under its descendant is a 400."""
        # Arrange
        a = create(api, "A")
        b = create(api, "B", parent_id=a["category_id"])

        # Act
        response = api.client.put(
            f"/categories/{a['category_id']}",
            json={"parent_id": b["category_id"]},
            headers=as_user("admin"),
        )

        # Assert
        assert response.status_code == 400
        assert "circular" in response.json()["detail"]

    def test_null_parent_moves_to_root(self, api):
        """parent_id: null detaches the category."""
        # Arrange
        a = create(api, "A")
        b = create(api, "B", parent_id=a["category_id"])

        # Act
        response = api.client.put(
            f"/categories/{b['category_id']}",
            json={"parent_id": None},
            headers=as_user("admin"),
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["category"]["parent_id"] is None

    def test_delete_blocked_then_allowed(self, api):
        """Delete refuses while children exist."""
        # Arrange
        a = create(api, "A")
        b = create(api, "B", parent_id=a["category_id"])

        # Act
        blocked = api.client.delete(
            f"/categories/{a['category_id']}", headers=as_user("admin")
        )
        leaf = api.client.delete(
            f"/categories/{b['category_id']}", headers=as_user("admin")
        )

        # Assert
        assert blocked.status_code == 400
        assert "subcategories" in blocked.json()["detail"]
        assert leaf.status_code == 204

    def test_reorder(self, api):
        """Reorder reports how many categories moved."""
        # Arrange
        a = create(api, "A")
        b = create(api, "B")

        # Act
        response = api.client.post(
            "/categories/reorder",
            json={
                "categories": [
                    {"category_id": a["category_id"], "sort_order": 2},
                    {"category_id": b["category_id"], "sort_order": 1},
                ]
            },
            headers=as_user("admin"),
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["updated"] == 2
        listing = api.client.get("/categories").json()
        assert [c["name"] for c in listing["categories"]] == ["B", "A"]

    def test_merge(self, api):
        """Merge moves posts and recomputes target stats."""
        # Arrange
        source = create(api, "Source")
        target = create(api, "Target")
        api.seed_posts(
            make_post(CategoryId(UUID(source["category_id"])), views=4),
            make_post(CategoryId(UUID(source["category_id"])), views=6),
        )

        # Act
        response = api.client.post(
            "/categories/merge",
            json={
                "source_ids": [source["category_id"]],
                "target_id": target["category_id"],
            },
            headers=as_user("admin"),
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["posts_moved"] == 2
        assert body["target"]["total_posts"] == 2
        assert body["target"]["total_views"] == 10
        assert api.client.get("/categories/source").status_code == 404

    def test_merge_missing_target(self, api):
        """Unknown merge target is a 404."""
        # Arrange
        source = create(api, "Source")

        # Act
        response = api.client.post(
            "/categories/merge",
            json={"source_ids": [source["category_id"]], "target_id": str(uuid4())},
            headers=as_user("admin"),
        )

        # Assert
        assert response.status_code == 404


class TestCategoryReads:
    """Public category reads."""

    def test_tree(self, api):
        """The tree nests children under their parent."""
        # Arrange
        root = create(api, "Root")
        create(api, "Child", parent_id=root["category_id"])

        # Act
        response = api.client.get("/categories/tree")

        # Assert
        assert response.status_code == 200
        nodes = {n["name"]: n for n in response.json()["categories"]}
        assert [c["name"] for c in nodes["Root"]["subcategories"]] == ["Child"]

    def test_get_by_slug_with_breadcrumb(self, api):
        """Slug lookup returns breadcrumb and subcategories."""
        # Arrange
        root = create(api, "Root")
        mid = create(api, "Mid", parent_id=root["category_id"])
        create(api, "Leaf", parent_id=mid["category_id"])

        # Act
        response = api.client.get("/categories/mid")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert [b["slug"] for b in body["breadcrumb"]] == ["root"]
        assert [c["slug"] for c in body["subcategories"]] == ["leaf"]

    def test_inactive_slug_not_found(self, api):
        """Inactive categories are hidden."""
        # Arrange
        create(api, "Hidden", status="inactive")

        # Act & Assert
        assert api.client.get("/categories/hidden").status_code == 404

    def test_list_bad_parent_is_bad_request(self, api):
        """A parent filter that is neither null nor a UUID is a 400."""
        # Act
        response = api.client.get("/categories", params={"parent": "nope"})

        # Assert
        assert response.status_code == 400

    def test_posts_include_subcategories(self, api):
        """Category posts include published posts of descendants."""
        # Arrange
        root = create(api, "Root")
        child = create(api, "Child", parent_id=root["category_id"])
        api.seed_posts(
            make_post(CategoryId(UUID(root["category_id"]))),
            make_post(CategoryId(UUID(child["category_id"]))),
            make_post(
                CategoryId(UUID(child["category_id"])), status=PostStatus.DRAFT
            ),
        )

        # Act
        response = api.client.get(f"/categories/{root['category_id']}/posts")
        own = api.client.get(
            f"/categories/{root['category_id']}/posts",
            params={"include_subcategories": "false"},
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["total"] == 2
        assert own.json()["total"] == 1

    def test_refresh_stats(self, api):
        """Stats refresh recomputes totals from published posts."""
        # Arrange
        category = create(api, "News")
        api.seed_posts(make_post(CategoryId(UUID(category["category_id"])), views=3))

        # Act
        response = api.client.post(
            f"/categories/{category['category_id']}/stats", headers=as_user("admin")
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["total_posts"] == 1
        assert response.json()["total_views"] == 3
